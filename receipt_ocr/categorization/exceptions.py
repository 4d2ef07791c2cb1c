class CategorizationConfigError(Exception):
    """Raised when a keyword dictionary cannot be loaded or is malformed."""
