import logging
import sys


class Log:
    """Centralized logging for the pipeline.

    Records go to stderr so that stdout stays free for the CLI's JSON output.
    """

    _logger: logging.Logger = logging.getLogger("receipt_ocr")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stderr handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log a pipeline progress message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log a pipeline failure."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a recoverable pipeline problem."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log adapter-level detail."""
        cls._logger.debug(message, extra=kwargs)
