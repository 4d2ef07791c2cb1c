"""Receipt and bank-statement text extraction pipeline."""

__version__ = "0.1.0"
