"""Plain text double-entry ledgers with periodic balance reports."""

__version__ = "0.1.0"
