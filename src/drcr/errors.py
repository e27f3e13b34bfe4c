"""Errors raised while reading ledger files."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """A line in a ledger source, 1-based."""

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


class LedgerError(Exception):
    """Base class for errors located at a line of a ledger file."""

    def __init__(self, message: str, location: SourceLocation):
        super().__init__(f"{location}: {message}")
        self.message = message
        self.location = location


class LedgerSyntaxError(LedgerError):
    """Raised when a line matches none of the directive shapes."""
    pass


class ValidationError(LedgerError):
    """Raised for a malformed account name, alias name, date or amount."""
    pass


class SemanticError(LedgerError):
    """Raised when a well formed line conflicts with what was read before."""
    pass
