"""In-memory store for validated ledger data."""

from collections.abc import Iterable
from datetime import date
from pathlib import Path

from drcr.account import AccountName, is_alias_name, is_valid_account_name
from drcr.errors import SemanticError, SourceLocation, ValidationError
from drcr.logging_setup import get_logger
from drcr.parser import DATE_FORMAT, Line, parse_line
from drcr.transaction import Alias, Transaction

_logger = get_logger("drcr.ledger")


class LedgerStore:
    """Aliases, the current date and the transaction log of one run.

    The store is shared by every file read into it, so aliases and the
    current date carry over from one file to the next.
    """

    def __init__(self):
        self.aliases: dict[str, Alias] = {}
        self.transactions: list[Transaction] = []
        self.current_date: date | None = None
        self.current_date_location: SourceLocation | None = None

    def set_date(self, day: date, location: SourceLocation) -> None:
        """Move the current date forward. Earlier dates are rejected."""
        if self.current_date is not None and day < self.current_date:
            raise SemanticError(
                f"date set to an earlier date '{day.strftime(DATE_FORMAT)}' than "
                f"previous date '{self.current_date.strftime(DATE_FORMAT)}' "
                f"set at '{self.current_date_location}'",
                location,
            )
        self.current_date = day
        self.current_date_location = location

    def require_date(self, location: SourceLocation) -> date:
        if self.current_date is None:
            raise SemanticError("transaction without previous date", location)
        return self.current_date

    def add_alias(self, name: str, account: AccountName, location: SourceLocation) -> Alias:
        existing = self.aliases.get(name)
        if existing is not None:
            raise SemanticError(
                f"alias '{name}' redefined, first seen at '{existing.location}'",
                location,
            )
        alias = Alias(name=name, account=account, location=location)
        self.aliases[name] = alias
        return alias

    def get_alias(self, name: str) -> Alias | None:
        return self.aliases.get(name)

    def resolve_account(self, reference: str, location: SourceLocation) -> AccountName:
        """Expand an alias or validate a raw account name."""
        if is_alias_name(reference):
            alias = self.get_alias(reference)
            if alias is None:
                raise SemanticError(f"referenced alias '{reference}' is undefined", location)
            return alias.account
        if not is_valid_account_name(reference):
            raise ValidationError(f"invalid account name '{reference}'", location)
        return AccountName(reference)

    def add_transaction(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)

    def read_lines(self, lines: Iterable[str | bytes], source: str) -> int:
        """Parse lines from a named source, stopping at the first error.

        Byte lines are decoded as UTF-8. Returns the number of transactions
        added.
        """
        before = len(self.transactions)
        line_number = 0
        for line_number, text in enumerate(lines, start=1):
            location = SourceLocation(source, line_number)
            if isinstance(text, bytes):
                try:
                    text = text.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise ValidationError(f"invalid UTF-8 text ({e.reason})", location) from None
            parse_line(self, Line.from_text(text, location))
        added = len(self.transactions) - before
        _logger.debug("Read %d lines from %s", line_number, source)
        return added

    def read_file(self, path: Path | str) -> int:
        """Read a ledger file into the store.

        Returns the number of transactions added. Raises LedgerError for
        invalid content and OSError when the file cannot be opened.
        """
        path = Path(path)
        with path.open("rb") as f:
            added = self.read_lines(f, str(path))
        _logger.info("Read %d transactions from '%s'", added, path)
        return added
