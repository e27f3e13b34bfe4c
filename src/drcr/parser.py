"""Line classification and directive parsing for ledger files.

A ledger file holds one directive per line:

    # comment
    alias <alias-name> <account-name>
    YYYY-MM-DD
    <amount> <debit-account> <credit-account>

Each parse function validates a line and applies it to a LedgerStore.
"""

import re
import sys
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING

from drcr.account import AccountName, is_alias_name, is_valid_account_name
from drcr.errors import LedgerSyntaxError, SourceLocation, ValidationError
from drcr.transaction import Transaction

if TYPE_CHECKING:
    from drcr.ledger import LedgerStore

DATE_FORMAT = "%Y-%m-%d"
DATE_WIDTH = len("YYYY-MM-DD")

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Amounts must fit a double.
MAX_AMOUNT = Decimal(sys.float_info.max)


class LineKind(Enum):
    COMMENT = "comment"
    ALIAS = "alias"
    DATE = "date"
    TRANSACTION = "transaction"
    INVALID = "invalid"


def tokenize(text: str) -> list[str]:
    return text.split()


def classify(tokens: list[str]) -> LineKind:
    """Classify a tokenized line. The first matching shape wins."""
    if not tokens or tokens[0].startswith("#"):
        return LineKind.COMMENT
    if len(tokens) == 3 and tokens[0] == "alias":
        return LineKind.ALIAS
    if len(tokens) == 1 and len(tokens[0]) == DATE_WIDTH:
        return LineKind.DATE
    if len(tokens) == 3:
        return LineKind.TRANSACTION
    return LineKind.INVALID


@dataclass(frozen=True)
class Line:
    """A tokenized line together with where it was read."""

    location: SourceLocation
    tokens: list[str]

    @classmethod
    def from_text(cls, text: str, location: SourceLocation) -> "Line":
        return cls(location=location, tokens=tokenize(text))

    @property
    def kind(self) -> LineKind:
        return classify(self.tokens)


def parse_date_token(text: str) -> date:
    """Parse a YYYY-MM-DD date. Raises ValueError."""
    if not _DATE_RE.fullmatch(text):
        raise ValueError(f"date '{text}' does not match YYYY-MM-DD")
    return datetime.strptime(text, DATE_FORMAT).date()


def parse_amount(text: str) -> Decimal:
    """Parse an amount accepting both '.' and ',' as decimal point.

    Raises ValueError.
    """
    if "_" in text:
        raise ValueError(f"invalid amount '{text}'")
    try:
        amount = Decimal(text.replace(",", "."))
    except InvalidOperation:
        raise ValueError(f"invalid amount '{text}'") from None
    if not amount.is_finite() or amount.copy_abs() > MAX_AMOUNT:
        raise ValueError(f"invalid amount '{text}'")
    return amount


def parse_alias(store: "LedgerStore", line: Line) -> None:
    _, alias_name, account = line.tokens
    if not is_alias_name(alias_name):
        raise ValidationError(f"invalid alias name '{alias_name}'", line.location)
    if not is_valid_account_name(account):
        raise ValidationError(
            f"invalid account name '{account}' referenced by alias", line.location
        )
    store.add_alias(alias_name, AccountName(account), line.location)


def parse_date(store: "LedgerStore", line: Line) -> None:
    try:
        day = parse_date_token(line.tokens[0])
    except ValueError:
        raise ValidationError(f"invalid date '{line.tokens[0]}'", line.location) from None
    store.set_date(day, line.location)


def parse_transaction(store: "LedgerStore", line: Line) -> None:
    amount_text, debit, credit = line.tokens
    try:
        amount = parse_amount(amount_text)
    except ValueError:
        raise ValidationError(f"invalid amount '{amount_text}'", line.location) from None

    day = store.require_date(line.location)
    accounts = (
        store.resolve_account(debit, line.location),
        store.resolve_account(credit, line.location),
    )
    store.add_transaction(Transaction(date=day, amount=amount, accounts=accounts))


def parse_line(store: "LedgerStore", line: Line) -> LineKind:
    """Apply one line to the store and return what kind of line it was."""
    kind = line.kind
    if kind is LineKind.ALIAS:
        parse_alias(store, line)
    elif kind is LineKind.DATE:
        parse_date(store, line)
    elif kind is LineKind.TRANSACTION:
        parse_transaction(store, line)
    elif kind is LineKind.INVALID:
        raise LedgerSyntaxError("invalid syntax", line.location)
    return kind
