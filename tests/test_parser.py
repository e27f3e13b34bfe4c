"""Tests for parser module."""

from datetime import date
from decimal import Decimal

import pytest

from drcr.errors import LedgerSyntaxError, SemanticError, SourceLocation, ValidationError
from drcr.ledger import LedgerStore
from drcr.parser import (
    Line,
    LineKind,
    classify,
    parse_amount,
    parse_date_token,
    parse_line,
    tokenize,
)


def make_line(text, line=1):
    """Helper to create a line read from 'test.ledger'."""
    return Line.from_text(text, SourceLocation("test.ledger", line))


@pytest.fixture
def store():
    return LedgerStore()


def test_tokenize_any_whitespace():
    """Test that tabs and repeated spaces separate tokens."""
    assert tokenize("  10.50\ta:cash   i:salary \r\n") == ["10.50", "a:cash", "i:salary"]
    assert tokenize("") == []


@pytest.mark.parametrize("text,kind", [
    ("", LineKind.COMMENT),
    ("   ", LineKind.COMMENT),
    ("# a comment", LineKind.COMMENT),
    ("#no space 1 2 3", LineKind.COMMENT),
    ("alias cash a:cash", LineKind.ALIAS),
    ("2024-03-01", LineKind.DATE),
    ("2024-13-01", LineKind.DATE),
    ("10.50 a:cash i:salary", LineKind.TRANSACTION),
    ("alias cash", LineKind.INVALID),
    ("2024-3-1", LineKind.INVALID),
    ("10 a:cash", LineKind.INVALID),
    ("10 a:cash i:salary extra", LineKind.INVALID),
])
def test_classify(text, kind):
    """Test line classification by token shape."""
    assert classify(tokenize(text)) == kind


def test_parse_date_token():
    """Test parsing a valid date."""
    assert parse_date_token("2024-02-29") == date(2024, 2, 29)


@pytest.mark.parametrize("text", ["2024-13-01", "2023-02-29", "2024/03/01", "2024-3-011", "abcdefghij"])
def test_parse_date_token_invalid(text):
    """Test that malformed dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_date_token(text)


def test_parse_amount_decimal_separators():
    """Test that ',' and '.' are both accepted as decimal point."""
    assert parse_amount("10.50") == Decimal("10.50")
    assert parse_amount("10,50") == Decimal("10.50")
    assert parse_amount("-3") == Decimal("-3")


@pytest.mark.parametrize("text", ["abc", "1,000.50", "nan", "inf", "10.5.0", "1_000", "1e1000000", "-1e309"])
def test_parse_amount_invalid(text):
    """Test that malformed amounts raise ValueError."""
    with pytest.raises(ValueError, match="invalid amount"):
        parse_amount(text)


def test_parse_amount_large_but_finite():
    """Test that amounts within double range are accepted."""
    assert parse_amount("1e300") == Decimal("1e300")


def test_parse_transaction_amount_out_of_range(store):
    """Test that an amount too large for a double fails at its line."""
    parse_line(store, make_line("2024-01-01", line=1))
    with pytest.raises(ValidationError, match="test.ledger:2: invalid amount '1e1000000'"):
        parse_line(store, make_line("1e1000000 a:cash i:salary", line=2))
    assert store.transactions == []


def test_parse_line_comment_leaves_store_untouched(store):
    """Test that comments are ignored."""
    assert parse_line(store, make_line("# 2024-03-01")) is LineKind.COMMENT
    assert store.current_date is None
    assert store.transactions == []


def test_parse_alias(store):
    """Test that an alias directive registers the alias."""
    parse_line(store, make_line("alias cash a:cash"))
    alias = store.get_alias("cash")
    assert alias.account == "a:cash"
    assert alias.location == SourceLocation("test.ledger", 1)


def test_parse_alias_invalid_name(store):
    """Test that alias names must be letters, digits and hyphens."""
    with pytest.raises(ValidationError, match="invalid alias name 'my_cash'"):
        parse_line(store, make_line("alias my_cash a:cash"))


def test_parse_alias_invalid_account(store):
    """Test that aliases must reference a valid account name."""
    with pytest.raises(ValidationError, match="referenced by alias"):
        parse_line(store, make_line("alias cash x:cash"))
    assert store.aliases == {}


def test_parse_date(store):
    """Test that a date directive sets the current date."""
    parse_line(store, make_line("2024-03-01", line=4))
    assert store.current_date == date(2024, 3, 1)
    assert store.current_date_location == SourceLocation("test.ledger", 4)


def test_parse_date_invalid_month_keeps_cursor(store):
    """Test that an invalid date fails without moving the current date."""
    parse_line(store, make_line("2024-03-01", line=1))
    with pytest.raises(ValidationError, match="invalid date '2024-13-01'") as excinfo:
        parse_line(store, make_line("2024-13-01", line=2))
    assert excinfo.value.location == SourceLocation("test.ledger", 2)
    assert store.current_date == date(2024, 3, 1)


def test_parse_transaction_with_alias(store):
    """Test that aliases are expanded in transactions."""
    parse_line(store, make_line("alias cash a:cash", line=1))
    parse_line(store, make_line("2024-03-01", line=2))
    parse_line(store, make_line("10.50 cash i:salary", line=3))
    assert len(store.transactions) == 1
    tr = store.transactions[0]
    assert tr.date == date(2024, 3, 1)
    assert tr.amount == Decimal("10.50")
    assert tr.debit == "a:cash"
    assert tr.credit == "i:salary"


def test_parse_transaction_comma_amount(store):
    """Test that a comma amount parses to the same value."""
    parse_line(store, make_line("2024-03-01"))
    parse_line(store, make_line("10,50 a:cash i:salary"))
    parse_line(store, make_line("10.50 a:cash i:salary"))
    first, second = store.transactions
    assert first.amount == second.amount


def test_parse_transaction_without_date(store):
    """Test that a transaction before any date directive fails."""
    with pytest.raises(SemanticError, match="transaction without previous date"):
        parse_line(store, make_line("10 a:cash i:salary"))


def test_parse_transaction_invalid_amount(store):
    """Test that a bad amount fails even before a date is set."""
    with pytest.raises(ValidationError, match="invalid amount 'ten'"):
        parse_line(store, make_line("ten a:cash i:salary"))


def test_parse_transaction_undefined_alias(store):
    """Test that referencing an undefined alias fails."""
    parse_line(store, make_line("2024-03-01"))
    with pytest.raises(SemanticError, match="referenced alias 'cash' is undefined"):
        parse_line(store, make_line("10 cash i:salary"))
    assert store.transactions == []


def test_parse_transaction_invalid_account(store):
    """Test that raw account references must be valid names."""
    parse_line(store, make_line("2024-03-01"))
    with pytest.raises(ValidationError, match="invalid account name 'i:salary.'"):
        parse_line(store, make_line("10 a:cash i:salary."))


def test_parse_line_invalid_syntax(store):
    """Test that unrecognized lines are syntax errors."""
    with pytest.raises(LedgerSyntaxError, match="test.ledger:7: invalid syntax"):
        parse_line(store, make_line("10 a:cash", line=7))
