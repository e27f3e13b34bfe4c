"""Tests for transaction module."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from drcr.account import AccountName
from drcr.errors import SourceLocation
from drcr.transaction import CR, DR, Alias, Transaction


def test_transaction_legs():
    """Test the debit and credit legs of a transaction."""
    tr = Transaction(
        date=date(2024, 1, 15),
        amount=Decimal("1000.00"),
        accounts=(AccountName("a:cash"), AccountName("i:salary")),
    )
    assert tr.debit == "a:cash"
    assert tr.credit == "i:salary"
    assert tr.accounts[DR] == tr.debit
    assert tr.accounts[CR] == tr.credit


def test_transaction_is_immutable():
    """Test that transactions cannot be modified."""
    tr = Transaction(
        date=date(2024, 1, 15),
        amount=Decimal("1"),
        accounts=(AccountName("a:cash"), AccountName("i:salary")),
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        tr.amount = Decimal("2")


def test_alias():
    """Test creating an alias."""
    alias = Alias(name="cash", account=AccountName("a:cash"), location=SourceLocation("x.ledger", 3))
    assert alias.account.type.value == "asset"
    assert str(alias.location) == "x.ledger:3"
