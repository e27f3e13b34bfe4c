"""Alias and transaction models for double-entry ledgers."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from drcr.account import AccountName
from drcr.errors import SourceLocation

# Indices of the two legs of a transaction.
DR = 0
CR = 1


@dataclass(frozen=True)
class Alias:
    """A short name standing in for an account name."""

    name: str
    account: AccountName
    location: SourceLocation


@dataclass(frozen=True)
class Transaction:
    """A double-entry transaction moving an amount from credit to debit.

    Accounts are always fully resolved, aliases are expanded when read.
    """

    date: date
    amount: Decimal
    accounts: tuple[AccountName, AccountName]

    @property
    def debit(self) -> AccountName:
        return self.accounts[DR]

    @property
    def credit(self) -> AccountName:
        return self.accounts[CR]
