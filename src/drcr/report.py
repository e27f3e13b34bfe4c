"""Periodic balance reports built from a ledger's transaction log.

Reports are kept per period (all-time, yearly, quarterly, monthly) in a
ReportChain. Each report covers the dates [start, end) and links to its
predecessor by index, so deltas can be computed between consecutive
reports of the same period.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import MAXYEAR, date
from decimal import Decimal
from enum import Enum

from drcr.account import AccountName, AccountType
from drcr.ledger import LedgerStore
from drcr.logging_setup import get_logger
from drcr.transaction import CR, DR, Transaction

_logger = get_logger("drcr.report")

ZERO = Decimal("0")

# Balance sheet accounts keep their balance from one period to the next.
CARRIED_TYPES = (AccountType.ASSET, AccountType.DEBT)


class Period(Enum):
    ALL = "all"
    YEARLY = "yearly"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"

    @property
    def months(self) -> int | None:
        """Length of the period in months, None when unbounded."""
        return _PERIOD_MONTHS[self]


_PERIOD_MONTHS = {
    Period.ALL: None,
    Period.YEARLY: 12,
    Period.QUARTERLY: 3,
    Period.MONTHLY: 1,
}


def add_months(day: date, months: int) -> date | None:
    """First day of the month `months` after `day`'s month.

    Returns None when the result would be past the last representable year.
    """
    years, month_index = divmod(day.month - 1 + months, 12)
    if day.year + years > MAXYEAR:
        return None
    return date(day.year + years, month_index + 1, 1)


def period_window(period: Period, day: date) -> tuple[date, date | None]:
    """Return the [start, end) window of `period` containing `day`."""
    months = period.months
    if months is None:
        return day, None
    start = date(day.year, (day.month - 1) // months * months + 1, 1)
    return start, add_months(start, months)


def balance(account_type: AccountType, sides: list[Decimal]) -> Decimal:
    """Debit-normal types are debit minus credit, credit-normal the reverse."""
    if account_type in (AccountType.ASSET, AccountType.EXPENSE):
        return sides[DR] - sides[CR]
    if account_type in (AccountType.DEBT, AccountType.INCOME):
        return sides[CR] - sides[DR]
    return ZERO


@dataclass
class Account:
    """Debit and credit sums of one account within a report.

    `flat` holds amounts posted to exactly this account, `cumulative` also
    includes everything posted to its descendants.
    """

    name: AccountName
    flat: list[Decimal] = field(default_factory=lambda: [ZERO, ZERO])
    cumulative: list[Decimal] = field(default_factory=lambda: [ZERO, ZERO])

    @property
    def flat_balance(self) -> Decimal:
        return balance(self.name.type, self.flat)

    @property
    def cumulative_balance(self) -> Decimal:
        return balance(self.name.type, self.cumulative)

    def copy(self) -> "Account":
        return Account(name=self.name, flat=list(self.flat), cumulative=list(self.cumulative))


@dataclass
class Report:
    """Accounts and transactions of one period window [start, end)."""

    period: Period
    start: date
    end: date | None
    prev: int | None = None
    accounts: dict[AccountName, Account] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)

    def get_account(self, name: AccountName) -> Account:
        """Look up an account, adding an empty one if missing."""
        account = self.accounts.get(name)
        if account is None:
            account = Account(name=name)
            self.accounts[name] = account
        return account

    def add_transaction(self, transaction: Transaction) -> None:
        """Post both legs to their accounts and every ancestor account."""
        for side, name in enumerate(transaction.accounts):
            self.get_account(name).flat[side] += transaction.amount
            for ancestor in name.ancestors():
                self.get_account(ancestor).cumulative[side] += transaction.amount
        self.transactions.append(transaction)

    def carry_forward(self, previous: "Report") -> None:
        """Copy balance sheet accounts from the previous report."""
        for name, account in previous.accounts.items():
            if name.type in CARRIED_TYPES:
                self.accounts[name] = account.copy()


class ReportChain:
    """All reports of one period, oldest first."""

    def __init__(self, period: Period, first: date):
        self.period = period
        start, end = period_window(period, first)
        self.reports: list[Report] = [Report(period=period, start=start, end=end)]

    def __iter__(self) -> Iterator[Report]:
        return iter(self.reports)

    def __len__(self) -> int:
        return len(self.reports)

    @property
    def current(self) -> Report:
        return self.reports[-1]

    def previous(self, report: Report) -> Report | None:
        if report.prev is None:
            return None
        return self.reports[report.prev]

    def next_period(self) -> Report:
        """Open the report following the current one."""
        current = self.current
        report = Report(
            period=self.period,
            start=current.end,
            end=add_months(current.end, self.period.months),
            prev=len(self.reports) - 1,
        )
        report.carry_forward(current)
        self.reports.append(report)
        return report

    def advance(self, day: date) -> Report:
        """Open reports until one covers `day` and return it."""
        while self.current.end is not None and day >= self.current.end:
            self.next_period()
        return self.current

    def post(self, transaction: Transaction) -> Report:
        report = self.advance(transaction.date)
        report.add_transaction(transaction)
        return report

    def account_delta(self, report: Report, name: AccountName) -> Decimal:
        """Change of an account's cumulative balance since the previous report."""
        current = report.accounts.get(name)
        curr = current.cumulative_balance if current is not None else ZERO
        previous = self.previous(report)
        prev = ZERO
        if previous is not None and name in previous.accounts:
            prev = previous.accounts[name].cumulative_balance
        return curr - prev


def prepare_reports(store: LedgerStore, periods: Iterable[Period] = tuple(Period)) -> list[ReportChain]:
    """Build one report chain per period from the store's transactions.

    Transactions are assumed to be in date order, which LedgerStore
    guarantees. An empty ledger gives no chains.
    """
    transactions = store.transactions
    if not transactions:
        return []
    first = transactions[0].date
    chains = [ReportChain(period, first) for period in periods]
    for transaction in transactions:
        for chain in chains:
            chain.post(transaction)
    for chain in chains:
        _logger.info("Prepared %d %s reports", len(chain), chain.period.value)
    return chains


def iter_reports(chains: Iterable[ReportChain]) -> Iterator[tuple[ReportChain, Report]]:
    """Yield every report of every chain, oldest first within a chain."""
    for chain in chains:
        for report in chain:
            yield chain, report
