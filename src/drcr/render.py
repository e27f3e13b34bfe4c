"""Text rendering of reports, one file per report."""

import calendar
from collections.abc import Iterable
from decimal import Decimal
from pathlib import Path

from drcr.logging_setup import get_logger
from drcr.parser import DATE_FORMAT
from drcr.report import Account, Period, Report, ReportChain, iter_reports
from drcr.table import Align, Cell, Table

_logger = get_logger("drcr.render")

INDENT = 4


def report_title(report: Report) -> str:
    start = report.start
    if report.period is Period.ALL:
        return "All transactions"
    if report.period is Period.YEARLY:
        return f"{start.year}"
    if report.period is Period.QUARTERLY:
        return f"Q{quarter(report)} {start.year}"
    if report.period is Period.MONTHLY:
        return f"{calendar.month_name[start.month]} {start.year}"
    raise ValueError(f"Unsupported report period {report.period!r}")


def report_filename(report: Report) -> str:
    start = report.start
    if report.period is Period.ALL:
        return "all.txt"
    if report.period is Period.YEARLY:
        return f"{start.year}.txt"
    if report.period is Period.QUARTERLY:
        return f"{start.year}-Q{quarter(report)}.txt"
    if report.period is Period.MONTHLY:
        return f"{start.year}-{start.month:02d}.txt"
    raise ValueError(f"Unsupported report period {report.period!r}")


def quarter(report: Report) -> int:
    return (report.start.month - 1) // 3 + 1


def format_balance(value: Decimal) -> str:
    """Two decimals, with a zero balance shown as '-'."""
    text = f"{value:.2f}"
    if text in ("0.00", "-0.00"):
        return "-"
    return text


def format_delta(value: Decimal) -> str:
    text = f"{value:+.2f}"
    if text == "-0.00":
        return "+0.00"
    return text


def account_sort_key(account: Account) -> str:
    # With '.' as ' ', "e:food.snacks" sorts directly below "e:food".
    return account.name.replace(".", " ")


def account_table(chain: ReportChain, report: Report) -> Table:
    t = Table()
    t.set_titles([Cell("account"), Cell("amount"), Cell("cumulative"), Cell("delta")])
    for account in sorted(report.accounts.values(), key=account_sort_key):
        cumulative = format_balance(account.cumulative_balance)
        delta = format_delta(chain.account_delta(report, account.name))
        if cumulative == "-" and delta == "+0.00":
            continue
        t.add_row([
            Cell(account.name.leaf, pad_left=INDENT * account.name.depth),
            Cell(format_balance(account.flat_balance), align=Align.RIGHT),
            Cell(cumulative, align=Align.RIGHT),
            Cell(delta, align=Align.RIGHT),
        ])
    return t


def transaction_table(report: Report) -> Table:
    t = Table()
    t.set_titles([Cell("date"), Cell("account"), Cell("debit"), Cell("credit")])
    prev_date = None
    for tr in report.transactions:
        date_text = tr.date.strftime(DATE_FORMAT) if tr.date != prev_date else ""
        prev_date = tr.date
        amount = f"{tr.amount:.2f}"
        t.add_row([
            Cell(date_text),
            Cell(tr.debit),
            Cell(amount, align=Align.RIGHT),
            Cell(""),
        ])
        t.add_row([
            Cell(""),
            Cell(tr.credit),
            Cell(""),
            Cell(amount, align=Align.RIGHT),
        ])
    return t


def render_report(chain: ReportChain, report: Report) -> str:
    """Render the account summary followed by the transaction log."""
    return (
        f"{report_title(report)}\n\n"
        f"{account_table(chain, report)}"
        "\nTransactions\n\n"
        f"{transaction_table(report)}"
    )


def write_report(chain: ReportChain, report: Report, output_dir: Path) -> Path:
    path = Path(output_dir) / report_filename(report)
    path.write_text(render_report(chain, report), encoding="utf-8")
    _logger.debug("Wrote %s", path)
    return path


def write_reports(chains: Iterable[ReportChain], output_dir: Path) -> list[Path]:
    """Write every report of every chain to the output directory."""
    paths = [write_report(chain, report, output_dir) for chain, report in iter_reports(chains)]
    _logger.info("Wrote %d reports to '%s'", len(paths), output_dir)
    return paths
