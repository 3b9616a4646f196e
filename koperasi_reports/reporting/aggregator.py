import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from koperasi_reports.exceptions import (
    AggregationFailure,
    InvalidParameter,
    MissingParameter,
    UnsupportedReportType,
)
from koperasi_reports.models.account import (
    Account,
    AccountType,
    BALANCE_SHEET_TYPES,
    INCOME_STATEMENT_TYPES,
)
from koperasi_reports.models.journal import ActivityClassification, LedgerLine
from koperasi_reports.models.report import (
    BalanceSheetReport,
    CashFlowActivity,
    CashFlowReport,
    IncomeStatementReport,
    Report,
    ReportType,
    StatementRow,
    TrialBalanceReport,
    TrialBalanceRow,
)
from koperasi_reports.reporting.classification import resolve_activity

logger = logging.getLogger(__name__)

class LedgerStore(Protocol):
    """Read access to the chart of accounts and posted journal lines."""

    async def list_accounts(self, types: Optional[Iterable[AccountType]] = None) -> List[Account]:
        ...

    async def posted_lines(self, account_code: str, start_date: Optional[date], end_date: date) -> List[LedgerLine]:
        ...

def parse_report_type(raw: Optional[str]) -> ReportType:
    if not raw:
        raise MissingParameter("Missing report type parameter")
    try:
        return ReportType(raw)
    except ValueError:
        raise UnsupportedReportType("Invalid report type") from None

def parse_date(raw: Optional[str], name: str, default: date) -> date:
    if not raw:
        return default
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise InvalidParameter(f"Invalid {name}: expected YYYY-MM-DD") from None

def _totals(lines: Sequence[LedgerLine]) -> Tuple[Decimal, Decimal]:
    total_debit = sum((line.debit_amount for line in lines), Decimal(0))
    total_credit = sum((line.credit_amount for line in lines), Decimal(0))
    return total_debit, total_credit

class LedgerAggregator:
    """
    Builds financial statements from posted journal lines.

    Every call recomputes from the store; nothing is cached between requests.
    Balances follow each account's current type: asset and expense accounts
    are debit-normal, the rest credit-normal.
    """

    def __init__(self, store: LedgerStore, cash_account_code: str, operating_tags: Iterable[str]):
        self.store = store
        self.cash_account_code = cash_account_code
        self.operating_tags = tuple(operating_tags)

    async def generate(self, report_type: ReportType, start_date: date, end_date: date) -> Report:
        logger.info(f"Generating {report_type.value} report for period {start_date} to {end_date}")
        builders = {
            ReportType.TRIAL_BALANCE: lambda: self.trial_balance(start_date, end_date),
            ReportType.BALANCE_SHEET: lambda: self.balance_sheet(end_date),
            ReportType.INCOME_STATEMENT: lambda: self.income_statement(start_date, end_date),
            ReportType.CASH_FLOW: lambda: self.cash_flow(start_date, end_date),
        }
        try:
            report = await builders[report_type]()
        except Exception as e:
            raise AggregationFailure(str(e)) from e
        logger.info("Report generated successfully")
        return report

    async def _account_totals(self, account: Account, start_date: Optional[date], end_date: date) -> Tuple[Decimal, Decimal, Decimal]:
        lines = await self.store.posted_lines(account.code, start_date, end_date)
        total_debit, total_credit = _totals(lines)
        return total_debit, total_credit, account.signed_balance(total_debit, total_credit)

    async def trial_balance(self, start_date: date, end_date: date) -> TrialBalanceReport:
        rows: List[TrialBalanceRow] = []
        for account in await self.store.list_accounts():
            debit, credit, balance = await self._account_totals(account, start_date, end_date)
            # Keep any account with activity, even when it nets to zero
            if debit == 0 and credit == 0 and balance == 0:
                continue
            rows.append(TrialBalanceRow(
                account_code=account.code,
                account_name=account.name,
                account_type=account.type,
                debit=debit,
                credit=credit,
                balance=balance
            ))

        total_debit = sum((row.debit for row in rows), Decimal(0))
        total_credit = sum((row.credit for row in rows), Decimal(0))
        return TrialBalanceReport(
            period=f"{start_date} to {end_date}",
            accounts=rows,
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=abs(total_debit - total_credit) < Decimal("0.01")
        )

    async def balance_sheet(self, end_date: date) -> BalanceSheetReport:
        sections = {t: [] for t in BALANCE_SHEET_TYPES}
        for account in await self.store.list_accounts(BALANCE_SHEET_TYPES):
            _, _, balance = await self._account_totals(account, None, end_date)
            if balance == 0:
                continue
            sections[account.type].append(StatementRow(
                account_code=account.code,
                account_name=account.name,
                balance=balance
            ))

        total_assets = sum((row.balance for row in sections[AccountType.ASSET]), Decimal(0))
        total_liabilities = sum((row.balance for row in sections[AccountType.LIABILITY]), Decimal(0))
        total_equity = sum((row.balance for row in sections[AccountType.EQUITY]), Decimal(0))
        return BalanceSheetReport(
            as_of_date=end_date,
            assets=sections[AccountType.ASSET],
            liabilities=sections[AccountType.LIABILITY],
            equity=sections[AccountType.EQUITY],
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            total_equity=total_equity,
            total_liabilities_equity=total_liabilities + total_equity
        )

    async def income_statement(self, start_date: date, end_date: date) -> IncomeStatementReport:
        sections = {t: [] for t in INCOME_STATEMENT_TYPES}
        for account in await self.store.list_accounts(INCOME_STATEMENT_TYPES):
            _, _, balance = await self._account_totals(account, start_date, end_date)
            if balance == 0:
                continue
            sections[account.type].append(StatementRow(
                account_code=account.code,
                account_name=account.name,
                balance=balance
            ))

        total_revenues = sum((row.balance for row in sections[AccountType.REVENUE]), Decimal(0))
        total_expenses = sum((row.balance for row in sections[AccountType.EXPENSE]), Decimal(0))
        return IncomeStatementReport(
            period=f"{start_date} to {end_date}",
            revenues=sections[AccountType.REVENUE],
            expenses=sections[AccountType.EXPENSE],
            total_revenues=total_revenues,
            total_expenses=total_expenses,
            net_income=total_revenues - total_expenses
        )

    async def cash_flow(self, start_date: date, end_date: date) -> CashFlowReport:
        operating: List[CashFlowActivity] = []
        financing: List[CashFlowActivity] = []

        lines = await self.store.posted_lines(self.cash_account_code, start_date, end_date)
        for line in sorted(lines, key=lambda l: l.entry_date):
            activity = CashFlowActivity(
                description=line.description,
                amount=line.net_amount,
                date=line.entry_date
            )
            if resolve_activity(line, self.operating_tags) == ActivityClassification.OPERATING:
                operating.append(activity)
            else:
                financing.append(activity)

        net_operating = sum((a.amount for a in operating), Decimal(0))
        net_financing = sum((a.amount for a in financing), Decimal(0))
        return CashFlowReport(
            period=f"{start_date} to {end_date}",
            operating_activities=operating,
            financing_activities=financing,
            net_operating_cash_flow=net_operating,
            net_financing_cash_flow=net_financing,
            net_cash_flow=net_operating + net_financing
        )
