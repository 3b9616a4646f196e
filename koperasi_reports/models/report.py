import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Literal, Union
from pydantic import BaseModel, Field
from koperasi_reports.models.account import AccountType
from koperasi_reports.models.base import Amount

class ReportType(str, Enum):
    TRIAL_BALANCE = "trial_balance"
    BALANCE_SHEET = "balance_sheet"
    INCOME_STATEMENT = "income_statement"
    CASH_FLOW = "cash_flow"

class TrialBalanceRow(BaseModel):
    account_code: str
    account_name: str
    account_type: AccountType
    debit: Amount
    credit: Amount
    balance: Amount

class StatementRow(BaseModel):
    """One account line on the balance sheet or income statement."""
    account_code: str
    account_name: str
    balance: Amount

class CashFlowActivity(BaseModel):
    description: str
    amount: Amount
    date: datetime.date

class TrialBalanceReport(BaseModel):
    report_type: Literal["Trial Balance"] = "Trial Balance"
    period: str
    accounts: List[TrialBalanceRow] = Field(default_factory=list)
    total_debit: Amount = Decimal(0)
    total_credit: Amount = Decimal(0)
    is_balanced: bool = True

class BalanceSheetReport(BaseModel):
    report_type: Literal["Balance Sheet"] = "Balance Sheet"
    as_of_date: datetime.date
    assets: List[StatementRow] = Field(default_factory=list)
    liabilities: List[StatementRow] = Field(default_factory=list)
    equity: List[StatementRow] = Field(default_factory=list)
    total_assets: Amount = Decimal(0)
    total_liabilities: Amount = Decimal(0)
    total_equity: Amount = Decimal(0)
    total_liabilities_equity: Amount = Decimal(0)

class IncomeStatementReport(BaseModel):
    report_type: Literal["Income Statement"] = "Income Statement"
    period: str
    revenues: List[StatementRow] = Field(default_factory=list)
    expenses: List[StatementRow] = Field(default_factory=list)
    total_revenues: Amount = Decimal(0)
    total_expenses: Amount = Decimal(0)
    net_income: Amount = Decimal(0)

class CashFlowReport(BaseModel):
    report_type: Literal["Cash Flow Statement"] = "Cash Flow Statement"
    period: str
    operating_activities: List[CashFlowActivity] = Field(default_factory=list)
    financing_activities: List[CashFlowActivity] = Field(default_factory=list)
    net_operating_cash_flow: Amount = Decimal(0)
    net_financing_cash_flow: Amount = Decimal(0)
    net_cash_flow: Amount = Decimal(0)

Report = Union[TrialBalanceReport, BalanceSheetReport, IncomeStatementReport, CashFlowReport]

class ReportEnvelope(BaseModel):
    """Success wrapper returned by the reports endpoint."""
    success: bool = True
    generated_at: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(datetime.timezone.utc))
    data: Report
