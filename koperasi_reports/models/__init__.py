from koperasi_reports.models.base import MongoModel
from koperasi_reports.models.account import Account, AccountType, BALANCE_SHEET_TYPES, INCOME_STATEMENT_TYPES
from koperasi_reports.models.journal import JournalEntry, JournalLine, LedgerLine, EntryStatus, ActivityClassification
from koperasi_reports.models.report import (
    ReportType, ReportEnvelope, Report,
    TrialBalanceReport, TrialBalanceRow,
    BalanceSheetReport, IncomeStatementReport, StatementRow,
    CashFlowReport, CashFlowActivity,
)
