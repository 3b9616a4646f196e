from datetime import date
from typing import Iterable, List, Optional
from koperasi_reports.models.account import Account, AccountType
from koperasi_reports.models.journal import LedgerLine
from koperasi_reports.repositories.account import AccountRepository
from koperasi_reports.repositories.journal import JournalRepository

class MongoLedgerStore:
    """Ledger reads backed by the chart-of-accounts and journal collections."""

    def __init__(self, accounts: AccountRepository, journal: JournalRepository):
        self.accounts = accounts
        self.journal = journal

    async def list_accounts(self, types: Optional[Iterable[AccountType]] = None) -> List[Account]:
        return await self.accounts.list_active(types)

    async def posted_lines(self, account_code: str, start_date: Optional[date], end_date: date) -> List[LedgerLine]:
        return await self.journal.posted_lines(account_code, start_date, end_date)
