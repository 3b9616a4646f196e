import pytest
from datetime import date
from typing import Iterable, List, Optional

from koperasi_reports.models.account import Account, AccountType
from koperasi_reports.models.journal import (
    EntryStatus,
    JournalEntry,
    JournalLine,
    LedgerLine,
)


class InMemoryLedgerStore:
    """Ledger store over plain lists, filtered the way the Mongo pipeline filters."""

    def __init__(self, accounts: List[Account], entries: List[JournalEntry]):
        self.accounts = accounts
        self.entries = entries
        self.queries = []

    async def list_accounts(self, types: Optional[Iterable[AccountType]] = None) -> List[Account]:
        types = tuple(types) if types is not None else None
        selected = [a for a in self.accounts if a.active and (types is None or a.type in types)]
        return sorted(selected, key=lambda a: a.code)

    async def posted_lines(self, account_code: str, start_date: Optional[date], end_date: date) -> List[LedgerLine]:
        self.queries.append((account_code, start_date, end_date))
        lines = []
        for entry in self.entries:
            if entry.status != EntryStatus.POSTED or entry.entry_date > end_date:
                continue
            if start_date is not None and entry.entry_date < start_date:
                continue
            for line in entry.lines:
                if line.account_code != account_code:
                    continue
                lines.append(LedgerLine(
                    account_code=line.account_code,
                    debit_amount=line.debit_amount,
                    credit_amount=line.credit_amount,
                    entry_date=entry.entry_date,
                    status=entry.status,
                    reference_type=entry.reference_type,
                    description=entry.description,
                    activity_classification=entry.activity_classification
                ))
        return sorted(lines, key=lambda l: l.entry_date)


class FailingLedgerStore:
    async def list_accounts(self, types=None):
        raise ConnectionError("ledger store unavailable")

    async def posted_lines(self, account_code, start_date, end_date):
        raise ConnectionError("ledger store unavailable")


def make_entry(journal_id, entry_date, reference_type, lines, status=EntryStatus.POSTED, classification=None, description=None):
    journal_lines = [
        JournalLine(account_code=code, debit_amount=debit, credit_amount=credit)
        for code, debit, credit in lines
    ]
    return JournalEntry(
        journal_id=journal_id,
        entry_date=entry_date,
        reference_type=reference_type,
        description=description or f"{reference_type} {journal_id}",
        lines=journal_lines,
        total_debit=sum(l.debit_amount for l in journal_lines),
        total_credit=sum(l.credit_amount for l in journal_lines),
        status=status,
        activity_classification=classification
    )


@pytest.fixture
def chart_of_accounts():
    return [
        Account(code="1001", name="Kas", type=AccountType.ASSET),
        Account(code="1101", name="Piutang Pinjaman Anggota", type=AccountType.ASSET),
        Account(code="2001", name="Simpanan Pokok", type=AccountType.LIABILITY),
        Account(code="3001", name="Modal Koperasi", type=AccountType.EQUITY),
        Account(code="4001", name="Pendapatan Bunga Pinjaman", type=AccountType.REVENUE),
        Account(code="5001", name="Beban Jasa Pelayanan", type=AccountType.EXPENSE),
        Account(code="9001", name="Kas Lama", type=AccountType.ASSET, active=False),
    ]


@pytest.fixture
def journal_entries():
    return [
        make_entry("JE-0", date(2023, 12, 15), "capital_injection", [("1001", 1000000, 0), ("3001", 0, 1000000)]),
        make_entry("JE-1", date(2024, 1, 5), "savings_deposit", [("1001", 500000, 0), ("2001", 0, 500000)]),
        make_entry("JE-2", date(2024, 1, 20), "loan_disbursement", [("1101", 200000, 0), ("1001", 0, 200000)]),
        make_entry("JE-3", date(2024, 1, 25), "loan_interest", [("1101", 30000, 0), ("4001", 0, 30000)]),
        make_entry("JE-4", date(2024, 1, 28), "service_fee_accrual", [("5001", 20000, 0), ("1101", 0, 20000)]),
        make_entry("JE-5", date(2024, 1, 15), "savings_deposit", [("1001", 999000, 0), ("4001", 0, 999000)], status=EntryStatus.DRAFT),
        make_entry("JE-6", date(2024, 1, 16), "savings_deposit", [("1001", 777000, 0), ("4001", 0, 777000)], status=EntryStatus.VOIDED),
        make_entry("JE-7", date(2024, 2, 10), "savings_deposit", [("1001", 100000, 0), ("2001", 0, 100000)]),
        make_entry("JE-8", date(2023, 11, 1), "old_cash", [("9001", 5000, 0), ("3001", 0, 5000)]),
    ]


@pytest.fixture
def ledger_store(chart_of_accounts, journal_entries):
    return InMemoryLedgerStore(chart_of_accounts, journal_entries)


@pytest.fixture
def failing_store():
    return FailingLedgerStore()


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def store_factory():
    return InMemoryLedgerStore
