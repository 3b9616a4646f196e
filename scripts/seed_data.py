import asyncio

from koperasi_reports.config import settings
from koperasi_reports.database import db
from koperasi_reports.journal.templates import build_journal_entry
from koperasi_reports.models.account import Account, AccountType

CHART_OF_ACCOUNTS = [
    ("1001", "Kas", AccountType.ASSET),
    ("1101", "Piutang Pinjaman Anggota", AccountType.ASSET),
    ("2001", "Simpanan Pokok", AccountType.LIABILITY),
    ("2002", "Simpanan Wajib", AccountType.LIABILITY),
    ("2003", "Simpanan Sukarela", AccountType.LIABILITY),
    ("3001", "Modal Koperasi", AccountType.EQUITY),
    ("4001", "Pendapatan Bunga Pinjaman", AccountType.REVENUE),
    ("5001", "Beban Jasa Pelayanan", AccountType.EXPENSE),
]

TRANSACTIONS = [
    ("savings_deposit", {"member_id": "AGT-001", "account_type": "pokok", "amount": 500000, "transaction_date": "2024-01-05"}),
    ("savings_deposit", {"member_id": "AGT-002", "account_type": "wajib", "amount": 100000, "transaction_date": "2024-01-06"}),
    ("loan_disbursement", {"member_id": "AGT-001", "loan_type": "reguler", "principal_amount": 2000000, "transaction_date": "2024-01-10"}),
    ("loan_payment", {"member_id": "AGT-001", "payment_amount": 220000, "principal_amount": 200000, "interest_amount": 20000, "transaction_date": "2024-02-10"}),
    ("savings_withdrawal", {"member_id": "AGT-002", "account_type": "sukarela", "amount": 50000, "transaction_date": "2024-02-15"}),
    ("service_fee_payment", {"member_id": "AGT-001", "period": "2024-02", "gross_amount": 300000, "net_amount": 250000, "loan_deduction": 50000, "transaction_date": "2024-02-28"}),
]

async def seed_db():
    print(f"Connecting to {settings.MONGODB_URL}...")
    db.connect()

    # 1. Chart of Accounts
    print("Seeding Chart of Accounts...")
    for code, name, account_type in CHART_OF_ACCOUNTS:
        await db.accounts.upsert("account_code", Account(code=code, name=name, type=account_type))

    # 2. Journal Entries
    if await db.journal.count() > 0:
        print("Journal already has entries, skipping transactions.")
    else:
        print("Seeding Journal Entries...")
        for transaction_type, data in TRANSACTIONS:
            entry = build_journal_entry(transaction_type, data)
            await db.journal.create(entry)

    print("Seeding complete.")
    db.close()

if __name__ == "__main__":
    asyncio.run(seed_db())
