import asyncio
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, IndexModel

from koperasi_reports.config import settings

async def init_db():
    print(f"Connecting to {settings.MONGODB_URL}...")
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    db = client[settings.DB_NAME]

    # 1. Chart of Accounts
    print(f"Creating indexes on '{settings.ACCOUNTS_COLLECTION}'...")
    await db[settings.ACCOUNTS_COLLECTION].create_indexes([
        IndexModel([("account_code", ASCENDING)], unique=True),
        IndexModel([("is_active", ASCENDING), ("account_type", ASCENDING)]),
    ])

    # 2. Journal Entries
    print(f"Creating indexes on '{settings.JOURNAL_COLLECTION}'...")
    await db[settings.JOURNAL_COLLECTION].create_indexes([
        IndexModel([("journal_id", ASCENDING)], unique=True),
        IndexModel([("status", ASCENDING), ("entry_date", ASCENDING)]),
        IndexModel([("lines.account_code", ASCENDING), ("entry_date", ASCENDING)]),
    ])

    print("Database initialization complete.")
    client.close()

if __name__ == "__main__":
    asyncio.run(init_db())
