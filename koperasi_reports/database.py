import logging
from motor.motor_asyncio import AsyncIOMotorClient
from koperasi_reports.config import settings
from koperasi_reports.repositories.account import AccountRepository
from koperasi_reports.repositories.journal import JournalRepository
from koperasi_reports.repositories.ledger import MongoLedgerStore
from koperasi_reports.models.account import Account
from koperasi_reports.models.journal import JournalEntry

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None

    # Repositories
    accounts: AccountRepository = None
    journal: JournalRepository = None

    def connect(self):
        """Initialize database connection and repositories."""
        self.client = AsyncIOMotorClient(settings.MONGODB_URL)
        db = self.client[settings.DB_NAME]

        self.accounts = AccountRepository(db[settings.ACCOUNTS_COLLECTION], Account)
        self.journal = JournalRepository(db[settings.JOURNAL_COLLECTION], JournalEntry)

        logger.info("Connected to MongoDB")

    def close(self):
        """Close database connection."""
        if self.client:
            self.client.close()
            self.client = None
            logger.info("Disconnected from MongoDB")

db = Database()

async def get_ledger_store() -> MongoLedgerStore:
    """Ledger store dependency; tests override it with an in-memory store."""
    return MongoLedgerStore(db.accounts, db.journal)
