from datetime import date, datetime, time
from typing import Any, Dict, List, Optional
from koperasi_reports.repositories.base import BaseRepository
from koperasi_reports.models.journal import JournalEntry, LedgerLine, EntryStatus

class JournalRepository(BaseRepository[JournalEntry]):

    def _date_bounds(self, start_date: Optional[date], end_date: date) -> Dict[str, Any]:
        # Entry dates are stored as midnight datetimes
        bounds = {"$lte": datetime.combine(end_date, time.max)}
        if start_date is not None:
            bounds["$gte"] = datetime.combine(start_date, time.min)
        return bounds

    async def posted_lines(self, account_code: str, start_date: Optional[date], end_date: date) -> List[LedgerLine]:
        """
        Posted line items for one account, joined to their parent entry.
        `start_date=None` drops the lower bound (point-in-time snapshot).
        """
        pipeline = [
            {"$match": {
                "status": EntryStatus.POSTED.value,
                "entry_date": self._date_bounds(start_date, end_date),
                "lines.account_code": account_code
            }},
            {"$unwind": "$lines"},
            {"$match": {"lines.account_code": account_code}},
            {"$sort": {"entry_date": 1, "journal_id": 1}},
            {"$project": {
                "_id": 0,
                "account_code": "$lines.account_code",
                "debit_amount": {"$ifNull": ["$lines.debit_amount", 0]},
                "credit_amount": {"$ifNull": ["$lines.credit_amount", 0]},
                "entry_date": 1,
                "status": 1,
                "reference_type": {"$ifNull": ["$reference_type", ""]},
                "description": {"$ifNull": ["$description", ""]},
                "activity_classification": 1
            }}
        ]
        docs = await self.aggregate(pipeline)
        return [LedgerLine.from_mongo(doc) for doc in docs]
