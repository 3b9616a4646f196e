from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Optional
from pydantic import BeforeValidator, Field
from koperasi_reports.models.base import Amount, MongoModel

class EntryStatus(str, Enum):
    DRAFT = "draft"
    POSTED = "posted"
    VOIDED = "voided"

class ActivityClassification(str, Enum):
    OPERATING = "operating"
    FINANCING = "financing"

def _as_date(value):
    # BSON has no date type, entries come back as midnight datetimes
    if isinstance(value, datetime):
        return value.date()
    return value

BsonDate = Annotated[date, BeforeValidator(_as_date)]

class JournalLine(MongoModel):
    account_code: str
    debit_amount: Amount = Field(Decimal(0), ge=0)
    credit_amount: Amount = Field(Decimal(0), ge=0)
    description: str = ""

    def to_mongo(self, exclude_none: bool = False):
        data = super().to_mongo(exclude_none=exclude_none)
        data.pop("_id", None)
        return data

class JournalEntry(MongoModel):
    """Double-entry bookkeeping record with its embedded line items."""
    journal_id: str
    entry_date: BsonDate
    reference_type: str
    reference_id: Optional[str] = None
    description: str = ""

    lines: List[JournalLine]

    total_debit: Amount
    total_credit: Amount

    status: EntryStatus = EntryStatus.DRAFT
    activity_classification: Optional[ActivityClassification] = None

    def validate_balance(self) -> bool:
        return abs(self.total_debit - self.total_credit) < Decimal("0.01")

    def to_mongo(self, exclude_none: bool = False):
        data = super().to_mongo(exclude_none=exclude_none)
        data["lines"] = [line.to_mongo(exclude_none=exclude_none) for line in self.lines]
        return data

class LedgerLine(MongoModel):
    """
    A journal line joined to its parent entry, as read for aggregation.
    """
    account_code: str
    debit_amount: Amount = Decimal(0)
    credit_amount: Amount = Decimal(0)
    entry_date: BsonDate
    status: EntryStatus
    reference_type: str = ""
    description: str = ""
    activity_classification: Optional[ActivityClassification] = None

    @property
    def net_amount(self) -> Decimal:
        return self.debit_amount - self.credit_amount
