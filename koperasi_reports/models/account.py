from decimal import Decimal
from enum import Enum
from pydantic import Field
from koperasi_reports.models.base import MongoModel

class AccountType(str, Enum):
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @property
    def is_debit_normal(self) -> bool:
        return self in (AccountType.ASSET, AccountType.EXPENSE)

BALANCE_SHEET_TYPES = (AccountType.ASSET, AccountType.LIABILITY, AccountType.EQUITY)
INCOME_STATEMENT_TYPES = (AccountType.REVENUE, AccountType.EXPENSE)

class Account(MongoModel):
    """An entry in the chart of accounts."""
    code: str = Field(..., alias="account_code", description="Unique, stable account code")
    name: str = Field(..., alias="account_name")
    type: AccountType = Field(..., alias="account_type")
    active: bool = Field(True, alias="is_active")

    def signed_balance(self, total_debit: Decimal, total_credit: Decimal) -> Decimal:
        """Balance on the account's normal side."""
        if self.type.is_debit_normal:
            return total_debit - total_credit
        return total_credit - total_debit
