from typing import Iterable, List, Optional
from pymongo import ASCENDING
from koperasi_reports.repositories.base import BaseRepository
from koperasi_reports.models.account import Account, AccountType

class AccountRepository(BaseRepository[Account]):

    async def list_active(self, types: Optional[Iterable[AccountType]] = None) -> List[Account]:
        """Active accounts, optionally restricted to some types, ordered by code."""
        filter = {"is_active": True}
        if types is not None:
            filter["account_type"] = {"$in": [t.value for t in types]}
        return await self.list(filter, sort=[("account_code", ASCENDING)])
