from datetime import date, datetime, time
from decimal import Decimal
from typing import Annotated, Any, Dict, Type, TypeVar
from bson import Decimal128
from pydantic import BaseModel, BeforeValidator, Field, ConfigDict, PlainSerializer

# Helper to handle ObjectId as string
PyObjectId = Annotated[str, BeforeValidator(str)]

def _as_decimal(value):
    if isinstance(value, Decimal128):
        return value.to_decimal()
    # Legacy documents hold doubles, go through repr so 0.1 stays 0.1
    if isinstance(value, float):
        return Decimal(str(value))
    return value

# Money is exact in memory and in Mongo, plain JSON numbers on the wire
Amount = Annotated[
    Decimal,
    BeforeValidator(_as_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]

def to_bson(value: Any) -> Any:
    """Map values BSON cannot encode: Decimal to Decimal128, date to midnight datetime."""
    if isinstance(value, dict):
        return {k: to_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_bson(v) for v in value]
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value

T = TypeVar("T", bound="MongoModel")

class MongoModel(BaseModel):
    """
    Base model for MongoDB documents with _id handling and serialization helpers.
    """
    id: PyObjectId | None = Field(default=None, alias="_id")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @classmethod
    def from_mongo(cls: Type[T], data: Dict[str, Any]) -> T:
        """Convert MongoDB document to Pydantic model."""
        if not data:
            return None
        data = dict(data)
        id = data.pop("_id", None)
        return cls(id=id, **data)

    def to_mongo(self, exclude_none: bool = False) -> Dict[str, Any]:
        """Convert Pydantic model to a BSON-encodable MongoDB document."""
        data = self.model_dump(by_alias=True, exclude_none=exclude_none)
        if data.get("_id") is None:
            data.pop("_id", None)
        return to_bson(data)
