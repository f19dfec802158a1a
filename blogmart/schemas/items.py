from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ItemStatus(str, Enum):
    ON_SALE = "ON_SALE"
    SOLD_OUT = "SOLD_OUT"


class CreateItem(BaseModel):
    name: str = Field(..., min_length=1, max_length=40)
    price: int = Field(..., ge=0)
    description: Optional[str] = None


class Item(CreateItem):
    id: str
    status: ItemStatus = ItemStatus.ON_SALE
