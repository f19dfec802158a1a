import logging
import threading
import uuid
from typing import List

from blogmart.errors import ItemNotFound
from blogmart.schemas.items import CreateItem, Item, ItemStatus

logger = logging.getLogger(__name__)


class ItemsStore:
    """In-memory marketplace items, owned by the application lifespan."""

    def __init__(self):
        self._items: List[Item] = []
        self._lock = threading.Lock()

    def find_all(self) -> List[Item]:
        with self._lock:
            return list(self._items)

    def find_by_id(self, item_id: str) -> Item:
        with self._lock:
            return self._find(item_id)

    def create(self, data: CreateItem) -> Item:
        item = Item(id=str(uuid.uuid4()), **data.model_dump(), status=ItemStatus.ON_SALE)
        with self._lock:
            self._items.append(item)
        logger.info(f"Created item {item.id}")
        return item

    def update_status(self, item_id: str) -> Item:
        with self._lock:
            item = self._find(item_id)
            item.status = ItemStatus.SOLD_OUT
        return item

    def delete(self, item_id: str) -> None:
        with self._lock:
            self._items = [item for item in self._items if item.id != item_id]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def _find(self, item_id: str) -> Item:
        for item in self._items:
            if item.id == item_id:
                return item
        raise ItemNotFound(item_id)
