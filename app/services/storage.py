# app/services/storage.py
import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Protocol

from sqlmodel import Session

from app.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)

CART_KEY = "cart"
RECENTLY_VIEWED_KEY = "recentlyViewed"
ORDERS_KEY = "orders"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Dict backed storage, one instance per browsing session."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SQLStorage:
    """
    Durable storage rows scoped by user.

    Every ``set``/``remove`` commits immediately.
    """

    def __init__(self, session: Session, scope: str):
        self.session = session
        self.scope = scope

    def get(self, key: str) -> Optional[str]:
        entry = self.session.get(StorageEntry, (self.scope, key))
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        entry = self.session.get(StorageEntry, (self.scope, key))
        if entry:
            entry.value = value
            entry.updated_at = datetime.utcnow()
        else:
            entry = StorageEntry(scope=self.scope, key=key, value=value)
        self.session.add(entry)
        self.session.commit()

    def remove(self, key: str) -> None:
        entry = self.session.get(StorageEntry, (self.scope, key))
        if entry:
            self.session.delete(entry)
            self.session.commit()


def load_json(storage: KeyValueStorage, key: str, default: Any) -> Any:
    """
    Read a JSON payload, falling back to ``default`` when it is
    missing or unparseable. Corruption is logged, never raised.
    """
    raw = storage.get(key)
    if raw is None:
        return default

    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning(f"Discarding corrupt '{key}' payload: {e}")
        return default
