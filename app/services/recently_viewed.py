import json
from typing import List, Optional

from app.config import settings
from app.services.storage import RECENTLY_VIEWED_KEY, KeyValueStorage, load_json


class RecentlyViewed:
    """Most recently opened product ids, newest first, no duplicates."""

    def __init__(self, storage: KeyValueStorage, limit: Optional[int] = None):
        self.storage = storage
        self.limit = settings.recently_viewed_limit if limit is None else limit

    def ids(self) -> List[str]:
        payload = load_json(self.storage, RECENTLY_VIEWED_KEY, [])
        if not isinstance(payload, list):
            return []
        return [str(i) for i in payload]

    def record(self, product_id: str) -> List[str]:
        ids = self.ids()
        # an id already in the list keeps its position
        if product_id in ids:
            return ids

        ids = [product_id, *ids][: self.limit]
        self.storage.set(RECENTLY_VIEWED_KEY, json.dumps(ids))
        return ids
