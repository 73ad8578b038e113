import json
import logging
from typing import Callable, Iterable, List, Optional

from pydantic import TypeAdapter

from app.models.cart import LineItem
from app.notifications import StoreEvent, dispatch_event
from app.services.storage import CART_KEY, KeyValueStorage, load_json

logger = logging.getLogger(__name__)

_lines_adapter = TypeAdapter(List[LineItem])


class CartStore:
    """
    Line items for one browsing session.

    One line per product id; adding an existing product merges into the
    existing line. Every mutation writes the whole collection back to
    ``storage`` before returning.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = CART_KEY,
        notify: Optional[Callable] = dispatch_event,
    ):
        self.storage = storage
        self.key = key
        self.notify = notify
        self._lines: List[LineItem] = self._load()

    # -------------------------
    # PERSISTENCE
    # -------------------------
    def _load(self) -> List[LineItem]:
        payload = load_json(self.storage, self.key, [])
        try:
            return _lines_adapter.validate_python(payload)
        except ValueError as e:
            logger.warning(f"Discarding unreadable cart payload: {e}")
            return []

    def _persist(self) -> None:
        self.storage.set(
            self.key,
            json.dumps([line.model_dump() for line in self._lines]),
        )

    def _emit(self, event: StoreEvent, **extra):
        if self.notify is None:
            return None
        return self.notify(event, extra=extra)

    def _find(self, product_id: str) -> Optional[LineItem]:
        for line in self._lines:
            if line.product_id == product_id:
                return line
        return None

    # -------------------------
    # MUTATIONS
    # -------------------------
    def add(
        self,
        product_id: str,
        name: str,
        unit_price: float,
        image: str = "",
        quantity: int = 1,
        color: Optional[str] = None,
    ) -> LineItem:
        quantity = max(int(quantity), 1)
        existing = self._find(product_id)

        if existing:
            existing.quantity += quantity
            # an empty color never wipes the chosen one
            if color:
                existing.color = color
            line = existing
        else:
            line = LineItem(
                product_id=product_id,
                name=name,
                unit_price=unit_price,
                image=image,
                quantity=quantity,
                color=color or None,
                selected=False,
            )
            self._lines.append(line)

        self._persist()
        self._emit(StoreEvent.ITEM_ADDED, name=name, product_id=product_id)
        return line.model_copy()

    def remove(self, product_id: str) -> None:
        before = len(self._lines)
        self._lines = [line for line in self._lines if line.product_id != product_id]
        if len(self._lines) == before:
            return

        self._persist()
        self._emit(StoreEvent.ITEM_REMOVED, product_id=product_id)

    def remove_many(self, product_ids: Iterable[str]) -> None:
        """Drop every line whose product id is given, silently."""
        ids = set(product_ids)
        self._lines = [line for line in self._lines if line.product_id not in ids]
        self._persist()

    def set_quantity(self, product_id: str, quantity: int) -> None:
        if quantity < 1:
            return

        line = self._find(product_id)
        if line:
            line.quantity = quantity
            self._persist()

    def toggle_selected(self, product_id: str) -> None:
        line = self._find(product_id)
        if line:
            line.selected = not line.selected
            self._persist()

    def select_all(self, selected: bool) -> None:
        for line in self._lines:
            line.selected = selected
        self._persist()

    def clear(self) -> None:
        self._lines = []
        self._persist()
        logger.info("Cart cleared")
        self._emit(StoreEvent.CART_CLEARED)

    # -------------------------
    # READS
    # -------------------------
    @property
    def lines(self) -> List[LineItem]:
        return [line.model_copy() for line in self._lines]

    def get(self, product_id: str) -> Optional[LineItem]:
        line = self._find(product_id)
        return line.model_copy() if line else None

    def selected_lines(self) -> List[LineItem]:
        return [line.model_copy() for line in self._lines if line.selected]

    @property
    def total_item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def selected_subtotal(self) -> float:
        return sum(line.unit_price * line.quantity for line in self._lines if line.selected)

    def __len__(self) -> int:
        return len(self._lines)
