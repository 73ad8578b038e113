# app/services/fulfillment_tracker.py
import logging
from typing import Dict, Iterable, List, Optional

from app.constants.order_status import OrderStatus, TERMINAL_STATUSES
from app.notifications import StoreEvent, dispatch_event
from app.schemas.orders_schemas import OrderRead

logger = logging.getLogger(__name__)


class FulfillmentTracker:
    """
    Admin packing checklist.

    Keeps a working copy of each order plus a per-line completion flag.
    Completion flags live only in this object; they are not written back
    to the order store, so a new tracker starts every line unticked.
    """

    def __init__(self, notify=dispatch_event):
        self.notify = notify
        self._orders: Dict[str, OrderRead] = {}
        self._completion: Dict[str, Dict[str, bool]] = {}

    # -------------------------
    # WORKING SET
    # -------------------------
    def track(self, order: OrderRead) -> OrderRead:
        """
        Add or refresh an order. Existing checklist state is kept, a
        newly seen line starts incomplete.
        """
        self._orders[order.id] = order
        state = self._completion.setdefault(order.id, {})
        for line in order.lines:
            state.setdefault(line.product.id, bool(line.completed))
        return self.view(order.id)

    def load(self, orders: Iterable[OrderRead]) -> None:
        for order in orders:
            self.track(order)

    def get(self, order_id: str) -> Optional[OrderRead]:
        return self._orders.get(order_id)

    def view(self, order_id: str) -> Optional[OrderRead]:
        """The tracked order with its lines' ``completed`` flags filled in."""
        order = self._orders.get(order_id)
        if order is None:
            return None

        state = self._completion.get(order_id, {})
        lines = tuple(
            line.model_copy(update={"completed": state.get(line.product.id, False)})
            for line in order.lines
        )
        return order.model_copy(update={"lines": lines})

    def orders(self, search: str = "", completed: bool = False) -> List[OrderRead]:
        """
        Tracked orders newest first. ``completed`` picks delivered orders,
        otherwise everything not yet delivered. ``search`` matches the
        display order id, username or email, case-insensitively.
        """
        term = (search or "").lower()
        result = []
        for order in self._orders.values():
            if term and not (
                term in order.order_id.lower()
                or term in order.user.username.lower()
                or term in order.user.email.lower()
            ):
                continue

            is_delivered = order.status == OrderStatus.delivered
            if completed != is_delivered:
                continue

            result.append(self.view(order.id))

        result.sort(key=lambda o: o.created_at, reverse=True)
        return result

    # -------------------------
    # CHECKLIST
    # -------------------------
    def toggle_line_completion(self, order_id: str, product_id: str) -> Optional[bool]:
        """
        Flip one line's flag and return the new value. Returns None when
        nothing changed: unknown order or line, or the order is already
        delivered or cancelled.
        """
        order = self._orders.get(order_id)
        if order is None or order.status.value in TERMINAL_STATUSES:
            return None

        state = self._completion.setdefault(order_id, {})
        if product_id not in state:
            return None

        state[product_id] = not state[product_id]
        return state[product_id]

    def is_order_ready(self, order: OrderRead) -> bool:
        # zero lines is vacuously ready
        state = self._completion.get(order.id, {})
        return all(
            state.get(line.product.id, bool(line.completed))
            for line in order.lines
        )

    def complete_order(self, order_id: str) -> bool:
        """
        Mark a fully ticked order delivered. Returns False, and changes
        nothing, when the order is unknown, not ready, or already terminal.
        """
        order = self._orders.get(order_id)
        if order is None:
            return False

        if order.status.value in TERMINAL_STATUSES or not self.is_order_ready(order):
            return False

        self._orders[order_id] = order.model_copy(update={"status": OrderStatus.delivered})
        logger.info(f"Order {order.order_id} marked as delivered")
        if self.notify:
            self.notify(StoreEvent.DELIVERED, extra={"order_id": order.order_id})
        return True
