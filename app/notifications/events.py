from enum import Enum


class StoreEvent(str, Enum):
    ITEM_ADDED = "item_added"
    ITEM_REMOVED = "item_removed"
    CART_CLEARED = "cart_cleared"

    ORDER_PLACED = "order_placed"
    ORDER_FAILED = "order_failed"
    ORDER_SUMMARY_GENERATED = "order_summary_generated"
    STATUS_CHANGED = "status_changed"
    DELIVERED = "delivered"
