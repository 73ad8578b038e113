from enum import Enum


class OrderStatus(str, Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


class PaymentMethod(str, Enum):
    upi = "upi"
    netbanking = "netbanking"
    cod = "cod"


# forward only; cancellation from any non-terminal state
ALLOWED_TRANSITIONS = {
    "pending": ["processing", "shipped", "delivered", "cancelled"],
    "processing": ["shipped", "delivered", "cancelled"],
    "shipped": ["delivered", "cancelled"],
    "delivered": [],
    "cancelled": []
}

TERMINAL_STATUSES = {"delivered", "cancelled"}


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, [])
