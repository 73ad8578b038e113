from .events import StoreEvent
from .dispatcher import dispatch_event

__all__ = [
    "StoreEvent",
    "dispatch_event",
]
