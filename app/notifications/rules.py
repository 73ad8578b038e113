from app.notifications.events import StoreEvent
from app.notifications.channels import Channel


NOTIFICATION_RULES = {

    StoreEvent.ITEM_ADDED: {
        Channel.POPUP_USER: True,
    },

    StoreEvent.ITEM_REMOVED: {
        Channel.POPUP_USER: True,
    },

    StoreEvent.CART_CLEARED: {
        Channel.POPUP_USER: True,
    },

    StoreEvent.ORDER_PLACED: {
        Channel.POPUP_USER: True,
        Channel.LOG_ADMIN: True,
    },

    StoreEvent.ORDER_FAILED: {
        Channel.POPUP_USER: True,
        Channel.LOG_ADMIN: True,
    },

    StoreEvent.ORDER_SUMMARY_GENERATED: {
        Channel.POPUP_USER: True,
    },

    StoreEvent.STATUS_CHANGED: {
        Channel.LOG_ADMIN: True,
    },

    StoreEvent.DELIVERED: {
        Channel.POPUP_USER: True,
        Channel.LOG_ADMIN: True,
    },
}


# (title, description) templates, formatted with the dispatcher's ``extra``
POPUP_MESSAGES = {
    StoreEvent.ITEM_ADDED: ("Added to Cart", "{name} has been added to your cart."),
    StoreEvent.ITEM_REMOVED: ("Removed from Cart", "Item has been removed from your cart."),
    StoreEvent.CART_CLEARED: ("Cart Cleared", "All items have been removed from your cart."),
    StoreEvent.ORDER_PLACED: ("Order Placed Successfully", "Your order #{order_id} has been placed."),
    StoreEvent.ORDER_FAILED: ("Error", "Failed to place order. Please try again."),
    StoreEvent.ORDER_SUMMARY_GENERATED: (
        "Order Summary Generated",
        "Your order #{order_id} summary has been generated.",
    ),
    StoreEvent.DELIVERED: ("Order Completed", "Order #{order_id} has been marked as delivered."),
}
