# app/services/order_summary.py
import logging
from typing import Callable, List, Optional

from app.notifications import StoreEvent, dispatch_event
from app.schemas.orders_schemas import OrderRead

logger = logging.getLogger(__name__)


def generate_order_summary(
    order: OrderRead,
    notify: Optional[Callable] = dispatch_event,
) -> List[str]:
    """
    Plain text order summary.

    Stand-in for a printable document; nothing is rendered or stored.
    """
    address = order.shipping_address
    summary = [
        f"Order #{order.order_id}",
        f"Placed: {order.created_at:%d %b %Y %H:%M}",
        f"Customer: {order.user.username} <{order.user.email}>",
        (
            f"Ship to: {address.door_number}, {address.street}, "
            f"{address.city}, {address.state} - {address.pincode}"
        ),
        f"Payment: {order.payment_method.value}",
    ]

    for line in order.lines:
        color = f" ({line.color})" if line.color else ""
        summary.append(
            f"  {line.product.name}{color} x{line.quantity} "
            f"@ {line.product.unit_price:.2f} = {line.product.unit_price * line.quantity:.2f}"
        )

    summary += [
        f"Subtotal: {order.subtotal:.2f}",
        f"Shipping: {'Free' if order.shipping == 0 else f'{order.shipping:.2f}'}",
        f"Total: {order.total_amount:.2f}",
    ]

    logger.info(f"Order summary generated for {order.order_id}")
    if notify:
        notify(
            StoreEvent.ORDER_SUMMARY_GENERATED,
            extra={"order_id": order.order_id},
        )
    return summary
