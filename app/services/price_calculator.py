from typing import Iterable, Optional

from app.config import settings
from app.models.cart import LineItem
from app.schemas.checkout_schemas import CartTotals


def compute_totals(
    lines: Iterable[LineItem],
    free_shipping_threshold: Optional[float] = None,
    flat_shipping_fee: Optional[float] = None,
) -> CartTotals:
    """
    Derive subtotal / shipping / total for the given lines.

    Callers pass only the selected lines. Shipping is free strictly
    above the threshold; a cart exactly at the threshold still pays the
    flat fee. An empty selection costs nothing at all.
    """
    if free_shipping_threshold is None:
        free_shipping_threshold = settings.free_shipping_threshold
    if flat_shipping_fee is None:
        flat_shipping_fee = settings.flat_shipping_fee

    subtotal = sum(line.unit_price * line.quantity for line in lines)

    if subtotal == 0:
        shipping = 0
    elif subtotal > free_shipping_threshold:
        shipping = 0
    else:
        shipping = flat_shipping_fee

    return CartTotals(
        subtotal=subtotal,
        shipping=shipping,
        total=subtotal + shipping,
    )
