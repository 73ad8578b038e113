# app/services/order_composer.py
import logging
from datetime import datetime
from typing import Callable, List, Optional, Protocol, Sequence

from app.constants.order_status import OrderStatus, PaymentMethod
from app.exceptions import PersistenceError, ValidationError
from app.models.cart import LineItem
from app.notifications import StoreEvent, dispatch_event
from app.schemas.address_schemas import AddressForm, ShippingAddress
from app.schemas.orders_schemas import (
    OrderDraft,
    OrderLine,
    OrderProduct,
    OrderRead,
    OrderUser,
)
from app.schemas.user_schemas import CurrentUser
from app.services.cart_store import CartStore
from app.services.order_summary import generate_order_summary
from app.services.price_calculator import compute_totals
from app.utils.order_id import generate_order_id

logger = logging.getLogger(__name__)


class OrderRepository(Protocol):
    async def save(self, draft: OrderDraft) -> OrderRead: ...


def _snapshot(lines: Sequence[LineItem]) -> tuple:
    return tuple(
        OrderLine(
            product=OrderProduct(
                id=line.product_id,
                name=line.name,
                unit_price=line.unit_price,
                image=line.image,
            ),
            quantity=line.quantity,
            color=line.color,
        )
        for line in lines
    )


class OrderComposer:
    """
    Turns the selected cart lines plus address and payment input into a
    stored order, then drops those lines from the cart.
    """

    def __init__(
        self,
        cart: CartStore,
        repository: OrderRepository,
        *,
        free_shipping_threshold: Optional[float] = None,
        flat_shipping_fee: Optional[float] = None,
        order_id_factory: Callable[[], str] = generate_order_id,
        clock: Callable[[], datetime] = datetime.utcnow,
        notify: Optional[Callable] = dispatch_event,
    ):
        self.cart = cart
        self.repository = repository
        self.free_shipping_threshold = free_shipping_threshold
        self.flat_shipping_fee = flat_shipping_fee
        self.order_id_factory = order_id_factory
        self.clock = clock
        self.notify = notify

    def validate(
        self,
        selected_lines: Sequence[LineItem],
        address_form: AddressForm,
        payment_method,
        user: Optional[CurrentUser],
    ) -> List[str]:
        problems = []

        missing = address_form.missing_fields()
        if missing:
            problems.append(
                "Please fill in all address fields: missing " + ", ".join(missing)
            )

        if not selected_lines:
            problems.append("No items selected for checkout")

        try:
            PaymentMethod(payment_method)
        except ValueError:
            problems.append(f"Unsupported payment method: {payment_method}")

        if user is None:
            problems.append("You must be signed in to place an order")

        return problems

    def build_draft(
        self,
        selected_lines: Sequence[LineItem],
        address_form: AddressForm,
        payment_method,
        user: CurrentUser,
    ) -> OrderDraft:
        totals = compute_totals(
            selected_lines,
            self.free_shipping_threshold,
            self.flat_shipping_fee,
        )

        return OrderDraft(
            order_id=self.order_id_factory(),
            user=OrderUser(id=user.id, username=user.username, email=user.email),
            lines=_snapshot(selected_lines),
            shipping_address=ShippingAddress(
                door_number=address_form.door_number.strip(),
                street=address_form.street.strip(),
                city=address_form.city.strip(),
                state=address_form.state.strip(),
                pincode=address_form.pincode.strip(),
            ),
            payment_method=PaymentMethod(payment_method),
            subtotal=totals.subtotal,
            shipping=totals.shipping,
            total_amount=totals.total,
            status=OrderStatus.pending,
            created_at=self.clock(),
        )

    async def place_order(
        self,
        selected_lines: Sequence[LineItem],
        address_form: AddressForm,
        payment_method,
        user: Optional[CurrentUser],
    ) -> OrderRead:
        if isinstance(address_form, dict):
            address_form = AddressForm(**address_form)

        problems = self.validate(selected_lines, address_form, payment_method, user)
        if problems:
            raise ValidationError(problems)

        draft = self.build_draft(selected_lines, address_form, payment_method, user)
        logger.info(
            f"User {user.id} placing order {draft.order_id}: "
            f"{len(draft.lines)} lines, total {draft.total_amount}, "
            f"payment {draft.payment_method.value}"
        )

        try:
            order = await self.repository.save(draft)
        except PersistenceError as e:
            logger.warning(f"Order {draft.order_id} was not saved: {e.message}")
            if self.notify:
                self.notify(StoreEvent.ORDER_FAILED, extra={"order_id": draft.order_id})
            raise

        self.cart.remove_many(line.product.id for line in draft.lines)

        logger.info(f"Order {order.order_id} stored as {order.id}")
        if self.notify:
            self.notify(StoreEvent.ORDER_PLACED, extra={"order_id": order.order_id, "id": order.id})
        generate_order_summary(order, notify=self.notify)

        return order
