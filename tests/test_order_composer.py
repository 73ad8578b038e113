import re
from datetime import datetime

import pytest
from pydantic import ValidationError as SchemaError

from app.constants.order_status import OrderStatus, PaymentMethod
from app.exceptions import PersistenceError, ValidationError
from app.schemas.address_schemas import AddressForm
from app.schemas.orders_schemas import OrderRead
from app.services.order_composer import OrderComposer
from app.utils.order_id import generate_order_id

ADDRESS = AddressForm(
    door_number="12-4",
    street="Market Road",
    city="Nashik",
    state="Maharashtra",
    pincode="422001",
)


class FakeOrderRepository:
    def __init__(self, fail: Exception | None = None):
        self.fail = fail
        self.saved = []

    async def save(self, draft):
        if self.fail:
            raise self.fail
        self.saved.append(draft)
        return OrderRead(**draft.model_dump(), id=f"srv-{len(self.saved)}")


@pytest.fixture
def repository():
    return FakeOrderRepository()


@pytest.fixture
def composer(cart, repository, events):
    return OrderComposer(
        cart,
        repository,
        free_shipping_threshold=10000,
        flat_shipping_fee=500,
        order_id_factory=lambda: "ORD0042",
        clock=lambda: datetime(2026, 3, 14, 9, 30),
        notify=events,
    )


@pytest.fixture
def filled_cart(cart):
    cart.add("1", "Mahindra 575 DI Tractor", 385000, image="/img/575di.jpg", color="red")
    cart.add("3", "Rotavator 42 Blade", 75000, quantity=2, color="green")
    cart.add("5", "Knapsack Sprayer 16L", 5000)
    cart.toggle_selected("1")
    cart.toggle_selected("3")
    return cart


async def test_place_order_builds_pending_snapshot(composer, filled_cart, repository, customer):
    order = await composer.place_order(
        filled_cart.selected_lines(), ADDRESS, PaymentMethod.upi, customer
    )

    assert order.id == "srv-1"
    assert order.order_id == "ORD0042"
    assert order.status == OrderStatus.pending
    assert order.created_at == datetime(2026, 3, 14, 9, 30)
    assert order.payment_method == PaymentMethod.upi
    assert (order.subtotal, order.shipping, order.total_amount) == (535000, 0, 535000)
    assert order.user.username == "ravi"
    assert [(l.product.id, l.quantity, l.color) for l in order.lines] == [
        ("1", 1, "red"),
        ("3", 2, "green"),
    ]
    assert order.shipping_address.city == "Nashik"
    assert len(repository.saved) == 1


async def test_success_removes_only_submitted_lines(composer, filled_cart, customer, events):
    await composer.place_order(filled_cart.selected_lines(), ADDRESS, "cod", customer)

    assert [l.product_id for l in filled_cart.lines] == ["5"]
    assert events.names[-2:] == ["order_placed", "order_summary_generated"]


async def test_placed_order_is_not_affected_by_later_cart_changes(composer, filled_cart, customer):
    order = await composer.place_order(filled_cart.selected_lines(), ADDRESS, "cod", customer)

    filled_cart.set_quantity("5", 9)
    filled_cart.add("3", "Rotavator 42 Blade", 75000, quantity=4, color="orange")

    assert [(l.product.id, l.quantity, l.color) for l in order.lines] == [
        ("1", 1, "red"),
        ("3", 2, "green"),
    ]
    with pytest.raises(SchemaError):
        order.lines[0].quantity = 50


@pytest.mark.parametrize("field", ["door_number", "street", "city", "state", "pincode"])
async def test_blank_address_field_is_rejected(composer, filled_cart, repository, customer, field):
    address = ADDRESS.model_copy(update={field: "   "})

    with pytest.raises(ValidationError) as exc:
        await composer.place_order(filled_cart.selected_lines(), address, "cod", customer)

    assert field in exc.value.message
    assert repository.saved == []
    assert len(filled_cart) == 3


async def test_empty_selection_is_rejected(composer, filled_cart, repository, customer):
    filled_cart.select_all(False)

    with pytest.raises(ValidationError) as exc:
        await composer.place_order(filled_cart.selected_lines(), ADDRESS, "cod", customer)

    assert "No items selected for checkout" in exc.value.problems
    assert repository.saved == []


async def test_every_problem_is_listed(composer, customer):
    with pytest.raises(ValidationError) as exc:
        await composer.place_order([], AddressForm(), "cheque", customer)

    assert len(exc.value.problems) == 3


async def test_address_may_be_a_plain_dict(composer, filled_cart, customer):
    order = await composer.place_order(
        filled_cart.selected_lines(), ADDRESS.model_dump(), "netbanking", customer
    )

    assert order.shipping_address.pincode == "422001"


async def test_persistence_failure_is_reraised_and_cart_untouched(cart, customer, events):
    failure = PersistenceError("database unavailable")
    composer = OrderComposer(cart, FakeOrderRepository(fail=failure), notify=events)
    cart.add("5", "Knapsack Sprayer 16L", 5000)
    cart.select_all(True)
    before = cart.lines

    with pytest.raises(PersistenceError) as exc:
        await composer.place_order(cart.selected_lines(), ADDRESS, "cod", customer)

    assert exc.value is failure
    assert cart.lines == before
    assert "order_failed" in events.names


async def test_small_order_total_includes_shipping(composer, cart, customer):
    cart.add("5", "Knapsack Sprayer 16L", 5000)
    cart.select_all(True)

    order = await composer.place_order(cart.selected_lines(), ADDRESS, "cod", customer)

    assert (order.subtotal, order.shipping, order.total_amount) == (5000, 500, 5500)


def test_display_order_id_format():
    order_id = generate_order_id()

    assert re.fullmatch(r"ORD\d{4}", order_id)


def test_display_order_id_is_zero_padded():
    class Low:
        def randint(self, a, b):
            return 7

    assert generate_order_id(prefix="ORD", rng=Low()) == "ORD0007"
