from datetime import datetime

import pytest

from app.constants.order_status import OrderStatus
from app.schemas.orders_schemas import OrderRead
from app.services.fulfillment_tracker import FulfillmentTracker


def make_order(id, order_id="ORD1234", product_ids=("1", "3"), status="pending",
               username="ravi", created_at=datetime(2026, 3, 1)):
    return OrderRead.model_validate({
        "id": id,
        "order_id": order_id,
        "user": {"id": 7, "username": username, "email": f"{username}@example.com"},
        "lines": [
            {
                "product": {"id": pid, "name": f"Product {pid}", "unit_price": 1000},
                "quantity": 1,
            }
            for pid in product_ids
        ],
        "shipping_address": {
            "door_number": "1", "street": "Main", "city": "Pune",
            "state": "MH", "pincode": "411001",
        },
        "payment_method": "cod",
        "subtotal": 1000 * len(product_ids),
        "shipping": 500,
        "total_amount": 1000 * len(product_ids) + 500,
        "status": status,
        "created_at": created_at,
    })


@pytest.fixture
def tracker(events):
    return FulfillmentTracker(notify=events)


def test_new_orders_start_unticked(tracker):
    view = tracker.track(make_order("a"))

    assert [l.completed for l in view.lines] == [False, False]
    assert tracker.is_order_ready(view) is False


def test_order_ready_once_every_line_is_ticked(tracker):
    order = make_order("a")
    tracker.track(order)

    assert tracker.toggle_line_completion("a", "1") is True
    assert tracker.is_order_ready(order) is False

    assert tracker.toggle_line_completion("a", "3") is True
    assert tracker.is_order_ready(order) is True


def test_toggle_flips_back(tracker):
    tracker.track(make_order("a"))

    tracker.toggle_line_completion("a", "1")
    assert tracker.toggle_line_completion("a", "1") is False


def test_toggle_unknown_order_or_line_is_noop(tracker):
    tracker.track(make_order("a"))

    assert tracker.toggle_line_completion("missing", "1") is None
    assert tracker.toggle_line_completion("a", "99") is None


def test_order_without_lines_is_ready(tracker):
    order = make_order("empty", product_ids=())
    tracker.track(order)

    assert tracker.is_order_ready(order) is True
    assert tracker.complete_order("empty") is True


def test_complete_order_requires_readiness(tracker, events):
    tracker.track(make_order("a"))
    tracker.toggle_line_completion("a", "1")

    assert tracker.complete_order("a") is False
    assert tracker.get("a").status == OrderStatus.pending
    assert "delivered" not in events.names

    tracker.toggle_line_completion("a", "3")
    assert tracker.complete_order("a") is True
    assert tracker.get("a").status == OrderStatus.delivered
    assert events.names == ["delivered"]


def test_delivered_order_checklist_is_frozen(tracker):
    tracker.track(make_order("a"))
    tracker.toggle_line_completion("a", "1")
    tracker.toggle_line_completion("a", "3")
    tracker.complete_order("a")

    assert tracker.toggle_line_completion("a", "1") is None
    assert tracker.get("a").status == OrderStatus.delivered
    assert [l.completed for l in tracker.view("a").lines] == [True, True]
    assert tracker.complete_order("a") is False


def test_cancelled_order_cannot_be_completed(tracker):
    tracker.track(make_order("a", product_ids=(), status="cancelled"))

    assert tracker.complete_order("a") is False


def test_complete_unknown_order_is_noop(tracker):
    assert tracker.complete_order("missing") is False


def test_retracking_keeps_checklist_state(tracker):
    tracker.track(make_order("a"))
    tracker.toggle_line_completion("a", "1")

    tracker.track(make_order("a", status="processing"))

    assert [l.completed for l in tracker.view("a").lines] == [True, False]


def test_checklist_does_not_touch_the_stored_order(tracker):
    order = make_order("a")
    tracker.track(order)
    tracker.toggle_line_completion("a", "1")

    assert [l.completed for l in order.lines] == [None, None]


def test_orders_filters_and_sorts(tracker):
    tracker.load([
        make_order("a", order_id="ORD0001", created_at=datetime(2026, 3, 1)),
        make_order("b", order_id="ORD0002", username="meena", created_at=datetime(2026, 3, 5)),
        make_order("c", order_id="ORD0003", product_ids=(), created_at=datetime(2026, 3, 3)),
    ])
    tracker.complete_order("c")

    assert [o.id for o in tracker.orders()] == ["b", "a"]
    assert [o.id for o in tracker.orders(completed=True)] == ["c"]
    assert [o.id for o in tracker.orders(search="MEENA")] == ["b"]
    assert [o.id for o in tracker.orders(search="ord0001")] == ["a"]
