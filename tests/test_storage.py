from app.notifications import StoreEvent, dispatch_event
from app.services.cart_store import CartStore
from app.services.storage import CART_KEY, SQLStorage, load_json, MemoryStorage


def test_sql_storage_round_trip_and_remove(session):
    storage = SQLStorage(session, scope="7")

    assert storage.get(CART_KEY) is None
    storage.set(CART_KEY, "[]")
    storage.set(CART_KEY, '[{"a": 1}]')
    assert storage.get(CART_KEY) == '[{"a": 1}]'

    storage.remove(CART_KEY)
    assert storage.get(CART_KEY) is None
    storage.remove(CART_KEY)


def test_sql_storage_is_scoped(session):
    SQLStorage(session, scope="7").set(CART_KEY, "mine")

    assert SQLStorage(session, scope="8").get(CART_KEY) is None


def test_cart_survives_a_new_session_object(engine):
    from sqlmodel import Session

    with Session(engine) as first:
        CartStore(SQLStorage(first, "7"), notify=None).add("5", "Knapsack Sprayer 16L", 5000)

    with Session(engine) as second:
        cart = CartStore(SQLStorage(second, "7"), notify=None)
        assert [l.product_id for l in cart.lines] == ["5"]


def test_load_json_falls_back_on_garbage():
    storage = MemoryStorage({"orders": "{{"})

    assert load_json(storage, "orders", []) == []
    assert load_json(storage, "missing", None) is None


def test_dispatcher_builds_popups():
    popup = dispatch_event(StoreEvent.ITEM_ADDED, extra={"name": "Rotavator"})
    assert popup == {
        "title": "Added to Cart",
        "description": "Rotavator has been added to your cart.",
        "variant": "default",
    }

    failed = dispatch_event(StoreEvent.ORDER_FAILED)
    assert failed["variant"] == "destructive"

    assert dispatch_event(StoreEvent.STATUS_CHANGED, extra={"order_id": "ORD0001"}) is None
    assert dispatch_event(StoreEvent.ITEM_ADDED, extra={"name": "x"}, notify_user=False) is None
