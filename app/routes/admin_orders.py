# -------- ADMIN ORDERS --------
import logging
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from app.constants.order_status import OrderStatus
from app.dependencies.admin import require_admin
from app.dependencies.services import get_fulfillment_tracker, get_order_repository
from app.exceptions import InvalidStatusTransition, NotFoundError
from app.notifications import StoreEvent, dispatch_event
from app.schemas.orders_schemas import OrderRead, OrderStatusUpdate
from app.schemas.user_schemas import CurrentUser
from app.services.fulfillment_tracker import FulfillmentTracker
from app.services.order_repository import SQLOrderRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def _tracked(
    order_id: str,
    orders: SQLOrderRepository,
    tracker: FulfillmentTracker,
) -> OrderRead:
    try:
        return tracker.track(orders.get(order_id))
    except NotFoundError as e:
        raise HTTPException(404, e.message)


@router.get("", response_model=List[OrderRead])
def list_orders(
    search: str = "",
    completed: bool = False,
    orders: SQLOrderRepository = Depends(get_order_repository),
    tracker: FulfillmentTracker = Depends(get_fulfillment_tracker),
    _: CurrentUser = Depends(require_admin),
):
    tracker.load(orders.list_all())
    return tracker.orders(search=search, completed=completed)


@router.patch("/{order_id}/status", response_model=OrderRead)
def update_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    orders: SQLOrderRepository = Depends(get_order_repository),
    tracker: FulfillmentTracker = Depends(get_fulfillment_tracker),
    admin: CurrentUser = Depends(require_admin),
):
    # delivery goes through the packing checklist
    if data.status == OrderStatus.delivered:
        tracked = _tracked(order_id, orders, tracker)
        if not tracker.is_order_ready(tracked):
            raise HTTPException(400, "Order is not ready: every line must be completed first")

    try:
        order = orders.update_status(order_id, data.status.value)
    except NotFoundError as e:
        raise HTTPException(404, e.message)
    except InvalidStatusTransition as e:
        raise HTTPException(400, e.message)

    dispatch_event(
        StoreEvent.STATUS_CHANGED,
        extra={"order_id": order.order_id, "status": order.status.value, "admin": admin.id},
    )
    return tracker.track(order)


@router.post("/{order_id}/lines/{product_id}/toggle")
def toggle_line(
    order_id: str,
    product_id: str,
    orders: SQLOrderRepository = Depends(get_order_repository),
    tracker: FulfillmentTracker = Depends(get_fulfillment_tracker),
    _: CurrentUser = Depends(require_admin),
):
    order = _tracked(order_id, orders, tracker)
    completed = tracker.toggle_line_completion(order.id, product_id)

    return {
        "changed": completed is not None,
        "completed": completed,
        "ready": tracker.is_order_ready(order),
        "order": tracker.view(order.id),
    }


@router.get("/{order_id}/ready")
def order_ready(
    order_id: str,
    orders: SQLOrderRepository = Depends(get_order_repository),
    tracker: FulfillmentTracker = Depends(get_fulfillment_tracker),
    _: CurrentUser = Depends(require_admin),
):
    order = _tracked(order_id, orders, tracker)
    return {"order_id": order.order_id, "ready": tracker.is_order_ready(order)}


@router.post("/{order_id}/complete")
def complete_order(
    order_id: str,
    orders: SQLOrderRepository = Depends(get_order_repository),
    tracker: FulfillmentTracker = Depends(get_fulfillment_tracker),
    _: CurrentUser = Depends(require_admin),
):
    _tracked(order_id, orders, tracker)

    # not ready -> the UI keeps the button disabled; nothing is raised
    if not tracker.complete_order(order_id):
        return {"completed": False, "order": tracker.view(order_id)}

    try:
        stored = orders.update_status(order_id, "delivered")
    except InvalidStatusTransition as e:
        raise HTTPException(400, e.message)

    logger.info(f"Order {stored.order_id} delivered")
    return {"completed": True, "order": tracker.track(stored)}
