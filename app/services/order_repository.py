# app/services/order_repository.py
import json
import logging
from datetime import datetime
from typing import List
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from starlette.concurrency import run_in_threadpool

from app.constants.order_status import OrderStatus, can_transition
from app.exceptions import InvalidStatusTransition, NotFoundError, PersistenceError
from app.models.order import Order
from app.schemas.orders_schemas import OrderDraft, OrderRead
from app.services.storage import ORDERS_KEY, KeyValueStorage, load_json

logger = logging.getLogger(__name__)


def _check_transition(order: OrderRead, new_status: str) -> None:
    current = order.status.value
    if not can_transition(current, new_status):
        raise InvalidStatusTransition(current, new_status)


class SQLOrderRepository:
    """Orders in the ``order`` table; lines and address as JSON columns."""

    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def to_read(row: Order) -> OrderRead:
        return OrderRead.model_validate({
            "id": row.id,
            "order_id": row.order_id,
            "user": row.user,
            "lines": row.lines,
            "shipping_address": row.shipping_address,
            "payment_method": row.payment_method,
            "subtotal": row.subtotal,
            "shipping": row.shipping,
            "total_amount": row.total_amount,
            "status": row.status,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        })

    def _save(self, draft: OrderDraft) -> OrderRead:
        data = draft.model_dump(mode="json")
        row = Order(
            order_id=draft.order_id,
            user_id=draft.user.id,
            user=data["user"],
            lines=data["lines"],
            shipping_address=data["shipping_address"],
            payment_method=draft.payment_method.value,
            subtotal=draft.subtotal,
            shipping=draft.shipping,
            total_amount=draft.total_amount,
            status=draft.status.value,
            created_at=draft.created_at,
        )
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Order insert failed")
            raise PersistenceError("Failed to place order. Please try again.", e)

        return self.to_read(row)

    async def save(self, draft: OrderDraft) -> OrderRead:
        return await run_in_threadpool(self._save, draft)

    def get(self, id: str) -> OrderRead:
        row = self.session.get(Order, id)
        if not row:
            raise NotFoundError("Order", id)
        return self.to_read(row)

    def list_for_user(self, user_id: int) -> List[OrderRead]:
        rows = self.session.exec(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc())
        ).all()
        return [self.to_read(r) for r in rows]

    def list_all(self) -> List[OrderRead]:
        rows = self.session.exec(
            select(Order).order_by(Order.created_at.desc())
        ).all()
        return [self.to_read(r) for r in rows]

    def update_status(self, id: str, new_status: str) -> OrderRead:
        row = self.session.get(Order, id)
        if not row:
            raise NotFoundError("Order", id)

        _check_transition(self.to_read(row), new_status)

        old_status = row.status
        row.status = new_status
        row.updated_at = datetime.utcnow()
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)

        logger.info(f"Order {row.order_id} changed from {old_status} → {new_status}")
        return self.to_read(row)


class StorageOrderRepository:
    """
    Orders kept as a JSON list under the ``orders`` storage key,
    in insertion order.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def _load(self) -> List[OrderRead]:
        payload = load_json(self.storage, ORDERS_KEY, [])
        if not isinstance(payload, list):
            logger.warning("Discarding non-list orders payload")
            return []

        orders = []
        for item in payload:
            try:
                orders.append(OrderRead.model_validate(item))
            except ValueError as e:
                logger.warning(f"Skipping unreadable stored order: {e}")
        return orders

    def _write(self, orders: List[OrderRead]) -> None:
        self.storage.set(
            ORDERS_KEY,
            json.dumps([o.model_dump(mode="json") for o in orders]),
        )

    async def save(self, draft: OrderDraft) -> OrderRead:
        order = OrderRead(**draft.model_dump(), id=f"order_{uuid4().hex}")
        orders = self._load()
        orders.append(order)
        try:
            self._write(orders)
        except (OSError, SQLAlchemyError) as e:
            logger.exception("Order write failed")
            raise PersistenceError("Failed to place order. Please try again.", e)
        return order

    def get(self, id: str) -> OrderRead:
        for order in self._load():
            if order.id == id:
                return order
        raise NotFoundError("Order", id)

    def list_for_user(self, user_id: int) -> List[OrderRead]:
        return [o for o in self.list_all() if o.user.id == user_id]

    def list_all(self) -> List[OrderRead]:
        # newest first; later inserts win ties
        return list(reversed(self._load()))

    def update_status(self, id: str, new_status: str) -> OrderRead:
        orders = self._load()
        for index, order in enumerate(orders):
            if order.id != id:
                continue

            _check_transition(order, new_status)
            updated = order.model_copy(
                update={"status": OrderStatus(new_status), "updated_at": datetime.utcnow()}
            )
            orders[index] = updated
            self._write(orders)

            logger.info(f"Order {order.order_id} changed from {order.status.value} → {new_status}")
            return updated

        raise NotFoundError("Order", id)
