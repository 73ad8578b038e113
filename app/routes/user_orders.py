from fastapi import APIRouter, Depends, HTTPException
from typing import List

from app.dependencies.services import get_order_repository
from app.exceptions import NotFoundError
from app.schemas.orders_schemas import OrderRead
from app.schemas.user_schemas import CurrentUser
from app.services.order_repository import SQLOrderRepository
from app.utils.token import get_current_user

router = APIRouter()


@router.get("/my", response_model=List[OrderRead])
def my_orders(
    orders: SQLOrderRepository = Depends(get_order_repository),
    current_user: CurrentUser = Depends(get_current_user),
):
    return orders.list_for_user(current_user.id)


@router.get("/{id}", response_model=OrderRead)
def order_detail(
    id: str,
    orders: SQLOrderRepository = Depends(get_order_repository),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        order = orders.get(id)
    except NotFoundError as e:
        raise HTTPException(404, e.message)

    if not current_user.is_admin and order.user.id != current_user.id:
        raise HTTPException(403, "Not authorized")

    return order
