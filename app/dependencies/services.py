from fastapi import Depends, Request
from sqlmodel import Session

from app.database import get_session
from app.schemas.user_schemas import CurrentUser
from app.services.cart_store import CartStore
from app.services.fulfillment_tracker import FulfillmentTracker
from app.services.order_composer import OrderComposer
from app.services.order_repository import SQLOrderRepository
from app.services.product_repository import ProductRepository
from app.services.recently_viewed import RecentlyViewed
from app.services.storage import SQLStorage
from app.utils.token import get_current_user


def get_storage(
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
) -> SQLStorage:
    return SQLStorage(session, scope=str(current_user.id))


def get_cart(storage: SQLStorage = Depends(get_storage)) -> CartStore:
    return CartStore(storage)


def get_recently_viewed(storage: SQLStorage = Depends(get_storage)) -> RecentlyViewed:
    return RecentlyViewed(storage)


def get_product_repository(session: Session = Depends(get_session)) -> ProductRepository:
    return ProductRepository(session)


def get_order_repository(session: Session = Depends(get_session)) -> SQLOrderRepository:
    return SQLOrderRepository(session)


def get_order_composer(
    cart: CartStore = Depends(get_cart),
    repository: SQLOrderRepository = Depends(get_order_repository),
) -> OrderComposer:
    return OrderComposer(cart, repository)


def get_fulfillment_tracker(request: Request) -> FulfillmentTracker:
    # admin working state, one per running app
    return request.app.state.fulfillment_tracker
