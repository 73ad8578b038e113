from fastapi import APIRouter, Depends, HTTPException
from typing import Optional
from sqlmodel import Session

from app.database import get_session
from app.exceptions import NotFoundError
from app.schemas.user_schemas import CurrentUser
from app.dependencies.services import get_product_repository, get_recently_viewed
from app.services.product_repository import ProductRepository
from app.services.recently_viewed import RecentlyViewed
from app.services.storage import SQLStorage
from app.utils.token import get_optional_user

router = APIRouter()


@router.get("")
def list_products(
    category: Optional[str] = None,
    products: ProductRepository = Depends(get_product_repository),
):
    return products.list(category=category)


@router.get("/recently-viewed")
def recently_viewed_products(
    recent: RecentlyViewed = Depends(get_recently_viewed),
    products: ProductRepository = Depends(get_product_repository),
):
    result = []
    for product_id in recent.ids():
        try:
            result.append(products.get(product_id))
        except NotFoundError:
            # product removed from the catalog since it was viewed
            continue
    return result


@router.get("/{product_id}")
def product_detail(
    product_id: str,
    session: Session = Depends(get_session),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    products: ProductRepository = Depends(get_product_repository),
):
    try:
        product = products.get(product_id)
    except NotFoundError as e:
        raise HTTPException(404, e.message)

    if current_user:
        RecentlyViewed(SQLStorage(session, scope=str(current_user.id))).record(product.id)

    return product
