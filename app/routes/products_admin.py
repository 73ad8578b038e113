from fastapi import APIRouter, Depends, HTTPException

from app.dependencies.admin import require_admin
from app.dependencies.services import get_product_repository
from app.exceptions import NotFoundError
from app.schemas.product_schemas import ProductCreate, ProductUpdate
from app.schemas.user_schemas import CurrentUser
from app.services.product_repository import ProductRepository

router = APIRouter()


@router.post("", status_code=201)
def create_product(
    data: ProductCreate,
    products: ProductRepository = Depends(get_product_repository),
    _: CurrentUser = Depends(require_admin),
):
    return products.create(data)


@router.put("/{product_id}")
def update_product(
    product_id: str,
    data: ProductUpdate,
    products: ProductRepository = Depends(get_product_repository),
    _: CurrentUser = Depends(require_admin),
):
    try:
        return products.update(product_id, data)
    except NotFoundError as e:
        raise HTTPException(404, e.message)
