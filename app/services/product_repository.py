# app/services/product_repository.py
import logging
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, select

from app.exceptions import NotFoundError
from app.models.product import Product
from app.schemas.product_schemas import ProductCreate, ProductRead, ProductUpdate

logger = logging.getLogger(__name__)


class ProductRepository:
    """Single source of truth for the catalog, shared by storefront and admin."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, product_id: str) -> ProductRead:
        product = self.session.get(Product, product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return ProductRead.model_validate(product)

    def list(self, category: Optional[str] = None) -> List[ProductRead]:
        query = select(Product)
        if category:
            query = query.where(Product.category == category)
        products = self.session.exec(query.order_by(Product.created_at, Product.id)).all()
        return [ProductRead.model_validate(p) for p in products]

    def create(self, data: ProductCreate) -> ProductRead:
        product = Product(**data.model_dump())
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)

        logger.info(f"Product created: {product.id} {product.name}")
        return ProductRead.model_validate(product)

    def update(self, product_id: str, data: ProductUpdate) -> ProductRead:
        product = self.session.get(Product, product_id)
        if not product:
            raise NotFoundError("Product", product_id)

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(product, key, value)
        product.updated_at = datetime.utcnow()

        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)

        logger.info(f"Product updated: {product.id}")
        return ProductRead.model_validate(product)
