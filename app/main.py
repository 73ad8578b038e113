import logging

from fastapi import FastAPI
from app.database import create_db_and_tables
from app.config import settings
from app.services.fulfillment_tracker import FulfillmentTracker
from app.routes import (
    admin_orders,
    cart,
    checkout,
    health,
    products,
    products_admin,
    user_orders,
)

from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.ENV == "local":
        create_db_and_tables()
    app.state.fulfillment_tracker = FulfillmentTracker()
    yield

app = FastAPI(title="AgriMart Storefront API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(products.router, prefix="/products", tags=["Products"])
app.include_router(products_admin.router, prefix="/admin/products", tags=["Admin Products"])
app.include_router(cart.router, prefix="/cart", tags=["Cart"])
app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(user_orders.router, prefix="/orders", tags=["Orders"])
app.include_router(admin_orders.router, prefix="/admin/orders", tags=["Admin Orders"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "product_endpoints": [
            "/products", "/products/{product_id}", "/products/recently-viewed"
        ],
        "admin_product_endpoints": [
            "/admin/products", "/admin/products/{product_id}"
        ],
        "cart": [
            "/cart", "/cart/add", "/cart/update/{product_id}",
            "/cart/toggle/{product_id}", "/cart/select-all",
            "/cart/remove/{product_id}", "/cart/clear"
        ],
        "checkout": [
            "/checkout/summary", "/checkout/place-order"
        ],
        "orders": [
            "/orders/my", "/orders/{id}"
        ],
        "admin_orders": [
            "/admin/orders", "/admin/orders/{order_id}/status",
            "/admin/orders/{order_id}/lines/{product_id}/toggle",
            "/admin/orders/{order_id}/ready", "/admin/orders/{order_id}/complete"
        ]
    }
