from fastapi import APIRouter, Depends, HTTPException

from app.dependencies.services import get_cart, get_product_repository
from app.exceptions import NotFoundError
from app.schemas.cart_schemas import (
    CartAddRequest,
    CartResponse,
    CartSelectAllRequest,
    CartUpdateRequest,
)
from app.services.cart_store import CartStore
from app.services.price_calculator import compute_totals
from app.services.product_repository import ProductRepository

router = APIRouter()


def cart_response(cart: CartStore) -> CartResponse:
    return CartResponse(
        items=cart.lines,
        total_items=cart.total_item_count,
        summary=compute_totals(cart.selected_lines()),
    )


# View Cart

@router.get("", response_model=CartResponse)
def get_cart_view(cart: CartStore = Depends(get_cart)):
    return cart_response(cart)


# Add to Cart

@router.post("/add")
def add_to_cart(
    data: CartAddRequest,
    cart: CartStore = Depends(get_cart),
    products: ProductRepository = Depends(get_product_repository),
):
    try:
        product = products.get(data.product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    if data.color and product.colors and data.color not in product.colors:
        raise HTTPException(400, f"Color '{data.color}' is not available for {product.name}")

    item = cart.add(
        product_id=product.id,
        name=product.name,
        unit_price=product.price,
        image=product.image,
        quantity=data.quantity,
        color=data.color,
    )

    return {"message": f"{product.name} has been added to your cart.", "item": item}


# Update Cart

@router.put("/update/{product_id}")
def update_cart_item(
    product_id: str,
    data: CartUpdateRequest,
    cart: CartStore = Depends(get_cart),
):
    if not cart.get(product_id):
        raise HTTPException(404, "Cart item not found")

    # quantities below 1 are ignored, not treated as removal
    cart.set_quantity(product_id, data.quantity)
    return {"message": "Quantity updated", "item": cart.get(product_id)}


@router.post("/toggle/{product_id}")
def toggle_cart_item(product_id: str, cart: CartStore = Depends(get_cart)):
    if not cart.get(product_id):
        raise HTTPException(404, "Cart item not found")

    cart.toggle_selected(product_id)
    return cart_response(cart)


@router.post("/select-all")
def select_all_items(data: CartSelectAllRequest, cart: CartStore = Depends(get_cart)):
    cart.select_all(data.selected)
    return cart_response(cart)


# Remove Cart

@router.delete("/remove/{product_id}")
def remove_item(product_id: str, cart: CartStore = Depends(get_cart)):
    cart.remove(product_id)
    return {"message": "Item removed from cart"}


# Clear Cart

@router.delete("/clear")
def clear_cart_endpoint(cart: CartStore = Depends(get_cart)):
    cart.clear()
    return {"message": "Cart cleared"}
