from fastapi import APIRouter, Depends, HTTPException

from app.dependencies.services import get_cart, get_order_composer
from app.exceptions import PersistenceError, ValidationError
from app.schemas.checkout_schemas import CheckoutSummary, PlaceOrderRequest
from app.schemas.orders_schemas import OrderRead
from app.schemas.user_schemas import CurrentUser
from app.services.cart_store import CartStore
from app.services.order_composer import OrderComposer
from app.services.price_calculator import compute_totals
from app.utils.token import get_current_user

router = APIRouter()


# Checkout page - selected lines + summary

@router.get("/summary", response_model=CheckoutSummary)
def checkout_summary(cart: CartStore = Depends(get_cart)):
    selected = cart.selected_lines()
    return CheckoutSummary(items=selected, summary=compute_totals(selected))


# Place Order

@router.post("/place-order", status_code=201, response_model=OrderRead)
async def place_order(
    data: PlaceOrderRequest,
    cart: CartStore = Depends(get_cart),
    composer: OrderComposer = Depends(get_order_composer),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await composer.place_order(
            cart.selected_lines(),
            data.shipping_address,
            data.payment_method,
            current_user,
        )
    except ValidationError as e:
        raise HTTPException(400, {"message": "Missing Information", "problems": e.problems})
    except PersistenceError as e:
        raise HTTPException(502, e.message)
