import pytest

from app.models.cart import LineItem
from app.services.price_calculator import compute_totals


def line(product_id, unit_price, quantity=1):
    return LineItem(
        product_id=product_id,
        name=f"Product {product_id}",
        unit_price=unit_price,
        quantity=quantity,
        selected=True,
    )


def test_large_order_ships_free():
    totals = compute_totals([line("1", 385000), line("3", 75000, 2)], 10000, 500)

    assert totals.subtotal == 535000
    assert totals.shipping == 0
    assert totals.total == 535000


def test_small_order_pays_flat_fee():
    totals = compute_totals([line("5", 5000)], 10000, 500)

    assert (totals.subtotal, totals.shipping, totals.total) == (5000, 500, 5500)


def test_exactly_at_threshold_still_pays_shipping():
    totals = compute_totals([line("5", 5000, 2)], 10000, 500)

    assert totals.subtotal == 10000
    assert totals.shipping == 500
    assert totals.total == 10500


def test_empty_selection_costs_nothing():
    totals = compute_totals([], 10000, 500)

    assert (totals.subtotal, totals.shipping, totals.total) == (0, 0, 0)


@pytest.mark.parametrize("subtotal", [1, 2500, 9999, 10000, 10001, 50000])
def test_shipping_is_either_zero_or_flat_fee(subtotal):
    shipping = compute_totals([line("x", subtotal)], 10000, 500).shipping

    assert shipping in (0, 500)
    assert shipping == (0 if subtotal > 10000 else 500)


def test_shipping_never_increases_with_subtotal():
    fees = [
        compute_totals([line("x", s)], 10000, 500).shipping
        for s in range(1000, 20001, 1000)
    ]

    assert fees == sorted(fees, reverse=True)


def test_defaults_come_from_settings():
    totals = compute_totals([line("5", 5000)])

    assert totals.shipping == 500
