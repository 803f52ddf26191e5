import random
from decimal import Decimal

import pytest

from messijoe import MENU_CATALOG, MenuCatalog, MenuItem, InvalidSelection, compute_bill, format_money


def items(*prices):
    return [MenuItem(i, f"item {i}", p) for i, p in enumerate(prices, start=1)]


def test_two_guest_bill():
    bill = compute_bill(items(45, 38))
    assert bill.subtotal == 83
    assert bill.tax == Decimal("8.30")
    assert bill.tip == Decimal("16.60")
    assert bill.total == Decimal("107.90")
    assert [format_money(v) for v in (bill.subtotal, bill.tax, bill.tip, bill.total)] == [
        "$83.00", "$8.30", "$16.60", "$107.90"
    ]


def test_empty_bill_is_zero():
    bill = compute_bill([])
    assert bill.subtotal == 0
    assert bill.total == 0


def test_bill_is_pure():
    order_items = items(35, 45, 38, 38)
    snapshot = list(order_items)
    assert compute_bill(order_items) == compute_bill(order_items)
    assert order_items == snapshot


def test_total_is_exact_sum_of_parts():
    rng = random.Random(1234)
    for _ in range(200):
        prices = [rng.randint(0, 500) for _ in range(rng.randint(0, 12))]
        bill = compute_bill(items(*prices))
        assert bill.subtotal == sum(prices)
        assert bill.total == bill.subtotal + bill.tax + bill.tip


def test_precision_kept_until_formatting():
    bill = compute_bill(items(1), tax_rate=Decimal("0.075"), tip_rate=Decimal("0.185"))
    assert bill.tax == Decimal("0.075")
    assert bill.total == Decimal("1.260")
    assert format_money(bill.tax) == "$0.08"


def test_default_catalog():
    assert [(i.index, i.name, i.price) for i in MENU_CATALOG] == [
        (1, "Raw Fish", 35),
        (2, "Eggs", 45),
        (3, "Ham", 38),
        (4, "Biscuits", 38),
        (5, "Toast", 38),
    ]


@pytest.mark.parametrize("index", [0, 6, -1])
def test_catalog_rejects_unknown_numbers(index):
    with pytest.raises(InvalidSelection) as exc:
        MENU_CATALOG.get(index)
    assert exc.value.menu_size == 5


def test_catalog_rejects_gaps_and_negative_prices():
    with pytest.raises(ValueError):
        MenuCatalog([MenuItem(1, "a", 1), MenuItem(3, "b", 1)])
    with pytest.raises(ValueError):
        MenuCatalog.from_entries([("free lunch", -1)])


@pytest.mark.parametrize("amount, shown", [
    (Decimal("0.085"), "$0.09"),
    (Decimal("0.125"), "$0.13"),
    (Decimal("0.084"), "$0.08"),
    (83, "$83.00"),
])
def test_half_cents_round_up(amount, shown):
    assert format_money(amount) == shown
