# tests/test_aggregation.py
from datetime import date, datetime

import pytest

from stockdesk.services import aggregation
from tests.factories import movement, product, sales_order


# === Stock health ===

def test_stock_health_on_empty_input():
    summary = aggregation.stock_health_summary([])
    assert summary.total_products == 0
    assert summary.low_stock_count == 0
    assert summary.out_of_stock_count == 0
    assert summary.total_inventory_cost == 0
    assert summary.potential_profit == 0


def test_out_of_stock_never_counts_as_low():
    products = [
        product(1, current_stock=0, reorder_level=10),
        product(2, current_stock=3, reorder_level=10),
        product(3, current_stock=10, reorder_level=10),
        product(4, current_stock=11, reorder_level=10),
        product(5, current_stock=0, reorder_level=0),
    ]
    summary = aggregation.stock_health_summary(products)

    assert summary.total_products == 5
    assert summary.out_of_stock_count == 2
    assert summary.low_stock_count == 2
    assert summary.low_stock_count + summary.out_of_stock_count <= summary.total_products


def test_valuation_and_profit():
    products = [
        product(1, current_stock=3, unit_cost=1.1, selling_price=2.35),
        product(2, current_stock=7, unit_cost=0.3, selling_price=0.7),
        product(3, current_stock=0, unit_cost=99.0, selling_price=150.0),
    ]
    summary = aggregation.stock_health_summary(products)

    assert summary.total_inventory_cost == pytest.approx(3 * 1.1 + 7 * 0.3)
    assert summary.total_inventory_retail_value == pytest.approx(3 * 2.35 + 7 * 0.7)
    assert summary.total_inventory_retail_value - summary.total_inventory_cost == summary.potential_profit


@pytest.mark.parametrize("stock,reorder,expected", [
    (0, 5, "out"),
    (1, 5, "low"),
    (5, 5, "low"),
    (6, 5, "normal"),
    (0, 0, "out"),
])
def test_stock_status(stock, reorder, expected):
    assert aggregation.stock_status(product(current_stock=stock, reorder_level=reorder)) == expected


# === Expiry ===

def test_expiring_soon_boundaries():
    now = date(2024, 1, 1)
    products = [
        product(1, expiration_date=date(2024, 1, 1)),    # same day: not after now
        product(2, expiration_date=date(2023, 12, 31)),  # already expired
        product(3, expiration_date=date(2024, 1, 2)),
        product(4, expiration_date=date(2024, 1, 30)),
        product(5, expiration_date=date(2024, 1, 31)),   # exactly now + 30 days
        product(6, expiration_date=None),
    ]
    result = aggregation.expiring_soon(products, 30, now)
    assert [p.id for p in result] == [3, 4]


def test_expired_is_separate_from_expiring():
    now = date(2024, 1, 1)
    products = [
        product(1, expiration_date=date(2024, 1, 1)),
        product(2, expiration_date=date(2023, 12, 31)),
        product(3, expiration_date=date(2024, 1, 10)),
    ]
    assert [p.id for p in aggregation.expired(products, now)] == [1, 2]


def test_expiring_soon_with_time_of_day():
    # Later on the same day, today's expiry has already passed
    now = datetime(2024, 1, 1, 10, 0)
    products = [product(1, expiration_date=date(2024, 1, 1)), product(2, expiration_date=date(2024, 1, 2))]
    assert [p.id for p in aggregation.expiring_soon(products, 30, now)] == [2]


# === Window filter ===

def test_within_window_is_inclusive_by_calendar_day():
    movements = [
        movement(1, timestamp=datetime(2024, 1, 1, 0, 0)),
        movement(2, timestamp=datetime(2024, 1, 31, 23, 59)),
        movement(3, timestamp=datetime(2024, 2, 1, 0, 0)),
        movement(4, timestamp=datetime(2023, 12, 31, 23, 59)),
    ]
    result = aggregation.within_window(movements, "timestamp", date(2024, 1, 1), date(2024, 1, 31))
    assert [m.id for m in result] == [1, 2]


def test_within_window_with_datetime_bounds_and_open_ends():
    orders = [sales_order(1, order_date=date(2024, 1, 5)), sales_order(2, order_date=date(2024, 2, 5))]

    assert len(aggregation.within_window(orders, "order_date")) == 2
    assert [o.id for o in aggregation.within_window(orders, "order_date", start=date(2024, 2, 1))] == [2]
    assert [o.id for o in aggregation.within_window(orders, "order_date", end=datetime(2024, 1, 5, 0, 0))] == [1]


def test_within_window_skips_missing_dates_when_bounded():
    orders = [sales_order(1, order_date=None), sales_order(2, order_date=date(2024, 1, 5))]
    assert [o.id for o in aggregation.within_window(orders, "order_date", start=date(2024, 1, 1))] == [2]


# === Sales performance ===

def test_sales_performance_counts_and_revenue():
    orders = [
        sales_order(1, items=[(1, 2, 10.0)], status="Fulfilled"),
        sales_order(2, items=[(1, 1, 5.0)], status="Fulfilled"),
        sales_order(3, items=[(1, 1, 100.0)], status="Pending"),
        sales_order(4, items=[(1, 1, 100.0)], status="Processing"),
        sales_order(5, items=[(1, 1, 100.0)], status="Shipped"),
    ]
    perf = aggregation.sales_performance(orders)

    assert perf.total_orders == 5
    assert perf.fulfilled_orders == 2
    assert perf.pending_orders == 2
    assert perf.total_revenue == 25.0
    assert perf.avg_order_value == 12.5


def test_avg_order_value_without_fulfilled_orders_is_zero():
    orders = [sales_order(1, items=[(1, 1, 10.0)], status="Pending")]
    perf = aggregation.sales_performance(orders)
    assert perf.total_orders == 1
    assert perf.avg_order_value == 0


def test_sales_performance_window():
    orders = [
        sales_order(1, items=[(1, 1, 10.0)], status="Fulfilled", order_date=date(2024, 1, 5)),
        sales_order(2, items=[(1, 1, 30.0)], status="Fulfilled", order_date=date(2024, 3, 5)),
    ]
    perf = aggregation.sales_performance(orders, date(2024, 3, 1), date(2024, 3, 31))
    assert perf.total_orders == 1
    assert perf.total_revenue == 30.0


# === Top products ===

def test_top_products_sorted_and_truncated():
    products = [product(1), product(2), product(3)]
    orders = [
        sales_order(1, items=[(1, 1, 10.0), (2, 5, 10.0)], status="Fulfilled"),
        sales_order(2, items=[(3, 2, 10.0), (1, 1, 10.0)], status="Fulfilled"),
    ]
    top = aggregation.top_products_by_revenue(orders, products, n=10)

    assert len(top) == 3
    assert [t.product_id for t in top] == [2, 1, 3]
    assert [t.revenue for t in top] == [50.0, 20.0, 20.0]
    assert top[1].quantity == 2

    assert len(aggregation.top_products_by_revenue(orders, products, n=2)) == 2


def test_top_products_only_counts_fulfilled_orders():
    orders = [
        sales_order(1, items=[(1, 100, 10.0)], status="Shipped"),
        sales_order(2, items=[(2, 1, 1.0)], status="Fulfilled"),
    ]
    top = aggregation.top_products_by_revenue(orders, [product(1), product(2)])
    assert [t.product_id for t in top] == [2]


def test_top_products_unknown_product_resolves_to_sentinel():
    orders = [sales_order(1, items=[(42, 1, 9.0)], status="Fulfilled")]
    top = aggregation.top_products_by_revenue(orders, [product(1)])

    assert top[0].name == "Unknown Product"
    assert top[0].sku == "N/A"


def test_top_products_ties_keep_first_seen_order():
    orders = [sales_order(1, items=[(3, 1, 5.0), (1, 1, 5.0), (2, 1, 5.0)], status="Fulfilled")]
    top = aggregation.top_products_by_revenue(orders, [product(1), product(2), product(3)])
    assert [t.product_id for t in top] == [3, 1, 2]


# === Movement series ===

def test_daily_movement_series():
    d1, d2 = date(2024, 1, 1), date(2024, 1, 2)
    movements = [
        movement(1, type="IN", quantity=10, timestamp=datetime(2024, 1, 1, 9, 0)),
        movement(2, type="OUT", quantity=4, timestamp=datetime(2024, 1, 1, 17, 30)),
        movement(3, type="IN", quantity=5, timestamp=datetime(2024, 1, 2, 8, 0)),
    ]
    series = aggregation.daily_movement_series(movements, d1, d2)

    assert series.dates == [d1, d2]
    assert series.stock_in == [10, 5]
    assert series.stock_out == [4, 0]


def test_daily_movement_series_skips_empty_days():
    movements = [
        movement(1, quantity=1, timestamp=datetime(2024, 1, 5, 9, 0)),
        movement(2, quantity=2, timestamp=datetime(2024, 1, 1, 9, 0)),
    ]
    series = aggregation.daily_movement_series(movements)
    assert series.dates == [date(2024, 1, 1), date(2024, 1, 5)]
    assert series.stock_in == [2, 1]


def test_daily_movement_series_empty():
    series = aggregation.daily_movement_series([], date(2024, 1, 1), date(2024, 1, 31))
    assert series.dates == [] and series.stock_in == [] and series.stock_out == []


# === Category distribution ===

def test_category_distribution():
    products = [
        product(1, category="Dairy", current_stock=2, unit_cost=1.5),
        product(2, category="Dairy", current_stock=1, unit_cost=4.0),
        product(3, category="Produce", current_stock=0, unit_cost=9.0),
    ]
    assert aggregation.category_distribution(products) == {"Dairy": 7.0, "Produce": 0.0}
    assert aggregation.category_distribution([]) == {}


# === Derived rules ===

def test_apply_movement_never_goes_negative():
    assert aggregation.apply_movement(5, "IN", 3) == 8
    assert aggregation.apply_movement(5, "OUT", 3) == 2
    assert aggregation.apply_movement(5, "OUT", 9) == 0


def test_adjustment_for():
    assert aggregation.adjustment_for(10, 10) is None
    assert aggregation.adjustment_for(10, 14) == ("IN", 4)
    assert aggregation.adjustment_for(10, 3) == ("OUT", 7)


def test_order_total():
    order = sales_order(1, items=[(1, 2, 2.5), (2, 3, 1.0)])
    assert aggregation.order_total(order.items) == 8.0
    assert aggregation.order_total([]) == 0
