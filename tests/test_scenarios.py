"""End-to-end runs: hand-checked single-DC cases and whole-network properties."""

import pytest

from supply_chain import simulate
from supply_chain.scenario import build_network


# ----------------------------------------------------------------------
# Single DC, lane fixed_cost=100 unit_cost=1 time=2, policy s=50 S=200
# ----------------------------------------------------------------------
def test_no_reorder_when_stock_stays_above_reorder_point(single_dc_network):
    network, storage, policies = single_dc_network(horizon=10, initial=100.0)
    state = simulate(network, policies)
    key = (storage, network.products[0])
    assert state.inventory_history[key] == [100.0] * 10
    assert state.pending_orders == []
    assert state.fulfilled_orders == []
    assert state.total_costs == 0.0


def test_reorder_after_demand_drops_stock_below_reorder_point(single_dc_network):
    network, storage, policies = single_dc_network(
        horizon=10, initial=100.0, demand=[60.0] + [0.0] * 9
    )
    state = simulate(network, policies)
    key = (storage, network.products[0])

    first = state.fulfilled_orders[0]
    assert (first.creation_time, first.due_date, first.quantity) == (2, 4, 160.0)
    assert first.origin == network.suppliers[0]
    assert state.inventory_history[key][:4] == [100.0, 40.0, 40.0, 200.0]
    assert state.transport_costs == pytest.approx(
        sum(100.0 + 1.0 * o.quantity for o in state.fulfilled_orders + state.pending_orders)
    )
    assert state.revenue == 60.0 * 15.0


def test_demand_larger_than_stock_is_lost(single_dc_network):
    network, storage, policies = single_dc_network(
        horizon=1, initial=40.0, policy=None, demand=[60.0], lost_sales_cost=4.0
    )
    state = simulate(network, policies)
    customer, product = network.demands[0].customer, network.demands[0].product
    assert state.lost_sales[(customer, product)] == 60.0
    assert state.inventory[(storage, product)] == 40.0
    assert state.total_costs == 60.0 * 4.0
    assert state.lost_sales_costs == 60.0 * 4.0
    assert state.revenue == 0.0


def test_lost_sale_cost_adds_on_top_of_other_costs(single_dc_network):
    network, storage, policies = single_dc_network(
        horizon=1, initial=40.0, holding=0.5, demand=[60.0], lost_sales_cost=4.0
    )
    state = simulate(network, policies)
    assert state.holding_costs == 20.0
    assert state.transport_costs == 100.0 + 160.0
    assert state.total_costs == 20.0 + 260.0 + 240.0


def test_no_supplier_lane_means_no_order_and_no_cost(single_dc_network):
    network, storage, policies = single_dc_network(horizon=5, initial=40.0, lanes=())
    state = simulate(network, policies)
    key = (storage, network.products[0])
    assert state.pending_orders == []
    assert state.fulfilled_orders == []
    assert state.total_costs == 0.0
    assert state.inventory_history[key] == [40.0] * 5
    assert [(u.day, u.quantity) for u in state.unsourced_replenishments] == [
        (day, 160.0) for day in range(1, 6)
    ]
    assert state.summary()["unsourced_replenishments"] == 5


# ----------------------------------------------------------------------
# Whole-network properties on the default scenario
# ----------------------------------------------------------------------
@pytest.fixture(scope="module")
def default_run():
    network, policies = build_network(horizon=120, seed=3)
    return simulate(network, policies)


def test_inventory_is_conserved(default_run):
    state = default_run
    for storage in state.network.storages:
        for product in state.network.products:
            key = (storage, product)
            arrived = sum(
                o.quantity
                for o in state.fulfilled_orders
                if o.destination == storage and o.product == product
            )
            balance = (
                state.initial_inventory.get(key, 0.0)
                + arrived
                - state.shipped.get(key, 0.0)
                - state.inventory.get(key, 0.0)
            )
            assert balance == pytest.approx(0.0, abs=1e-6)


def test_costs_and_revenue_never_decrease(default_run):
    for series in (default_run.cost_history, default_run.revenue_history):
        assert len(series) == 120
        assert all(b >= a for a, b in zip(series, series[1:]))


def test_cost_components_add_up(default_run):
    breakdown = default_run.cost_breakdown()
    assert breakdown["holding"] + breakdown["transport"] + breakdown["lost_sales"] == pytest.approx(
        breakdown["total"]
    )


def test_demand_is_either_fully_served_or_lost(default_run):
    state = default_run
    for demand in state.network.demands:
        key = (demand.customer, demand.product)
        served = state.fulfilled_sales.get(key, 0.0)
        lost = state.lost_sales.get(key, 0.0)
        assert served + lost == pytest.approx(demand.total)
    assert all(level >= 0 for level in state.inventory.values())
    assert all(min(h) >= 0 for h in state.inventory_history.values() if h)


def test_pending_orders_are_all_in_the_future(default_run):
    assert all(o.due_date > default_run.current_time for o in default_run.pending_orders)


def test_service_levels_match_lost_sales(default_run):
    levels = default_run.service_levels()
    assert len(levels) == 3
    for demand in default_run.network.demands:
        key = (demand.customer, demand.product)
        expected = 1.0 - default_run.lost_sales.get(key, 0.0) / demand.total
        assert levels[key] == pytest.approx(expected)
        assert 0.0 <= levels[key] <= 1.0
