"""Shared builders for small hand-checkable networks."""

from __future__ import annotations

import pytest

from supply_chain import (
    Customer,
    Demand,
    Lane,
    Product,
    SSPolicy,
    Storage,
    Supplier,
    create_network,
)


@pytest.fixture
def widget():
    return Product("Widget", 10.0)


@pytest.fixture
def factory():
    return Supplier("Factory", "Ohio")


@pytest.fixture
def market():
    return Customer("Market", "Midwest")


@pytest.fixture
def single_dc_network(widget, factory, market):
    """Factory -> one DC -> one market, parametrised through a builder.

    Returns a callable so each test picks its own horizon, stock, demand and
    lanes.  The callable returns ``(network, storage, policies)``.
    """

    def build(
        horizon=10,
        initial=100.0,
        holding=0.0,
        demand=None,
        lanes=((100.0, 1.0, 2),),
        policy=(50.0, 200.0),
        sales_price=15.0,
        lost_sales_cost=4.0,
    ):
        network = create_network(horizon)
        network.add_product(widget)
        network.add_supplier(factory)
        storage = Storage(
            "DC",
            "Chicago",
            holding_costs={widget: holding},
            initial_inventory={widget: initial} if initial is not None else {},
        )
        network.add_storage(storage)
        network.add_customer(market)
        for fixed_cost, unit_cost, time in lanes:
            network.add_lane(Lane(factory, storage, time, fixed_cost, unit_cost))
        quantities = list(demand) if demand is not None else [0.0] * horizon
        network.add_demand(Demand(market, widget, quantities, sales_price, lost_sales_cost))
        policies = {(storage, widget): SSPolicy(*policy)} if policy else {}
        return network, storage, policies

    return build
