"""
engine.py
---------
Day-by-day simulation of a supply-chain network.

Every day ``t`` in ``1..horizon`` runs four phases, each one completing
before the next starts:

    1) order arrival        - orders due today land in their storage
    2) inventory accounting - record levels and charge holding cost
    3) replenishment        - policies order, cheapest supplier lane wins
    4) demand fulfilment    - serve each demand from one storage or lose it

Holding cost is therefore charged after today's arrivals but before today's
demand, and an order placed today can never serve today's demand.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from supply_chain.entities import Lane, Order, Product, Storage
from supply_chain.errors import NetworkConfigError, SimulationStateError
from supply_chain.network import SupplyChainNetwork
from supply_chain.policies import OrderingPolicy
from supply_chain.state import SimulationState, UnsourcedReplenishment, initialize_state

logger = logging.getLogger(__name__)

PolicyMap = Mapping[tuple[Storage, Product], OrderingPolicy]


# ======================================================================
# Sourcing
# ======================================================================
def select_lane(network: SupplyChainNetwork, storage: Storage, quantity: float) -> Optional[Lane]:
    """Cheapest supplier lane into ``storage`` for a shipment of ``quantity``.

    Only lanes whose origin is a replenishment source (a supplier) are
    eligible.  Cost is ``fixed_cost + unit_cost * quantity``; transit time is
    ignored.  Ties go to the lane added first.  Returns ``None`` when no lane
    qualifies.
    """
    best_lane: Optional[Lane] = None
    min_cost = float("inf")
    for lane in network.inbound_lanes(storage):
        if not lane.origin.is_replenishment_source:
            continue
        cost = lane.shipment_cost(quantity)
        if cost < min_cost:
            min_cost = cost
            best_lane = lane
    return best_lane


# ======================================================================
# Phases
# ======================================================================
def process_orders(state: SimulationState) -> None:
    """Phase 1: deliver every pending order due today."""
    t = state.current_time
    still_pending: list[Order] = []
    for order in state.pending_orders:
        if order.due_date == t:
            key = (order.destination, order.product)
            state.inventory[key] = state.inventory.get(key, 0.0) + order.quantity
            state.inventory_history.setdefault(key, [])
            state.fulfilled_orders.append(order)
            logger.debug(
                "day %d: %.2f x %s arrived at %s from %s",
                t, order.quantity, order.product.name, order.destination.name, order.origin.name,
            )
        elif order.due_date > t:
            still_pending.append(order)
        else:
            raise SimulationStateError(
                f"day {t}: order for {order.quantity} x {order.product.name} to "
                f"{order.destination.name} was due on day {order.due_date} and never arrived"
            )
    state.pending_orders = still_pending


def update_inventory(state: SimulationState) -> None:
    """Phase 2: snapshot every tracked level and charge holding cost on it."""
    network = state.network
    for storage in network.storages:
        for product in network.products:
            key = (storage, product)
            if key not in state.inventory:
                continue
            level = state.inventory[key]
            state.inventory_history[key].append(level)
            state.add_holding_cost(level * storage.holding_cost(product))


def place_orders(state: SimulationState, policies: PolicyMap) -> None:
    """Phase 3: ask each policy for a quantity and ship it on the cheapest lane."""
    network = state.network
    t = state.current_time
    for storage in network.storages:
        for product in network.products:
            policy = policies.get((storage, product))
            if policy is None:
                continue
            quantity = policy.calculate_order_quantity(state.on_hand(storage, product))
            if quantity <= 0:
                continue

            lane = select_lane(network, storage, quantity)
            if lane is None:
                state.unsourced_replenishments.append(
                    UnsourcedReplenishment(t, storage, product, quantity)
                )
                logger.warning(
                    "day %d: %s needs %.2f x %s but no supplier lane reaches it",
                    t, storage.name, quantity, product.name,
                )
                continue

            order = Order(
                creation_time=t,
                origin=lane.origin,
                destination=storage,
                product=product,
                quantity=quantity,
                due_date=t + lane.time,
            )
            state.pending_orders.append(order)
            state.add_transport_cost(lane.shipment_cost(quantity))
            logger.debug(
                "day %d: ordered %.2f x %s for %s from %s, due day %d",
                t, quantity, product.name, storage.name, lane.origin.name, order.due_date,
            )


def process_demand(state: SimulationState) -> None:
    """Phase 4: serve each demand in full from the first storage able to."""
    network = state.network
    t = state.current_time
    for demand in network.demands:
        requested = demand.quantity_on(t)
        if requested <= 0:
            continue
        sales_key = (demand.customer, demand.product)

        for storage in network.storages:
            stock_key = (storage, demand.product)
            if state.inventory.get(stock_key, 0.0) >= requested:
                state.inventory[stock_key] -= requested
                state.shipped[stock_key] = state.shipped.get(stock_key, 0.0) + requested
                state.fulfilled_sales[sales_key] = state.fulfilled_sales.get(sales_key, 0.0) + requested
                state.revenue += requested * demand.sales_price
                break
        else:
            state.lost_sales[sales_key] = state.lost_sales.get(sales_key, 0.0) + requested
            state.add_lost_sales_cost(requested * demand.lost_sales_cost)


def _run_day(state: SimulationState, policies: PolicyMap) -> None:
    """Advance ``state`` by one day."""
    state.current_time += 1
    process_orders(state)
    update_inventory(state)
    place_orders(state, policies)
    process_demand(state)
    state.close_day()


# ======================================================================
# Entry point
# ======================================================================
def validate_policies(network: SupplyChainNetwork, policies: PolicyMap) -> None:
    """Reject policy keys outside the network or without a holding-cost rate."""
    for key, policy in policies.items():
        try:
            storage, product = key
        except (TypeError, ValueError):
            raise NetworkConfigError(f"policy key {key!r} is not a (storage, product) pair") from None
        if storage not in network.storages:
            raise NetworkConfigError(f"policy for unknown storage {getattr(storage, 'name', storage)!r}")
        if product not in network.products:
            raise NetworkConfigError(f"policy for unknown product {getattr(product, 'name', product)!r}")
        # the network's own instance carries the configuration the engine will use
        storage = network.storages[network.storages.index(storage)]
        if product not in storage.holding_costs:
            raise NetworkConfigError(
                f"policy manages {product.name!r} at {storage.name!r}, "
                "which has no holding-cost rate for it"
            )
        if not isinstance(policy, OrderingPolicy):
            raise NetworkConfigError(
                f"policy for {storage.name!r}/{product.name!r} is not an OrderingPolicy: {policy!r}"
            )


def simulate(network: SupplyChainNetwork, policies: Optional[PolicyMap] = None) -> SimulationState:
    """Run ``network`` for its full horizon under ``policies``.

    Configuration problems raise :class:`NetworkConfigError` before day 1.
    The network is locked from then on; each call builds a fresh state.
    """
    policies = dict(policies or {})
    network.validate()
    validate_policies(network, policies)
    network.lock()

    state = initialize_state(network)
    logger.info(
        "simulating %d days: %d storages, %d products, %d lanes, %d demands, %d policies",
        network.horizon, len(network.storages), len(network.products),
        len(network.lanes), len(network.demands), len(policies),
    )
    for _ in range(network.horizon):
        _run_day(state, policies)

    logger.info(
        "finished: revenue=%.2f costs=%.2f lost=%.2f units, %d unsourced replenishments",
        state.revenue, state.total_costs, state.total_lost_sales, len(state.unsourced_replenishments),
    )
    return state
