"""
state.py
--------
Mutable per-run state of a simulation and the read-side helpers used to
report on a finished run.

A :class:`SimulationState` is created by :func:`initialize_state` from the
network's storage configuration, mutated only by the four engine phases and
returned to the caller at the end of the horizon.  It is never reused for a
second run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import pandas as pd

from supply_chain.entities import Customer, Order, Product, Storage
from supply_chain.network import SupplyChainNetwork

StockKey = tuple[Storage, Product]
SalesKey = tuple[Customer, Product]


@dataclass(frozen=True)
class UnsourcedReplenishment:
    """A replenishment the policy asked for but no supplier lane could serve."""

    day: int
    storage: Storage
    product: Product
    quantity: float


@dataclass
class SimulationState:
    network: SupplyChainNetwork
    current_time: int = 0
    inventory: dict[StockKey, float] = field(default_factory=dict)
    initial_inventory: dict[StockKey, float] = field(default_factory=dict)
    inventory_history: dict[StockKey, list[float]] = field(default_factory=dict)
    pending_orders: list[Order] = field(default_factory=list)
    fulfilled_orders: list[Order] = field(default_factory=list)
    lost_sales: dict[SalesKey, float] = field(default_factory=dict)
    fulfilled_sales: dict[SalesKey, float] = field(default_factory=dict)
    shipped: dict[StockKey, float] = field(default_factory=dict)
    total_costs: float = 0.0
    revenue: float = 0.0

    # Cost components; they always add up to ``total_costs``
    holding_costs: float = 0.0
    transport_costs: float = 0.0
    lost_sales_costs: float = 0.0

    # Cumulative totals at the end of each simulated day
    cost_history: list[float] = field(default_factory=list)
    revenue_history: list[float] = field(default_factory=list)

    unsourced_replenishments: list[UnsourcedReplenishment] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Accounting helpers used by the engine
    # ------------------------------------------------------------------
    def on_hand(self, storage: Storage, product: Product) -> float:
        return self.inventory.get((storage, product), 0.0)

    def add_holding_cost(self, amount: float) -> None:
        self.holding_costs += amount
        self.total_costs += amount

    def add_transport_cost(self, amount: float) -> None:
        self.transport_costs += amount
        self.total_costs += amount

    def add_lost_sales_cost(self, amount: float) -> None:
        self.lost_sales_costs += amount
        self.total_costs += amount

    def close_day(self) -> None:
        self.cost_history.append(self.total_costs)
        self.revenue_history.append(self.revenue)

    # ------------------------------------------------------------------
    # Read-side metrics
    # ------------------------------------------------------------------
    @property
    def profit(self) -> float:
        return self.revenue - self.total_costs

    @property
    def total_lost_sales(self) -> float:
        return sum(self.lost_sales.values())

    def cost_breakdown(self) -> dict[str, float]:
        return {
            "holding": self.holding_costs,
            "transport": self.transport_costs,
            "lost_sales": self.lost_sales_costs,
            "total": self.total_costs,
        }

    def service_levels(self) -> dict[SalesKey, float]:
        """Fraction of requested units served, per (customer, product).

        Pairs with no demand over the horizon are reported as fully served.
        """
        requested: dict[SalesKey, float] = {}
        for demand in self.network.demands:
            key = (demand.customer, demand.product)
            requested[key] = requested.get(key, 0.0) + demand.total
        levels: dict[SalesKey, float] = {}
        for key, total in requested.items():
            if total > 0:
                levels[key] = (total - self.lost_sales.get(key, 0.0)) / total
            else:
                levels[key] = 1.0
        return levels

    def summary(self) -> dict[str, float]:
        """Flat dict of headline KPIs for a finished run."""
        requested = sum(d.total for d in self.network.demands)
        lost = self.total_lost_sales
        return {
            "days": self.current_time,
            "revenue": self.revenue,
            "total_costs": self.total_costs,
            "holding_costs": self.holding_costs,
            "transport_costs": self.transport_costs,
            "lost_sales_costs": self.lost_sales_costs,
            "profit": self.profit,
            "orders_placed": len(self.fulfilled_orders) + len(self.pending_orders),
            "orders_received": len(self.fulfilled_orders),
            "lost_units": lost,
            "fill_rate": (requested - lost) / requested if requested > 0 else 1.0,
            "unsourced_replenishments": len(self.unsourced_replenishments),
        }

    def inventory_frame(self) -> pd.DataFrame:
        """Daily inventory levels, one column per ``"storage / product"`` pair.

        A pair that starts being tracked mid-run (its first replenishment
        arrived then) has NaN for the days before.
        """
        days = pd.RangeIndex(1, len(self.cost_history) + 1, name="day")
        columns: dict[str, np.ndarray] = {}
        for (storage, product), history in self.inventory_history.items():
            series = np.full(len(days), np.nan)
            if history:
                series[len(days) - len(history):] = history
            columns[f"{storage.name} / {product.name}"] = series
        return pd.DataFrame(columns, index=days)

    def history_for(self, storage: Storage, product: Product) -> Optional[list[float]]:
        return self.inventory_history.get((storage, product))


def initialize_state(network: SupplyChainNetwork) -> SimulationState:
    """Fresh state seeded with every storage's initial inventory."""
    state = SimulationState(network)
    for storage in network.storages:
        for product, quantity in storage.initial_inventory.items():
            state.inventory[(storage, product)] = quantity
            state.initial_inventory[(storage, product)] = quantity
            state.inventory_history[(storage, product)] = []
    return state
