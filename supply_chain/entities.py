"""
entities.py
-----------
Immutable value objects that describe a supply-chain network: products,
the three node variants (supplier, storage, customer), transport lanes,
replenishment orders and customer demand series.

Nodes share a ``kind`` tag and an ``is_replenishment_source`` capability
flag so the engine never has to inspect concrete types.  Storage carries
configuration only (holding-cost rates and the inventory it starts a run
with); every quantity that changes during a run lives in
:class:`supply_chain.state.SimulationState`.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Mapping, Sequence, Union

from supply_chain.errors import NetworkConfigError


class NodeKind(enum.Enum):
    SUPPLIER = "supplier"
    STORAGE = "storage"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class Product:
    """A traded good.  ``name`` identifies it within a network."""

    name: str
    base_price: float = 0.0


# ======================================================================
# Nodes
# ======================================================================
@dataclass(frozen=True)
class Supplier:
    """Primary production source with unlimited supply."""

    name: str
    location: str = ""

    kind: ClassVar[NodeKind] = NodeKind.SUPPLIER
    is_replenishment_source: ClassVar[bool] = True


@dataclass(frozen=True)
class Storage:
    """Distribution centre holding stock of one or more products.

    Parameters
    ----------
    name : str
        Unique storage name.
    location : str
        Free-text location label.
    holding_costs : Mapping[Product, float]
        Cost per unit per day for every product this storage may hold.
    initial_inventory : Mapping[Product, float]
        Quantity on hand at the start of every run.
    """

    name: str
    location: str = ""
    holding_costs: Mapping[Product, float] = field(default_factory=dict, compare=False)
    initial_inventory: Mapping[Product, float] = field(default_factory=dict, compare=False)

    kind: ClassVar[NodeKind] = NodeKind.STORAGE
    is_replenishment_source: ClassVar[bool] = False

    def __post_init__(self) -> None:
        for product, rate in self.holding_costs.items():
            if not _non_negative(rate):
                raise NetworkConfigError(
                    f"Storage {self.name!r}: holding cost for {product.name!r} must be finite and >= 0"
                )
        for product, qty in self.initial_inventory.items():
            if not _non_negative(qty):
                raise NetworkConfigError(
                    f"Storage {self.name!r}: initial inventory of {product.name!r} must be finite and >= 0"
                )
        # Freeze the mappings so a shared network cannot be edited between runs
        object.__setattr__(self, "holding_costs", MappingProxyType(dict(self.holding_costs)))
        object.__setattr__(
            self,
            "initial_inventory",
            MappingProxyType({p: float(q) for p, q in self.initial_inventory.items()}),
        )

    def __reduce__(self):
        # mappingproxy does not pickle; rebuild from plain dicts instead
        return (
            type(self),
            (self.name, self.location, dict(self.holding_costs), dict(self.initial_inventory)),
        )

    def holding_cost(self, product: Product) -> float:
        return self.holding_costs[product]


@dataclass(frozen=True)
class Customer:
    """Market that only consumes products."""

    name: str
    region: str = ""

    kind: ClassVar[NodeKind] = NodeKind.CUSTOMER
    is_replenishment_source: ClassVar[bool] = False


Node = Union[Supplier, Storage, Customer]


# ======================================================================
# Flows
# ======================================================================
@dataclass(frozen=True)
class Lane:
    """Directed transport link between two nodes.

    ``time`` is the transit time in whole days and must be at least one, so
    an order placed today always arrives on a later day.
    """

    origin: Node
    destination: Node
    time: int
    fixed_cost: float = 0.0
    unit_cost: float = 0.0

    def __post_init__(self) -> None:
        if int(self.time) != self.time or self.time < 1:
            raise NetworkConfigError(
                f"Lane {self.origin.name!r} -> {self.destination.name!r}: "
                f"transit time must be a positive integer, got {self.time!r}"
            )
        if not (_non_negative(self.fixed_cost) and _non_negative(self.unit_cost)):
            raise NetworkConfigError(
                f"Lane {self.origin.name!r} -> {self.destination.name!r}: costs must be finite and >= 0"
            )
        object.__setattr__(self, "time", int(self.time))

    def shipment_cost(self, quantity: float) -> float:
        """Total cost of moving ``quantity`` units in a single shipment."""
        return self.fixed_cost + self.unit_cost * quantity


@dataclass(frozen=True)
class Order:
    creation_time: int
    origin: Node
    destination: Node
    product: Product
    quantity: float
    due_date: int


@dataclass(frozen=True, eq=False)
class Demand:
    """Per-day requested quantities of one product by one customer.

    ``quantities`` is indexed by day starting at 1 through :meth:`quantity_on`.
    Any sequence is accepted (lists, tuples, numpy arrays) and stored as a
    tuple of floats.
    """

    customer: Customer
    product: Product
    quantities: Sequence[float]
    sales_price: float
    lost_sales_cost: float

    def __post_init__(self) -> None:
        label = f"Demand {self.customer.name!r}/{self.product.name!r}"
        values = tuple(float(q) for q in self.quantities)
        if not all(_non_negative(q) for q in values):
            raise NetworkConfigError(f"{label}: quantities must be finite and >= 0")
        if not _non_negative(self.sales_price):
            raise NetworkConfigError(f"{label}: sales price must be finite and >= 0")
        if not _non_negative(self.lost_sales_cost):
            raise NetworkConfigError(f"{label}: lost-sales cost must be finite and >= 0")
        object.__setattr__(self, "quantities", values)

    def quantity_on(self, day: int) -> float:
        return self.quantities[day - 1]

    @property
    def total(self) -> float:
        return sum(self.quantities)


def _non_negative(value) -> bool:
    return math.isfinite(value) and value >= 0
