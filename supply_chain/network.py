"""
network.py
----------
The :class:`SupplyChainNetwork` aggregate and its append-only builder API.

Referential checks run as entities are added (a lane may only connect nodes
the network already knows, a demand series must match the horizon).  Checks
that depend on the full picture, such as storages referencing registered
products, run in :meth:`SupplyChainNetwork.validate` when a simulation
starts.  After that the network is locked: the builder methods refuse new
entities and the collections are frozen into tuples.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Iterable

from supply_chain.entities import (
    Customer,
    Demand,
    Lane,
    Node,
    NodeKind,
    Product,
    Storage,
    Supplier,
)
from supply_chain.errors import NetworkConfigError


@dataclass
class SupplyChainNetwork:
    """Suppliers, storages, customers, products, lanes and demands over a horizon."""

    horizon: int
    suppliers: list[Supplier] = field(default_factory=list)
    storages: list[Storage] = field(default_factory=list)
    customers: list[Customer] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    lanes: list[Lane] = field(default_factory=list)
    demands: list[Demand] = field(default_factory=list)
    _locked: bool = field(default=False, init=False, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Builder API
    # ------------------------------------------------------------------
    def add_supplier(self, supplier: Supplier) -> Supplier:
        self._check_unlocked()
        self._check_unique_name(supplier.name, self.suppliers, "supplier")
        self.suppliers.append(supplier)
        return supplier

    def add_storage(self, storage: Storage) -> Storage:
        self._check_unlocked()
        self._check_unique_name(storage.name, self.storages, "storage")
        self.storages.append(storage)
        return storage

    def add_customer(self, customer: Customer) -> Customer:
        self._check_unlocked()
        self._check_unique_name(customer.name, self.customers, "customer")
        self.customers.append(customer)
        return customer

    def add_product(self, product: Product) -> Product:
        self._check_unlocked()
        self._check_unique_name(product.name, self.products, "product")
        self.products.append(product)
        return product

    def add_lane(self, lane: Lane) -> Lane:
        self._check_unlocked()
        for end in (lane.origin, lane.destination):
            if not self.contains_node(end):
                raise NetworkConfigError(
                    f"Lane {lane.origin.name!r} -> {lane.destination.name!r} references "
                    f"{end.kind.value} {end.name!r}, which is not part of the network"
                )
        self.lanes.append(lane)
        return lane

    def add_demand(self, demand: Demand) -> Demand:
        self._check_unlocked()
        label = f"{demand.customer.name!r}/{demand.product.name!r}"
        if demand.customer not in self.customers:
            raise NetworkConfigError(f"Demand {label}: unknown customer {demand.customer.name!r}")
        if demand.product not in self.products:
            raise NetworkConfigError(f"Demand {label}: unknown product {demand.product.name!r}")
        if len(demand.quantities) != self.horizon:
            raise NetworkConfigError(
                f"Demand {label}: {len(demand.quantities)} daily quantities "
                f"for a horizon of {self.horizon} days"
            )
        self.demands.append(demand)
        return demand

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def contains_node(self, node: Node) -> bool:
        if node.kind is NodeKind.SUPPLIER:
            return node in self.suppliers
        if node.kind is NodeKind.STORAGE:
            return node in self.storages
        return node in self.customers

    def inbound_lanes(self, destination: Node) -> list[Lane]:
        """Lanes ending at ``destination``, in the order they were added."""
        return [lane for lane in self.lanes if lane.destination == destination]

    @property
    def locked(self) -> bool:
        return self._locked

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """Run whole-network checks; raise :class:`NetworkConfigError` on failure."""
        if not _is_positive_int(self.horizon):
            raise NetworkConfigError(f"horizon must be a positive integer, got {self.horizon!r}")
        known = set(self.products)
        for storage in self.storages:
            for product in list(storage.holding_costs) + list(storage.initial_inventory):
                if product not in known:
                    raise NetworkConfigError(
                        f"Storage {storage.name!r} references unknown product {product.name!r}"
                    )
            for product in storage.initial_inventory:
                if product not in storage.holding_costs:
                    raise NetworkConfigError(
                        f"Storage {storage.name!r} holds {product.name!r} "
                        "but has no holding-cost rate for it"
                    )
        for demand in self.demands:
            if len(demand.quantities) != self.horizon:
                raise NetworkConfigError(
                    f"Demand {demand.customer.name!r}/{demand.product.name!r}: "
                    f"{len(demand.quantities)} daily quantities for a horizon of {self.horizon} days"
                )

    def lock(self) -> None:
        """Refuse further additions; collections become tuples from here on."""
        for name in _COLLECTIONS:
            setattr(self, name, tuple(getattr(self, name)))
        self._locked = True

    def _check_unlocked(self) -> None:
        if self._locked:
            raise NetworkConfigError("network is locked once a simulation has started")

    @staticmethod
    def _check_unique_name(name: str, existing: Iterable, what: str) -> None:
        if any(item.name == name for item in existing):
            raise NetworkConfigError(f"duplicate {what} name {name!r}")


_COLLECTIONS = ("suppliers", "storages", "customers", "products", "lanes", "demands")


def create_network(horizon: int) -> SupplyChainNetwork:
    """Return an empty network simulating ``horizon`` days."""
    if not _is_positive_int(horizon):
        raise NetworkConfigError(f"horizon must be a positive integer, got {horizon!r}")
    return SupplyChainNetwork(int(horizon))


def _is_positive_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value >= 1
