"""
policies.py
-----------
Replenishment rules.  A policy only sees the current on-hand quantity of one
(storage, product) pair and answers how much to order today.  The engine is
handed a mapping ``{(storage, product): policy}``; pairs that are missing
from it never reorder.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass


class OrderingPolicy(abc.ABC):
    """Interface every replenishment rule implements."""

    @abc.abstractmethod
    def calculate_order_quantity(self, current_inventory: float) -> float:
        """Return a non-negative quantity to order given the on-hand level."""


@dataclass(frozen=True)
class SSPolicy(OrderingPolicy):
    """Reorder-point / order-up-to rule.

    Parameters
    ----------
    s : float
        Reorder point.  Stock at or below ``s`` triggers an order.
    S : float
        Order-up-to level, strictly greater than ``s``.
    """

    s: float
    S: float

    def __post_init__(self) -> None:
        if self.S <= self.s:
            raise ValueError(f"order-up-to level S={self.S} must exceed reorder point s={self.s}")

    def calculate_order_quantity(self, current_inventory: float) -> float:
        if current_inventory <= self.s:
            return self.S - current_inventory
        return 0.0


@dataclass(frozen=True)
class BaseStockPolicy(OrderingPolicy):
    """Top up to ``target`` every day the stock is below it."""

    target: float

    def __post_init__(self) -> None:
        if self.target < 0:
            raise ValueError(f"target must be >= 0, got {self.target}")

    def calculate_order_quantity(self, current_inventory: float) -> float:
        return max(0.0, self.target - current_inventory)
