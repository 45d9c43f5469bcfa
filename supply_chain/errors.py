"""
errors.py
---------
Exception hierarchy for the supply-chain simulator.

Configuration problems are raised before the first simulated day.  Numeric
outcomes of a run (stock-outs, lost sales, missing lanes) are never errors;
they show up in the returned state instead.
"""


class SupplyChainError(Exception):
    """Base class for all simulator errors."""


class NetworkConfigError(SupplyChainError, ValueError):
    """The network or policy mapping is internally inconsistent."""


class SimulationStateError(SupplyChainError, RuntimeError):
    """The simulation state violated one of its own invariants."""
