"""Discrete-time multi-echelon supply-chain simulator."""
from supply_chain.entities import (
    Customer,
    Demand,
    Lane,
    Node,
    NodeKind,
    Order,
    Product,
    Storage,
    Supplier,
)
from supply_chain.errors import NetworkConfigError, SimulationStateError, SupplyChainError
from supply_chain.network import SupplyChainNetwork, create_network
from supply_chain.policies import BaseStockPolicy, OrderingPolicy, SSPolicy
from supply_chain.state import SimulationState, UnsourcedReplenishment, initialize_state
from supply_chain.engine import select_lane, simulate
from supply_chain.demand_model import DemandModel, generate_seasonal_demand, generate_trending_demand
