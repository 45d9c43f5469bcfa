"""
scenario.py
-----------
Builds the default smart-home network: three products shipped from two
factories through three regional distribution centres to three markets.

All numbers come from a config dict merged over
:data:`configs.default_config.DEFAULT_CONFIG`, so a sensitivity study only
has to vary the keys it cares about and call :func:`build_network` again.
"""

from __future__ import annotations

from typing import Any, Optional

from configs.default_config import DEFAULT_CONFIG
from supply_chain.demand_model import DemandModel
from supply_chain.entities import Customer, Demand, Lane, Product, Storage, Supplier
from supply_chain.network import SupplyChainNetwork, create_network
from supply_chain.policies import OrderingPolicy, SSPolicy

THERMOSTAT = "Smart Thermostat"
CAMERA = "Security Camera"
LIGHTING = "Smart Lighting"

# origin factory, destination DC, transport tier
LANE_TIERS = [
    ("USA Factory", "North America DC", "short"),
    ("USA Factory", "Europe DC", "medium"),
    ("USA Factory", "Asia Pacific DC", "long"),
    ("Asia Factory", "North America DC", "long"),
    ("Asia Factory", "Europe DC", "long"),
    ("Asia Factory", "Asia Pacific DC", "short"),
]


def merge_config(cfg: Optional[dict] = None, **kwargs: Any) -> dict:
    return {**DEFAULT_CONFIG, **(cfg or {}), **kwargs}


def build_network(
    cfg: Optional[dict] = None, **kwargs: Any
) -> tuple[SupplyChainNetwork, dict[tuple[Storage, Product], OrderingPolicy]]:
    """Return ``(network, policies)`` for the smart-home scenario."""
    cfg = merge_config(cfg, **kwargs)
    horizon = int(cfg["horizon"])
    network = create_network(horizon)

    products = {
        name: network.add_product(Product(name, float(price)))
        for name, price in cfg["product_prices"].items()
    }

    for supplier in (Supplier("USA Factory", "USA"), Supplier("Asia Factory", "China")):
        network.add_supplier(supplier)

    holding = {products[name]: float(rate) for name, rate in cfg["holding_cost_rates"].items()}
    initial = {product: float(cfg["initial_inventory"]) for product in products.values()}
    for name, location in (
        ("Europe DC", "Germany"),
        ("North America DC", "USA"),
        ("Asia Pacific DC", "Singapore"),
    ):
        network.add_storage(Storage(name, location, holding, initial))

    eu = network.add_customer(Customer("EU Market", "Europe"))
    us = network.add_customer(Customer("US Market", "North America"))
    asia = network.add_customer(Customer("Asia Market", "Asia"))

    suppliers = {s.name: s for s in network.suppliers}
    storages = {s.name: s for s in network.storages}
    for origin, destination, tier in LANE_TIERS:
        network.add_lane(
            Lane(
                suppliers[origin],
                storages[destination],
                time=int(cfg["transport_times"][tier]),
                fixed_cost=float(cfg["transport_fixed_costs"][tier]),
                unit_cost=float(cfg["transport_unit_costs"][tier]),
            )
        )

    seed = cfg["seed"]
    models = {
        THERMOSTAT: DemandModel(
            pattern="seasonal",
            base=cfg["base_demand"][THERMOSTAT],
            amplitude=cfg["seasonal_amplitude"],
            trend=cfg["trend_percentage"],
            noise_mean=cfg["seasonal_noise_mean"],
            seed=seed,
        ),
        CAMERA: DemandModel(
            pattern="trending",
            base=cfg["base_demand"][CAMERA],
            trend=cfg["trend_percentage"],
            noise_factor=cfg["noise_factor"],
            seed=None if seed is None else seed + 1,
        ),
        LIGHTING: DemandModel(
            pattern="trending",
            base=cfg["base_demand"][LIGHTING],
            trend=cfg["trend_percentage"],
            noise_factor=cfg["noise_factor"],
            seed=None if seed is None else seed + 2,
        ),
    }
    for customer, name in ((eu, THERMOSTAT), (us, CAMERA), (asia, LIGHTING)):
        product = products[name]
        network.add_demand(
            Demand(
                customer,
                product,
                models[name].generate(horizon),
                sales_price=product.base_price * cfg["sales_price_markup"],
                lost_sales_cost=product.base_price * cfg["lost_sales_cost_ratio"],
            )
        )

    policies: dict[tuple[Storage, Product], OrderingPolicy] = {
        (storage, product): SSPolicy(float(cfg["reorder_point"]), float(cfg["order_up_to"]))
        for storage in network.storages
        for product in network.products
    }
    return network, policies
