"""
default_config.py
-----------------
Central configuration dictionary for the default smart-home scenario.
Every runnable entry point imports from here and overrides only what it
needs, e.g. ``{**DEFAULT_CONFIG, "reorder_point": 100.0}``.

Transport tiers (``short`` / ``medium`` / ``long``) are assigned to lanes by
distance in :func:`supply_chain.scenario.build_network`.
"""

DEFAULT_CONFIG = dict(
    # --- Horizon ---
    horizon=365,

    # --- Products ---
    product_prices={
        "Smart Thermostat": 200.0,
        "Security Camera": 150.0,
        "Smart Lighting": 100.0,
    },
    sales_price_markup=1.5,          # sales price = base price * markup
    lost_sales_cost_ratio=0.1,       # penalty per lost unit = base price * ratio

    # --- Inventory ---
    initial_inventory=100.0,         # per storage and product
    holding_cost_rates={
        "Smart Thermostat": 0.5,
        "Security Camera": 0.7,
        "Smart Lighting": 0.3,
    },

    # --- Ordering (s, S) ---
    reorder_point=75.0,
    order_up_to=200.0,

    # --- Transport ---
    transport_fixed_costs={"short": 1000.0, "medium": 2000.0, "long": 2500.0},
    transport_unit_costs={"short": 10.0, "medium": 20.0, "long": 25.0},
    transport_times={"short": 5, "medium": 15, "long": 20},

    # --- Demand ---
    base_demand={
        "Smart Thermostat": 60.0,
        "Security Camera": 50.0,
        "Smart Lighting": 70.0,
    },
    seasonal_amplitude=20.0,
    seasonal_noise_mean=5.0,
    trend_percentage=10.0,           # yearly growth in percent
    noise_factor=0.1,

    # --- Reproducibility ---
    seed=42,
)
