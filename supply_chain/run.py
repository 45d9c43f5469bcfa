"""
run.py
------
Run the default smart-home scenario once and print its headline numbers.

Usage
-----
    python -m supply_chain.run
    python -m supply_chain.run --horizon 180 --seed 7
    python -m supply_chain.run --reorder-point 100 --order-up-to 300
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

import pandas as pd

from configs.default_config import DEFAULT_CONFIG
from supply_chain.engine import simulate
from supply_chain.scenario import build_network
from supply_chain.state import SimulationState


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0].strip())
    parser.add_argument("--horizon", type=int, default=DEFAULT_CONFIG["horizon"])
    parser.add_argument("--seed", type=int, default=DEFAULT_CONFIG["seed"])
    parser.add_argument("--reorder-point", type=float, default=DEFAULT_CONFIG["reorder_point"])
    parser.add_argument("--order-up-to", type=float, default=DEFAULT_CONFIG["order_up_to"])
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def service_level_table(state: SimulationState) -> pd.DataFrame:
    rows = [
        {
            "customer": customer.name,
            "product": product.name,
            "served": state.fulfilled_sales.get((customer, product), 0.0),
            "lost": state.lost_sales.get((customer, product), 0.0),
            "service_level": level,
        }
        for (customer, product), level in state.service_levels().items()
    ]
    return pd.DataFrame(rows).round(3)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    cfg = dict(DEFAULT_CONFIG)
    cfg.update(
        horizon=args.horizon,
        seed=args.seed,
        reorder_point=args.reorder_point,
        order_up_to=args.order_up_to,
    )
    network, policies = build_network(cfg)
    state = simulate(network, policies)

    summary = pd.Series(state.summary()).round(2)
    print(summary.to_string())
    print()
    print(service_level_table(state).to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
