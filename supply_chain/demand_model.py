"""
demand_model.py
---------------
Generators for daily customer demand series.  The engine only consumes the
finished sequences; these helpers exist so scenarios can be built with
realistic seasonal or trending demand.

Both patterns share a linear yearly trend:

    trend_term(t) = base * (trend / 100) * (t / 365)      t = 1 .. horizon

and are floored at zero.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass, field
from typing import Optional

DAYS_PER_YEAR = 365


def _days(horizon: int) -> np.ndarray:
    return np.arange(1, horizon + 1, dtype=float)


def _trend_term(days: np.ndarray, base: float, trend: float) -> np.ndarray:
    return base * (trend / 100.0) * (days / DAYS_PER_YEAR)


def generate_seasonal_demand(
    horizon: int,
    base: float = 50.0,
    amplitude: float = 20.0,
    trend: float = 0.0,
    noise_mean: float = 5.0,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Yearly sine wave around ``base`` plus trend and Poisson noise.

    Parameters
    ----------
    horizon : int
        Number of days to generate.
    base : float
        Level of the series before seasonality, trend and noise.
    amplitude : float
        Peak deviation of the yearly sine component.
    trend : float
        Growth in percent of ``base`` per year.
    noise_mean : float
        Mean of the additive Poisson noise.
    rng : numpy.random.Generator, optional
        Source of randomness; a fresh unseeded generator when omitted.
    """
    rng = rng if rng is not None else np.random.default_rng()
    days = _days(horizon)
    seasonal = amplitude * np.sin(2.0 * np.pi * days / DAYS_PER_YEAR)
    noise = rng.poisson(noise_mean, size=horizon)
    return np.maximum(0.0, base + _trend_term(days, base, trend) + seasonal + noise)


def generate_trending_demand(
    horizon: int,
    base: float = 50.0,
    trend: float = 0.0,
    noise_factor: float = 0.2,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Linear trend around ``base`` with Normal noise of std ``base * noise_factor``."""
    rng = rng if rng is not None else np.random.default_rng()
    days = _days(horizon)
    noise = rng.normal(0.0, base * noise_factor, size=horizon)
    return np.maximum(0.0, base + _trend_term(days, base, trend) + noise)


@dataclass
class DemandModel:
    """Seeded demand-series generator.

    Parameters
    ----------
    pattern : str
        ``"seasonal"`` or ``"trending"``.
    base : float
        Baseline daily demand.
    amplitude : float
        Seasonal amplitude (``"seasonal"`` only).
    trend : float
        Yearly growth in percent of ``base``.
    noise_mean : float
        Poisson noise mean (``"seasonal"`` only).
    noise_factor : float
        Normal noise std as a fraction of ``base`` (``"trending"`` only).
    seed : Optional[int]
        Random seed for reproducibility.
    """

    pattern: str = "seasonal"
    base: float = 50.0
    amplitude: float = 20.0
    trend: float = 0.0
    noise_mean: float = 5.0
    noise_factor: float = 0.2
    seed: Optional[int] = None
    _rng: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.pattern not in ("seasonal", "trending"):
            raise ValueError(f"Unknown demand pattern: {self.pattern}")
        self._rng = np.random.default_rng(self.seed)

    # ------------------------------------------------------------------
    def generate(self, horizon: int) -> np.ndarray:
        """Return ``horizon`` non-negative daily quantities."""
        if self.pattern == "seasonal":
            return generate_seasonal_demand(
                horizon,
                base=self.base,
                amplitude=self.amplitude,
                trend=self.trend,
                noise_mean=self.noise_mean,
                rng=self._rng,
            )
        return generate_trending_demand(
            horizon,
            base=self.base,
            trend=self.trend,
            noise_factor=self.noise_factor,
            rng=self._rng,
        )

    def reset(self, seed: Optional[int] = None) -> None:
        """Re-seed the internal RNG."""
        self._rng = np.random.default_rng(seed if seed is not None else self.seed)
