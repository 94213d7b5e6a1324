"""Depth-damage curves and the damage ratio evaluator.

Curves are the JRC global flood depth-damage functions for Asia
(Huizinga et al., 2017), one per asset class. Depth in meters, ratio as a
fraction of asset value.
"""

import math
from dataclasses import dataclass

import numpy as np

from flood_risk.utils.constants import DEFAULT_ASSET_CLASS


@dataclass(frozen=True)
class DamageCurve:
    """Piecewise-linear depth to damage ratio curve."""
    name: str
    points: tuple

    def __post_init__(self):
        if len(self.points) < 2:
            raise ValueError(f"Curve '{self.name}' needs at least two points")

        depths = [d for d, _ in self.points]
        ratios = [r for _, r in self.points]
        if depths[0] > 0 or ratios[0] != 0:
            raise ValueError(f"Curve '{self.name}' must start at depth <= 0 with ratio 0")
        if any(b <= a for a, b in zip(depths, depths[1:])):
            raise ValueError(f"Curve '{self.name}' depths must be strictly increasing")
        if any(b < a for a, b in zip(ratios, ratios[1:])):
            raise ValueError(f"Curve '{self.name}' ratios must be non-decreasing")

    @property
    def depths(self) -> list:
        return [d for d, _ in self.points]

    @property
    def ratios(self) -> list:
        return [r for _, r in self.points]

    @property
    def max_depth(self) -> float:
        return self.points[-1][0]

    @property
    def max_ratio(self) -> float:
        return self.points[-1][1]

    def ratio(self, depth: float) -> float:
        return damage_ratio(depth, self)


def damage_ratio(depth: float, curve: DamageCurve) -> float:
    """
    Interpolate the damage ratio for a flood depth.

    Dry or negative depths give 0; depths at or past the last control point
    saturate at the curve's maximum ratio.
    """
    if depth is None or math.isnan(depth) or depth <= 0:
        return 0.0
    if depth >= curve.max_depth:
        return float(curve.max_ratio)
    return float(np.interp(depth, curve.depths, curve.ratios))


INDUSTRY_CURVE = DamageCurve(
    name="industry",
    points=(
        (0.0, 0.0), (0.5, 0.28), (1.0, 0.48), (1.5, 0.63), (2.0, 0.72),
        (3.0, 0.86), (4.0, 0.91), (5.0, 0.96), (6.0, 1.0),
    ),
)

COMMERCIAL_CURVE = DamageCurve(
    name="commercial",
    points=(
        (0.0, 0.0), (0.5, 0.38), (1.0, 0.54), (1.5, 0.66), (2.0, 0.76),
        (3.0, 0.88), (4.0, 0.94), (5.0, 0.98), (6.0, 1.0),
    ),
)

DAMAGE_CURVES = {
    "industry": INDUSTRY_CURVE,
    "commercial": COMMERCIAL_CURVE,
}


def get_curve(asset_class: str) -> DamageCurve:
    return DAMAGE_CURVES.get(asset_class, DAMAGE_CURVES[DEFAULT_ASSET_CLASS])
