from __future__ import annotations

from typing import Protocol

"""
Geospatial helpers.

Listing pins are deliberately imprecise: a resolved coordinate is "scattered" by a
small uniform offset on each axis so the map never points at a private address.
"""


class UniformSource(Protocol):
    """Anything with `random.Random.uniform`'s signature (injectable for tests)."""

    def uniform(self, a: float, b: float) -> float: ...


def scatter_point(
    lat: float,
    lon: float,
    *,
    degrees: float,
    rng: UniformSource,
    decimals: int = 6,
) -> tuple[float, float]:
    """Offset (lat, lon) by independent uniform(-degrees, degrees) draws, then round.

    Rounding bounds stored precision (6 decimals is ~0.11 m) and removes float noise.
    Latitude is clamped to the valid range; longitude wraps across the antimeridian
    into [-180, 180).
    """
    if degrees < 0:
        raise ValueError("degrees must be >= 0")
    new_lat = round(lat + rng.uniform(-degrees, degrees), decimals)
    new_lon = ((lon + rng.uniform(-degrees, degrees) + 180.0) % 360.0) - 180.0
    new_lon = round(new_lon, decimals)
    if new_lon >= 180.0:
        new_lon -= 360.0
    return max(-90.0, min(90.0, new_lat)), new_lon
