"""
Listing location resolver.

Turns a coarse administrative address (state, district, optional locality) into an
approximate map coordinate:

1. Tiered lookup, most to least specific: locality -> district -> state. The first
   tier whose query returns at least one candidate wins and its first candidate is
   used as-is (the provider's ranking is trusted).
2. Optional scatter: the coordinate is jittered by up to `scatter_degrees` per axis
   so a listing never pins a private address.

The resolver "fails open": provider errors are logged and treated as an empty tier,
and an exhausted lookup returns None. Nothing is cached; each call re-queries.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Protocol

import httpx

from findmyroom.config.settings import Settings
from findmyroom.core.geo import UniformSource, scatter_point
from findmyroom.domain.models import GeoQuery, GeoResult
from findmyroom.ingestion.nominatim_client import NominatimClient

logger = logging.getLogger(__name__)


class GeocodingClient(Protocol):
    def search(self, query: str) -> list[GeoResult]: ...


@dataclass(frozen=True)
class Tier:
    """One query builder; `build` returns None when the tier does not apply."""

    name: str
    build: Callable[[GeoQuery, str], str | None]


def _locality_query(q: GeoQuery, country: str) -> str | None:
    if not q.locality:
        return None
    return f"{q.locality}, {q.district}, {q.state}, {country}"


def _district_query(q: GeoQuery, country: str) -> str | None:
    return f"{q.district}, {q.state}, {country}"


def _state_query(q: GeoQuery, country: str) -> str | None:
    return f"{q.state}, {country}"


TIERS: tuple[Tier, ...] = (
    Tier("locality", _locality_query),
    Tier("district", _district_query),
    Tier("state", _state_query),
)


def tier_queries(query: GeoQuery, country: str = "India") -> list[tuple[str, str]]:
    """Return the (tier name, query text) pairs that apply to `query`, in order."""
    out: list[tuple[str, str]] = []
    for tier in TIERS:
        text = tier.build(query, country)
        if text is not None:
            out.append((tier.name, text))
    return out


@dataclass(frozen=True)
class Resolution:
    """Resolver output plus which tier produced it (None when unresolved)."""

    result: GeoResult | None
    tier: str | None = None


class LocationResolver:
    """Resolves `GeoQuery` objects to (optionally scattered) coordinates."""

    def __init__(
        self,
        settings: Settings,
        *,
        client: GeocodingClient | None = None,
        rng: UniformSource | None = None,
    ):
        self._settings = settings
        self._client = client if client is not None else NominatimClient(settings)
        self._rng = rng if rng is not None else random.Random()

    def resolve(self, query: GeoQuery, scatter: bool = True) -> GeoResult | None:
        """Return a coordinate for `query`, or None if no tier matched."""
        return self.resolve_detailed(query, scatter=scatter).result

    def resolve_detailed(self, query: GeoQuery, *, scatter: bool = True) -> Resolution:
        cfg = self._settings.geocoding
        raw: GeoResult | None = None
        tier: str | None = None

        for name, text in tier_queries(query, cfg.country):
            try:
                candidates = self._client.search(text)
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("Geocoding tier %s failed for %r: %s", name, text, exc)
                if not cfg.fallback_on_error:
                    return Resolution(result=None)
                continue

            if candidates:
                raw, tier = candidates[0], name
                break
            logger.debug("No geocoding candidates for %r", text)

        if raw is None:
            logger.info(
                "No coordinates found after all tiers for state=%r district=%r locality=%r",
                query.state,
                query.district,
                query.locality,
            )
            return Resolution(result=None)

        if not scatter:
            return Resolution(result=raw, tier=tier)

        lat, lon = scatter_point(
            raw.latitude,
            raw.longitude,
            degrees=cfg.scatter_degrees,
            rng=self._rng,
            decimals=cfg.scatter_decimals,
        )
        logger.debug(
            "Scattered %.6f,%.6f -> %.6f,%.6f (tier=%s)", raw.latitude, raw.longitude, lat, lon, tier
        )
        return Resolution(result=GeoResult(latitude=lat, longitude=lon), tier=tier)
