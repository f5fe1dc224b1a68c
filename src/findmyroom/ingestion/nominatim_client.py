"""
Geocoding ingestion client (Nominatim / OpenStreetMap search).

This module is responsible only for:
- issuing one free-text search request,
- parsing the ranked candidate list into `GeoResult` objects.

It does not implement fallback or scatter; see `findmyroom.location.resolver` for that.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from findmyroom.config.settings import Settings
from findmyroom.core.http import get_json
from findmyroom.core.rate_limit import TokenBucketRateLimiter
from findmyroom.domain.models import GeoResult

logger = logging.getLogger(__name__)


def parse_candidates(payload: Any) -> list[GeoResult]:
    """Parse a Nominatim search response into candidates (provider order preserved).

    Only `lat` and `lon` are read; they may be numbers or numeric strings.

    Raises:
        ValueError: If the payload is not a list or a candidate lacks a usable `lat`/`lon`.
    """
    if not isinstance(payload, list):
        raise ValueError("Unexpected geocoder response shape; expected a list.")

    out: list[GeoResult] = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"Unexpected geocoder candidate #{i}; expected an object.")
        try:
            out.append(GeoResult(latitude=float(item["lat"]), longitude=float(item["lon"])))
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise ValueError(f"Geocoder candidate #{i} has no usable lat/lon: {exc}") from exc
    return out


class NominatimClient:
    """Free-text forward geocoding against a Nominatim-compatible search endpoint."""

    def __init__(self, settings: Settings, *, rate_limiter: TokenBucketRateLimiter | None = None):
        self._settings = settings
        self._rate_limiter = rate_limiter
        rpm = settings.geocoding.max_requests_per_minute
        if self._rate_limiter is None and rpm > 0:
            self._rate_limiter = TokenBucketRateLimiter(max_per_minute=rpm)

    def set_rate_limiter(self, limiter: TokenBucketRateLimiter | None) -> None:
        self._rate_limiter = limiter

    def search(self, query: str) -> list[GeoResult]:
        """Return ranked candidates for `query` (empty list means "no match").

        Raises:
            httpx.HTTPError: On transport errors, timeouts or non-2xx responses.
            ValueError: On malformed JSON or an unexpected payload shape.
        """
        cfg = self._settings.geocoding
        headers = {"User-Agent": cfg.user_agent}
        if cfg.accept_language:
            headers["Accept-Language"] = cfg.accept_language

        if self._rate_limiter is not None:
            self._rate_limiter.acquire()

        logger.debug("Geocoding query=%r", query)
        payload = get_json(
            cfg.base_url,
            params={"q": query, "format": "json"},
            headers=headers,
            timeout_seconds=cfg.timeout_seconds,
        )
        return parse_candidates(payload)
