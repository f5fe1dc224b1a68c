"""
API routes.

Endpoints:
- GET  `/api/health`: liveness probe.
- GET  `/api/location/resolve`: resolve state/district/locality to a `{lat, lng}` pin.
- POST `/api/listings/location`: re-geocode a listing's location fields.

A geocoding outage is never a 5xx here: the resolver fails open and returns `null`.
The listing endpoint is stateless and applies no latest-wins guard: a client that
fires overlapping updates for one listing must order them itself.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from findmyroom.config.settings import get_settings
from findmyroom.domain.models import GeoQuery, ListingLocation, LocationUpdate, ResolveResponse
from findmyroom.location.listings import update_listing_location
from findmyroom.location.resolver import LocationResolver

router = APIRouter()


@lru_cache
def _resolver() -> LocationResolver:
    return LocationResolver(get_settings())


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok"}


@router.get("/api/location/resolve", response_model=ResolveResponse)
def get_location(
    state: str = Query(..., min_length=1),
    district: str = Query(..., min_length=1),
    locality: str | None = None,
    scatter: bool = True,
) -> ResolveResponse:
    """Resolve an administrative address to an approximate coordinate."""
    try:
        query = GeoQuery(state=state, district=district, locality=locality)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail="state and district must not be blank") from exc
    resolution = _resolver().resolve_detailed(query, scatter=scatter)
    if resolution.result is None:
        return ResolveResponse(result=None, tier=None)
    return ResolveResponse(result=resolution.result.to_lat_lng(), tier=resolution.tier)


@router.post("/api/listings/location", response_model=LocationUpdate)
def post_listing_location(listing: ListingLocation) -> LocationUpdate:
    """Recompute a listing's coordinates after its address fields changed."""
    return update_listing_location(listing, _resolver())
