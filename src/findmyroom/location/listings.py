"""
Listing location updates.

Called by the post/edit listing flows whenever state, district or locality change.
An unresolved location never blocks saving a listing: the current coordinates are
kept and the map is simply suppressed for listings without a coordinate pair.
"""

from __future__ import annotations

import logging
from typing import Iterable

from findmyroom.domain.models import ListingLocation, LocationUpdate
from findmyroom.location.resolver import LocationResolver
from findmyroom.location.tokens import LatestResolution

logger = logging.getLogger(__name__)


def update_listing_location(
    listing: ListingLocation,
    resolver: LocationResolver,
    *,
    guard: LatestResolution | None = None,
    scatter: bool = True,
) -> LocationUpdate:
    """Re-geocode `listing` and return an updated copy (the input is not mutated)."""
    query = listing.to_query()
    if query is None:
        logger.debug("Listing %s is missing state/district; keeping coordinates", listing.id)
        return LocationUpdate(status="missing_fields", listing=listing)

    token = guard.issue() if guard is not None else None
    resolution = resolver.resolve_detailed(query, scatter=scatter)

    if guard is not None and token is not None and not guard.is_current(token):
        logger.info("Discarding stale location result for listing %s (token=%s)", listing.id, token)
        return LocationUpdate(status="stale", listing=listing, tier=resolution.tier)

    if resolution.result is None:
        return LocationUpdate(status="unresolved", listing=listing)

    updated = listing.model_copy(
        update={"latitude": resolution.result.latitude, "longitude": resolution.result.longitude}
    )
    return LocationUpdate(status="updated", listing=updated, tier=resolution.tier)


def mappable_listings(listings: Iterable[ListingLocation]) -> list[ListingLocation]:
    """Keep only listings that have a full coordinate pair (the map view filter)."""
    return [listing for listing in listings if listing.has_coordinates]
