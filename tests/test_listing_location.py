import pytest

from findmyroom.config.settings import get_settings
from findmyroom.domain.models import GeoResult, ListingLocation
from findmyroom.location.listings import mappable_listings, update_listing_location
from findmyroom.location.resolver import LocationResolver
from findmyroom.location.tokens import LatestResolution


class StubGeocoder:
    def __init__(self, candidates=None, on_search=None):
        self.candidates = candidates or []
        self.on_search = on_search
        self.calls: list[str] = []

    def search(self, query: str):
        self.calls.append(query)
        if self.on_search:
            self.on_search()
        return list(self.candidates)


def _resolver(geocoder) -> LocationResolver:
    return LocationResolver(get_settings(), client=geocoder)


def test_update_sets_coordinates_on_copy():
    listing = ListingLocation(id="room-1", state="Maharashtra", district="Mumbai", locality="Andheri West")
    geocoder = StubGeocoder([GeoResult(latitude=19.1364, longitude=72.8296)])

    update = update_listing_location(listing, _resolver(geocoder), scatter=False)

    assert update.status == "updated"
    assert update.tier == "locality"
    assert (update.listing.latitude, update.listing.longitude) == (19.1364, 72.8296)
    assert update.listing.id == "room-1"
    assert listing.latitude is None


def test_unresolved_keeps_current_coordinates():
    listing = ListingLocation(state="Kerala", district="Idukki", latitude=9.85, longitude=76.97)

    update = update_listing_location(listing, _resolver(StubGeocoder()))

    assert update.status == "unresolved"
    assert (update.listing.latitude, update.listing.longitude) == (9.85, 76.97)


@pytest.mark.parametrize("state,district", [(None, "Idukki"), ("Kerala", None), ("Kerala", "  ")])
def test_missing_state_or_district_skips_lookup(state, district):
    geocoder = StubGeocoder([GeoResult(latitude=1.0, longitude=1.0)])
    listing = ListingLocation(state=state, district=district)

    update = update_listing_location(listing, _resolver(geocoder))

    assert update.status == "missing_fields"
    assert geocoder.calls == []


def test_stale_result_is_discarded_when_newer_lookup_started():
    guard = LatestResolution()
    # A newer edit issues its own token while this lookup is still in flight.
    geocoder = StubGeocoder([GeoResult(latitude=19.076, longitude=72.8777)], on_search=guard.issue)
    listing = ListingLocation(state="Maharashtra", district="Mumbai", latitude=18.52, longitude=73.85)

    update = update_listing_location(listing, _resolver(geocoder), guard=guard)

    assert update.status == "stale"
    assert (update.listing.latitude, update.listing.longitude) == (18.52, 73.85)


def test_latest_lookup_applies_with_guard():
    guard = LatestResolution()
    geocoder = StubGeocoder([GeoResult(latitude=19.076, longitude=72.8777)])
    listing = ListingLocation(state="Maharashtra", district="Mumbai")

    update = update_listing_location(listing, _resolver(geocoder), guard=guard, scatter=False)

    assert update.status == "updated"
    assert guard.latest == 1


def test_latest_resolution_tokens_are_monotonic():
    guard = LatestResolution()
    first = guard.issue()
    second = guard.issue()

    assert second > first
    assert not guard.is_current(first)
    assert guard.is_current(second)


def test_mappable_listings_drops_unresolved():
    rooms = [
        ListingLocation(id="a", state="Goa", district="North Goa", latitude=15.5, longitude=73.8),
        ListingLocation(id="b", state="Goa", district="South Goa"),
        ListingLocation(id="c", state="Kerala", district="Idukki", latitude=0.0, longitude=0.0),
    ]

    assert [r.id for r in mappable_listings(rooms)] == ["a", "c"]


def test_listing_requires_coordinates_as_a_pair():
    with pytest.raises(ValueError, match="latitude and longitude must be set together"):
        ListingLocation(state="Goa", district="North Goa", latitude=15.5)
