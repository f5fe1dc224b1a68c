"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- geocoding inputs/outputs (`GeoQuery`, `GeoResult`)
- the location part of a room listing (`ListingLocation`)
- API/CLI responses (`LatLng`, `ResolveResponse`, `LocationUpdate`)

Keeping these models in one place helps:
- validation (reject bad inputs early),
- consistent JSON output across CLI/API.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class GeoQuery(BaseModel):
    """A coarse, user-entered administrative address."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    state: str = Field(..., min_length=1)
    district: str = Field(..., min_length=1)
    locality: str | None = None

    @field_validator("locality")
    @classmethod
    def _blank_locality_is_absent(cls, value: str | None) -> str | None:
        return value or None


class GeoResult(BaseModel):
    """A resolved coordinate in WGS84 decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_lat_lng(self) -> "LatLng":
        return LatLng(lat=self.latitude, lng=self.longitude)


class LatLng(BaseModel):
    """Caller-facing `{lat, lng}` shape used by the web client."""

    lat: float
    lng: float


class ResolveResponse(BaseModel):
    result: LatLng | None = None
    tier: str | None = None


class ListingLocation(BaseModel):
    """Location fields of a room listing.

    A `None` coordinate pair means "unresolved"; callers should suppress the map
    rather than plot (0, 0).
    """

    id: str | None = None
    state: str | None = None
    district: str | None = None
    locality: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)

    @model_validator(mode="after")
    def _validate_coordinate_pair(self) -> "ListingLocation":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self

    def to_query(self) -> GeoQuery | None:
        """Return a `GeoQuery`, or None when state/district are missing."""
        state = (self.state or "").strip()
        district = (self.district or "").strip()
        if not state or not district:
            return None
        return GeoQuery(state=state, district=district, locality=self.locality)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


UpdateStatus = Literal["updated", "unresolved", "missing_fields", "stale"]


class LocationUpdate(BaseModel):
    """Outcome of re-geocoding a listing after its address fields changed."""

    status: UpdateStatus
    listing: ListingLocation
    tier: str | None = None
