"""Pydantic models for index queries and their JSON output."""
from pydantic import BaseModel, Field


class NearestRequest(BaseModel):
    lat: float
    lng: float


class NearbyRequest(BaseModel):
    lat: float
    lng: float
    radius_miles: float = Field(ge=0)


class PointInfo(BaseModel):
    lat: float
    lng: float


class NearestResponse(BaseModel):
    point: PointInfo | None
    distance_miles: float | None = None


class NearbyResponse(BaseModel):
    # Sorted by distance from the query
    points: list[PointInfo]


class IndexInfoResponse(BaseModel):
    size: int
    height: int
    well_formed: bool
