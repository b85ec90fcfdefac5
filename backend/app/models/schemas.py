"""Pydantic schemas for API request/response validation.

Shapes travel as GeoJSON, the format the drawing tool hands over, with
positions in ``[lon, lat]`` order.
"""

from __future__ import annotations

import math
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from app.utils.units import VALID_UNITS


class Coordinate(BaseModel):
    lon: float = Field(ge=-180.0, le=180.0)
    lat: float = Field(ge=-90.0, le=90.0)

    @field_validator("lon", "lat")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Coordinate must be a finite number")
        return v

    def as_tuple(self) -> tuple[float, float]:
        return (self.lon, self.lat)


class PolygonGeometry(BaseModel):
    type: Literal["Polygon"]
    coordinates: list[list[list[float]]]

    @field_validator("coordinates")
    @classmethod
    def must_have_exterior(cls, v: list[list[list[float]]]) -> list[list[list[float]]]:
        if not v:
            raise ValueError("Polygon needs an exterior ring")
        for pos in v[0]:
            if len(pos) < 2:
                raise ValueError("Position must be [lon, lat]")
        return v


class PolygonFeature(BaseModel):
    type: Literal["Feature"]
    geometry: PolygonGeometry
    properties: Optional[dict] = None


Shape = Union[PolygonFeature, PolygonGeometry]


def exterior_ring(shape: Shape) -> list[tuple[float, float]]:
    """The exterior ring of a GeoJSON polygon as (lon, lat) tuples.

    Holes are ignored: the drawing tool only produces simple outlines.
    """
    geometry = shape.geometry if isinstance(shape, PolygonFeature) else shape
    return [(pos[0], pos[1]) for pos in geometry.coordinates[0]]


AngleDeg = Annotated[float, Field(ge=-180.0, le=180.0)]


class RotateRequest(BaseModel):
    source: Shape
    angle: AngleDeg = 0.0


class ProjectRequest(BaseModel):
    source: Shape
    target: Coordinate


class MirrorRequest(BaseModel):
    source: Optional[Shape] = None
    angle: AngleDeg = 0.0
    target: Coordinate


class OffsetsRequest(BaseModel):
    source: Shape
    unit: str = "m"

    @field_validator("unit")
    @classmethod
    def known_unit(cls, v: str) -> str:
        if v not in VALID_UNITS:
            raise ValueError(f"Unit must be one of {sorted(VALID_UNITS)}")
        return v


class AngleRequest(BaseModel):
    angle: AngleDeg = 0.0


class SourceRequest(BaseModel):
    source: Shape


class IssueResponse(BaseModel):
    severity: str
    code: str
    message: str
    location: Optional[list[float]] = None


class ShapeResponse(BaseModel):
    feature: dict
    issues: list[IssueResponse] = []


class MirrorResponse(BaseModel):
    rotated: Optional[dict] = None
    mirrored: Optional[dict] = None
    issues: list[IssueResponse] = []


class VertexOffsetResponse(BaseModel):
    vertex: list[float]
    distance: float
    bearing: float


class OffsetsResponse(BaseModel):
    centroid: list[float]
    unit: str
    offsets: list[VertexOffsetResponse]


class SessionResponse(BaseModel):
    has_source: bool
    angle: float
    target: list[float]
    epoch: int


class OverlayResponse(BaseModel):
    epoch: int
    rotated: Optional[dict] = None
    mirrored: Optional[dict] = None
