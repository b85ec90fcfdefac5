"""Bridge between GeoJSON request bodies and the geometry engine."""

from __future__ import annotations

from shapely.geometry import Polygon, mapping

from app.config import settings
from app.core.geometry.spherical import Ring
from app.core.geometry.validation import RingValidationResult, validate_ring
from app.models.schemas import Shape, exterior_ring


def shape_to_ring(shape: Shape) -> RingValidationResult:
    """Validate a drawn GeoJSON polygon and return it as a closed ring."""
    return validate_ring(
        exterior_ring(shape),
        close_tolerance=settings.close_tolerance_deg,
        max_extent=settings.max_shape_extent_deg,
    )


def ring_to_feature(ring: Ring | None, **properties) -> dict | None:
    """GeoJSON Feature for a ring, or None when there is no shape."""
    if ring is None:
        return None
    geometry = mapping(Polygon(ring))
    return {
        "type": "Feature",
        "geometry": {
            "type": geometry["type"],
            "coordinates": [[list(pos) for pos in geometry["coordinates"][0]]],
        },
        "properties": properties,
    }
