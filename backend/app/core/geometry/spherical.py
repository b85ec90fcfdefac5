"""Great-circle primitives on a spherical Earth.

Everything here is a pure function of its arguments. Points are
``(lon, lat)`` tuples in decimal degrees, the same axis order GeoJSON uses,
so rings coming straight off the drawing tool can be passed in as-is.

The four primitives are mutually consistent: for any two points that are
not antipodal,

    destination(a, distance(a, b), bearing(a, b)) ~= b

to well under a centimetre.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Mean Earth radius (IUGG), meters.
EARTH_RADIUS_M = 6_371_008.8

LonLat = tuple[float, float]
Ring = list[LonLat]


class DegenerateInputError(ValueError):
    """Raised when a ring has too few distinct vertices to have a centroid."""

    def __init__(self, distinct: int) -> None:
        self.distinct = distinct
        super().__init__(
            f"Need at least 3 distinct vertices for a shape, got {distinct}"
        )


@dataclass(frozen=True)
class VertexOffset:
    """Position of a vertex relative to a centroid, in true ground units."""

    distance_m: float
    bearing_deg: float


# ── Ring helpers ────────────────────────────────────────────────────────

def is_closed(ring: Ring) -> bool:
    return len(ring) > 1 and tuple(ring[0]) == tuple(ring[-1])


def open_vertices(ring: Ring) -> Ring:
    """The ring's vertices without the duplicated closing point."""
    if is_closed(ring):
        return list(ring[:-1])
    return list(ring)


def distinct_vertex_count(ring: Ring) -> int:
    return len({(float(lon), float(lat)) for lon, lat in ring})


def normalize_longitude(lon: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    wrapped = (lon + 180.0) % 360.0 - 180.0
    # % can round up to exactly 360 for tiny negative inputs
    if wrapped >= 180.0:
        wrapped -= 360.0
    return wrapped


# ── Primitives ──────────────────────────────────────────────────────────

def centroid(ring: Ring) -> LonLat:
    """Arithmetic mean of a ring's vertices, ignoring the closing duplicate.

    This is a pivot for rotation and a reference for offsets, not a
    spherical centroid. Rings with fewer than 3 distinct vertices raise
    ``DegenerateInputError``.
    """
    distinct = distinct_vertex_count(ring)
    if distinct < 3:
        raise DegenerateInputError(distinct)
    return mean_point(ring)


def mean_point(ring: Ring) -> LonLat:
    """Vertex mean without the distinct-vertex check.

    Used where a best-effort pivot is preferable to failing.
    """
    pts = open_vertices(ring)
    if not pts:
        raise DegenerateInputError(0)
    n = len(pts)
    return (sum(p[0] for p in pts) / n, sum(p[1] for p in pts) / n)


def distance(a: LonLat, b: LonLat) -> float:
    """Haversine great-circle distance in meters.

    Symmetric bit-for-bit: swapping the arguments only negates the
    differences, which are squared.
    """
    phi1 = math.radians(a[1])
    phi2 = math.radians(b[1])
    dphi = math.radians(b[1] - a[1])
    dlmb = math.radians(b[0] - a[0])

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing(a: LonLat, b: LonLat) -> float:
    """Initial great-circle bearing from ``a`` to ``b`` in [0, 360).

    Coincident points have no direction; 0 (north) is returned for them.
    """
    if a[0] == b[0] and a[1] == b[1]:
        return 0.0

    phi1 = math.radians(a[1])
    phi2 = math.radians(b[1])
    dlmb = math.radians(b[0] - a[0])

    y = math.sin(dlmb) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlmb)
    deg = math.degrees(math.atan2(y, x)) % 360.0
    if deg >= 360.0:
        deg = 0.0
    return deg


def destination(origin: LonLat, distance_m: float, bearing_deg: float) -> LonLat:
    """Point reached from ``origin`` after ``distance_m`` along ``bearing_deg``."""
    delta = distance_m / EARTH_RADIUS_M
    theta = math.radians(bearing_deg)
    phi1 = math.radians(origin[1])
    lmb1 = math.radians(origin[0])

    sin_phi2 = (
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    sin_phi2 = max(-1.0, min(1.0, sin_phi2))
    phi2 = math.asin(sin_phi2)
    lmb2 = lmb1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * sin_phi2,
    )

    return (normalize_longitude(math.degrees(lmb2)), math.degrees(phi2))


def vertex_offset(center: LonLat, vertex: LonLat) -> VertexOffset:
    """Distance and bearing of ``vertex`` as seen from ``center``."""
    return VertexOffset(distance(center, vertex), bearing(center, vertex))
