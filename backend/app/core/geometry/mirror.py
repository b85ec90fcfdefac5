"""Mirror a ring onto a different part of the globe.

Each vertex is expressed as (distance, bearing) from the source centroid
and re-emitted the same distance and bearing away from the target center.
On a sphere this is an exact isometry: the copy has the same ground size
and orientation as the source no matter how far apart the two centers are,
including across hemispheres and the antimeridian.
"""

from __future__ import annotations

from app.core.geometry.rotation import IDENTITY_EPSILON_DEG, rotate
from app.core.geometry.spherical import (
    DegenerateInputError,
    LonLat,
    Ring,
    VertexOffset,
    centroid,
    destination,
    distinct_vertex_count,
    mean_point,
    vertex_offset,
)


def offsets(ring: Ring, center: LonLat | None = None) -> list[VertexOffset]:
    """Per-vertex ``VertexOffset`` relative to ``center`` (default: centroid)."""
    if center is None:
        center = centroid(ring)
    return [vertex_offset(center, (lon, lat)) for lon, lat in ring]


def project(ring: Ring, target_center: LonLat) -> Ring:
    """Re-anchor ``ring`` at ``target_center`` keeping distance and bearing.

    Vertex order, closure and winding are kept. Degenerate rings do not
    raise: the pivot falls back to the plain vertex mean, and a vertex that
    sits exactly on the pivot maps onto the target center (bearing 0 at
    distance 0).
    """
    if not ring:
        return []

    try:
        pivot = centroid(ring)
    except DegenerateInputError:
        pivot = mean_point(ring)

    result: Ring = []
    for lon, lat in ring:
        off = vertex_offset(pivot, (lon, lat))
        result.append(destination(target_center, off.distance_m, off.bearing_deg))
    return result


def mirror(
    source_ring: Ring | None,
    angle_deg: float,
    target_center: LonLat,
    epsilon: float = IDENTITY_EPSILON_DEG,
) -> Ring | None:
    """Rotate ``source_ring`` then project it onto ``target_center``.

    Returns None when there is no source ring. Rings with fewer than 3
    distinct vertices raise ``DegenerateInputError``; callers treat that as
    "no shape to show".
    """
    if source_ring is None:
        return None

    distinct = distinct_vertex_count(source_ring)
    if distinct < 3:
        raise DegenerateInputError(distinct)

    rotated = rotate(source_ring, angle_deg, epsilon=epsilon)
    return project(rotated, target_center)

