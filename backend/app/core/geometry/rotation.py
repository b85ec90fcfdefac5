"""Rotate a ring about its centroid.

The rotation treats longitude and latitude as flat Cartesian coordinates
around the centroid. That is NOT great-circle preserving: the error grows
with shape size and latitude. It is accurate enough for city and region
sized shapes, which is what the mirror view is for, and it is what users
see on screen, so it is kept as is.
"""

from __future__ import annotations

import math

from app.core.geometry.spherical import LonLat, Ring, centroid

# Below this the rotation is treated as the identity (degrees).
IDENTITY_EPSILON_DEG = 1e-4


def rotate_point(point: LonLat, pivot: LonLat, angle_deg: float) -> LonLat:
    """Rotate ``point`` counter-clockwise about ``pivot`` in the lon/lat plane."""
    theta = math.radians(angle_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    dx = point[0] - pivot[0]
    dy = point[1] - pivot[1]
    return (
        pivot[0] + dx * cos_t - dy * sin_t,
        pivot[1] + dx * sin_t + dy * cos_t,
    )


def rotate(
    ring: Ring,
    angle_deg: float,
    epsilon: float = IDENTITY_EPSILON_DEG,
) -> Ring:
    """Return ``ring`` rotated by ``angle_deg`` about its centroid.

    Near-zero angles return the input ring object itself so a no-op
    rotation never accumulates floating point error. Any other angle
    returns a new list with the same vertex count; the closing vertex is
    rotated like the rest, so closure is kept exactly.

    Longitudes are not wrapped: a shape hugging the antimeridian can come
    back with longitudes past +/-180, which keeps the rotation exactly
    invertible. ``project`` renormalizes every vertex it emits.

    Raises ``DegenerateInputError`` for rings with fewer than 3 distinct
    vertices (there is no centroid to pivot on).
    """
    if abs(angle_deg) < epsilon:
        return ring

    pivot = centroid(ring)
    return [rotate_point((lon, lat), pivot, angle_deg) for lon, lat in ring]
