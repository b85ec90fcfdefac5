"""Ring coordinate validation and auto-closing.

This module catches bad input BEFORE it reaches the spherical kernel,
producing clear error messages instead of NaNs or a mirrored shape in the
wrong hemisphere. Self-intersecting rings are reported, never repaired:
the mirror copies whatever was drawn.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto

from shapely.geometry import Polygon
from shapely.validation import explain_validity

from app.core.geometry.spherical import LonLat, Ring, distinct_vertex_count


class ValidationSeverity(Enum):
    ERROR = auto()    # blocks processing
    WARNING = auto()  # auto-fixable, continue with correction
    INFO = auto()     # informational only


@dataclass
class GeometryIssue:
    severity: ValidationSeverity
    code: str
    message: str
    location: LonLat | None = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.name.lower(),
            "code": self.code,
            "message": self.message,
            "location": list(self.location) if self.location else None,
        }


@dataclass
class RingValidationResult:
    ring: Ring | None
    issues: list[GeometryIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not any(i.severity == ValidationSeverity.ERROR for i in self.issues)

    @property
    def errors(self) -> list[GeometryIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[GeometryIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]


# ── 1. Coordinate-level validation ──────────────────────────────────────

def validate_coordinates(coords: list[LonLat]) -> list[GeometryIssue]:
    """Check a raw (lon, lat) list for problems before building a ring."""
    issues: list[GeometryIssue] = []

    if len(coords) < 3:
        issues.append(GeometryIssue(
            ValidationSeverity.ERROR,
            "TOO_FEW_POINTS",
            f"Need at least 3 points for a shape, got {len(coords)}",
        ))
        return issues

    finite = True
    for i, (lon, lat) in enumerate(coords):
        if not (math.isfinite(lon) and math.isfinite(lat)):
            finite = False
            issues.append(GeometryIssue(
                ValidationSeverity.ERROR,
                "NON_FINITE_COORD",
                f"Point {i} has non-finite coordinate ({lon}, {lat})",
            ))
            continue
        if not -180.0 <= lon <= 180.0:
            issues.append(GeometryIssue(
                ValidationSeverity.ERROR,
                "LON_OUT_OF_RANGE",
                f"Point {i} longitude {lon} is outside [-180, 180]",
                location=(lon, lat),
            ))
        if not -90.0 <= lat <= 90.0:
            issues.append(GeometryIssue(
                ValidationSeverity.ERROR,
                "LAT_OUT_OF_RANGE",
                f"Point {i} latitude {lat} is outside [-90, 90]",
                location=(lon, lat),
            ))

    if not finite:
        return issues

    for i in range(len(coords) - 1):
        if _points_equal(coords[i], coords[i + 1]):
            issues.append(GeometryIssue(
                ValidationSeverity.WARNING,
                "CONSECUTIVE_DUPLICATE",
                f"Points {i} and {i+1} are identical at ({coords[i][0]}, {coords[i][1]})",
                location=coords[i],
            ))

    distinct = distinct_vertex_count(coords)
    if distinct < 3:
        issues.append(GeometryIssue(
            ValidationSeverity.ERROR,
            "DEGENERATE_RING",
            f"Only {distinct} distinct points, cannot form a shape",
        ))

    return issues


# ── 2. Auto-closing ─────────────────────────────────────────────────────

def auto_close_ring(
    coords: list[LonLat],
    tolerance: float = 1e-7,
) -> tuple[Ring, list[GeometryIssue]]:
    """Ensure a ring is closed, snapping the last point onto the first if
    they're within ``tolerance`` degrees.

    Three cases:
    1. Already closed (first == last): return as-is
    2. Gap <= tolerance: snap last point to first (WARNING)
    3. Gap > tolerance: append first point as new last point (WARNING)
    """
    issues: list[GeometryIssue] = []
    coords = [(float(lon), float(lat)) for lon, lat in coords]

    if len(coords) < 3:
        return coords, issues

    first = coords[0]
    last = coords[-1]

    if first == last:
        return coords, issues

    gap = math.hypot(last[0] - first[0], last[1] - first[1])
    if gap <= tolerance:
        closed = coords[:-1] + [first]
        issues.append(GeometryIssue(
            ValidationSeverity.WARNING,
            "SNAPPED_CLOSED",
            f"Snapped last point to first (gap was {gap:.2e} deg)",
            location=last,
        ))
        return closed, issues

    closed = coords + [first]
    issues.append(GeometryIssue(
        ValidationSeverity.WARNING,
        "AUTO_CLOSED",
        f"Appended closing point ({gap:.6f} deg gap between first and last point)",
        location=last,
    ))
    return closed, issues


# ── 3. Full ring validation ─────────────────────────────────────────────

def validate_ring(
    coords: list[LonLat],
    close_tolerance: float = 1e-7,
    max_extent: float = 5.0,
) -> RingValidationResult:
    """Full validation pipeline for a drawn ring.

    Steps:
    1. Validate raw coordinates (NaN, range, duplicates, degeneracy)
    2. Auto-close if needed, then re-check degeneracy
    3. Report self-intersection (kept as drawn)
    4. Flag shapes too large for the flat rotation to stay faithful
    """
    all_issues = validate_coordinates(coords)
    if any(i.severity == ValidationSeverity.ERROR for i in all_issues):
        return RingValidationResult(ring=None, issues=all_issues)

    ring, close_issues = auto_close_ring(coords, close_tolerance)
    all_issues.extend(close_issues)

    # Snapping the last point shut can collapse a sliver onto two vertices
    distinct = distinct_vertex_count(ring)
    if distinct < 3:
        all_issues.append(GeometryIssue(
            ValidationSeverity.ERROR,
            "DEGENERATE_RING",
            f"Only {distinct} distinct points after closing, cannot form a shape",
        ))
        return RingValidationResult(ring=None, issues=all_issues)

    poly = Polygon(ring)
    if not poly.is_valid:
        all_issues.append(GeometryIssue(
            ValidationSeverity.WARNING,
            "SELF_INTERSECTING",
            f"Shape is not simple: {explain_validity(poly)}",
        ))

    minx, miny, maxx, maxy = poly.bounds
    extent = max(maxx - minx, maxy - miny)
    if extent > max_extent:
        all_issues.append(GeometryIssue(
            ValidationSeverity.INFO,
            "LARGE_SHAPE",
            f"Shape spans {extent:.1f} deg; rotation is approximate at this size",
        ))

    return RingValidationResult(ring=ring, issues=all_issues)


# ── Helpers ─────────────────────────────────────────────────────────────

def _points_equal(a: LonLat, b: LonLat, eps: float = 1e-12) -> bool:
    return abs(a[0] - b[0]) < eps and abs(a[1] - b[1]) < eps
