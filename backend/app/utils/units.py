"""Distance unit conversion. Internal representation is always meters."""

UNIT_TO_M = {
    "m": 1.0,
    "km": 1000.0,
    "mi": 1609.344,
    "ft": 0.3048,
    "nmi": 1852.0,
}

VALID_UNITS = set(UNIT_TO_M.keys())


def from_meters(value: float, unit: str) -> float:
    """Convert a distance in meters to the given unit."""
    if unit not in UNIT_TO_M:
        raise ValueError(f"Unknown unit '{unit}'. Valid: {sorted(VALID_UNITS)}")
    return value / UNIT_TO_M[unit]
