"""Tests for distance unit conversion."""

import pytest

from app.utils.units import from_meters


class TestUnits:
    @pytest.mark.parametrize("unit, meters", [
        ("m", 1.0),
        ("km", 1000.0),
        ("mi", 1609.344),
        ("ft", 0.3048),
        ("nmi", 1852.0),
    ])
    def test_one_unit(self, unit, meters):
        assert from_meters(meters, unit) == pytest.approx(1.0)

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            from_meters(1.0, "furlong")
