import math

import pytest

from py_gnuballistics.unit import deg_to_moa, deg_to_rad, moa_to_deg, moa_to_rad, rad_to_deg, rad_to_moa


class TestAngleConversions:

    def test_degrees_radians(self):
        assert deg_to_rad(180.0) == pytest.approx(math.pi)
        assert rad_to_deg(math.pi / 2) == pytest.approx(90.0)

    def test_moa(self):
        assert deg_to_moa(1.0) == 60.0
        assert moa_to_deg(30.0) == 0.5
        assert moa_to_rad(1.0) == pytest.approx(math.radians(1 / 60), rel=1e-12)
        assert rad_to_moa(math.radians(1.0)) == pytest.approx(60.0, rel=1e-12)

    @pytest.mark.parametrize("value", [-45.0, 0.0, 0.01, 14.0, 359.0])
    def test_inverse_pairs(self, value):
        assert rad_to_deg(deg_to_rad(value)) == pytest.approx(value, abs=1e-12)
        assert moa_to_deg(deg_to_moa(value)) == pytest.approx(value, abs=1e-12)
        assert rad_to_moa(moa_to_rad(value)) == pytest.approx(value, abs=1e-12)

    def test_zero_accuracy_step(self):
        # 0.01 MOA, the default zero search precision
        assert moa_to_rad(0.01) == pytest.approx(2.9088820866572e-06, rel=1e-9)
