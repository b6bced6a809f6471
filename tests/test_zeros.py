import logging
import math

import pytest

from py_gnuballistics import BaseEngineConfigDict, Calculator, DragFunction
from py_gnuballistics.exceptions import InputValidationError, UndefinedDragFunctionError, ZeroFindingError
from tests.fixtures_and_helpers import BC, DRAG_FUNCTION, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE

pytestmark = pytest.mark.engine


@pytest.fixture
def calc(loaded_engine_instance):
    return Calculator(engine=loaded_engine_instance)


class TestZeroAngle:

    def test_standard_zero(self, calc):
        zero = calc.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 0.0)
        assert zero.converged
        assert zero.reason == ""
        assert 0.0 < zero.angle < 1.0
        assert zero.iterations < 200

    def test_deterministic(self, calc):
        args = (DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 0.0)
        assert calc.zero_angle(*args) == calc.zero_angle(*args)

    def test_longer_zero_needs_more_elevation(self, calc):
        near = calc.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, 100, 0.0)
        far = calc.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, 300, 0.0)
        assert far.angle > near.angle

    def test_y_intercept_in_inches(self, calc):
        level = calc.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 0.0)
        high = calc.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 1.5)
        # 1.5 in at 100 yd is about 1.43 MOA, i.e. 0.024 degrees
        assert high.angle - level.angle == pytest.approx(math.degrees(1.5 / 3600), abs=0.005)

    @pytest.mark.parametrize("df", [DragFunction.G2, DragFunction.G5, DragFunction.G6,
                                    DragFunction.G7, DragFunction.G8])
    def test_other_drag_functions(self, calc, df):
        zero = calc.zero_angle(df, 0.3, 2600, 2.0, 200, 0.0)
        assert zero.converged
        assert 0.0 < zero.angle < 1.0

    def test_counts_steps(self, loaded_engine_instance):
        engine = loaded_engine_instance()
        engine.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE)
        assert engine.integration_step_count > 0


class TestZeroFailures:

    def test_angle_ceiling(self, calc, caplog):
        # 5000 in above the sight line at 100 yd needs more than 45 degrees
        with caplog.at_level(logging.WARNING, logger='py_gnuballistics'):
            zero = calc.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 5000.0)
        assert not zero.converged
        assert zero.reason == ZeroFindingError.ANGLE_CEILING_EXCEEDED
        assert zero.angle > 45.0
        assert zero.iterations == 5
        assert "did not converge" in caplog.text

    def test_angle_ceiling_raises_on_request(self, calc):
        with pytest.raises(ZeroFindingError) as excinfo:
            calc.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 5000.0,
                            raise_zero_error=True)
        assert excinfo.value.reason == ZeroFindingError.ANGLE_CEILING_EXCEEDED
        assert excinfo.value.iterations_count == 5
        assert excinfo.value.last_angle > 45.0

    def test_target_out_of_reach(self, calc):
        # 100 fps tops out far short of 2000 yd; trials above the sight line turn near-vertical
        zero = calc.zero_angle(DragFunction.G1, 0.5, 100.0, 1.5, 2000.0, 0.0)
        assert not zero.converged
        assert zero.reason == ZeroFindingError.TARGET_NOT_REACHED
        assert zero.angle < 45.0

    def test_target_out_of_reach_raises_on_request(self, calc):
        with pytest.raises(ZeroFindingError) as excinfo:
            calc.zero_angle(DragFunction.G1, 0.5, 100.0, 1.5, 2000.0, 0.0, raise_zero_error=True)
        assert excinfo.value.reason == ZeroFindingError.TARGET_NOT_REACHED
        assert ZeroFindingError.TARGET_NOT_REACHED in str(excinfo.value)

    def test_iteration_cap(self, loaded_engine_instance):
        calc = Calculator(config=BaseEngineConfigDict(cMaxIterations=3), engine=loaded_engine_instance)
        zero = calc.zero_angle(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE)
        assert not zero.converged
        assert zero.iterations == 3
        assert zero.reason == ZeroFindingError.ITERATIONS_EXHAUSTED

    def test_coarse_accuracy_converges_sooner(self, loaded_engine_instance):
        fine = Calculator(engine=loaded_engine_instance)
        coarse = Calculator(config=BaseEngineConfigDict(cZeroAccuracyMOA=1.0), engine=loaded_engine_instance)
        args = (DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE)
        assert coarse.zero_angle(*args).iterations < fine.zero_angle(*args).iterations


class TestZeroValidation:

    @pytest.mark.parametrize("df", [DragFunction.G3, DragFunction.G4, 3])
    def test_undefined_drag_function(self, calc, df):
        with pytest.raises(UndefinedDragFunctionError):
            calc.zero_angle(df, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE)

    @pytest.mark.parametrize("df, bc, vi, sh, zr, yi", [
        (9, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 0.0),
        (DRAG_FUNCTION, 0.0, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 0.0),
        (DRAG_FUNCTION, -0.5, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 0.0),
        (DRAG_FUNCTION, float('nan'), MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, 0.0),
        (DRAG_FUNCTION, BC, 0.0, SIGHT_HEIGHT, ZERO_RANGE, 0.0),
        (DRAG_FUNCTION, BC, 10000.0, SIGHT_HEIGHT, ZERO_RANGE, 0.0),
        (DRAG_FUNCTION, BC, MUZZLE_VELOCITY, float('inf'), ZERO_RANGE, 0.0),
        (DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, 0.0, 0.0),
        (DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE, float('nan')),
        (DRAG_FUNCTION, BC, "fast", SIGHT_HEIGHT, ZERO_RANGE, 0.0),
    ])
    def test_invalid_inputs(self, calc, df, bc, vi, sh, zr, yi):
        with pytest.raises(InputValidationError):
            calc.zero_angle(df, bc, vi, sh, zr, yi)
