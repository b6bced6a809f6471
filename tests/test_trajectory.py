import pytest

from py_gnuballistics import Calculator, DragFunction, IntegrationStatus
from py_gnuballistics.exceptions import DragDomainError, InputValidationError, UndefinedDragFunctionError
from py_gnuballistics.unit import rad_to_moa
from tests.fixtures_and_helpers import (BC, DRAG_FUNCTION, MUZZLE_VELOCITY, SIGHT_HEIGHT, ZERO_RANGE,
                                        print_out_table_compact, zeroed_table)

pytestmark = pytest.mark.engine


@pytest.fixture
def calc(loaded_engine_instance):
    return Calculator(engine=loaded_engine_instance)


@pytest.fixture(scope="class")
def table(loaded_engine_instance):
    result = zeroed_table(Calculator(engine=loaded_engine_instance), max_range=300)
    print_out_table_compact(result, "zeroed at 100 yd")
    return result


class TestZeroedTable:

    def test_rows_indexed_by_yard(self, table):
        assert len(table) == 301
        assert table[0].range == 0.0
        for i, row in enumerate(table):
            assert int(row.range) == i

    def test_crosses_line_of_sight_at_zero(self, table):
        assert abs(table.get_at_range(ZERO_RANGE).path) < 0.5

    def test_starts_below_line_of_sight(self, table):
        assert table[0].path == pytest.approx(-SIGHT_HEIGHT)
        assert table[0].correction == 0.0

    def test_drops_below_line_of_sight_past_zero(self, table):
        far = table.get_at_range(300)
        assert far.path < -5.0
        assert far.correction > 0.0

    def test_correction_matches_path(self, table):
        for row in table.solutions[1::25]:
            expected = -rad_to_moa((row.path / 12) / (row.range * 3))
            assert row.correction == pytest.approx(expected, rel=1e-9)

    def test_no_wind_no_windage(self, table):
        assert all(row.windage == 0.0 for row in table)

    def test_time_and_speed_monotone(self, table):
        times = [row.time for row in table]
        speeds = [row.speed for row in table]
        assert times == sorted(times)
        assert speeds == sorted(speeds, reverse=True)

    def test_velocity_column_is_muzzle_velocity(self, table):
        assert all(row.velocity == MUZZLE_VELOCITY for row in table)

    def test_terminates_on_row_ceiling(self, table):
        assert table.status is IntegrationStatus.RANGE_LIMIT_REACHED
        assert table.truncated
        assert table.error is None

    def test_index_at_range(self, table):
        assert table.index_at_range(99.6) == 100
        with pytest.raises(IndexError):
            table.index_at_range(301)
        with pytest.raises(IndexError):
            table.index_at_range(-1)


class TestWind:

    def test_crosswind_deflection_sign(self, calc):
        from_right = zeroed_table(calc, max_range=300, wind_speed=10, wind_angle=90)
        from_left = zeroed_table(calc, max_range=300, wind_speed=10, wind_angle=-90)
        assert from_right[300].windage > 0
        assert from_right[300].windage == pytest.approx(-from_left[300].windage)

    def test_headwind_drops_more(self, calc):
        head = zeroed_table(calc, max_range=300, wind_speed=20, wind_angle=0)
        tail = zeroed_table(calc, max_range=300, wind_speed=20, wind_angle=180)
        assert head[300].path < tail[300].path
        assert head[300].time > tail[300].time


class TestShootingAngle:

    def test_uphill_shot_drops_less(self, calc):
        level = zeroed_table(calc, max_range=300)
        uphill = zeroed_table(calc, max_range=300, shooting_angle=30)
        assert uphill[300].path > level[300].path


class TestTermination:

    def test_small_max_range(self, calc):
        result = calc.tabulate(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, 0, 0.05, max_range=50)
        assert len(result) == 51
        assert result.truncated

    def test_zero_max_range(self, calc):
        result = calc.tabulate(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, 0, 0.05, max_range=0)
        assert len(result) == 1
        assert result.truncated

    def test_near_vertical(self, calc):
        result = calc.tabulate(DRAG_FUNCTION, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, 0, 80.0, max_range=100)
        assert result.status is IntegrationStatus.NEAR_VERTICAL
        assert len(result) == 1
        assert not result.truncated

    def test_domain_exit_before_first_row(self, calc):
        # 10 mph headwind pushes 9995 fps out of the tables on the first step
        result = calc.tabulate(DRAG_FUNCTION, BC, 9995.0, SIGHT_HEIGHT, 0, 0.0, 10.0, 0.0, max_range=100)
        assert result.status is IntegrationStatus.DRAG_DOMAIN_EXCEEDED
        assert len(result) == 0
        assert isinstance(result.error, DragDomainError)
        assert result.error.last_range is None
        with pytest.raises(DragDomainError):
            result.check_error()

    def test_domain_exit_keeps_rows(self, calc):
        # A tailwind nearly as fast as the projectile: the relative speed reaches 0 shortly
        result = calc.tabulate(DragFunction.G1, BC, 100.0, SIGHT_HEIGHT, 0, 60.0, 95.0, 180.0, max_range=100)
        assert result.status is IntegrationStatus.DRAG_DOMAIN_EXCEEDED
        assert len(result) >= 1
        assert result.error.incomplete_trajectory == result.solutions
        assert result.error.last_range == result[-1].range

    def test_domain_exit_raises_on_request(self, calc):
        with pytest.raises(DragDomainError):
            calc.tabulate(DRAG_FUNCTION, BC, 9995.0, SIGHT_HEIGHT, 0, 0.0, 10.0, 0.0, max_range=100,
                          raise_domain_error=True)


class TestTabulateValidation:

    def test_undefined_drag_function(self, calc):
        with pytest.raises(UndefinedDragFunctionError):
            calc.tabulate(DragFunction.G4, BC, MUZZLE_VELOCITY, SIGHT_HEIGHT, 0, 0.05, max_range=10)

    @pytest.mark.parametrize("kwargs", [
        dict(drag_coefficient=0.0),
        dict(vi=-5.0),
        dict(vi=12000.0),
        dict(shooting_angle=float('nan')),
        dict(zero_angle=float('inf')),
        dict(wind_speed=float('nan')),
        dict(max_range=-1),
        dict(max_range=10.5),
        dict(max_range=float('nan')),
    ])
    def test_invalid_inputs(self, calc, kwargs):
        args = dict(drag_function=DRAG_FUNCTION, drag_coefficient=BC, vi=MUZZLE_VELOCITY,
                    sight_height=SIGHT_HEIGHT, shooting_angle=0.0, zero_angle=0.05,
                    wind_speed=0.0, wind_angle=0.0, max_range=10)
        args.update(kwargs)
        with pytest.raises(InputValidationError):
            calc.tabulate(**args)
