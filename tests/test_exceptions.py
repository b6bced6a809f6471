import pytest

from py_gnuballistics.drag_tables import DragFunction
from py_gnuballistics.exceptions import (DragDomainError, InputValidationError, SolverRuntimeError,
                                         UndefinedDragFunctionError, ZeroFindingError)
from py_gnuballistics.trajectory_data import Solution


def _row(range_yd: float = 0.0) -> Solution:
    """Create a minimal Solution row for exception tests."""
    return Solution(range=range_yd, path=0.0, correction=0.0, time=0.0, windage=0.0,
                    velocity=2800.0, velocity_x=2800.0, velocity_y=0.0)


def test_hierarchy():
    assert issubclass(UndefinedDragFunctionError, InputValidationError)
    assert issubclass(InputValidationError, ValueError)
    assert issubclass(ZeroFindingError, SolverRuntimeError)
    assert issubclass(DragDomainError, SolverRuntimeError)
    assert issubclass(SolverRuntimeError, RuntimeError)


def test_undefined_drag_function_message():
    err = UndefinedDragFunctionError(DragFunction.G3)
    assert err.drag_function is DragFunction.G3
    assert "G3" in str(err)


def test_zero_finding_error_message_and_attrs():
    zfe = ZeroFindingError(52.5, 7)
    assert "after 7 iterations" in str(zfe)
    assert zfe.iterations_count == 7
    assert zfe.last_angle == 52.5
    assert zfe.reason == ""

    zfe2 = ZeroFindingError(45.1, 4, reason=ZeroFindingError.ANGLE_CEILING_EXCEEDED)
    assert ZeroFindingError.ANGLE_CEILING_EXCEEDED in str(zfe2)


def test_drag_domain_error_last_range_set_and_none():
    err_empty = DragDomainError(10005.0, DragFunction.G1)
    assert err_empty.last_range is None
    assert err_empty.incomplete_trajectory == []
    assert "10005.0" in str(err_empty)

    err_with = DragDomainError(-1.0, DragFunction.G7, [_row(0.0), _row(1.2)])
    assert err_with.last_range == 1.2
    assert len(err_with.incomplete_trajectory) == 2
    assert "G7" in str(err_with)
    assert "last range" in str(err_with)


def test_drag_domain_error_copies_rows():
    rows = [_row(0.0)]
    err = DragDomainError(0.0, DragFunction.G1, rows)
    rows.append(_row(1.0))
    assert len(err.incomplete_trajectory) == 1


def test_catch_as_builtin():
    with pytest.raises(ValueError):
        raise UndefinedDragFunctionError(DragFunction.G4)
    with pytest.raises(RuntimeError):
        raise ZeroFindingError(0.0, 1)
