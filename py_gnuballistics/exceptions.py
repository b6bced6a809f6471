"""py_gnuballistics exception types.

Exception Hierarchy
-------------------

Exception (built-in Python)
├── ValueError
│   └── InputValidationError
│       └── UndefinedDragFunctionError
└── RuntimeError
    └── SolverRuntimeError
        ├── ZeroFindingError
        └── DragDomainError

Input errors are raised eagerly, before any integration starts. Solver errors describe
a run that started but could not produce a trustworthy answer:

- ZeroFindingError: the successive-approximation search stopped without a trustworthy
  zero (launch angle ceiling, iteration cap, or a target the trajectory never reaches
  at the zero range). Only raised on
  request; engines report this condition through `ZeroFindingResult.converged`.
- DragDomainError: the projectile speed left the velocity envelope covered by the
  retardation tables while integrating. Carries the offending speed and the rows
  computed before the failure.
"""
from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from py_gnuballistics.drag_tables import DragFunction
    from py_gnuballistics.trajectory_data import Solution

__all__ = (
    'InputValidationError',
    'UndefinedDragFunctionError',
    'SolverRuntimeError',
    'ZeroFindingError',
    'DragDomainError',
)


class InputValidationError(ValueError):
    """Invalid caller input."""


class UndefinedDragFunctionError(InputValidationError):
    """Drag function has no retardation table (G3, G4)."""

    def __init__(self, drag_function: DragFunction):
        self.drag_function = drag_function
        super().__init__(f'Undefined drag function: {drag_function!r}')


class SolverRuntimeError(RuntimeError):
    """Solver error."""


class ZeroFindingError(SolverRuntimeError):
    """Exception for zero-finding issues.

    Contains:
    - Last bore angle in degrees
    - Iteration count
    - Reason the search stopped
    """

    ANGLE_CEILING_EXCEEDED = "Launch angle ceiling exceeded"
    ITERATIONS_EXHAUSTED = "Maximum iterations reached"
    TARGET_NOT_REACHED = "Trajectory turned near-vertical before reaching the zero range"

    def __init__(self, last_angle: float, iterations_count: int, reason: str = ""):
        self.last_angle: float = last_angle
        self.iterations_count: int = iterations_count
        self.reason: str = reason
        msg = f'Zero not found: last angle {last_angle} degrees after {iterations_count} iterations.'
        if reason:
            msg = f"{reason}. " + msg
        super().__init__(msg)


class DragDomainError(SolverRuntimeError):
    """Projectile speed left the modeled drag envelope.

    Contains:
    - The speed passed to the drag model, in fps
    - The drag function in use
    - Rows computed before the failure (empty for zero searches)
    """

    velocity: float
    incomplete_trajectory: List[Solution]
    last_range: Optional[float]

    def __init__(self, velocity: float, drag_function: DragFunction,
                 ranges: Optional[List[Solution]] = None):
        self.velocity = velocity
        self.drag_function = drag_function
        self.incomplete_trajectory = list(ranges) if ranges else []

        message = f'Velocity {velocity} fps outside of {drag_function.name} drag domain'
        if self.incomplete_trajectory:
            self.last_range = self.incomplete_trajectory[-1].range
            message += f', last range: {self.last_range} yd'
        else:
            self.last_range = None
        super().__init__(message)
