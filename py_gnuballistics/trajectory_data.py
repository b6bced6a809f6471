"""Ballistic solution data structures.

Core Components:
    - IntegrationStatus: States of a single integration run
    - Solution: One tabulated trajectory sample, taken at a whole-yard crossing
    - TabulationResult: Ordered solution table with its termination details
    - ZeroFindingResult: Bore angle found by the zero search, tagged with convergence

Typical Usage:
    ```python
    from py_gnuballistics import Calculator, DragFunction

    calc = Calculator()
    zero = calc.zero_angle(DragFunction.G1, 0.5, 2800, 1.5, 100, 0)
    table = calc.tabulate(DragFunction.G1, 0.5, 2800, 1.5, 0, zero.angle, 0, 0)
    row = table.get_at_range(300)
    print(row.path, row.correction, row.windage)
    ```
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator

from typing_extensions import List, NamedTuple, Optional

from py_gnuballistics.exceptions import DragDomainError

__all__ = (
    'IntegrationStatus',
    'Solution',
    'TabulationResult',
    'ZeroFindingResult',
)


class IntegrationStatus(Enum):
    """States of one integration run.

    ADVANCING is the only non-terminal state; each step either stays in it or moves
    the run to one of the terminal states below.
    """

    ADVANCING = auto()
    BELOW_TARGET_DESCENDING = auto()  # Falling and already below the target height
    NEAR_VERTICAL = auto()  # Vertical speed exceeds the steepness ratio of horizontal speed
    RANGE_LIMIT_REACHED = auto()  # Down-range or row-count limit passed
    DRAG_DOMAIN_EXCEEDED = auto()  # Speed left the retardation table envelope

    @property
    def is_terminal(self) -> bool:
        return self is not IntegrationStatus.ADVANCING


class Solution(NamedTuple):
    """Trajectory sample recorded when the projectile crosses a whole yard.

    Attributes:
        range: Down-range distance of the sample, yards
        path: Height relative to the line of sight, inches
        correction: Angular correction to hit at this range, MOA
        time: Time of flight, seconds
        windage: Crosswind deflection, inches
        velocity: Muzzle velocity of the run, fps
        velocity_x: Current horizontal velocity component, fps
        velocity_y: Current vertical velocity component, fps
    """

    range: float
    path: float
    correction: float
    time: float
    windage: float
    velocity: float
    velocity_x: float
    velocity_y: float

    @property
    def speed(self) -> float:
        """Current velocity magnitude, fps."""
        return math.hypot(self.velocity_x, self.velocity_y)


class ZeroFindingResult(NamedTuple):
    """Outcome of a zero angle search.

    Attributes:
        angle: Bore angle relative to the line of sight, degrees
        converged: False when the search stopped before reaching the requested precision;
            the angle is then unreliable
        iterations: Number of trial trajectories flown
        reason: Why the search stopped without converging; empty when converged
    """

    angle: float
    converged: bool
    iterations: int
    reason: str = ""


@dataclass
class TabulationResult:
    """Range-indexed trajectory table.

    Row ``i`` is the first integration sample at or beyond ``i`` yards down-range.

    Attributes:
        solutions: Ordered rows, owned by the caller
        status: Terminal state that ended the run
        max_range: Row ceiling the run was given, yards
        error: Set when the run stopped because the speed left the drag envelope
    """

    solutions: List[Solution] = field(repr=False)
    status: IntegrationStatus
    max_range: int
    error: Optional[DragDomainError] = None

    def __len__(self) -> int:
        return len(self.solutions)

    def __iter__(self) -> Iterator[Solution]:
        yield from self.solutions

    def __getitem__(self, item):
        return self.solutions[item]

    @property
    def count(self) -> int:
        """Number of rows; also the maximum valid range index plus one."""
        return len(self.solutions)

    @property
    def truncated(self) -> bool:
        """True when the row ceiling ended the run, so the trajectory may continue further."""
        return self.count > self.max_range

    def index_at_range(self, yards: float) -> int:
        """Index of the row nearest to `yards`.

        Raises:
            IndexError: If `yards` is outside of the tabulated ranges.
        """
        if not self.solutions:
            raise IndexError("Empty solution table")
        index = int(round(yards))
        if index < 0 or index >= len(self.solutions):
            raise IndexError(f"Range {yards} yd outside of solution table (0..{len(self.solutions) - 1})")
        return index

    def get_at_range(self, yards: float) -> Solution:
        """Row nearest to `yards`."""
        return self.solutions[self.index_at_range(yards)]

    def check_error(self) -> None:
        """Raise the stored error, if any."""
        if self.error is not None:
            raise self.error
