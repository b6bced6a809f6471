"""Engine protocol module for py_gnuballistics.

This module defines the EngineProtocol type protocol that all ballistic calculation
engines must implement: a zero angle search and a trajectory tabulator with the
signatures below.  The Calculator checks loaded engines against it.
"""

# Standard library imports
from abc import abstractmethod
from typing import Optional, TypeVar, Union

# Third-party imports
from typing_extensions import Protocol, runtime_checkable

# Local imports
from py_gnuballistics.drag_tables import DragFunction
from py_gnuballistics.trajectory_data import TabulationResult, ZeroFindingResult

__all__ = ['EngineProtocol', 'ConfigT']

# Type variable for engine configuration
ConfigT = TypeVar("ConfigT", covariant=True)


@runtime_checkable
class EngineProtocol(Protocol[ConfigT]):
    """Protocol defining the interface for ballistic calculation engines.

    Type Parameters:
        ConfigT: The configuration type used by this engine implementation.

    Required Methods:
        - zero_angle: Bore angle that puts the trajectory through a point at range.
        - tabulate: Range-indexed trajectory table.
    """

    def __init__(self, _config: Optional[ConfigT] = None) -> None:
        ...

    @abstractmethod
    def zero_angle(self, drag_function: Union[DragFunction, int], drag_coefficient: float, vi: float,
                   sight_height: float, zero_range: float, y_intercept: float = 0.0) -> ZeroFindingResult:
        """Find the bore angle that zeroes the sight at `zero_range` yards."""
        ...

    @abstractmethod
    def tabulate(self, drag_function: Union[DragFunction, int], drag_coefficient: float, vi: float,
                 sight_height: float, shooting_angle: float, zero_angle: float,
                 wind_speed: float = 0.0, wind_angle: float = 0.0,
                 max_range: Optional[int] = None) -> TabulationResult:
        """Compute a solution table in one-yard increments."""
        ...
