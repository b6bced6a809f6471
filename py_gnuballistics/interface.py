"""Ballistics calculator interface and engine loading system.

This module provides the main `Calculator` class, the primary interface for zero
angle searches and trajectory tabulation.  Engines are pluggable: they can be passed
as classes, looked up by name among the `py_gnuballistics` entry points, or imported
from a ``module:Class`` reference.  Loaded engines must satisfy EngineProtocol.

Key Classes:
    - Calculator: Ballistics calculator with pluggable engine support
    - _EngineLoader: Internal utility for discovering and loading engine plugins
"""
from dataclasses import dataclass, field
from importlib.metadata import entry_points, EntryPoint
from typing import Generic, Any

from deprecated import deprecated
from typing_extensions import Union, Optional, TypeVar, Type, Generator

from py_gnuballistics.drag_tables import DragFunction
from py_gnuballistics.engines import TrapezoidIntegrationEngine
from py_gnuballistics.exceptions import ZeroFindingError
from py_gnuballistics.generics.engine import EngineProtocol
from py_gnuballistics.logger import logger
from py_gnuballistics.trajectory_data import TabulationResult, ZeroFindingResult

ConfigT = TypeVar('ConfigT', covariant=True)

DEFAULT_ENTRY_SUFFIX = '_engine'
DEFAULT_ENTRY_GROUP = 'py_gnuballistics'
DEFAULT_ENTRY: Type[EngineProtocol] = TrapezoidIntegrationEngine

EngineProtocolType = Type[EngineProtocol[ConfigT]]
EngineProtocolEntry = Union[str, EngineProtocolType, None]


@dataclass
class _EngineLoader:
    _entry_point_group = DEFAULT_ENTRY_GROUP
    _entry_point_suffix = DEFAULT_ENTRY_SUFFIX

    @classmethod
    def _get_entries_by_group(cls) -> set:
        return set(entry_points().select(group=cls._entry_point_group))

    @classmethod
    def iter_engines(cls) -> Generator[EntryPoint, None, None]:
        """Iterate over all available engines in the entry points."""
        for ep in cls._get_entries_by_group():
            if ep.name.endswith(cls._entry_point_suffix):
                yield ep

    @classmethod
    def _load_from_entry(cls, ep: EntryPoint) -> Optional[EngineProtocolType]:
        try:
            handle: EngineProtocolType = ep.load()
            if not isinstance(handle, EngineProtocol):
                raise TypeError(f"Unsupported engine {ep.value} does not implement EngineProtocol")
            logger.info(f"Loaded calculator from: {ep.value} (Class: {handle})")
            return handle  # type: ignore
        except ImportError as e:
            logger.error(f"Error loading engine from {ep.value}: {e}")
        except AttributeError as e:
            logger.error(f"Error loading attribute from {ep.value}: {e}")
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid engine reference {ep.value}: {e}")
        return None

    @classmethod
    def load(cls, entry_point: EngineProtocolEntry = DEFAULT_ENTRY) -> Type[EngineProtocol[Any]]:
        """Resolve `entry_point` to an engine class.

        Args:
            entry_point: Engine class, entry point name (e.g. ``"trapezoid_engine"``),
                ``"module:Class"`` reference, or None for DEFAULT_ENTRY.

        Raises:
            ValueError: If no engine matches the string.
            TypeError: If `entry_point` is neither a string nor an engine class.
        """
        if entry_point is None:
            entry_point = DEFAULT_ENTRY
        if isinstance(entry_point, type) and isinstance(entry_point, EngineProtocol):
            return entry_point  # type: ignore
        if isinstance(entry_point, str):
            for ep in cls.iter_engines():
                if ep.name == entry_point:
                    if handle := cls._load_from_entry(ep):
                        return handle

            if ':' in entry_point:
                ep = EntryPoint(entry_point, entry_point, cls._entry_point_group)
                if handle := cls._load_from_entry(ep):
                    return handle
            raise ValueError(f"No 'engine' entry point found containing '{entry_point}'")
        raise TypeError("Invalid entry_point type, expected 'str' or 'EngineProtocol'")


@dataclass
class Calculator(Generic[ConfigT]):
    """Basic interface for the ballistics calculator.

    Examples:
        >>> calc = Calculator()
        >>> zero = calc.zero_angle(DragFunction.G1, 0.5, 2800, 1.5, 100)
        >>> table = calc.tabulate(DragFunction.G1, 0.5, 2800, 1.5, 0, zero.angle, max_range=300)
    """

    config: Optional[ConfigT] = field(default=None)
    engine: EngineProtocolEntry = field(default=DEFAULT_ENTRY)
    _engine_instance: EngineProtocol[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._engine_instance = _EngineLoader.load(self.engine)(self.config)

    def __getattr__(self, item: str) -> Any:
        """Delegate attribute access to the underlying engine instance.

        Raises:
            AttributeError: If the attribute is not found on either the
                `Calculator` object or its `_engine_instance`.

        Examples:
            >>> calc = Calculator(engine=DEFAULT_ENTRY)
            >>> calc.get_calc_step()
            1.0
        """
        # Guard against recursion before __post_init__ has set the engine
        if item == '_engine_instance':
            raise AttributeError(item)
        if hasattr(self._engine_instance, item):
            return getattr(self._engine_instance, item)
        raise AttributeError(
            f"'{self.__class__.__name__}' object or its underlying engine "
            f"'{self._engine_instance.__class__.__name__}' has no attribute '{item}'"
        )

    def zero_angle(self, drag_function: Union[DragFunction, int], drag_coefficient: float, vi: float,
                   sight_height: float, zero_range: float, y_intercept: float = 0.0, *,
                   raise_zero_error: bool = False) -> ZeroFindingResult:
        """Bore angle, in degrees, that zeroes the sight at `zero_range` yards.

        Args:
            raise_zero_error: If True, raise ZeroFindingError when the search does not converge.
                Otherwise the caller checks `ZeroFindingResult.converged`.

        See `BaseIntegrationEngine.zero_angle` for the remaining arguments.
        """
        result = self._engine_instance.zero_angle(drag_function, drag_coefficient, vi,
                                                  sight_height, zero_range, y_intercept)
        if raise_zero_error and not result.converged:
            raise ZeroFindingError(result.angle, result.iterations, result.reason)
        return result

    def tabulate(self, drag_function: Union[DragFunction, int], drag_coefficient: float, vi: float,
                 sight_height: float, shooting_angle: float, zero_angle: float,
                 wind_speed: float = 0.0, wind_angle: float = 0.0,
                 max_range: Optional[int] = None, *,
                 raise_domain_error: bool = False) -> TabulationResult:
        """Trajectory table in one-yard increments.

        Args:
            raise_domain_error: If True, raise the DragDomainError of a run that left the
                drag model envelope.  Otherwise it is available as `TabulationResult.error`.

        See `BaseIntegrationEngine.tabulate` for the remaining arguments.
        """
        result = self._engine_instance.tabulate(drag_function, drag_coefficient, vi, sight_height,
                                                shooting_angle, zero_angle, wind_speed, wind_angle,
                                                max_range)
        if raise_domain_error:
            result.check_error()
        return result

    @deprecated(reason="Use `Calculator.tabulate` instead.")
    def solve_all(self, drag_function: Union[DragFunction, int], drag_coefficient: float, vi: float,
                  sight_height: float, shooting_angle: float, zero_angle: float,
                  wind_speed: float = 0.0, wind_angle: float = 0.0) -> TabulationResult:
        """Trajectory table out to the configured `cMaxRange`, in the `SolveAll` call shape.

        Kept for callers ported from GNU Ballistics, whose `SolveAll` takes the same
        positional arguments and always runs to the library's row ceiling.  It forwards to
        `tabulate` with the default `max_range` and never raises on a drag domain exit.
        New code should call `tabulate`, which also accepts `max_range` and
        `raise_domain_error`.
        """
        return self.tabulate(drag_function, drag_coefficient, vi, sight_height,
                             shooting_angle, zero_angle, wind_speed, wind_angle)

    @staticmethod
    def iter_engines() -> Generator[EntryPoint, None, None]:
        """Iterate all available engines in the entry points."""
        yield from _EngineLoader.iter_engines()


__all__ = ('Calculator', '_EngineLoader',)
