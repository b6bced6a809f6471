"""Base integration engine for ballistic trajectory calculations.

The module provides:
- Engine configuration through BaseEngineConfig and BaseEngineConfigDict
- IntegrationState, the per-run state machine shared by the zero search and the tabulator
- Abstract base class BaseIntegrationEngine implementing the EngineProtocol

Classes:
    BaseEngineConfig: Dataclass configuration for engine parameters
    BaseEngineConfigDict: TypedDict version for flexible configuration
    IntegrationState: Mutable state of one integration run
    BaseIntegrationEngine: Abstract base class for integration engines

Configuration Constants:
    cZeroInitialStepDegrees: First bore angle increment of the zero search
    cZeroAccuracyMOA: Angle increment below which the zero search has converged
    cZeroMaxAngleDegrees: Bore angle above which the zero search gives up
    cSteepnessRatio: Vertical/horizontal speed ratio that ends a run as near-vertical
    cMaxIterations: Maximum trial trajectories flown by the zero search

Architecture:
    BaseIntegrationEngine validates inputs, owns configuration and logging, and exposes the
    public `zero_angle` and `tabulate` operations.  Subclasses implement the stepping loops
    in `_zero_angle` and `_tabulate`.  Every run owns a fresh IntegrationState, so an engine
    carries no state between calls apart from diagnostic counters.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict, fields

from typing_extensions import Optional, TypedDict, Union

from py_gnuballistics.constants import (cGravityConstant, cInchesPerFoot, cMaxRange, cMaxVelocity)
from py_gnuballistics.drag_tables import DragFunction, UNDEFINED_DRAG_FUNCTIONS
from py_gnuballistics.exceptions import InputValidationError, UndefinedDragFunctionError
from py_gnuballistics.generics.engine import EngineProtocol
from py_gnuballistics.logger import logger
from py_gnuballistics.trajectory_data import IntegrationStatus, TabulationResult, ZeroFindingResult

__all__ = (
    'create_base_engine_config',
    'set_default_engine_config',
    'reset_default_engine_config',
    'BaseEngineConfig',
    'BaseEngineConfigDict',
    'DEFAULT_BASE_ENGINE_CONFIG',
    'IntegrationState',
    'BaseIntegrationEngine',
)

cZeroInitialStepDegrees: float = 14.0  # Coarse first step, so even large launch angles are found quickly
cZeroAccuracyMOA: float = 0.01  # Zero search stops when the angle step falls below this
cZeroMaxAngleDegrees: float = 45.0  # Beyond this the projectile can't reach the zero
cSteepnessRatio: float = 3.0  # |vy| above this multiple of |vx| ends a run
cMaxIterations: int = 200  # maximum number of trial trajectories for zero search
cStepMultiplier: float = 1.0  # Multiplier for engine's default step, for changing integration speed & precision


@dataclass
class BaseEngineConfig:
    """Configuration dataclass for ballistic calculation engines.

    All parameters use imperial units (feet, fps) for internal calculations.

    Attributes:
        cGravityConstant: Gravitational acceleration in ft/s². Defaults to -32.194.
        cMaxRange: Ceiling on the number of tabulated rows (yards). Defaults to 50001.
        cZeroInitialStepDegrees: Initial bore angle step of the zero search. Defaults to 14.
        cZeroAccuracyMOA: Zero search precision in MOA. Defaults to 0.01.
        cZeroMaxAngleDegrees: Bore angle ceiling of the zero search. Defaults to 45.
        cSteepnessRatio: Ratio of vertical to horizontal speed that ends a run. Defaults to 3.
        cMaxIterations: Maximum trial trajectories flown by the zero search. Defaults to 200.
        cStepMultiplier: Multiplier for the engine's integration step size.
                        Values < 1.0 increase precision but slow calculation.
                        Defaults to 1.0.

    Examples:
        >>> config = BaseEngineConfig(cMaxRange=1000)
    """

    cGravityConstant: float = cGravityConstant
    cMaxRange: int = cMaxRange
    cZeroInitialStepDegrees: float = cZeroInitialStepDegrees
    cZeroAccuracyMOA: float = cZeroAccuracyMOA
    cZeroMaxAngleDegrees: float = cZeroMaxAngleDegrees
    cSteepnessRatio: float = cSteepnessRatio
    cMaxIterations: int = cMaxIterations
    cStepMultiplier: float = cStepMultiplier


#: Default configuration instance; overridden by `set_default_engine_config` and `.pygb.toml`
DEFAULT_BASE_ENGINE_CONFIG: BaseEngineConfig = BaseEngineConfig()


class BaseEngineConfigDict(TypedDict, total=False):
    """TypedDict for flexible engine configuration from dictionaries.

    All fields are optional; unspecified fields take their values from
    DEFAULT_BASE_ENGINE_CONFIG when passed to create_base_engine_config().

    Examples:
        >>> config_dict: BaseEngineConfigDict = {'cMaxRange': 1500}
        >>> config = create_base_engine_config(config_dict)
    """

    cGravityConstant: Optional[float]
    cMaxRange: Optional[int]
    cZeroInitialStepDegrees: Optional[float]
    cZeroAccuracyMOA: Optional[float]
    cZeroMaxAngleDegrees: Optional[float]
    cSteepnessRatio: Optional[float]
    cMaxIterations: Optional[int]
    cStepMultiplier: Optional[float]


_CONFIG_FIELDS = frozenset(f.name for f in fields(BaseEngineConfig))


def _check_config_keys(config: dict) -> None:
    unknown = set(config) - _CONFIG_FIELDS
    if unknown:
        raise InputValidationError(f"Unknown engine config fields: {sorted(unknown)}")


def create_base_engine_config(interface_config: Optional[BaseEngineConfigDict] = None) -> BaseEngineConfig:
    """Create BaseEngineConfig from optional dictionary configuration.

    Args:
        interface_config: Optional dictionary of overrides. Only specified fields override
                          the current defaults.

    Returns:
        BaseEngineConfig instance with merged configuration values.

    Raises:
        InputValidationError: If interface_config names unknown fields.
    """
    config = asdict(DEFAULT_BASE_ENGINE_CONFIG)
    if interface_config is not None and isinstance(interface_config, dict):
        _check_config_keys(interface_config)
        config.update({k: v for k, v in interface_config.items() if v is not None})
    return BaseEngineConfig(**config)


def set_default_engine_config(overrides: BaseEngineConfigDict) -> None:
    """Override fields of DEFAULT_BASE_ENGINE_CONFIG for every engine created afterwards."""
    _check_config_keys(dict(overrides))
    for key, value in overrides.items():
        if value is not None:
            setattr(DEFAULT_BASE_ENGINE_CONFIG, key, value)


def reset_default_engine_config() -> None:
    """Restore DEFAULT_BASE_ENGINE_CONFIG to the library defaults."""
    for key, value in asdict(BaseEngineConfig()).items():
        setattr(DEFAULT_BASE_ENGINE_CONFIG, key, value)


@dataclass
class IntegrationState:
    """Mutable state of a single integration run.

    Positions are in feet (x down-range, y up), velocities in fps.  `vx1`/`vy1` hold the
    velocity before the current step, for the trapezoidal position update.
    """

    time: float = 0.0
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vx1: float = 0.0
    vy1: float = 0.0
    dvx: float = 0.0
    dvy: float = 0.0
    dt: float = 0.0
    steps: int = 0
    status: IntegrationStatus = IntegrationStatus.ADVANCING

    @classmethod
    def launch(cls, velocity: float, angle_rad: float, sight_height: float) -> IntegrationState:
        """State at the muzzle: bore `sight_height` inches below the line of sight."""
        return cls(y=-sight_height / cInchesPerFoot,
                   vx=velocity * math.cos(angle_rad),
                   vy=velocity * math.sin(angle_rad))

    @property
    def speed(self) -> float:
        return math.pow(math.pow(self.vx, 2) + math.pow(self.vy, 2), 0.5)

    def advance_position(self) -> None:
        """Move by the average of the previous and current velocity over `dt`."""
        self.x = self.x + self.dt * (self.vx + self.vx1) / 2
        self.y = self.y + self.dt * (self.vy + self.vy1) / 2


def _require_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(value):
        raise InputValidationError(f"{name} must be finite, got {value}")
    return value


class BaseIntegrationEngine(ABC, EngineProtocol[BaseEngineConfigDict]):
    """All calculations are done in imperial units (feet and fps)."""

    def __init__(self, _config: Optional[BaseEngineConfigDict] = None):
        """Initialize the class.

        Args:
            _config: The configuration object.
        """
        self._config: BaseEngineConfig = create_base_engine_config(_config)
        self.integration_step_count: int = 0

    @property
    def config(self) -> BaseEngineConfig:
        return self._config

    def get_calc_step(self) -> float:
        """Get step size multiplier for integration."""
        return self._config.cStepMultiplier

    @staticmethod
    def _validate_shot(drag_function: Union[DragFunction, int], drag_coefficient: float,
                       vi: float, sight_height: float) -> DragFunction:
        try:
            drag_function = DragFunction(drag_function)
        except ValueError as e:
            raise InputValidationError(f"Unknown drag function: {drag_function!r}") from e
        if drag_function in UNDEFINED_DRAG_FUNCTIONS:
            raise UndefinedDragFunctionError(drag_function)
        if _require_finite("drag_coefficient", drag_coefficient) <= 0:
            raise InputValidationError(f"Drag coefficient must be positive, got {drag_coefficient}")
        if not 0 < _require_finite("vi", vi) < cMaxVelocity:
            raise InputValidationError(f"Muzzle velocity must be within (0, {cMaxVelocity}) fps, got {vi}")
        _require_finite("sight_height", sight_height)
        return drag_function

    def zero_angle(self, drag_function: Union[DragFunction, int], drag_coefficient: float, vi: float,
                   sight_height: float, zero_range: float, y_intercept: float = 0.0) -> ZeroFindingResult:
        """Find the bore angle needed to achieve a target zero at range, on level ground.

        Args:
            drag_function: Drag function family of `drag_coefficient`
            drag_coefficient: Ballistic coefficient of the projectile
            vi: Muzzle velocity, fps
            sight_height: Height of the sight above the bore centerline, inches
            zero_range: Range at which the projectile should cross `y_intercept`, yards
            y_intercept: Height of the projectile above the line of sight at `zero_range`,
                inches.  Usually 0; e.g. 1.5 sights in 1.5" high at `zero_range`.

        Returns:
            Bore angle relative to the sight line in degrees, tagged with convergence.

        Raises:
            InputValidationError: On invalid inputs, including undefined drag functions.
            DragDomainError: If a trial trajectory leaves the drag model envelope.
        """
        drag_function = self._validate_shot(drag_function, drag_coefficient, vi, sight_height)
        if _require_finite("zero_range", zero_range) <= 0:
            raise InputValidationError(f"Zero range must be positive, got {zero_range}")
        _require_finite("y_intercept", y_intercept)

        result = self._zero_angle(drag_function, float(drag_coefficient), float(vi),
                                  float(sight_height), float(zero_range), float(y_intercept))
        if not result.converged:
            logger.warning(f"Zero search for {zero_range} yd did not converge: {result.reason} "
                           f"(last angle {result.angle} degrees after {result.iterations} iterations)")
        return result

    def tabulate(self, drag_function: Union[DragFunction, int], drag_coefficient: float, vi: float,
                 sight_height: float, shooting_angle: float, zero_angle: float,
                 wind_speed: float = 0.0, wind_angle: float = 0.0,
                 max_range: Optional[int] = None) -> TabulationResult:
        """Generate a ballistic solution table in 1 yard increments.

        Args:
            drag_function: Drag function family of `drag_coefficient`
            drag_coefficient: Ballistic coefficient of the projectile
            vi: Muzzle velocity, fps
            sight_height: Height of the sight above the bore centerline, inches
            shooting_angle: Uphill (positive) or downhill (negative) shooting angle, degrees
            zero_angle: Bore angle relative to the sight line, degrees (see `zero_angle()`)
            wind_speed: Wind speed, mph
            wind_angle: Angle the wind is coming from, degrees. 0 is a headwind, 90 blows
                from right to left, 180 is a tailwind, -90 or 270 blows from left to right.
            max_range: Row ceiling in yards; defaults to the configured `cMaxRange`

        Returns:
            TabulationResult; a row count above `max_range` means the table was truncated.

        Raises:
            InputValidationError: On invalid inputs, including undefined drag functions.
        """
        drag_function = self._validate_shot(drag_function, drag_coefficient, vi, sight_height)
        for name, value in (("shooting_angle", shooting_angle), ("zero_angle", zero_angle),
                            ("wind_speed", wind_speed), ("wind_angle", wind_angle)):
            _require_finite(name, value)
        if max_range is None:
            max_range = self._config.cMaxRange
        max_range_value = _require_finite("max_range", max_range)
        if max_range_value < 0 or not max_range_value.is_integer():
            raise InputValidationError(f"max_range must be a non-negative whole number, got {max_range}")

        return self._tabulate(drag_function, float(drag_coefficient), float(vi), float(sight_height),
                              float(shooting_angle), float(zero_angle),
                              float(wind_speed), float(wind_angle), int(max_range_value))

    @abstractmethod
    def _zero_angle(self, drag_function: DragFunction, drag_coefficient: float, vi: float,
                    sight_height: float, zero_range: float, y_intercept: float) -> ZeroFindingResult:
        """Search for the zero angle with already validated inputs."""
        ...

    @abstractmethod
    def _tabulate(self, drag_function: DragFunction, drag_coefficient: float, vi: float,
                  sight_height: float, shooting_angle: float, zero_angle: float,
                  wind_speed: float, wind_angle: float, max_range: int) -> TabulationResult:
        """Build the solution table with already validated inputs."""
        ...
