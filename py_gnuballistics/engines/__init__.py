"""Integration engines for ballistic trajectory calculations.

All engines implement the EngineProtocol interface: a zero angle search and a
range-indexed trajectory tabulator.

Available Engines:
    - BaseIntegrationEngine: Abstract base class for all integration engines
    - TrapezoidIntegrationEngine: Euler velocity update with trapezoidal position update
      (default, `trapezoid_engine`)

Configuration:
    - All engines accept BaseEngineConfigDict for configuration.

Examples:
    >>> from py_gnuballistics.engines import TrapezoidIntegrationEngine, BaseEngineConfigDict
    >>> custom_config = BaseEngineConfigDict(cZeroAccuracyMOA=0.1)

    >>> # Using with Calculator
    >>> from py_gnuballistics import Calculator
    >>> calc = Calculator(engine="trapezoid_engine")  # By name
    >>> calc = Calculator(config=custom_config, engine=TrapezoidIntegrationEngine)  # By class

See Also:
    - py_gnuballistics.generics.engine.EngineProtocol: Base protocol for engines
    - py_gnuballistics.interface.Calculator: Main interface using engines
    - py_gnuballistics.trajectory_data: Data structures for engine results
"""

from .base_engine import *
from .trapezoid import *

__all__ = (
    # Base engine infrastructure
    'create_base_engine_config',
    'set_default_engine_config',
    'reset_default_engine_config',
    'BaseEngineConfig',
    'BaseEngineConfigDict',
    'DEFAULT_BASE_ENGINE_CONFIG',
    'IntegrationState',
    'BaseIntegrationEngine',

    # Integration engines
    'TrapezoidIntegrationEngine',
)
