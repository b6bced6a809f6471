"""Generic type definitions for ballistic calculation engines.

Protocol Definitions:
    EngineProtocol: Core interface for ballistic calculation engines

Type Variables:
    ConfigT: Generic configuration type for engine parameters

Engines that implement the required methods are compatible with the Calculator
regardless of their inheritance hierarchy.
"""

# Local imports
from .engine import ConfigT, EngineProtocol

__all__ = (
    'ConfigT',
    'EngineProtocol',
)
