"""Retardation model for the standard drag functions.

Key Components:
    - RetardationStatus: Outcome of a retardation lookup
    - Retardation: Tagged result carrying the retardation or the failure reason
    - find_band: Select the retardation table band for a velocity
    - retard: Retardation of a projectile at a given velocity

The lookup is a pure function of its arguments. Failures are reported through the
result status instead of being raised, so the integrators decide how to react when the
velocity leaves the modeled envelope.

Examples:
    >>> from py_gnuballistics.drag_tables import DragFunction
    >>> r = retard(DragFunction.G1, 0.5, 2800.0)
    >>> r.is_valid
    True
    >>> retard(DragFunction.G3, 0.5, 2800.0).status is RetardationStatus.UNDEFINED_DRAG_FUNCTION
    True
"""
from enum import Enum, auto

from typing_extensions import NamedTuple, Optional, Union

from py_gnuballistics.constants import cInvalidRetardation, cMaxVelocity
from py_gnuballistics.drag_tables import (DragFunction, RetardationBand,
                                          RETARDATION_TABLES, UNDEFINED_DRAG_FUNCTIONS)

__all__ = (
    'RetardationStatus',
    'Retardation',
    'find_band',
    'retard',
)


class RetardationStatus(Enum):
    VALID = auto()
    INVALID_VELOCITY = auto()  # No band matches or velocity outside (0, cMaxVelocity)
    UNDEFINED_DRAG_FUNCTION = auto()  # G3, G4


class Retardation(NamedTuple):
    """Result of a retardation lookup.

    Attributes:
        value: Retardation in ft/s², or `cInvalidRetardation` when status is not VALID
        status: Outcome of the lookup
    """

    value: float
    status: RetardationStatus

    @property
    def is_valid(self) -> bool:
        return self.status is RetardationStatus.VALID


def find_band(drag_function: Union[DragFunction, int], velocity: float) -> Optional[RetardationBand]:
    """Find the band of the retardation table that covers `velocity`.

    Bands are scanned from the highest lower bound downward, and the first band whose
    bound is strictly exceeded by `velocity` is selected.

    Args:
        drag_function: Drag function family
        velocity: Projectile speed relative to air, fps

    Returns:
        Matching band, or None for undefined drag functions and velocities at or below
        the lowest bound.
    """
    table = RETARDATION_TABLES.get(DragFunction(drag_function))
    if table is None:
        return None
    for band in table:
        if velocity > band.velocity:
            return band
    return None


def retard(drag_function: Union[DragFunction, int], drag_coefficient: float, velocity: float) -> Retardation:
    """Compute ballistic retardation for a standard drag function.

    Args:
        drag_function: G1, G2, G5, G6, G7 or G8. G3 and G4 are undefined.
        drag_coefficient: Ballistic coefficient of the projectile for `drag_function`.
            Must be positive; it is not checked here.
        velocity: Projectile speed relative to air, fps

    Returns:
        Retardation (deceleration magnitude in ft/s²) tagged with its status.
    """
    drag_function = DragFunction(drag_function)
    if drag_function in UNDEFINED_DRAG_FUNCTIONS:
        return Retardation(cInvalidRetardation, RetardationStatus.UNDEFINED_DRAG_FUNCTION)
    if not 0.0 < velocity < cMaxVelocity:
        return Retardation(cInvalidRetardation, RetardationStatus.INVALID_VELOCITY)
    band = find_band(drag_function, velocity)
    if band is None:
        return Retardation(cInvalidRetardation, RetardationStatus.INVALID_VELOCITY)
    return Retardation(band.A * velocity ** band.M / drag_coefficient, RetardationStatus.VALID)
