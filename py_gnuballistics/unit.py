"""Angle unit conversions.

Exact multiplicative conversions between degrees, radians and minutes of angle (MOA).
One MOA is 1/60 of a degree. The factors are the reference values of the GNU Ballistics
library, so that converted tolerances and angles match its published tables.

Examples:
    >>> round(deg_to_moa(1.5), 6)
    90.0
    >>> round(rad_to_deg(moa_to_rad(60.0)), 9)
    1.0
"""
from typing_extensions import Final

__all__ = (
    'deg_to_rad',
    'rad_to_deg',
    'deg_to_moa',
    'moa_to_deg',
    'moa_to_rad',
    'rad_to_moa',
)

_DEGREES_PER_RADIAN: Final[float] = 57.295779513082320876798154814105
_RADIANS_PER_DEGREE: Final[float] = 0.01745329251994329576923690768489
_MOA_PER_DEGREE: Final[float] = 60.0
_RADIANS_PER_MOA: Final[float] = 0.00029088820866572159615394846141477
_MOA_PER_RADIAN: Final[float] = 3437.7467707849392526078892888463


def deg_to_rad(degrees: float) -> float:
    return degrees * _RADIANS_PER_DEGREE


def rad_to_deg(radians: float) -> float:
    return radians * _DEGREES_PER_RADIAN


def deg_to_moa(degrees: float) -> float:
    return degrees * _MOA_PER_DEGREE


def moa_to_deg(moa: float) -> float:
    return moa / _MOA_PER_DEGREE


def moa_to_rad(moa: float) -> float:
    return moa * _RADIANS_PER_MOA


def rad_to_moa(radians: float) -> float:
    return radians * _MOA_PER_RADIAN
