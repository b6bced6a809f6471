"""Environmental conditions for ballistic calculations.

Key Components:
    - Atmo: Atmospheric conditions and the drag coefficient correction they imply
    - Wind: Wind speed and direction resolved into head and cross components

Functions:
    - atmospheric_correction: Correct a standard drag coefficient for the atmosphere
    - head_wind: Headwind component of a wind
    - cross_wind: Crosswind component of a wind
    - windage: Lateral deflection caused by a crosswind

Wind direction convention: the angle the wind is coming from, in degrees.
0 is a straight headwind, 90 blows from right to left, 180 is a tailwind, and
270 (or -90) blows from left to right.

Examples:
    ```python
    from py_gnuballistics.conditions import Atmo, Wind

    bc = Atmo(altitude=5000, pressure=29.53, temperature=40, humidity=0.5).correct(0.465)
    wind = Wind(velocity=10, direction_from=90)
    wind.crosswind  # 10 mph from the right
    ```
"""
import math
from dataclasses import dataclass

from py_gnuballistics.constants import (cDegreesFtoR, cLapseRateImperial, cMphToInchesPerSecond,
                                        cStandardPressure, cStandardTemperatureF)
from py_gnuballistics.unit import deg_to_rad

__all__ = (
    'Atmo',
    'Wind',
    'atmospheric_correction',
    'head_wind',
    'cross_wind',
    'windage',
)


def _altitude_factor(altitude: float) -> float:
    fa = -4e-15 * altitude ** 3 + 4e-10 * altitude ** 2 - 3e-5 * altitude + 1
    return 1 / fa


def _temperature_factor(temperature: float, altitude: float) -> float:
    t_std = cLapseRateImperial * altitude + cStandardTemperatureF
    return (temperature - t_std) / (cDegreesFtoR + t_std)


def _humidity_factor(temperature: float, pressure: float, humidity: float) -> float:
    # Saturated water vapor pressure, InHg
    vpw = 4e-6 * temperature ** 3 - 0.0004 * temperature ** 2 + 0.0234 * temperature - 0.2517
    return 0.995 * (pressure / (pressure - 0.3783 * humidity * vpw))


def _pressure_factor(pressure: float) -> float:
    return (pressure - cStandardPressure) / cStandardPressure


def atmospheric_correction(drag_coefficient: float, altitude: float, barometer: float,
                           temperature: float, humidity: float) -> float:
    """Correct a standard drag coefficient for differing atmospheric conditions.

    Args:
        drag_coefficient: Drag coefficient at standard conditions
        altitude: Altitude above sea level, feet
        barometer: Standardized barometric pressure (as reported in weather reports), InHg.
            Standard is 29.53 InHg.
        temperature: Temperature, °F. Standard is 59 °F at sea level.
        humidity: Relative humidity as a fraction from 0.0 to 1.0

    Returns:
        Drag coefficient corrected for the supplied conditions.
    """
    fa = _altitude_factor(altitude)
    ft = _temperature_factor(temperature, altitude)
    fr = _humidity_factor(temperature, barometer, humidity)
    fp = _pressure_factor(barometer)
    return drag_coefficient * (fa * (1 + ft - fp) * fr)


def head_wind(wind_speed: float, wind_angle: float) -> float:
    """Headwind component, in the units of `wind_speed`. `wind_angle` in degrees."""
    return math.cos(deg_to_rad(wind_angle)) * wind_speed


def cross_wind(wind_speed: float, wind_angle: float) -> float:
    """Crosswind component, in the units of `wind_speed`. `wind_angle` in degrees."""
    return math.sin(deg_to_rad(wind_angle)) * wind_speed


def windage(wind_speed: float, vi: float, x_range: float, time: float) -> float:
    """Windage deflection for a given crosswind speed.

    Args:
        wind_speed: Crosswind speed, mph
        vi: Muzzle velocity, fps
        x_range: Down-range distance reached, feet
        time: Time of flight to `x_range`, seconds

    Returns:
        Lateral deflection at `x_range`, inches.
    """
    vw = wind_speed * cMphToInchesPerSecond
    return vw * (time - x_range / vi)


@dataclass(frozen=True)
class Atmo:
    """Atmospheric conditions.

    Attributes:
        altitude: Feet above sea level
        pressure: Standardized barometric pressure, InHg
        temperature: °F
        humidity: Relative humidity fraction, 0.0 to 1.0
    """

    altitude: float = 0.0
    pressure: float = cStandardPressure
    temperature: float = cStandardTemperatureF
    humidity: float = 0.0

    @property
    def correction_factor(self) -> float:
        """Multiplier applied to a standard drag coefficient."""
        return atmospheric_correction(1.0, self.altitude, self.pressure, self.temperature, self.humidity)

    def correct(self, drag_coefficient: float) -> float:
        return atmospheric_correction(drag_coefficient, self.altitude, self.pressure,
                                      self.temperature, self.humidity)


@dataclass(frozen=True)
class Wind:
    """Wind in effect over the whole trajectory.

    Attributes:
        velocity: Wind speed, mph
        direction_from: Angle the wind is coming from, degrees
    """

    velocity: float = 0.0
    direction_from: float = 0.0

    @property
    def headwind(self) -> float:
        return head_wind(self.velocity, self.direction_from)

    @property
    def crosswind(self) -> float:
        return cross_wind(self.velocity, self.direction_from)
