"""Physical constants, conversion factors and runtime limits.

Constant Categories:
    - Physical constants: gravity in the imperial units used by the solver
    - Conversion factors: distance and wind speed scale factors
    - Atmosphere constants: reference conditions of the drag coefficient correction
    - Runtime limits: drag model velocity envelope and table size ceiling
"""

# Third-party imports
from typing_extensions import Final

# =============================================================================
# Physical Constants
# =============================================================================

cGravityConstant: Final[float] = -32.194  # ft/s^2
"""Gravitational acceleration used by both integrators (ft/s²)"""

# =============================================================================
# Conversion Factors
# =============================================================================

cFeetPerYard: Final[float] = 3.0
"""Feet in one yard"""

cInchesPerFoot: Final[float] = 12.0
"""Inches in one foot"""

cMphToInchesPerSecond: Final[float] = 17.60
"""Miles per hour to inches per second"""

# =============================================================================
# Standard Atmosphere (drag coefficient correction reference)
# =============================================================================

cStandardPressure: Final[float] = 29.53  # InHg
"""Reference barometric pressure of the correction formula (InHg)"""

cStandardTemperatureF: Final[float] = 59.0  # °F
"""Reference temperature at sea level (°F)"""

cLapseRateImperial: Final[float] = -0.0036  # °F/ft
"""Reference temperature lapse rate (°F/ft)"""

cDegreesFtoR: Final[float] = 459.6
"""Offset from Fahrenheit to Rankine used by the correction formula"""

# =============================================================================
# Runtime Limits
# =============================================================================

cMaxVelocity: Final[float] = 10000.0  # fps
"""Exclusive upper bound of the drag model velocity domain (fps)"""

cMaxRange: Final[int] = 50001
"""Ceiling on the number of tabulated rows (yards)"""

cInvalidRetardation: Final[float] = -1.0
"""Sentinel carried by retardation results that are not valid"""
