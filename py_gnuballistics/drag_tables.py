"""Standard retardation tables for the G-series drag functions.

Each drag function is fitted by a piecewise power law: inside a velocity band the
retardation of a projectile with unit drag coefficient is ``A * v ** M`` (v in fps).
A table lists the bands of one drag function ordered by descending lower velocity bound;
a band covers velocities strictly above its bound and up to the bound of the band before it.
The last band of every table is bounded below by 0.

The coefficients are an empirical curve fit and are reproduced exactly; they cannot be
derived analytically.

G3 and G4 are reserved numbers of the G-series that have no published fit, so they have
no table here.
"""
from enum import IntEnum
from typing import FrozenSet

from typing_extensions import Dict, List, NamedTuple, Tuple, TypeAlias

__all__ = (
    'DragFunction',
    'RetardationBand',
    'DragTableDataType',
    'TableG1',
    'TableG2',
    'TableG5',
    'TableG6',
    'TableG7',
    'TableG8',
    'RETARDATION_TABLES',
    'UNDEFINED_DRAG_FUNCTIONS',
    'get_drag_tables_names',
)


class DragFunction(IntEnum):
    """Standard drag function families."""

    G1 = 1
    G2 = 2
    G3 = 3  # Undefined
    G4 = 4  # Undefined
    G5 = 5
    G6 = 6
    G7 = 7
    G8 = 8


class RetardationBand(NamedTuple):
    """One band of a retardation table.

    Attributes:
        velocity: Exclusive lower velocity bound of the band, fps
        A: Retardation coefficient
        M: Velocity exponent
    """

    velocity: float
    A: float
    M: float


DragTableDataType: TypeAlias = Tuple[RetardationBand, ...]

TableG1: DragTableDataType = (
    RetardationBand(4230.0, 1.477404177730177e-04, 1.9565),
    RetardationBand(3680.0, 1.920339268755614e-04, 1.925),
    RetardationBand(3450.0, 2.894751026819746e-04, 1.875),
    RetardationBand(3295.0, 4.349905111115636e-04, 1.825),
    RetardationBand(3130.0, 6.520421871892662e-04, 1.775),
    RetardationBand(2960.0, 9.748073694078696e-04, 1.725),
    RetardationBand(2830.0, 1.453721560187286e-03, 1.675),
    RetardationBand(2680.0, 2.162887202930376e-03, 1.625),
    RetardationBand(2460.0, 3.209559783129881e-03, 1.575),
    RetardationBand(2225.0, 3.904368218691249e-03, 1.55),
    RetardationBand(2015.0, 3.222942271262336e-03, 1.575),
    RetardationBand(1890.0, 2.203329542297809e-03, 1.625),
    RetardationBand(1810.0, 1.511001028891904e-03, 1.675),
    RetardationBand(1730.0, 8.609957592468259e-04, 1.75),
    RetardationBand(1595.0, 4.086146797305117e-04, 1.85),
    RetardationBand(1520.0, 1.954473210037398e-04, 1.95),
    RetardationBand(1420.0, 5.431896266462351e-05, 2.125),
    RetardationBand(1360.0, 8.847742581674416e-06, 2.375),
    RetardationBand(1315.0, 1.456922328720298e-06, 2.625),
    RetardationBand(1280.0, 2.419485191895565e-07, 2.875),
    RetardationBand(1220.0, 1.657956321067612e-08, 3.25),
    RetardationBand(1185.0, 4.745469537157371e-10, 3.75),
    RetardationBand(1150.0, 1.379746590025088e-11, 4.25),
    RetardationBand(1100.0, 4.070157961147882e-13, 4.75),
    RetardationBand(1060.0, 2.938236954847331e-14, 5.125),
    RetardationBand(1025.0, 1.228597370774746e-14, 5.25),
    RetardationBand(980.0, 2.916938264100495e-14, 5.125),
    RetardationBand(945.0, 3.855099424807451e-13, 4.75),
    RetardationBand(905.0, 1.185097045689854e-11, 4.25),
    RetardationBand(860.0, 3.566129470974951e-10, 3.75),
    RetardationBand(810.0, 1.045513263966272e-08, 3.25),
    RetardationBand(780.0, 1.291159200846216e-07, 2.875),
    RetardationBand(750.0, 6.824429329105383e-07, 2.625),
    RetardationBand(700.0, 3.569169672385163e-06, 2.375),
    RetardationBand(640.0, 1.839015095899579e-05, 2.125),
    RetardationBand(600.0, 5.71117468873424e-05, 1.950),
    RetardationBand(550.0, 9.226557091973427e-05, 1.875),
    RetardationBand(250.0, 9.337991957131389e-05, 1.875),
    RetardationBand(100.0, 7.225247327590413e-05, 1.925),
    RetardationBand(65.0, 5.792684957074546e-05, 1.975),
    RetardationBand(0.0, 5.206214107320588e-05, 2.000),
)

TableG2: DragTableDataType = (
    RetardationBand(1674.0, 0.0079470052136733, 1.36999902851493),
    RetardationBand(1172.0, 1.00419763721974e-03, 1.65392237010294),
    RetardationBand(1060.0, 7.15571228255369e-23, 7.91913562392361),
    RetardationBand(949.0, 1.39589807205091e-10, 3.81439537623717),
    RetardationBand(670.0, 2.34364342818625e-04, 1.71869536324748),
    RetardationBand(335.0, 1.77962438921838e-04, 1.76877550388679),
    RetardationBand(0.0, 5.18033561289704e-05, 1.98160270524632),
)

TableG5: DragTableDataType = (
    RetardationBand(1730.0, 7.24854775171929e-03, 1.41538574492812),
    RetardationBand(1228.0, 3.50563361516117e-05, 2.13077307854948),
    RetardationBand(1116.0, 1.84029481181151e-13, 4.81927320350395),
    RetardationBand(1004.0, 1.34713064017409e-22, 7.8100555281422),
    RetardationBand(837.0, 1.03965974081168e-07, 2.84204791809926),
    RetardationBand(335.0, 1.09301593869823e-04, 1.81096361579504),
    RetardationBand(0.0, 3.51963178524273e-05, 2.00477856801111),
)

TableG6: DragTableDataType = (
    RetardationBand(3236.0, 0.0455384883480781, 1.15997674041274),
    RetardationBand(2065.0, 7.167261849653769e-02, 1.10704436538885),
    RetardationBand(1311.0, 1.66676386084348e-03, 1.60085100195952),
    RetardationBand(1144.0, 1.01482730119215e-07, 2.9569674731838),
    RetardationBand(1004.0, 4.31542773103552e-18, 6.34106317069757),
    RetardationBand(670.0, 2.04835650496866e-05, 2.11688446325998),
    RetardationBand(0.0, 7.50912466084823e-05, 1.92031057847052),
)

TableG7: DragTableDataType = (
    RetardationBand(4200.0, 1.29081656775919e-09, 3.24121295355962),
    RetardationBand(3000.0, 0.0171422231434847, 1.27907168025204),
    RetardationBand(1470.0, 2.33355948302505e-03, 1.52693913274526),
    RetardationBand(1260.0, 7.97592111627665e-04, 1.67688974440324),
    RetardationBand(1110.0, 5.71086414289273e-12, 4.3212826264889),
    RetardationBand(960.0, 3.02865108244904e-17, 5.99074203776707),
    RetardationBand(670.0, 7.52285155782535e-06, 2.1738019851075),
    RetardationBand(540.0, 1.31766281225189e-05, 2.08774690257991),
    RetardationBand(0.0, 1.34504843776525e-05, 2.08702306738884),
)

TableG8: DragTableDataType = (
    RetardationBand(3571.0, 0.0112263766252305, 1.33207346655961),
    RetardationBand(1841.0, 0.0167252613732636, 1.28662041261785),
    RetardationBand(1120.0, 2.20172456619625e-03, 1.55636358091189),
    RetardationBand(1088.0, 2.0538037167098e-16, 5.80410776994789),
    RetardationBand(976.0, 5.92182174254121e-12, 4.29275576134191),
    RetardationBand(0.0, 4.3917343795117e-05, 1.99978116283334),
)

RETARDATION_TABLES: Dict[DragFunction, DragTableDataType] = {
    DragFunction.G1: TableG1,
    DragFunction.G2: TableG2,
    DragFunction.G5: TableG5,
    DragFunction.G6: TableG6,
    DragFunction.G7: TableG7,
    DragFunction.G8: TableG8,
}

UNDEFINED_DRAG_FUNCTIONS: FrozenSet[DragFunction] = frozenset({DragFunction.G3, DragFunction.G4})


def get_drag_tables_names() -> List[str]:
    """Names of the module-level tables, e.g. ``['TableG1', 'TableG2', ...]``."""
    return [f"Table{drag_function.name}" for drag_function in RETARDATION_TABLES]
