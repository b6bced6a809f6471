"""Trapezoid integration engine for ballistic trajectory calculations.

Velocity is advanced with an explicit Euler step; position is advanced with the average
of the velocities before and after the step (trapezoidal rule).

The time step adapts to the projectile speed: ``dt = step / v`` so every step covers about
`step` feet.  The zero search uses a 1 ft step, the tabulator a finer 0.5 ft step so it can
sample every yard.

Classes:
    TrapezoidIntegrationEngine: Zero angle search and trajectory tabulation

Examples:
    >>> from py_gnuballistics import Calculator
    >>> calc = Calculator(engine="py_gnuballistics:TrapezoidIntegrationEngine")
"""

import math

from typing_extensions import List, override

from py_gnuballistics.conditions import Wind, windage
from py_gnuballistics.constants import cFeetPerYard, cInchesPerFoot
from py_gnuballistics.drag_model import retard
from py_gnuballistics.drag_tables import DragFunction
from py_gnuballistics.engines.base_engine import BaseIntegrationEngine, IntegrationState
from py_gnuballistics.exceptions import DragDomainError, ZeroFindingError
from py_gnuballistics.logger import logger
from py_gnuballistics.trajectory_data import IntegrationStatus, Solution, TabulationResult, ZeroFindingResult
from py_gnuballistics.unit import deg_to_rad, moa_to_rad, rad_to_deg, rad_to_moa

__all__ = ('TrapezoidIntegrationEngine',)


class TrapezoidIntegrationEngine(BaseIntegrationEngine):
    """Trapezoid integration engine.

    Attributes:
        ZERO_STEP: Distance-like step of the zero search, feet
        TABLE_STEP: Distance-like step of the tabulator, feet
        integration_step_count: Number of integration steps performed.
    """

    ZERO_STEP = 1.0
    TABLE_STEP = 0.5

    #region Steps
    @staticmethod
    def zero_step(state: IntegrationState, drag_function: DragFunction, drag_coefficient: float,
                  gx: float, gy: float, step: float) -> IntegrationStatus:
        """Advance `state` by one zero search step.

        Drag is applied as an instantaneous velocity decrement over `dt`, then gravity, then
        the trapezoidal position update.  Time is left to the caller.

        Returns:
            DRAG_DOMAIN_EXCEEDED if the speed is outside of the drag model envelope (the
            state is then left unchanged), otherwise ADVANCING.
        """
        v = state.speed
        r = retard(drag_function, drag_coefficient, v)
        if not r.is_valid:
            state.status = IntegrationStatus.DRAG_DOMAIN_EXCEEDED
            return state.status
        state.vx1 = state.vx
        state.vy1 = state.vy
        state.dt = step / v
        dt = state.dt
        state.dvy = -r.value * state.vy / v * dt
        state.dvx = -r.value * state.vx / v * dt

        state.vx = state.vx + state.dvx
        state.vy = state.vy + state.dvy
        state.vy = state.vy + dt * gy
        state.vx = state.vx + dt * gx

        state.advance_position()
        state.steps += 1
        return IntegrationStatus.ADVANCING

    @staticmethod
    def table_step(state: IntegrationState, drag_function: DragFunction, drag_coefficient: float,
                   gx: float, gy: float, step: float, headwind: float) -> IntegrationStatus:
        """Advance velocity and time of `state` by one tabulator step.

        The headwind (fps) is added to the speed before the drag lookup.  The position is not
        moved: the tabulator records a row first and then calls `state.advance_position()`.

        Returns:
            DRAG_DOMAIN_EXCEEDED if the speed is outside of the drag model envelope (the
            state is then left unchanged), otherwise ADVANCING.
        """
        v = state.speed
        r = retard(drag_function, drag_coefficient, v + headwind)
        if not r.is_valid:
            state.status = IntegrationStatus.DRAG_DOMAIN_EXCEEDED
            return state.status
        state.vx1 = state.vx
        state.vy1 = state.vy
        state.dt = step / v
        dt = state.dt
        state.dvx = -(state.vx / v) * r.value
        state.dvy = -(state.vy / v) * r.value

        state.vx = state.vx + dt * state.dvx + dt * gx
        state.vy = state.vy + dt * state.dvy + dt * gy

        state.time = state.time + dt
        state.steps += 1
        return IntegrationStatus.ADVANCING
    #endregion Steps

    #region Transitions
    @staticmethod
    def zero_transition(state: IntegrationState, y_target_ft: float, range_limit_ft: float,
                        steepness_ratio: float) -> IntegrationStatus:
        """Next state of a zero search trial after a step."""
        if state.vy < 0 and state.y < y_target_ft:
            # Falling and below the target
            return IntegrationStatus.BELOW_TARGET_DESCENDING
        if state.vy > steepness_ratio * state.vx:
            return IntegrationStatus.NEAR_VERTICAL
        if state.x > range_limit_ft:
            return IntegrationStatus.RANGE_LIMIT_REACHED
        return IntegrationStatus.ADVANCING

    @staticmethod
    def table_transition(state: IntegrationState, rows: int, max_range: int,
                         steepness_ratio: float) -> IntegrationStatus:
        """Next state of a tabulation run after a step and its row bookkeeping."""
        if math.fabs(state.vy) > math.fabs(steepness_ratio * state.vx):
            return IntegrationStatus.NEAR_VERTICAL
        if rows > max_range:
            return IntegrationStatus.RANGE_LIMIT_REACHED
        return IntegrationStatus.ADVANCING
    #endregion Transitions

    def _zero_trial(self, drag_function: DragFunction, drag_coefficient: float, vi: float,
                    angle_rad: float, sight_height: float, y_target_ft: float,
                    range_limit_ft: float) -> IntegrationState:
        """Fly one trial trajectory at `angle_rad` until a terminal state."""
        _cGravityConstant = self._config.cGravityConstant
        _cSteepnessRatio = self._config.cSteepnessRatio
        step = self.get_calc_step() * self.ZERO_STEP

        state = IntegrationState.launch(vi, angle_rad, sight_height)
        gx = _cGravityConstant * math.sin(angle_rad)
        gy = _cGravityConstant * math.cos(angle_rad)

        while state.status is IntegrationStatus.ADVANCING:
            if self.zero_step(state, drag_function, drag_coefficient, gx, gy, step) \
                    is IntegrationStatus.DRAG_DOMAIN_EXCEEDED:
                raise DragDomainError(state.speed, drag_function)
            state.status = self.zero_transition(state, y_target_ft, range_limit_ft, _cSteepnessRatio)
            if state.status in (IntegrationStatus.ADVANCING, IntegrationStatus.RANGE_LIMIT_REACHED):
                state.time += state.dt
        return state

    @override
    def _zero_angle(self, drag_function: DragFunction, drag_coefficient: float, vi: float,
                    sight_height: float, zero_range: float, y_intercept: float) -> ZeroFindingResult:
        """Successive approximation of the zero angle.

        Start at 0 degrees and raise the bore by a coarse step until the trial passes above
        the target.  Then halve the step and reverse it, going down until the trial passes
        below, and so on.  This usually converges in fewer than 40 trials.

        The search is reported as not converged when it hits the angle ceiling or the
        iteration cap, or when the trials above the target never got out to the zero range
        (a slow projectile turning near-vertical), so the bracketed angle is not a zero.
        """
        _cMaxIterations = self._config.cMaxIterations
        y_target_ft = y_intercept / cInchesPerFoot
        range_limit_ft = zero_range * cFeetPerYard
        accuracy_rad = moa_to_rad(self._config.cZeroAccuracyMOA)
        max_angle_rad = deg_to_rad(self._config.cZeroMaxAngleDegrees)

        angle = 0.0  # Bore angle, radians
        da = deg_to_rad(self._config.cZeroInitialStepDegrees)
        iterations_count = 0
        step_count = 0
        reason = ""
        done = False
        # Whether the latest trial ending above the target actually flew out to the zero range
        above_reached_range = True

        while not done:
            state = self._zero_trial(drag_function, drag_coefficient, vi, angle,
                                     sight_height, y_target_ft, range_limit_ft)
            iterations_count += 1
            step_count += state.steps

            if state.y > y_target_ft:
                above_reached_range = (state.status is IntegrationStatus.RANGE_LIMIT_REACHED
                                       and state.vx > 0)
            if state.y > y_target_ft and da > 0:
                da = -da / 2
            if state.y < y_target_ft and da < 0:
                da = -da / 2

            if math.fabs(da) < accuracy_rad:
                done = True
            if angle > max_angle_rad:
                reason = ZeroFindingError.ANGLE_CEILING_EXCEEDED
                done = True
            elif not done and iterations_count >= _cMaxIterations:
                reason = ZeroFindingError.ITERATIONS_EXHAUSTED
                done = True

            angle += da

        if not reason and not above_reached_range:
            # Bracketed by a trial that turned near-vertical short of the range: no real zero
            reason = ZeroFindingError.TARGET_NOT_REACHED

        logger.debug(f"Zero search flew {iterations_count} trials, {step_count} steps")
        self.integration_step_count += step_count
        return ZeroFindingResult(rad_to_deg(angle), not reason, iterations_count, reason)

    def _make_solution(self, state: IntegrationState, vi: float, crosswind: float) -> Solution:
        # The angle to a point at the muzzle is undefined; report no correction there
        correction = -rad_to_moa(state.y / state.x) if state.x != 0 else 0.0
        return Solution(range=state.x / cFeetPerYard,
                        path=state.y * cInchesPerFoot,
                        correction=correction,
                        time=state.time,
                        windage=windage(crosswind, vi, state.x, state.time),
                        velocity=vi,
                        velocity_x=state.vx,
                        velocity_y=state.vy)

    @override
    def _tabulate(self, drag_function: DragFunction, drag_coefficient: float, vi: float,
                  sight_height: float, shooting_angle: float, zero_angle: float,
                  wind_speed: float, wind_angle: float, max_range: int) -> TabulationResult:
        """Integrate the trajectory and record a row at every whole yard.

        Gravity is resolved along the combined shooting and zero angle, while the bore keeps
        pointing at the zero angle, modeling uphill or downhill fire.
        """
        _cGravityConstant = self._config.cGravityConstant
        _cSteepnessRatio = self._config.cSteepnessRatio
        step = self.get_calc_step() * self.TABLE_STEP

        wind = Wind(wind_speed, wind_angle)
        headwind = wind.headwind
        crosswind = wind.crosswind

        gy = _cGravityConstant * math.cos(deg_to_rad(shooting_angle + zero_angle))
        gx = _cGravityConstant * math.sin(deg_to_rad(shooting_angle + zero_angle))

        state = IntegrationState.launch(vi, deg_to_rad(zero_angle), sight_height)
        solutions: List[Solution] = []
        error = None
        n = 0

        while state.status is IntegrationStatus.ADVANCING:
            if self.table_step(state, drag_function, drag_coefficient, gx, gy, step, headwind) \
                    is IntegrationStatus.DRAG_DOMAIN_EXCEEDED:
                error = DragDomainError(state.speed + headwind, drag_function, solutions)
                logger.warning(f"Tabulation stopped: {error}")
                break

            if state.x / cFeetPerYard >= n:
                solutions.append(self._make_solution(state, vi, crosswind))
                n += 1

            state.advance_position()
            state.status = self.table_transition(state, n, max_range, _cSteepnessRatio)

        logger.debug(f"Tabulation ran {state.steps} steps, {n} rows, ended {state.status.name}")
        self.integration_step_count += state.steps
        return TabulationResult(solutions, state.status, max_range, error)
