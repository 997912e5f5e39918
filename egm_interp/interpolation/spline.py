"""
Boundary-value spline primitives (degree 5 or lower) for single scalar channels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from egm_interp.config import DURATION_EPSILON
from egm_interp.protocol.types import (
    CartesianGoal,
    Conditions,
    JointGoal,
    Operation,
    SplineMethod,
)
from egm_interp.utils.errors import InvalidConditionsError

logger = logging.getLogger(__name__)


class Axis(Enum):
    """Cartesian axis handled by a spline polynomial."""
    X = 0
    Y = 1
    Z = 2


def _value_at(values, index: int) -> float | None:
    if 0 <= index < len(values):
        return float(values[index])
    return None


@dataclass
class SplineConditions:
    """
    Boundary conditions for one spline polynomial.

    alfa/d_alfa/dd_alfa are the start position/velocity/acceleration and
    beta/d_beta/dd_beta the goal ones.
    """
    duration: float = 0.0
    alfa: float = 0.0
    d_alfa: float = 0.0
    dd_alfa: float = 0.0
    beta: float = 0.0
    d_beta: float = 0.0
    dd_beta: float = 0.0
    spline_method: SplineMethod = SplineMethod.QUINTIC
    do_ramp_down: bool = False
    ramp_down_factor: float = 0.0

    @classmethod
    def from_conditions(cls, conditions: Conditions) -> "SplineConditions":
        return cls(
            duration=conditions.duration,
            spline_method=conditions.spline_method,
            do_ramp_down=conditions.operation == Operation.RAMP_DOWN,
            ramp_down_factor=conditions.ramp_down_factor,
        )

    def _set_pair(self, start_values, goal_values, index: int, attrs: tuple[str, str]) -> None:
        # Only take a value when both ends carry it, otherwise keep the default
        a = _value_at(start_values, index)
        b = _value_at(goal_values, index)
        if a is not None and b is not None:
            setattr(self, attrs[0], a)
            setattr(self, attrs[1], b)

    def set_joint_conditions(self, index: int, start: JointGoal, goal: JointGoal) -> None:
        """Extract boundary conditions for joint ``index``."""
        self._set_pair(start.position, goal.position, index, ("alfa", "beta"))
        self._set_pair(start.velocity, goal.velocity, index, ("d_alfa", "d_beta"))
        self._set_pair(start.acceleration, goal.acceleration, index, ("dd_alfa", "dd_beta"))

    def set_cartesian_conditions(self, axis: Axis, start: CartesianGoal, goal: CartesianGoal) -> None:
        """Extract boundary conditions for a Cartesian position axis."""
        i = axis.value
        self.alfa = float(start.position[i])
        self.beta = float(goal.position[i])
        self.d_alfa = float(start.linear_velocity[i])
        self.d_beta = float(goal.linear_velocity[i])
        self.dd_alfa = float(start.linear_acceleration[i])
        self.dd_beta = float(goal.linear_acceleration[i])


class SplinePolynomial:
    """
    Single-channel spline of degree 5 or lower:

        q(t) = A + B*t + C*t² + D*t³ + E*t⁴ + F*t⁵

    Coefficients are solved in closed form from a SplineConditions. Evaluation
    is not clamped to [0, duration]; callers keep t inside the session.
    """

    def __init__(self):
        self.coeffs = [0.0] * 6
        self.conditions = SplineConditions()

    @property
    def coefficients(self) -> tuple[float, ...]:
        return tuple(self.coeffs)

    def update(self, conditions: SplineConditions) -> None:
        """Fit the polynomial's coefficients to ``conditions``."""
        T = conditions.duration
        if not T > DURATION_EPSILON:
            raise InvalidConditionsError(f"spline duration must be positive, got T={T}")

        self.conditions = conditions
        if conditions.do_ramp_down:
            self.coeffs = self._solve_ramp_down(conditions)
        else:
            self.coeffs = self._solve_boundary_value(conditions)

    @staticmethod
    def _solve_ramp_down(c: SplineConditions) -> list[float]:
        """
        Keep the start state and decelerate so that v(T) = factor * v(0)
        with a(T) = 0. The goal values are not used.
        """
        T = c.duration
        a = c.alfa
        b = c.d_alfa
        cc = c.dd_alfa / 2.0
        e = (b * (1.0 - c.ramp_down_factor) + cc * T) / (2.0 * T**3)
        d = -cc / (3.0 * T) - 2.0 * e * T
        return [a, b, cc, d, e, 0.0]

    @staticmethod
    def _solve_boundary_value(c: SplineConditions) -> list[float]:
        T = c.duration
        q0, qf = c.alfa, c.beta
        v0, vf = c.d_alfa, c.d_beta
        method = c.spline_method

        if method == SplineMethod.LINEAR:
            return [q0, (qf - q0) / T, 0.0, 0.0, 0.0, 0.0]

        if method == SplineMethod.SQUARE:
            return [q0, v0, (qf - q0 - v0 * T) / T**2, 0.0, 0.0, 0.0]

        if method == SplineMethod.CUBIC:
            d = qf - q0
            return [
                q0,
                v0,
                (3.0 * d - (2.0 * v0 + vf) * T) / T**2,
                (-2.0 * d + (v0 + vf) * T) / T**3,
                0.0,
                0.0,
            ]

        # Quintic, solved in normalized time τ = t/T then scaled back
        v0_n = v0 * T
        vf_n = vf * T
        a0_n = c.dd_alfa * T**2
        af_n = c.dd_beta * T**2

        a3_ = 10 * (qf - q0) - 6 * v0_n - 4 * vf_n - (3 * a0_n - af_n) / 2.0
        a4_ = -15 * (qf - q0) + 8 * v0_n + 7 * vf_n + (3 * a0_n - 2 * af_n) / 2.0
        a5_ = 6 * (qf - q0) - 3 * (v0_n + vf_n) - (a0_n - af_n) / 2.0

        return [q0, v0, a0_n / 2.0 / T**2, a3_ / T**3, a4_ / T**4, a5_ / T**5]

    def position(self, t: float) -> float:
        """Evaluate position at time t using Horner's method."""
        c = self.coeffs
        return c[0] + t * (c[1] + t * (c[2] + t * (c[3] + t * (c[4] + t * c[5]))))

    def velocity(self, t: float) -> float:
        c = self.coeffs
        return c[1] + t * (2.0 * c[2] + t * (3.0 * c[3] + t * (4.0 * c[4] + t * 5.0 * c[5])))

    def acceleration(self, t: float) -> float:
        c = self.coeffs
        return 2.0 * c[2] + t * (6.0 * c[3] + t * (12.0 * c[4] + t * 20.0 * c[5]))

    def evaluate_joint(self, output: JointGoal, index: int, t: float) -> None:
        """Write position/velocity/acceleration of joint ``index`` into ``output``."""
        if not 0 <= index < output.count:
            raise IndexError(f"joint index {index} out of range for {output.count} joints")
        output.resize(output.count)
        output.position[index] = self.position(t)
        output.velocity[index] = self.velocity(t)
        output.acceleration[index] = self.acceleration(t)

    def evaluate_cartesian(self, output: CartesianGoal, axis: Axis, t: float) -> None:
        """Write position/velocity/acceleration of ``axis`` into ``output``."""
        i = axis.value
        output.position[i] = self.position(t)
        output.linear_velocity[i] = self.velocity(t)
        output.linear_acceleration[i] = self.acceleration(t)

    def validate_continuity(self, tolerance: float = 1e-9) -> dict[str, bool]:
        """
        Check the boundary conditions the fitted method is meant to satisfy.

        Constraints a lower-degree (or ramp-down) fit does not impose are
        omitted from the result.
        """
        c = self.conditions
        T = c.duration
        if c.do_ramp_down:
            return {
                "q0": abs(self.position(0) - c.alfa) < tolerance,
                "v0": abs(self.velocity(0) - c.d_alfa) < tolerance,
                "a0": abs(self.acceleration(0) - c.dd_alfa) < tolerance,
                "vf": abs(self.velocity(T) - c.ramp_down_factor * c.d_alfa) < tolerance,
                "af": abs(self.acceleration(T)) < tolerance,
            }

        checks = {
            "q0": abs(self.position(0) - c.alfa) < tolerance,
            "qf": abs(self.position(T) - c.beta) < tolerance,
        }
        if c.spline_method in (SplineMethod.SQUARE, SplineMethod.CUBIC, SplineMethod.QUINTIC):
            checks["v0"] = abs(self.velocity(0) - c.d_alfa) < tolerance
        if c.spline_method in (SplineMethod.CUBIC, SplineMethod.QUINTIC):
            checks["vf"] = abs(self.velocity(T) - c.d_beta) < tolerance
        if c.spline_method == SplineMethod.QUINTIC:
            checks["a0"] = abs(self.acceleration(0) - c.dd_alfa) < tolerance
            checks["af"] = abs(self.acceleration(T) - c.dd_beta) < tolerance
        return checks
