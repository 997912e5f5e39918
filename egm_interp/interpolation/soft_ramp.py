"""
Soft ramps for ramping in positions or velocities, and ramping down angular velocity.

The ramp factor r over the session duration D is:

- Ramp down:                0.5*cos(pi*t/D) + 0.5       i.e. 1 -> 0
- Ramp in position/velocity: 0.5*cos(pi*t/D + pi) + 0.5  i.e. 0 -> 1
"""

from __future__ import annotations

import logging
import math

import numpy as np
from scipy.spatial.transform import Rotation

from egm_interp.config import TRACE
from egm_interp.protocol.types import CartesianGoal, Conditions, JointGoal, Operation, PointGoal
from egm_interp.utils.quaternions import from_rotation, normalize, to_rotation

from .slerp import Slerp

logger = logging.getLogger(__name__)


def _padded(values: np.ndarray, n: int) -> np.ndarray:
    out = np.zeros((n,), dtype=float)
    k = min(n, values.shape[0])
    out[:k] = values[:k]
    return out


class SoftRamp:
    """
    Cosine shaped blend used when the operation is not NORMAL.

    For RAMP_DOWN the angular velocity is driven from its value at session
    start, w0, to ``ramp_down_factor * w0``. The resulting angular acceleration
    is a finite difference against the previous evaluate() call, kept in
    ``previous_angular_velocity``: reset by update(), written only by
    evaluate_cartesian(). Joint channels ramp down through ramp-down splines,
    so evaluate_joints() only serves the ramp-in operations.
    """

    def __init__(self):
        self.duration = 0.0
        self.operation = Operation.RAMP_DOWN
        self.ramp_down_factor = 0.0
        self._start = PointGoal()
        self._goal = PointGoal()
        self._start_angular_velocity = np.zeros(3)
        self._previous_angular_velocity = np.zeros(3)
        self._start_rotation = Rotation.identity()
        self._slerp = Slerp()

    @property
    def previous_angular_velocity(self) -> np.ndarray:
        return self._previous_angular_velocity.copy()

    def update(self, start: PointGoal, goal: PointGoal, conditions: Conditions) -> None:
        """Store the session's start/goal points and reset the carried velocity estimate."""
        self.duration = conditions.duration
        self.operation = conditions.operation
        self.ramp_down_factor = conditions.ramp_down_factor
        self._start = start.copy()
        self._goal = goal.copy()
        self._start_angular_velocity = self._start.cartesian.angular_velocity.copy()
        self._previous_angular_velocity = self._start_angular_velocity.copy()
        self._start_rotation = to_rotation(self._start.cartesian.quaternion)
        self._slerp.update(start.cartesian.quaternion, goal.cartesian.quaternion, conditions)

    # ------------------------------------------------------------------
    # Ramp factors
    # ------------------------------------------------------------------
    def down_factor(self, t: float) -> float:
        return 0.5 * math.cos(math.pi * t / self.duration) + 0.5

    def in_factor(self, t: float) -> float:
        return 0.5 * math.cos(math.pi * t / self.duration + math.pi) + 0.5

    def in_factor_rate(self, t: float) -> float:
        """d/dt of in_factor."""
        return 0.5 * math.pi / self.duration * math.sin(math.pi * t / self.duration)

    def in_factor_rate2(self, t: float) -> float:
        """d²/dt² of in_factor."""
        w = math.pi / self.duration
        return 0.5 * w * w * math.cos(w * t)

    def factor(self, t: float) -> float:
        """Ramp factor for the session's operation."""
        if self.operation == Operation.RAMP_DOWN:
            return self.down_factor(t)
        return self.in_factor(t)

    def _down_velocity_scale(self, t: float) -> float:
        # w(t) = w0 * (k + (1 - k) * r(t))
        k = self.ramp_down_factor
        return k + (1.0 - k) * self.down_factor(t)

    def _down_travel_scale(self, t: float) -> float:
        # Closed form of the integral of _down_velocity_scale from 0 to t
        k = self.ramp_down_factor
        D = self.duration
        ramp_integral = 0.5 * t + D / (2.0 * math.pi) * math.sin(math.pi * t / D)
        return k * t + (1.0 - k) * ramp_integral

    @staticmethod
    def _finite_difference(current: np.ndarray, previous: np.ndarray, sample_time: float) -> np.ndarray:
        if sample_time <= 0.0:
            raise ValueError(f"sample_time must be positive, got {sample_time}")
        return (current - previous) / sample_time

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def evaluate_joints(self, output: JointGoal, robot: bool, sample_time: float, t: float) -> None:
        """
        Evaluate a ramp in for robot joints (``robot=True``) or external joints.

        Args:
            output: Joint block to write into, resized to the start block's count
            robot: Select the robot joint block, otherwise the external one
            sample_time: Control period [s], unused by the ramp in forms
            t: Time instance [s] within the session

        Raises:
            ValueError: If the session operation is RAMP_DOWN or NORMAL
        """
        if self.operation not in (Operation.RAMP_IN_POSITION, Operation.RAMP_IN_VELOCITY):
            raise ValueError(f"joint soft ramp does not handle {self.operation.name}")

        start = self._start.robot_joints if robot else self._start.external_joints
        goal = self._goal.robot_joints if robot else self._goal.external_joints
        n = start.count
        output.resize(n)

        p0 = start.position
        pf = _padded(goal.position, n)
        v0 = _padded(start.velocity, n)
        vf = _padded(goal.velocity, n)

        if self.operation == Operation.RAMP_IN_POSITION:
            delta = pf - p0
            output.position[:] = p0 + self.in_factor(t) * delta
            output.velocity[:] = self.in_factor_rate(t) * delta
            output.acceleration[:] = self.in_factor_rate2(t) * delta
        else:
            delta = vf - v0
            output.position[:] = pf
            output.velocity[:] = v0 + self.in_factor(t) * delta
            output.acceleration[:] = self.in_factor_rate(t) * delta

    def evaluate_cartesian(self, output: CartesianGoal, sample_time: float, t: float) -> None:
        """
        Evaluate the ramp for Cartesian values.

        RAMP_DOWN only writes orientation, angular velocity and angular
        acceleration; the position axes keep following their splines.
        """
        start = self._start.cartesian
        goal = self._goal.cartesian

        if self.operation == Operation.RAMP_DOWN:
            w0 = self._start_angular_velocity
            velocity = w0 * self._down_velocity_scale(t)
            swept = Rotation.from_rotvec(w0 * self._down_travel_scale(t))
            output.quaternion[:] = from_rotation(swept * self._start_rotation)
            output.angular_velocity[:] = velocity
            output.angular_acceleration[:] = self._finite_difference(
                velocity, self._previous_angular_velocity, sample_time
            )
            self._previous_angular_velocity = velocity
            logger.log(TRACE, "ramp down t=%.4f w=%s", t, velocity)
        elif self.operation == Operation.RAMP_IN_POSITION:
            r = self.in_factor(t)
            delta = goal.position - start.position
            # Slerp's constant rate times D is the full rotation vector
            rotvec = self._slerp.angular_velocity * self.duration
            output.position[:] = start.position + r * delta
            output.linear_velocity[:] = self.in_factor_rate(t) * delta
            output.linear_acceleration[:] = self.in_factor_rate2(t) * delta
            output.quaternion[:] = self._slerp.interpolate(r)
            output.angular_velocity[:] = self.in_factor_rate(t) * rotvec
            output.angular_acceleration[:] = self.in_factor_rate2(t) * rotvec
        else:
            r = self.in_factor(t)
            rate = self.in_factor_rate(t)
            d_linear = goal.linear_velocity - start.linear_velocity
            d_angular = goal.angular_velocity - start.angular_velocity
            output.position[:] = goal.position
            output.quaternion[:] = normalize(goal.quaternion)
            output.linear_velocity[:] = start.linear_velocity + r * d_linear
            output.angular_velocity[:] = start.angular_velocity + r * d_angular
            output.linear_acceleration[:] = rate * d_linear
            output.angular_acceleration[:] = rate * d_angular
