"""
Slerp (spherical linear interpolation) between two unit quaternions.

    Slerp(q0, q1; f) = [sin((1-f)*omega)/sin(omega)]*q0 + [sin(f*omega)/sin(omega)]*q1

with cos(omega) = q0 . q1 and 0 <= f <= 1. Slerp between unit quaternions gives a
rotation with uniform angular speed.
"""

from __future__ import annotations

import math

import numpy as np

from egm_interp.config import SLERP_DOT_THRESHOLD
from egm_interp.protocol.types import CartesianGoal, Conditions
from egm_interp.utils.quaternions import IDENTITY, normalize, to_rotation

DOT_PRODUCT_THRESHOLD: float = SLERP_DOT_THRESHOLD


class Slerp:
    """
    Constant angular rate interpolation over one session.

    Nearly parallel quaternions (|dot| >= DOT_PRODUCT_THRESHOLD) fall back to
    normalized linear interpolation, since sin(omega) approaches zero there.
    """

    def __init__(self):
        self.duration = 0.0
        self._omega = 0.0
        self._sin_omega = 0.0
        self._q0 = IDENTITY.copy()
        self._q1 = IDENTITY.copy()
        self._use_linear = False
        self._angular_velocity = np.zeros(3)

    @property
    def angular_velocity(self) -> np.ndarray:
        """Constant base-frame angular velocity [rad/s] of the session."""
        return self._angular_velocity.copy()

    @property
    def omega(self) -> float:
        return self._omega

    @property
    def use_linear(self) -> bool:
        return self._use_linear

    def update(self, start, goal, conditions: Conditions) -> None:
        """
        Fit the Slerp between the ``start`` and ``goal`` quaternions.

        Args:
            start: Start quaternion [w, x, y, z]
            goal: Goal quaternion [w, x, y, z]
            conditions: Session conditions (only the duration is used)

        Inputs need not be unit length. An all-zero quaternion is taken as the
        identity (see quaternions.normalize).
        """
        self.duration = conditions.duration
        q0 = normalize(start)
        q1 = normalize(goal)

        dot = float(np.dot(q0, q1))
        # Take the short path
        if dot < 0.0:
            q1 = -q1
            dot = -dot

        self._q0 = q0
        self._q1 = q1
        self._use_linear = dot >= DOT_PRODUCT_THRESHOLD
        if self._use_linear:
            self._omega = 0.0
            self._sin_omega = 0.0
        else:
            self._omega = math.acos(min(dot, 1.0))
            self._sin_omega = math.sin(self._omega)

        delta = to_rotation(q1) * to_rotation(q0).inv()
        self._angular_velocity = delta.as_rotvec() / self.duration

    def interpolate(self, fraction: float) -> np.ndarray:
        """Unit quaternion at ``fraction`` of the way from start to goal."""
        if self._use_linear:
            q = (1.0 - fraction) * self._q0 + fraction * self._q1
        else:
            k0 = math.sin((1.0 - fraction) * self._omega) / self._sin_omega
            k1 = math.sin(fraction * self._omega) / self._sin_omega
            q = k0 * self._q0 + k1 * self._q1
        # Renormalize, also corrects floating drift in the slerp branch
        return normalize(q)

    def evaluate(self, output: CartesianGoal, t: float) -> None:
        """Write the orientation and angular velocity at time ``t`` [s] into ``output``."""
        output.quaternion[:] = self.interpolate(t / self.duration)
        output.angular_velocity[:] = self._angular_velocity
        output.angular_acceleration[:] = 0.0
