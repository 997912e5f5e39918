"""
Type definitions for the EGM interpolation core.

Defines the enums and dataclasses exchanged with the (external) channel layer:
the start/goal ``PointGoal`` messages and the per-session ``Conditions``.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from spatialmath import SE3, UnitQuaternion

from egm_interp.config import DURATION_EPSILON
from egm_interp.utils.errors import InvalidConditionsError
from egm_interp.utils.quaternions import normalize


class EgmMode(Enum):
    """State space the interpolator works in."""
    JOINT = 0  # Joint angles (robot + external joints)
    POSE = 1   # Cartesian position + orientation (external joints still in joint space)


class Operation(Enum):
    """Interpolation operation for one session."""
    NORMAL = 0            # Splines + Slerp
    RAMP_DOWN = 1         # Ramp-down splines, soft ramp on angular velocity
    RAMP_IN_POSITION = 2  # Soft ramp towards a static position goal
    RAMP_IN_VELOCITY = 3  # Soft ramp towards a static velocity goal


class SplineMethod(Enum):
    """Degree of the boundary-value spline fitted per channel."""
    LINEAR = 1   # position at both ends
    SQUARE = 2   # + start velocity
    CUBIC = 3    # + velocity at both ends
    QUINTIC = 5  # + acceleration at both ends


def _vec(n: int):
    return lambda: np.zeros((n,), dtype=float)


def _identity_quat() -> np.ndarray:
    return np.array([1.0, 0.0, 0.0, 0.0])


def _as_array(values) -> np.ndarray:
    return np.array(values if values is not None else [], dtype=float).reshape(-1)


@dataclass
class JointGoal:
    """
    Joint-space state for a group of joints.

    ``velocity`` and ``acceleration`` may be shorter than ``position``; missing
    entries are read as zero by the boundary extractor.
    """
    position: np.ndarray = field(default_factory=_vec(0))
    velocity: np.ndarray = field(default_factory=_vec(0))
    acceleration: np.ndarray = field(default_factory=_vec(0))

    def __post_init__(self):
        self.position = _as_array(self.position)
        self.velocity = _as_array(self.velocity)
        self.acceleration = _as_array(self.acceleration)

    @property
    def count(self) -> int:
        return int(self.position.shape[0])

    def resize(self, n: int) -> None:
        """Make all three arrays exactly ``n`` long (zero padded)."""
        for name in ("position", "velocity", "acceleration"):
            arr = getattr(self, name)
            if arr.shape[0] != n:
                out = np.zeros((n,), dtype=float)
                k = min(n, arr.shape[0])
                out[:k] = arr[:k]
                setattr(self, name, out)


@dataclass
class CartesianGoal:
    """Cartesian state: position [mm], quaternion [w, x, y, z], velocities, accelerations."""
    position: np.ndarray = field(default_factory=_vec(3))
    quaternion: np.ndarray = field(default_factory=_identity_quat)
    linear_velocity: np.ndarray = field(default_factory=_vec(3))
    angular_velocity: np.ndarray = field(default_factory=_vec(3))  # rad/s, base frame
    linear_acceleration: np.ndarray = field(default_factory=_vec(3))
    angular_acceleration: np.ndarray = field(default_factory=_vec(3))

    def __post_init__(self):
        self.position = np.array(self.position, dtype=float).reshape(3)
        self.quaternion = np.array(self.quaternion, dtype=float).reshape(4)
        self.linear_velocity = np.array(self.linear_velocity, dtype=float).reshape(3)
        self.angular_velocity = np.array(self.angular_velocity, dtype=float).reshape(3)
        self.linear_acceleration = np.array(self.linear_acceleration, dtype=float).reshape(3)
        self.angular_acceleration = np.array(self.angular_acceleration, dtype=float).reshape(3)

    @classmethod
    def from_se3(cls, pose: SE3) -> "CartesianGoal":
        """Build a zero-velocity goal from a spatialmath pose."""
        return cls(position=np.array(pose.t, dtype=float), quaternion=UnitQuaternion(pose.R).vec)

    def as_se3(self) -> SE3:
        return SE3.Rt(UnitQuaternion(normalize(self.quaternion)).R, self.position)


@dataclass
class PointGoal:
    """Snapshot of motion state at one instant (start, goal or evaluated output)."""
    robot_joints: JointGoal = field(default_factory=JointGoal)
    external_joints: JointGoal = field(default_factory=JointGoal)
    cartesian: CartesianGoal = field(default_factory=CartesianGoal)

    def copy(self) -> "PointGoal":
        return copy.deepcopy(self)


@dataclass(frozen=True)
class Conditions:
    """Configuration for one interpolation session."""
    duration: float = 0.0  # [s]
    mode: EgmMode = EgmMode.JOINT
    operation: Operation = Operation.NORMAL
    ramp_down_factor: float = 0.0  # fraction of current velocity to end a ramp down at
    spline_method: SplineMethod = SplineMethod.QUINTIC

    def validate(self) -> None:
        """Raise InvalidConditionsError rather than clamp bad values."""
        if not math.isfinite(self.duration) or self.duration <= DURATION_EPSILON:
            raise InvalidConditionsError(f"duration must be positive, got {self.duration}")
        if not (0.0 <= self.ramp_down_factor <= 1.0):
            raise InvalidConditionsError(
                f"ramp_down_factor must be within [0, 1], got {self.ramp_down_factor}"
            )
