"""
Pytest configuration and shared fixtures for the EGM interpolation tests.

Provides factories for start/goal points and session conditions, plus the
servo period used across the suite.
"""

import os
import sys

import numpy as np
import pytest

# Add the parent directory to Python path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from egm_interp.protocol.types import (
    CartesianGoal,
    Conditions,
    EgmMode,
    JointGoal,
    Operation,
    PointGoal,
    SplineMethod,
)

Q_IDENTITY = np.array([1.0, 0.0, 0.0, 0.0])


# ============================================================================
# FACTORIES
# ============================================================================

def _make_joint_point(position, velocity=None, acceleration=None, external=None) -> PointGoal:
    """PointGoal carrying robot joints (and optionally external joint positions)."""
    return PointGoal(
        robot_joints=JointGoal(position=position, velocity=velocity, acceleration=acceleration),
        external_joints=JointGoal(position=external if external is not None else []),
    )


def _make_pose_point(
    position=(0.0, 0.0, 0.0),
    quaternion=Q_IDENTITY,
    linear_velocity=(0.0, 0.0, 0.0),
    angular_velocity=(0.0, 0.0, 0.0),
) -> PointGoal:
    """PointGoal carrying a Cartesian pose."""
    return PointGoal(
        cartesian=CartesianGoal(
            position=position,
            quaternion=quaternion,
            linear_velocity=linear_velocity,
            angular_velocity=angular_velocity,
        )
    )


@pytest.fixture
def joint_conditions():
    """Factory for JOINT mode conditions."""

    def _make(duration=2.0, operation=Operation.NORMAL, factor=0.0, method=SplineMethod.QUINTIC):
        return Conditions(
            duration=duration,
            mode=EgmMode.JOINT,
            operation=operation,
            ramp_down_factor=factor,
            spline_method=method,
        )

    return _make


@pytest.fixture
def pose_conditions():
    """Factory for POSE mode conditions."""

    def _make(duration=1.0, operation=Operation.NORMAL, factor=0.0, method=SplineMethod.QUINTIC):
        return Conditions(
            duration=duration,
            mode=EgmMode.POSE,
            operation=operation,
            ramp_down_factor=factor,
            spline_method=method,
        )

    return _make


@pytest.fixture
def joint_point():
    """Factory for joint-space PointGoals."""
    return _make_joint_point


@pytest.fixture
def pose_point():
    """Factory for Cartesian PointGoals."""
    return _make_pose_point


@pytest.fixture
def sample_time() -> float:
    """Servo loop period used by the tests (250 Hz)."""
    return 0.004
