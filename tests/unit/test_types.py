import dataclasses
import math

import numpy as np
import pytest
from spatialmath import SE3

from egm_interp.protocol.types import (
    CartesianGoal,
    Conditions,
    EgmMode,
    JointGoal,
    Operation,
    PointGoal,
    SplineMethod,
)
from egm_interp.utils.errors import ChannelLimitError, InterpolatorStateError, InvalidConditionsError
from egm_interp.utils.quaternions import same_rotation


def test_conditions_defaults():
    c = Conditions()
    assert c.duration == 0.0
    assert c.mode == EgmMode.JOINT
    assert c.operation == Operation.NORMAL
    assert c.ramp_down_factor == 0.0
    assert c.spline_method == SplineMethod.QUINTIC


def test_conditions_are_immutable():
    c = Conditions(duration=1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.duration = 2.0  # type: ignore[misc]


@pytest.mark.parametrize("factor", [0.0, 0.5, 1.0])
def test_conditions_validate_accepts_factor_bounds(factor):
    Conditions(duration=0.004, ramp_down_factor=factor).validate()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"duration": 0.0},
        {"duration": -0.5},
        {"duration": math.inf},
        {"duration": 1.0, "ramp_down_factor": 1.01},
        {"duration": 1.0, "ramp_down_factor": float("nan")},
    ],
)
def test_conditions_validate_rejects(kwargs):
    with pytest.raises(InvalidConditionsError):
        Conditions(**kwargs).validate()


def test_error_messages():
    assert str(InvalidConditionsError("bad")) == "Invalid Conditions: bad"
    assert str(ChannelLimitError("too many")) == "Invalid Conditions: too many"
    assert isinstance(ChannelLimitError("x"), ValueError)
    assert str(InterpolatorStateError("early")) == "Interpolator State Error: early"


def test_joint_goal_resize_pads_and_truncates():
    j = JointGoal(position=[1.0, 2.0], velocity=[3.0])
    j.resize(3)
    assert np.allclose(j.position, [1.0, 2.0, 0.0])
    assert np.allclose(j.velocity, [3.0, 0.0, 0.0])
    assert j.acceleration.shape == (3,)
    j.resize(1)
    assert j.count == 1 and j.position[0] == 1.0


def test_cartesian_goal_copies_inputs():
    q = np.array([1.0, 0.0, 0.0, 0.0])
    c = CartesianGoal(quaternion=q)
    c.quaternion[0] = 0.0
    assert q[0] == 1.0


def test_cartesian_goal_se3_conversion():
    pose = SE3.Trans(100.0, -20.0, 300.0) * SE3.Rz(math.pi / 2)
    goal = CartesianGoal.from_se3(pose)
    assert np.allclose(goal.position, [100.0, -20.0, 300.0])
    assert same_rotation(goal.quaternion, [math.cos(math.pi / 4), 0.0, 0.0, math.sin(math.pi / 4)])
    assert np.allclose(goal.linear_velocity, 0.0)

    back = goal.as_se3()
    assert np.allclose(back.A, pose.A)


def test_point_goal_copy_is_deep():
    p = PointGoal(robot_joints=JointGoal(position=[1.0, 2.0]))
    q = p.copy()
    q.robot_joints.position[0] = 9.0
    q.cartesian.position[1] = 9.0
    assert p.robot_joints.position[0] == 1.0
    assert p.cartesian.position[1] == 0.0
