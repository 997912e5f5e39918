"""
Interpolator managing one EGM interpolation session.

Depending on the session conditions the interpolator uses:
- 5th (or lower) degree spline polynomials per scalar channel,
- Slerp for the orientation,
- soft ramps for ramping in values or ramping down angular velocity.

No kinematics are considered, i.e. joint limits can be exceeded.
"""

from __future__ import annotations

import logging

from egm_interp.config import MAX_EXTERNAL_JOINTS, MAX_NUMBER_OF_SPLINES, MAX_ROBOT_JOINTS, TRACE
from egm_interp.protocol.types import Conditions, EgmMode, Operation, PointGoal
from egm_interp.utils.errors import ChannelLimitError, InterpolatorStateError

from .slerp import Slerp
from .soft_ramp import SoftRamp
from .spline import Axis, SplineConditions, SplinePolynomial

logger = logging.getLogger(__name__)


class Interpolator:
    """
    Orchestrates splines, Slerp and soft ramp for one session at a time.

    Spline slots are laid out as:
      JOINT mode: [robot joints..., external joints...]
      POSE mode:  [X, Y, Z, external joints...]
    ``offset`` is the slot of the first external joint.
    """

    def __init__(self):
        self._spline_polynomials = [SplinePolynomial() for _ in range(MAX_NUMBER_OF_SPLINES)]
        self._slerp = Slerp()
        self._soft_ramp = SoftRamp()
        self._conditions = Conditions()
        self._offset = 0
        self._robot_count = 0
        self._external_count = 0
        self._active = False

    @property
    def conditions(self) -> Conditions:
        return self._conditions

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def spline_count(self) -> int:
        return self._offset + self._external_count

    @property
    def duration(self) -> float:
        return self._conditions.duration

    def get_duration(self) -> float:
        """Valid duration [s] of the current interpolation session."""
        return self._conditions.duration

    def _spline(self, slot: int) -> SplinePolynomial:
        if not 0 <= slot < self.spline_count:
            raise IndexError(f"spline slot {slot} outside active range [0, {self.spline_count})")
        return self._spline_polynomials[slot]

    def update(self, start: PointGoal, goal: PointGoal, conditions: Conditions) -> None:
        """
        Start a new interpolation session, e.g. after a new goal has been chosen.

        Args:
            start: The start point
            goal: The goal point
            conditions: Session conditions

        Raises:
            InvalidConditionsError: Non-positive duration or ramp factor outside [0, 1]
            ChannelLimitError: More joints than the interpolator can hold
        """
        conditions.validate()

        robot_count = start.robot_joints.count if conditions.mode == EgmMode.JOINT else 0
        external_count = start.external_joints.count
        if robot_count > MAX_ROBOT_JOINTS:
            raise ChannelLimitError(f"{robot_count} robot joints exceeds limit of {MAX_ROBOT_JOINTS}")
        if external_count > MAX_EXTERNAL_JOINTS:
            raise ChannelLimitError(
                f"{external_count} external joints exceeds limit of {MAX_EXTERNAL_JOINTS}"
            )

        self._conditions = conditions
        self._robot_count = robot_count
        self._external_count = external_count

        if conditions.mode == EgmMode.JOINT:
            self._offset = robot_count
            for i in range(robot_count):
                sc = SplineConditions.from_conditions(conditions)
                sc.set_joint_conditions(i, start.robot_joints, goal.robot_joints)
                self._spline_polynomials[i].update(sc)
        else:
            self._offset = len(Axis)
            for axis in Axis:
                sc = SplineConditions.from_conditions(conditions)
                sc.set_cartesian_conditions(axis, start.cartesian, goal.cartesian)
                self._spline_polynomials[axis.value].update(sc)
            self._slerp.update(start.cartesian.quaternion, goal.cartesian.quaternion, conditions)

        for i in range(external_count):
            sc = SplineConditions.from_conditions(conditions)
            sc.set_joint_conditions(i, start.external_joints, goal.external_joints)
            self._spline_polynomials[self._offset + i].update(sc)

        self._soft_ramp.update(start, goal, conditions)
        self._active = True

        logger.debug(
            "Interpolator session: mode=%s operation=%s duration=%.4f splines=%d",
            conditions.mode.name,
            conditions.operation.name,
            conditions.duration,
            self.spline_count,
        )
        for slot in range(self.spline_count):
            logger.log(TRACE, "spline[%d] coeffs=%s", slot, self._spline_polynomials[slot].coefficients)

    def evaluate(self, output: PointGoal | None, sample_time: float, t: float) -> PointGoal:
        """
        Evaluate the session at time ``t`` [s].

        ``t`` is not clamped; callers keep it within [0, duration].

        Args:
            output: Message to fill in place, or None to allocate a new one (servo loops pass a reused message)
            sample_time: Control period [s]
            t: Time instance [s]

        Returns:
            The filled output message.
        """
        if not self._active:
            raise InterpolatorStateError("evaluate() called before update()")
        if output is None:
            output = PointGoal()

        output.robot_joints.resize(self._robot_count)
        output.external_joints.resize(self._external_count)

        operation = self._conditions.operation
        pose_mode = self._conditions.mode == EgmMode.POSE

        if operation in (Operation.NORMAL, Operation.RAMP_DOWN):
            if pose_mode:
                for axis in Axis:
                    self._spline(axis.value).evaluate_cartesian(output.cartesian, axis, t)
                if operation == Operation.NORMAL:
                    self._slerp.evaluate(output.cartesian, t)
                else:
                    self._soft_ramp.evaluate_cartesian(output.cartesian, sample_time, t)
            else:
                for i in range(self._robot_count):
                    self._spline(i).evaluate_joint(output.robot_joints, i, t)
            for i in range(self._external_count):
                self._spline(self._offset + i).evaluate_joint(output.external_joints, i, t)
        else:
            if pose_mode:
                self._soft_ramp.evaluate_cartesian(output.cartesian, sample_time, t)
            else:
                self._soft_ramp.evaluate_joints(output.robot_joints, True, sample_time, t)
            self._soft_ramp.evaluate_joints(output.external_joints, False, sample_time, t)

        return output
