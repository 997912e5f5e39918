"""
EGM interpolation core

Fills in motion between streamed start/goal points at servo-loop rate for an
externally guided motion (EGM) channel.

Key components:
- Interpolator: per-session orchestrator, update() once per goal, evaluate() per tick
- SplinePolynomial: degree <= 5 boundary-value spline for one scalar channel
- Slerp: constant angular rate orientation interpolation
- SoftRamp: cosine ramps for ramp down and static-goal ramp in
- PointGoal / Conditions: messages and session configuration
"""

from ._version import __version__
from .interpolation import Interpolator, Slerp, SoftRamp, SplineConditions, SplinePolynomial
from .protocol.types import (
    CartesianGoal,
    Conditions,
    EgmMode,
    JointGoal,
    Operation,
    PointGoal,
    SplineMethod,
)
from .utils.errors import ChannelLimitError, InterpolatorStateError, InvalidConditionsError

__all__ = [
    "__version__",
    "Interpolator",
    "SplinePolynomial",
    "SplineConditions",
    "Slerp",
    "SoftRamp",
    "PointGoal",
    "JointGoal",
    "CartesianGoal",
    "Conditions",
    "EgmMode",
    "Operation",
    "SplineMethod",
    "InvalidConditionsError",
    "ChannelLimitError",
    "InterpolatorStateError",
]
