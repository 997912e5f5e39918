"""
Offline sampling of an interpolation session.
"""

import numpy as np

from egm_interp.config import INTERVAL_S
from egm_interp.interpolation.interpolator import Interpolator
from egm_interp.protocol.types import PointGoal


def _samples_for_duration(duration: float, sample_rate: float) -> int:
    if duration <= 0:
        return 2
    n = int(round(duration * sample_rate)) + 1
    return max(2, n)


def sample_session(interpolator: Interpolator, sample_rate: float | None = None) -> dict[str, np.ndarray]:
    """
    Evaluate the interpolator's current session on an evenly spaced grid.

    Without sample_rate the grid follows the control loop interval (INTERVAL_S).

    Samples are taken in order, so RAMP_DOWN finite differences see the
    previous sample. Note that this advances the interpolator's ramp state.

    Returns: dict of arrays keyed by
      time (N,), robot_position/robot_velocity (N, J), external_position (N, E),
      cartesian_position (N, 3), quaternion (N, 4), angular_velocity (N, 3)
    """
    sr = 1.0 / INTERVAL_S if sample_rate is None else float(sample_rate)
    duration = interpolator.get_duration()
    n = _samples_for_duration(duration, sr)
    time_points = np.linspace(0.0, duration, n)
    sample_time = duration / (n - 1)

    out = PointGoal()
    rows: dict[str, list[np.ndarray]] = {
        "robot_position": [],
        "robot_velocity": [],
        "external_position": [],
        "cartesian_position": [],
        "quaternion": [],
        "angular_velocity": [],
    }
    for t in time_points:
        interpolator.evaluate(out, sample_time, float(t))
        rows["robot_position"].append(out.robot_joints.position.copy())
        rows["robot_velocity"].append(out.robot_joints.velocity.copy())
        rows["external_position"].append(out.external_joints.position.copy())
        rows["cartesian_position"].append(out.cartesian.position.copy())
        rows["quaternion"].append(out.cartesian.quaternion.copy())
        rows["angular_velocity"].append(out.cartesian.angular_velocity.copy())

    result = {"time": time_points}
    for key, values in rows.items():
        result[key] = np.vstack(values)
    return result
