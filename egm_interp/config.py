"""
Central configuration for EGM interpolation tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

TRACE_ENABLED = str(os.getenv("EGM_TRACE", "0")).lower() in ("1", "true", "yes", "on")

# Default control/sample rate (Hz) of the servo loop calling evaluate()
CONTROL_RATE_HZ: float = float(os.getenv("EGM_CONTROL_RATE_HZ", "250"))

# Centralized loop interval (seconds).
INTERVAL_S: float = max(1e-6, 1.0 / max(CONTROL_RATE_HZ, 1.0))

# Above this |q0 . q1| the Slerp switches to normalized linear interpolation
SLERP_DOT_THRESHOLD: float = float(os.getenv("EGM_SLERP_DOT_THRESHOLD", "0.9995"))

# Durations at or below this are rejected (closed-form fits divide by T^5)
DURATION_EPSILON: float = float(os.getenv("EGM_DURATION_EPSILON", "1e-9"))

# Channel capacity
MAX_ROBOT_JOINTS: int = 6
MAX_EXTERNAL_JOINTS: int = 6
MAX_NUMBER_OF_SPLINES: int = MAX_ROBOT_JOINTS + MAX_EXTERNAL_JOINTS


def apply_trace_setting(enabled: bool = TRACE_ENABLED) -> None:
    """Lower the package logger to TRACE when enabled (EGM_TRACE=1)."""
    if enabled:
        logging.getLogger("egm_interp").setLevel(TRACE)


apply_trace_setting()
