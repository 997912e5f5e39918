"""
Custom exception types for the EGM interpolation core.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""


class InvalidConditionsError(ValueError):
    """Interpolation session configuration rejected (duration, ramp factor, ...)."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Invalid Conditions: {message}")

    def __str__(self):
        return f"Invalid Conditions: {self.original_message}"


class ChannelLimitError(InvalidConditionsError):
    """More scalar channels requested than the interpolator can hold."""


class InterpolatorStateError(RuntimeError):
    """Interpolator used before a session was started with update()."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Interpolator State Error: {message}")

    def __str__(self):
        return f"Interpolator State Error: {self.original_message}"
