from .interpolator import Interpolator
from .slerp import DOT_PRODUCT_THRESHOLD, Slerp
from .soft_ramp import SoftRamp
from .spline import Axis, SplineConditions, SplinePolynomial

__all__ = [
    "Interpolator",
    "Slerp",
    "DOT_PRODUCT_THRESHOLD",
    "SoftRamp",
    "Axis",
    "SplineConditions",
    "SplinePolynomial",
]
