"""
Quaternion helpers.

Quaternions are stored scalar-first ``[w, x, y, z]`` throughout the package.
SciPy's ``Rotation`` uses scalar-last, so conversions go through here.
"""

from collections.abc import Sequence

import numpy as np
from scipy.spatial.transform import Rotation

IDENTITY = np.array([1.0, 0.0, 0.0, 0.0])


def normalize(q: Sequence[float] | np.ndarray) -> np.ndarray:
    """
    Return ``q`` scaled to unit norm.

    A zero quaternion encodes no rotation; it is read as the identity instead
    of raising, matching how an unset orientation field is treated.
    """
    arr = np.asarray(q, dtype=float)
    n = float(np.linalg.norm(arr))
    if n == 0.0:
        return IDENTITY.copy()
    return arr / n


def to_rotation(q: Sequence[float] | np.ndarray) -> Rotation:
    """Scalar-first quaternion -> scipy Rotation."""
    w, x, y, z = normalize(q)
    return Rotation.from_quat([x, y, z, w])


def from_rotation(rot: Rotation) -> np.ndarray:
    """scipy Rotation -> scalar-first quaternion."""
    x, y, z, w = rot.as_quat()
    return np.array([w, x, y, z])


def same_rotation(q0, q1, tol: float = 1e-9) -> bool:
    """True if ``q0`` and ``q1`` encode the same rotation (q and -q are equal)."""
    d = abs(float(np.dot(normalize(q0), normalize(q1))))
    return d >= 1.0 - tol
