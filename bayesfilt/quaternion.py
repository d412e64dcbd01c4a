"""Unit quaternion helpers in (w, x, y, z) order, one quaternion per column."""

from __future__ import annotations

import numpy as np

_SMALL_NORM = 1e-4


def _as_columns(values, rows: int, name: str) -> np.ndarray:
    matrix = np.asarray(values, dtype=float)
    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    if matrix.ndim != 2 or matrix.shape[0] != rows:
        raise ValueError(f"{name} must have {rows} rows")
    return matrix


def _product(left: np.ndarray, right: np.ndarray) -> np.ndarray:
    """Hamilton product, broadcasting over columns."""
    w1, x1, y1, z1 = left
    w2, x2, y2, z2 = right
    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ]
    )


def quaternion_to_rotation_vector(quaternion) -> np.ndarray:
    """Map each unit quaternion column to its rotation vector (3 x N)."""
    q = _as_columns(quaternion, 4, "quaternion")
    w = q[0]
    vec = q[1:]
    norms = np.linalg.norm(vec, axis=0)
    angles = np.where(
        w < 0,
        -2.0 * np.arccos(np.clip(-w, -1.0, 1.0)),
        2.0 * np.arccos(np.clip(w, -1.0, 1.0)),
    )
    result = np.zeros((3, q.shape[1]))
    large = norms > _SMALL_NORM
    result[:, large] = angles[large] * vec[:, large] / norms[large]
    return result


def rotation_vector_to_quaternion(rotation_vector) -> np.ndarray:
    """Map each rotation vector column to its unit quaternion (4 x N)."""
    r = _as_columns(rotation_vector, 3, "rotation_vector")
    norms = np.linalg.norm(r, axis=0)
    result = np.zeros((4, r.shape[1]))
    result[0] = 1.0
    large = norms > _SMALL_NORM
    half = norms[large] / 2.0
    result[0, large] = np.cos(half)
    result[1:, large] = np.sin(half) * r[:, large] / norms[large]
    return result


def sum_quaternion_rotation_vector(quaternion, rotation_vector) -> np.ndarray:
    """Apply each rotation vector, in the global frame, to a unit quaternion.

    Column i of the result is exp(r_i / 2) * q.
    """
    q_right = _as_columns(quaternion, 4, "quaternion")[:, :1]
    increments = rotation_vector_to_quaternion(rotation_vector)
    return _product(increments, q_right)


def diff_quaternion(quaternion_left, quaternion_right) -> np.ndarray:
    """Rotation vectors taking ``quaternion_right`` to each left column.

    Column i of the result is 2 log(q_i * conj(q)).
    """
    left = _as_columns(quaternion_left, 4, "quaternion_left")
    right = _as_columns(quaternion_right, 4, "quaternion_right")[:, :1]
    conjugate = right * np.array([[1.0], [-1.0], [-1.0], [-1.0]])
    return quaternion_to_rotation_vector(_product(left, conjugate))


def mean_quaternion(weight, quaternion) -> np.ndarray:
    """Weighted mean of unit quaternions.

    The mean is the eigenvector of sum_i w_i q_i q_i^T with the largest
    eigenvalue.
    """
    q = _as_columns(quaternion, 4, "quaternion")
    w = np.asarray(weight, dtype=float).reshape(-1)
    if w.shape[0] > q.shape[1]:
        raise ValueError("more weights than quaternions")
    q = q[:, : w.shape[0]]
    outer = (q * w) @ q.T
    eigenvalues, eigenvectors = np.linalg.eig(outer)
    index = int(np.argmax(eigenvalues.real))
    return eigenvectors[:, index].real.copy()