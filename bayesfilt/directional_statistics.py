"""Arithmetic and averaging of angles on the circle."""

from __future__ import annotations

import numpy as np


def _as_matrix(a) -> np.ndarray:
    matrix = np.asarray(a, dtype=float)
    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    if matrix.ndim != 2:
        raise ValueError("expected a vector or a matrix")
    return matrix


def _as_vector(b, size: int) -> np.ndarray:
    vector = np.asarray(b, dtype=float).reshape(-1)
    if vector.shape[0] != size:
        raise ValueError(f"expected a vector of size {size}, got {vector.shape[0]}")
    return vector


def directional_add(a, b) -> np.ndarray:
    """Add vector ``b`` to every column of ``a``, wrapping into (-pi, pi]."""
    matrix = _as_matrix(a)
    vector = _as_vector(b, matrix.shape[0])
    return np.angle(np.exp(1j * (matrix + vector[:, np.newaxis])))


def directional_sub(a, b) -> np.ndarray:
    """Subtract vector ``b`` from every column of ``a``, wrapping into (-pi, pi]."""
    matrix = _as_matrix(a)
    vector = _as_vector(b, matrix.shape[0])
    return directional_add(matrix, -vector)


def directional_mean(a, w) -> np.ndarray:
    """Weighted circular mean of the columns of ``a``.

    A single column is returned unchanged.
    """
    matrix = _as_matrix(a)
    if matrix.shape[1] == 1:
        return matrix[:, 0].copy()
    weights = _as_vector(w, matrix.shape[1])
    return np.angle(np.exp(1j * matrix) @ weights)