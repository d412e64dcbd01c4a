"""Sigma points and the unscented transform of a Gaussian."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np

from .directional_statistics import directional_add, directional_mean, directional_sub
from .quaternion import diff_quaternion, mean_quaternion, sum_quaternion_rotation_vector
from .vector_description import CircularType, VectorDescription

PropagationFunction = Callable[[np.ndarray], Tuple[np.ndarray, VectorDescription]]


def unscented_weights(n, alpha, beta, kappa) -> tuple[np.ndarray, np.ndarray, float]:
    """Weights of the unscented transform for ``n`` degrees of freedom.

    Returns the mean weights, the covariance weights (both of length
    ``2 n + 1``) and the scaling ``c = n + lambda`` of the sigma points.
    """
    if n < 0:
        raise ValueError("n must not be negative")
    lam = alpha**2 * (n + kappa) - n
    c = n + lam
    if c == 0:
        raise ValueError("n + lambda must not be zero")
    mean = np.full(2 * n + 1, 1.0 / (2.0 * c))
    covariance = mean.copy()
    mean[0] = lam / c
    covariance[0] = lam / c + (1.0 - alpha**2 + beta)
    return mean, covariance, float(c)


@dataclass
class UTWeight:
    """Mean and covariance weights of the unscented transform, with the scaling ``c``."""

    mean: np.ndarray
    covariance: np.ndarray
    c: float

    def __post_init__(self) -> None:
        self.mean = np.asarray(self.mean, dtype=float).reshape(-1)
        self.covariance = np.asarray(self.covariance, dtype=float).reshape(-1)
        if self.mean.shape != self.covariance.shape:
            raise ValueError("mean and covariance weights must have the same length")

    @classmethod
    def from_description(cls, description, alpha, beta, kappa) -> UTWeight:
        """Weights for a vector laid out as ``description``."""
        return cls(*unscented_weights(description.dof_size(), alpha, beta, kappa))


def _check_gaussian(mean, covariance, description: VectorDescription):
    mu = np.asarray(mean, dtype=float).reshape(-1)
    cov = np.asarray(covariance, dtype=float)
    if mu.shape[0] != description.total_size():
        raise ValueError(
            f"mean has size {mu.shape[0]}, description expects {description.total_size()}"
        )
    dof = description.dof_size()
    if cov.shape != (dof, dof):
        raise ValueError(f"covariance must be {dof} x {dof}")
    return mu, cov


def _is_quaternion(description: VectorDescription) -> bool:
    return description.circular_type is CircularType.QUATERNION


def sigma_point(mean, covariance, description, c) -> np.ndarray:
    """Sigma points of a Gaussian, one per column (``2 dof + 1`` columns).

    The first column is the mean. Circular components are perturbed on the
    circle or, for quaternions, in the tangent space.
    """
    mu, cov = _check_gaussian(mean, covariance, description)
    if c < 0:
        raise ValueError("c must not be negative")

    dof = description.dof_size()
    total = description.total_size()
    lin = description.linear_components
    circ = description.circular_components
    noise = description.noise_components

    if dof > 0:
        u, s, _ = np.linalg.svd(cov, full_matrices=False)
        spread = math.sqrt(c) * (u * np.sqrt(s))
    else:
        spread = np.zeros((0, 0))
    perturbations = np.hstack([np.zeros((dof, 1)), spread, -spread])

    points = np.empty((total, 2 * dof + 1))
    points[:lin] = perturbations[:lin] + mu[:lin, np.newaxis]

    if circ > 0:
        if _is_quaternion(description):
            for j in range(circ):
                rows = slice(lin + 4 * j, lin + 4 * j + 4)
                quaternion = mu[rows]
                points[rows, 0] = quaternion
                points[rows, 1:] = sum_quaternion_rotation_vector(
                    quaternion, perturbations[lin + 3 * j : lin + 3 * j + 3, 1:]
                )
        else:
            points[lin : lin + circ] = directional_add(
                perturbations[lin : lin + circ], mu[lin : lin + circ]
            )

    if noise > 0:
        points[total - noise :] = perturbations[dof - noise :] + mu[total - noise :, np.newaxis]

    return points


def _weighted_mean(points: np.ndarray, weights: np.ndarray, description: VectorDescription):
    lin = description.linear_components
    circ = description.circular_components
    parts = [points[:lin] @ weights]
    if circ > 0:
        if _is_quaternion(description):
            parts.extend(
                mean_quaternion(weights, points[lin + 4 * j : lin + 4 * j + 4])
                for j in range(circ)
            )
        else:
            parts.append(directional_mean(points[lin : lin + circ], weights))
    return np.concatenate(parts)


def _offsets(points: np.ndarray, centre: np.ndarray, description: VectorDescription):
    """Offsets of the columns of ``points`` from ``centre``, noise rows excluded."""
    lin = description.linear_components
    circ = description.circular_components
    parts = [points[:lin] - centre[:lin, np.newaxis]]
    if circ > 0:
        if _is_quaternion(description):
            parts.extend(
                diff_quaternion(
                    points[lin + 4 * j : lin + 4 * j + 4],
                    centre[lin + 4 * j : lin + 4 * j + 4],
                )
                for j in range(circ)
            )
        else:
            parts.append(directional_sub(points[lin : lin + circ], centre[lin : lin + circ]))
    return np.vstack(parts)


def unscented_transform(mean, covariance, description, weight, function):
    """Propagate a Gaussian through ``function`` with the unscented transform.

    ``function`` receives the sigma points, one per column, and returns the
    propagated points together with the description of the output vector.
    It should raise if it cannot evaluate the points.

    Returns the output mean, the output covariance and the cross covariance
    between the input (noise components excluded) and the output.
    """
    mu, cov = _check_gaussian(mean, covariance, description)
    dof = description.dof_size()
    if weight.mean.shape[0] != 2 * dof + 1:
        raise ValueError(f"weights must have length {2 * dof + 1}")

    points = sigma_point(mu, cov, description, weight.c)

    propagated, produced = function(points)
    propagated = np.asarray(propagated, dtype=float)
    if propagated.ndim == 1:
        propagated = propagated.reshape(1, -1)
    if propagated.ndim != 2 or propagated.shape[1] != points.shape[1]:
        raise ValueError("function must return one column per sigma point")

    output = VectorDescription(
        produced.linear_components, produced.circular_components, 0, produced.circular_type
    )
    if propagated.shape[0] < output.total_size():
        raise ValueError("function returned fewer rows than its description requires")

    out_mean = _weighted_mean(propagated, weight.mean, output)
    out_offsets = _offsets(propagated, out_mean, output)
    out_covariance = (out_offsets * weight.covariance) @ out_offsets.T

    in_offsets = _offsets(points, mu, description)
    cross_covariance = (in_offsets * weight.covariance) @ out_offsets.T

    return out_mean, out_covariance, cross_covariance