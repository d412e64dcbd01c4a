"""Numerical helpers: log-sum-exp, Gaussian densities, a timer and error reports."""

from __future__ import annotations

import math
import time

import numpy as np

_LOG_TWO_PI = math.log(2.0 * math.pi)


def _as_columns(values, name: str) -> np.ndarray:
    matrix = np.asarray(values, dtype=float)
    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    if matrix.ndim != 2:
        raise ValueError(f"{name} must be a vector or a matrix")
    return matrix


def _offsets(input, mean) -> np.ndarray:
    points = _as_columns(input, "input")
    centre = np.asarray(mean, dtype=float).reshape(-1)
    if centre.shape[0] != points.shape[0]:
        raise ValueError(
            f"mean has size {centre.shape[0]}, input has {points.shape[0]} rows"
        )
    return points - centre[:, np.newaxis]


def log_sum_exp(data) -> float:
    """Logarithm of the sum of the exponentials of all entries of ``data``."""
    values = np.asarray(data, dtype=float)
    if values.size == 0:
        raise ValueError("data must not be empty")
    peak = float(values.max())
    return peak + math.log(float(np.exp(values - peak).sum()))


def multivariate_gaussian_log_density(input, mean, covariance) -> np.ndarray:
    """Log density of a multivariate Gaussian at every column of ``input``."""
    diff = _offsets(input, mean)
    cov = np.asarray(covariance, dtype=float)
    if cov.shape != (diff.shape[0], diff.shape[0]):
        raise ValueError("covariance must be square and match the input size")
    inverse = np.linalg.inv(cov)
    quadratic = np.einsum("ji,jk,ki->i", diff, inverse, diff)
    with np.errstate(divide="ignore", invalid="ignore"):
        log_det = np.log(np.linalg.det(cov))
    return -0.5 * (diff.shape[0] * _LOG_TWO_PI + log_det + quadratic)


def _inverse_blocks(r: np.ndarray, block_size: int, num_blocks: int) -> list[np.ndarray]:
    if r.shape[1] == block_size:
        single = np.linalg.inv(r)
        return [single] * num_blocks
    return [
        np.linalg.inv(r[:, block_size * i : block_size * (i + 1)])
        for i in range(num_blocks)
    ]


def multivariate_gaussian_log_density_uvr(input, mean, u, v, r) -> np.ndarray:
    """Log density of a Gaussian whose covariance is ``u @ v + R``.

    ``R`` is block diagonal with square blocks of size M. It is given either
    as a single M x M block, used for every diagonal block, or as the
    M x (N * M) concatenation of all the blocks.
    """
    diff = _offsets(input, mean)
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    r = np.asarray(r, dtype=float)
    if r.ndim != 2 or r.shape[0] == 0:
        raise ValueError("R must be a non-empty matrix")

    input_size = diff.shape[0]
    block_size = r.shape[0]
    if input_size % block_size != 0:
        raise ValueError("input size must be a multiple of the block size of R")
    num_blocks = input_size // block_size
    if r.shape[1] not in (block_size, input_size):
        raise ValueError("R must hold one block or all the diagonal blocks")

    inv_blocks = _inverse_blocks(r, block_size, num_blocks)

    v_inv_r = np.hstack(
        [
            v[:, i * block_size : (i + 1) * block_size] @ inv_blocks[i]
            for i in range(v.shape[1] // block_size)
        ]
    )
    diff_t_inv_r = np.hstack(
        [
            diff[i * block_size : (i + 1) * block_size].T @ inv_blocks[i]
            for i in range(num_blocks)
        ]
    )

    # Woodbury: inv(UV + R) = inv(R) (I - U inv(I + V inv(R) U) V inv(R))
    capacitance = np.eye(v.shape[0]) + v_inv_r @ u
    middle = np.eye(u.shape[0]) - u @ np.linalg.inv(capacitance) @ v_inv_r
    weighted = np.einsum("ij,jk,ki->i", diff_t_inv_r, middle, diff)

    # Generalised determinant lemma: det(UV + R) = det(R) det(I + V inv(R) U)
    if r.shape[1] == block_size:
        det_r = np.linalg.det(r) ** num_blocks
    else:
        det_r = math.prod(
            np.linalg.det(r[:, block_size * i : block_size * (i + 1)])
            for i in range(num_blocks)
        )
    det_s = det_r * np.linalg.det(capacitance)

    with np.errstate(divide="ignore", invalid="ignore"):
        log_det = np.log(det_s)
    return -0.5 * (input_size * _LOG_TWO_PI + log_det + weighted)


def multivariate_gaussian_density(input, mean, covariance) -> np.ndarray:
    """Density of a multivariate Gaussian at every column of ``input``."""
    return np.exp(multivariate_gaussian_log_density(input, mean, covariance))


def multivariate_gaussian_density_uvr(input, mean, u, v, r) -> np.ndarray:
    """Density of a Gaussian whose covariance is ``u @ v + R``."""
    return np.exp(multivariate_gaussian_log_density_uvr(input, mean, u, v, r))


class CpuTimer:
    """Monotonic stopwatch reporting time in a chosen unit (milliseconds by default)."""

    def __init__(self, units_per_second: float = 1000.0) -> None:
        self.units_per_second = units_per_second
        self._start_time = time.monotonic()
        self._stop_time = self._start_time
        self._running = False

    def start(self) -> None:
        """Start the timer."""
        self._start_time = time.monotonic()
        self._running = True

    def stop(self) -> None:
        """Stop the timer."""
        self._stop_time = time.monotonic()
        self._running = False

    def elapsed(self) -> float:
        """Time between start and stop, or since start while running."""
        end = time.monotonic() if self._running else self._stop_time
        return (end - self._start_time) * self.units_per_second

    def now(self) -> float:
        """Current reading of the monotonic clock."""
        return time.monotonic() * self.units_per_second

    def is_running(self) -> bool:
        """Whether the timer is running."""
        return self._running


def throw_message(from_where: str, error_message: str, data_log: str = "") -> str:
    """Format an error report for an exception."""
    if not from_where or not error_message:
        return "UTILS::THROW_MESSAGE::EMPTY_THROW_REPORT"

    message = f"ERROR::{from_where}\nMESSAGE:\n\t{error_message}\n"
    if data_log:
        message += f"LOG:\n\t{data_log}\n"
    return message