"""White noise acceleration model of a point moving in one, two or three dimensions."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .state_model import StateModel
from .utils import multivariate_gaussian_density
from .vector_description import VectorDescription


class Dim(Enum):
    """Number of spatial dimensions of the model."""

    ONE_D = 1
    TWO_D = 2
    THREE_D = 3


def _square_root(matrix: np.ndarray) -> np.ndarray:
    """A matrix ``S`` with ``S @ S.T == matrix`` for a symmetric PSD matrix."""
    eigenvalues, eigenvectors = np.linalg.eigh(matrix)
    return eigenvectors * np.sqrt(np.clip(eigenvalues, 0.0, None))


class WhiteNoiseAcceleration(StateModel):
    """Constant-velocity dynamics driven by white noise acceleration.

    The state holds, for each axis, a position followed by a velocity.
    """

    _SUPPORTED_PROPERTIES: frozenset[str] = frozenset()

    def __init__(self, dim: Dim, sampling_interval: float, tilde_q: float, seed: int = 1) -> None:
        super().__init__()
        self.dim = Dim(dim)
        self.sampling_interval = float(sampling_interval)
        self.tilde_q = float(tilde_q)
        self.seed = seed

        t = self.sampling_interval
        block_f = np.array([[1.0, t], [0.0, 1.0]])
        block_q = np.array([[t**3 / 3.0, t**2 / 2.0], [t**2 / 2.0, t]])
        axes = np.eye(self.dim.value)

        self._f = np.kron(axes, block_f)
        self._q = np.kron(axes, block_q) * self.tilde_q
        self._sqrt_q = _square_root(self._q)
        self._description = VectorDescription(2 * self.dim.value)
        self._rng = np.random.default_rng(seed)

    def set_property(self, property: str) -> bool:
        """Whether ``property`` is supported; this model supports none."""
        return property in self._SUPPORTED_PROPERTIES

    def get_state_description(self) -> VectorDescription:
        """Layout of the state vector."""
        return VectorDescription(
            self._description.linear_components,
            self._description.circular_components,
            self._description.noise_components,
            self._description.circular_type,
        )

    def get_noise_sample(self, num: int) -> np.ndarray:
        """``num`` samples of the process noise, one per column."""
        if num < 0:
            raise ValueError("num must not be negative")
        standard = self._rng.standard_normal((self._q.shape[0], num))
        return self._sqrt_q @ standard

    def get_noise_covariance_matrix(self) -> np.ndarray:
        """Covariance matrix of the process noise."""
        return self._q.copy()

    def get_state_transition_matrix(self) -> np.ndarray:
        """State transition matrix."""
        return self._f.copy()

    def get_transition_probability(self, prev_states, cur_states) -> np.ndarray:
        """Gaussian density of ``prev_states`` centred on its first column."""
        prev = np.asarray(prev_states, dtype=float)
        if prev.ndim == 1:
            prev = prev.reshape(-1, 1)
        return multivariate_gaussian_density(prev, prev[:, 0], self._q)

    def propagate(self, states) -> np.ndarray:
        """Apply the noiseless transition to every column of ``states``."""
        matrix = np.asarray(states, dtype=float)
        if matrix.ndim == 1:
            matrix = matrix.reshape(-1, 1)
        if matrix.shape[0] != self._f.shape[0]:
            raise ValueError(f"states must have {self._f.shape[0]} rows")
        return self._f @ matrix

    def motion(self, states) -> np.ndarray:
        """Apply the transition and add a process noise sample to every column."""
        propagated = self.propagate(states)
        return propagated + self.get_noise_sample(propagated.shape[1])