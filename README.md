# bayesfilt

Building blocks for recursive Bayesian filters, built on NumPy. Vectors and sets of
points are NumPy arrays with one point per column.

## Modules

- `bayesfilt.vector_description`: `VectorDescription` and `CircularType` describe how a
  vector is laid out. Linear components come first, then circular components (Euler
  angles or unit quaternions), then noise components. Its methods `linear_size`,
  `circular_size`, `noise_size`, `total_size` and `dof_size` give the sizes of that
  layout. `add_noise_components` and `noiseless_description` change or strip the noise
  part. A quaternion takes four entries and has three degrees of freedom.
- `bayesfilt.directional_statistics`: `directional_add`, `directional_sub` and
  `directional_mean` add, subtract and average angles. Results are wrapped into
  (-pi, pi].
- `bayesfilt.quaternion`: unit quaternions in `(w, x, y, z)` order.
  - `quaternion_to_rotation_vector` and `rotation_vector_to_quaternion` convert between
    quaternions and rotation vectors.
  - `sum_quaternion_rotation_vector` applies rotation vectors to a quaternion in the
    global frame.
  - `diff_quaternion` gives the rotation vectors that take one quaternion to each of a set.
  - `mean_quaternion` returns a weighted mean. This is the eigenvector with the largest
    eigenvalue of `sum w_i q_i q_i^T`.
- `bayesfilt.utils`: general helpers.
  - `log_sum_exp`.
  - `multivariate_gaussian_density` and `multivariate_gaussian_log_density`.
  - `multivariate_gaussian_density_uvr` and `multivariate_gaussian_log_density_uvr`, for
    covariances of the form `U V + R` with a block-diagonal `R`. These use the Woodbury
    identity.
  - `CpuTimer`, a monotonic stopwatch that reports in milliseconds by default.
  - `throw_message`, which formats an error report.
- `bayesfilt.sigma_point`: the unscented transform.
  - `unscented_weights` and `UTWeight` (with `UTWeight.from_description`) give the weights.
  - `sigma_point` draws the sigma points of a Gaussian.
  - `unscented_transform` propagates a Gaussian through a function. It returns the output
    mean, the output covariance and the input/output cross covariance.
- `bayesfilt.state_model`: `StateModel` is a base class with skip status, an optional
  exogenous model and a recorded sampling time. Its operations that depend on the
  dynamics raise `UnsupportedOperationError` unless a subclass provides them.
- `bayesfilt.white_noise_acceleration`: `WhiteNoiseAcceleration` is a constant-velocity
  model driven by white-noise acceleration, in one, two or three dimensions (`Dim`). The
  state holds a position and a velocity per axis.
  - `propagate` applies the transition matrix.
  - `motion` applies the transition and also adds a sampled process noise.
  - `get_noise_covariance_matrix`, `get_state_transition_matrix` and `get_noise_sample`
    expose the model. Noise samples are seeded (seed 1 by default).
- `bayesfilt.simulated_state_model`: `SimulatedStateModel` precomputes a trajectory of a
  state model from an initial state. It replays the trajectory one step at a time:
  - `buffer_data` advances one step and raises `IndexError` past the end.
  - `get_data` returns the current state.
  - `set_property("reset")` restarts the replay.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import numpy as np

from bayesfilt.quaternion import quaternion_to_rotation_vector, rotation_vector_to_quaternion
from bayesfilt.sigma_point import UTWeight, unscented_transform
from bayesfilt.white_noise_acceleration import Dim, WhiteNoiseAcceleration

r = np.array([[1.1], [1.2], [1.3]])
q = rotation_vector_to_quaternion(r)
assert np.allclose(quaternion_to_rotation_vector(q), r)

model = WhiteNoiseAcceleration(Dim.TWO_D, 1.0, 10.0)
description = model.get_state_description()
weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)

mean = np.array([4.0, 0.04, 15.0, 0.4])
covariance = np.diag([0.05**2, 0.05**2, 0.01**2, 0.01**2])

predicted_mean, predicted_covariance, cross = unscented_transform(
    mean, covariance, description, weight,
    lambda points: (model.propagate(points), description),
)
# unscented_transform does not add process noise; add it for an additive model.
predicted_covariance += model.get_noise_covariance_matrix()
```

## What this package does not do

The package gives the pieces that a filter is made of. It does not give a filter. It has
no Kalman or particle filter driver, and no prediction or correction step classes. It has
no measurement or sensor models and no likelihood models. It does not log results to
files. It has no command-line program. To run a filter, write the loop yourself from
`sigma_point`, `unscented_transform` and the state models.