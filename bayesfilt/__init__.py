"""Building blocks for recursive Bayesian filtering: vector layouts, angle and quaternion
statistics, Gaussian densities, the unscented transform and simple state models."""

__version__ = "0.10.0"

__all__ = [
    "directional_statistics",
    "quaternion",
    "sigma_point",
    "simulated_state_model",
    "state_model",
    "utils",
    "vector_description",
    "white_noise_acceleration",
]