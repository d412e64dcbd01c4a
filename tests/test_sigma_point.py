import math

import numpy as np
import pytest

from bayesfilt.quaternion import rotation_vector_to_quaternion
from bayesfilt.sigma_point import UTWeight, sigma_point, unscented_transform, unscented_weights
from bayesfilt.vector_description import CircularType, VectorDescription


def identity(description):
    def function(points):
        return points.copy(), description

    return function


def test_unscented_weights_pinned_values():
    mean, covariance, c = unscented_weights(4, 1.0, 2.0, 0.0)
    assert c == 4.0
    assert mean[0] == 0.0
    assert covariance[0] == 2.0


@pytest.mark.parametrize("n, alpha, beta, kappa", [(1, 1.0, 2.0, 0.0), (4, 0.5, 2.0, 1.0), (6, 1.0, 0.0, 3.0)])
def test_unscented_weights_invariants(n, alpha, beta, kappa):
    mean, covariance, c = unscented_weights(n, alpha, beta, kappa)
    assert mean.shape == (2 * n + 1,)
    assert covariance.shape == (2 * n + 1,)
    assert math.isclose(mean.sum(), 1.0)
    np.testing.assert_allclose(covariance[1:], mean[1:])
    assert math.isclose(covariance[0] - mean[0], 1.0 - alpha**2 + beta)


def test_unscented_weights_degenerate_raises():
    with pytest.raises(ValueError):
        unscented_weights(0, 1.0, 2.0, 0.0)


def test_weight_from_quaternion_description_uses_dof():
    description = VectorDescription(1, 2, 0, CircularType.QUATERNION)
    weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)
    assert weight.mean.shape[0] == 2 * description.dof_size() + 1
    assert weight.c == pytest.approx(description.dof_size())


def test_weight_lengths_must_match():
    with pytest.raises(ValueError):
        UTWeight(np.ones(3), np.ones(5), 1.0)


def test_linear_sigma_points_reproduce_mean_and_covariance():
    description = VectorDescription(2)
    mean = np.array([1.0, 2.0])
    covariance = np.array([[2.0, 0.5], [0.5, 1.0]])
    weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)
    points = sigma_point(mean, covariance, description, weight.c)
    assert points.shape == (2, 5)
    np.testing.assert_allclose(points[:, 0], mean)
    np.testing.assert_allclose(points @ weight.mean, mean)
    offsets = points - mean[:, None]
    np.testing.assert_allclose((offsets * weight.mean) @ offsets.T, covariance)


def test_quaternion_sigma_points_are_unit_and_start_at_mean():
    description = VectorDescription(0, 1, 0, CircularType.QUATERNION)
    quaternion = rotation_vector_to_quaternion(np.array([[0.3], [0.2], [0.1]]))[:, 0]
    covariance = np.diag([1e-3, 2e-3, 3e-3])
    points = sigma_point(quaternion, covariance, description, 3.0)
    assert points.shape == (4, 7)
    np.testing.assert_allclose(points[:, 0], quaternion)
    np.testing.assert_allclose(np.linalg.norm(points, axis=0), np.ones(7))


def test_sigma_point_rejects_wrong_sizes():
    description = VectorDescription(2)
    with pytest.raises(ValueError):
        sigma_point(np.zeros(3), np.eye(2), description, 1.0)
    with pytest.raises(ValueError):
        sigma_point(np.zeros(2), np.eye(3), description, 1.0)


def test_linear_map_is_exact():
    description = VectorDescription(2)
    mean = np.array([1.0, 2.0])
    covariance = np.array([[2.0, 0.5], [0.5, 1.0]])
    matrix = np.array([[1.0, 1.0], [0.0, 1.0]])
    weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)

    out_mean, out_cov, cross = unscented_transform(
        mean, covariance, description, weight, lambda x: (matrix @ x, VectorDescription(2))
    )
    np.testing.assert_allclose(out_mean, matrix @ mean)
    np.testing.assert_allclose(out_cov, matrix @ covariance @ matrix.T)
    np.testing.assert_allclose(cross, covariance @ matrix.T)


def test_circular_identity_wraps_around_pi():
    description = VectorDescription(0, 1)
    mean = np.array([math.pi - 0.05])
    covariance = np.array([[0.01]])
    weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)
    out_mean, out_cov, cross = unscented_transform(
        mean, covariance, description, weight, identity(description)
    )
    assert out_mean[0] == pytest.approx(math.pi - 0.05)
    np.testing.assert_allclose(out_cov, covariance)
    np.testing.assert_allclose(cross, covariance)


def test_quaternion_identity_recovers_gaussian():
    description = VectorDescription(0, 1, 0, CircularType.QUATERNION)
    quaternion = rotation_vector_to_quaternion(np.array([[0.3], [0.2], [0.1]]))[:, 0]
    covariance = np.array([[1e-3, 2e-4, 0.0], [2e-4, 2e-3, 1e-4], [0.0, 1e-4, 3e-3]])
    weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)
    out_mean, out_cov, cross = unscented_transform(
        quaternion, covariance, description, weight, identity(description)
    )
    assert out_mean.shape == (4,)
    assert abs(float(out_mean @ quaternion)) == pytest.approx(1.0)
    np.testing.assert_allclose(out_cov, covariance, atol=1e-9)
    np.testing.assert_allclose(cross, covariance, atol=1e-9)


def test_noise_components_add_to_covariance_and_are_left_out_of_cross():
    description = VectorDescription(2, 0, 2)
    mean = np.array([1.0, 2.0, 0.0, 0.0])
    state_cov = np.array([[2.0, 0.5], [0.5, 1.0]])
    noise_cov = np.array([[0.3, 0.0], [0.0, 0.4]])
    covariance = np.block([[state_cov, np.zeros((2, 2))], [np.zeros((2, 2)), noise_cov]])
    weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)

    out_mean, out_cov, cross = unscented_transform(
        mean, covariance, description, weight, lambda x: (x[:2] + x[2:], VectorDescription(2))
    )
    np.testing.assert_allclose(out_mean, mean[:2])
    np.testing.assert_allclose(out_cov, state_cov + noise_cov)
    assert cross.shape == (2, 2)
    np.testing.assert_allclose(cross, state_cov)


def test_transform_rejects_mismatched_weight():
    description = VectorDescription(2)
    weight = UTWeight.from_description(VectorDescription(3), 1.0, 2.0, 0.0)
    with pytest.raises(ValueError):
        unscented_transform(np.zeros(2), np.eye(2), description, weight, identity(description))


def test_transform_rejects_wrong_column_count():
    description = VectorDescription(2)
    weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)
    with pytest.raises(ValueError):
        unscented_transform(
            np.zeros(2), np.eye(2), description, weight, lambda x: (x[:, :2], description)
        )


def test_transform_propagates_function_errors():
    description = VectorDescription(2)
    weight = UTWeight.from_description(description, 1.0, 2.0, 0.0)

    def failing(points):
        raise RuntimeError("no measurement")

    with pytest.raises(RuntimeError, match="no measurement"):
        unscented_transform(np.zeros(2), np.eye(2), description, weight, failing)