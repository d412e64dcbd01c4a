import numpy as np
import pytest

from bayesfilt.simulated_state_model import SimulatedStateModel
from bayesfilt.state_model import StateModel
from bayesfilt.white_noise_acceleration import Dim, WhiteNoiseAcceleration


class _Increment(StateModel):
    def motion(self, states):
        return np.asarray(states) + 1.0


def test_trajectory_built_from_motion():
    sim = SimulatedStateModel(_Increment(), [0.0, 5.0], 3)
    np.testing.assert_allclose(sim.target, [[0.0, 1.0, 2.0], [5.0, 6.0, 7.0]])


def test_buffer_data_steps_through_trajectory():
    sim = SimulatedStateModel(_Increment(), [0.0, 5.0], 3)
    assert sim.get_data() is None
    seen = []
    for _ in range(3):
        assert sim.buffer_data() is True
        seen.append(sim.get_data())
    assert seen[0].shape == (2, 1)
    np.testing.assert_allclose(np.hstack(seen), sim.target)


def test_buffer_past_end_raises():
    sim = SimulatedStateModel(_Increment(), [0.0], 2)
    sim.buffer_data()
    sim.buffer_data()
    with pytest.raises(IndexError):
        sim.buffer_data()


def test_reset_restarts(capsys):
    sim = SimulatedStateModel(_Increment(), [0.0], 3)
    sim.buffer_data()
    sim.buffer_data()
    assert sim.set_property("reset") is True
    assert "Successfully reset state model." in capsys.readouterr().out
    sim.buffer_data()
    np.testing.assert_allclose(sim.get_data(), [[0.0]])


def test_unknown_property():
    sim = SimulatedStateModel(_Increment(), [0.0], 1)
    assert sim.set_property("other") is False


def test_get_state_model_returns_model():
    model = _Increment()
    sim = SimulatedStateModel(model, [0.0], 1)
    assert sim.get_state_model() is model


def test_zero_time_rejected():
    with pytest.raises(ValueError):
        SimulatedStateModel(_Increment(), [0.0], 0)


def test_with_white_noise_acceleration():
    model = WhiteNoiseAcceleration(Dim.TWO_D, 1.0, 10.0)
    initial = np.array([10.0, 0.0, 10.0, 0.0])
    sim = SimulatedStateModel(model, initial, 100)
    assert sim.target.shape == (4, 100)
    sim.buffer_data()
    np.testing.assert_allclose(sim.get_data()[:, 0], initial)
    assert np.all(np.isfinite(sim.target))