"""A precomputed trajectory of a state model, replayed one step at a time."""

from __future__ import annotations

import numpy as np

from .state_model import StateModel


class SimulatedStateModel:
    """Simulates ``simulation_time`` steps of a state model from an initial state."""

    def __init__(self, state_model: StateModel, initial_state, simulation_time: int) -> None:
        if simulation_time < 1:
            raise ValueError("simulation_time must be at least 1")
        self.simulation_time = simulation_time
        self._state_model = state_model
        self._current_time = 0
        self._data = None

        initial = np.asarray(initial_state, dtype=float).reshape(-1)
        columns = [initial]
        for _ in range(1, simulation_time):
            nxt = np.asarray(state_model.motion(columns[-1].reshape(-1, 1)), dtype=float)
            columns.append(nxt.reshape(-1))
        self.target = np.column_stack(columns)

    def buffer_data(self) -> bool:
        """Advance one step and make its state available through ``get_data``."""
        if self._current_time >= self.simulation_time:
            raise IndexError("the simulation has no more steps")
        self._current_time += 1
        self._data = self.target[:, self._current_time - 1 : self._current_time].copy()
        return True

    def get_data(self):
        """The state of the current step as a column, or None before the first step."""
        return None if self._data is None else self._data.copy()

    def set_property(self, property: str) -> bool:
        """Handle ``"reset"``, which restarts the simulation; other properties return False."""
        if property == "reset":
            self._current_time = 0
            print("Successfully reset state model.")
            return True
        return False

    def get_state_model(self) -> StateModel:
        """The state model the trajectory was generated with."""
        return self._state_model