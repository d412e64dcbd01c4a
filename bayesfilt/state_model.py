"""Base class of the models describing how a state evolves."""

from __future__ import annotations


class UnsupportedOperationError(RuntimeError):
    """Raised when a state model does not provide a requested operation."""

    def __init__(self, model: object, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"{type(model).__name__}.{operation} is not provided by this state model"
        )


class StateModel:
    """A state model that can be skipped and may carry an exogenous model.

    The methods that depend on the particular dynamics raise
    ``UnsupportedOperationError`` unless a subclass provides them.
    """

    def __init__(self) -> None:
        self._skip = False
        self._exogenous_model = None
        self.sampling_time: float | None = None

    def skip(self, what_step: str, status: bool) -> bool:
        """Set the skip status of ``"state"`` or ``"exogenous"``.

        Returns False for any other step.
        """
        if what_step == "state":
            self._skip = bool(status)
        elif what_step == "exogenous":
            self.exogenous_model().skip(what_step, status)
        else:
            return False
        return True

    def is_skipping(self) -> bool:
        """Whether the state step is being skipped."""
        return self._skip

    def add_exogenous_model(self, exogenous_model) -> bool:
        """Attach an exogenous model, replacing any previous one."""
        self._exogenous_model = exogenous_model
        return True

    def have_exogenous_model(self) -> bool:
        """Whether an exogenous model is attached."""
        return self._exogenous_model is not None

    def exogenous_model(self):
        """The attached exogenous model."""
        if self._exogenous_model is None:
            raise RuntimeError(
                "No exogenous model present in the state model. "
                "Use add_exogenous_model() to add one."
            )
        return self._exogenous_model

    def get_jacobian(self):
        """Jacobian of the state transition."""
        raise UnsupportedOperationError(self, "get_jacobian")

    def get_transition_probability(self, prev_states, cur_states):
        """Probability of moving from ``prev_states`` to ``cur_states``."""
        raise UnsupportedOperationError(self, "get_transition_probability")

    def get_noise_covariance_matrix(self):
        """Covariance matrix of the process noise."""
        raise UnsupportedOperationError(self, "get_noise_covariance_matrix")

    def get_noise_sample(self, num):
        """``num`` samples of the process noise, one per column."""
        raise UnsupportedOperationError(self, "get_noise_sample")

    def set_sampling_time(self, time) -> bool:
        """Record the sampling time; the base dynamics do not depend on it."""
        self.sampling_time = float(time)
        return True