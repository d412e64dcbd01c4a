"""Description of the layout of a state or measurement vector."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CircularType(Enum):
    """How the circular part of a vector is represented."""

    EULER = "euler"
    QUATERNION = "quaternion"


@dataclass
class VectorDescription:
    """Counts of the linear, circular and noise components of a vector.

    The vector is laid out as the linear components first, then the circular
    components, then the noise components. With quaternions each circular
    component takes four entries but has three degrees of freedom.
    """

    linear_components: int = 0
    circular_components: int = 0
    noise_components: int = 0
    circular_type: CircularType = CircularType.EULER

    def __post_init__(self) -> None:
        for name in ("linear_components", "circular_components", "noise_components"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    def linear_size(self) -> int:
        """Number of entries taken by the linear components."""
        return self.linear_components

    def circular_size(self) -> int:
        """Number of entries taken by the circular components."""
        if self.circular_type is CircularType.QUATERNION:
            return self.circular_components * 4
        return self.circular_components

    def noise_size(self) -> int:
        """Number of entries taken by the noise components."""
        return self.noise_components

    def total_size(self) -> int:
        """Total number of entries of the vector."""
        return self.linear_size() + self.circular_size() + self.noise_size()

    def dof_size(self) -> int:
        """Number of degrees of freedom of the vector."""
        if self.circular_type is CircularType.QUATERNION:
            # Quaternions live on a manifold whose tangent space is R^3.
            return self.linear_size() + self.circular_components * 3 + self.noise_size()
        return self.total_size()

    def add_noise_components(self, components: int) -> None:
        """Add ``components`` noise components to the description."""
        if components < 0:
            raise ValueError("components must not be negative")
        self.noise_components += components

    def noiseless_description(self) -> VectorDescription:
        """Return a copy of this description without noise components."""
        return VectorDescription(
            self.linear_components, self.circular_components, 0, self.circular_type
        )