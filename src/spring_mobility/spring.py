"""Scalar damped spring with owned, mutable state.

A `Spring` animates one float toward a goal that may change at any time.
The caller drives it by calling `advance(dt)` (typically once per frame)
and may stop once `can_sleep()` returns True. Vector motion is built by
composing one `Spring` per axis.
"""

import math
from typing import Optional

from .core import advance, converges, is_settled
from .errors import InvalidInput, InvalidParameters


class Spring:
    """Second-order spring stepped with the exact closed-form solution.

    Not safe for unsynchronized use from several threads.
    """

    def __init__(
        self,
        start_position: float,
        frequency: float,
        damping_ratio: float,
        goal: Optional[float] = None,
    ):
        """Create a spring at rest.

        Args:
            start_position: Initial position. Velocity always starts at 0.
            frequency: Undamped frequency in Hz.
            damping_ratio: 0 undamped, < 1 underdamped, 1 critical, > 1 overdamped.
            goal: Target position. Defaults to `start_position`.

        Raises:
            InvalidParameters: If frequency * damping_ratio < 0.
        """
        if not converges(frequency, damping_ratio):
            raise InvalidParameters(frequency, damping_ratio)

        self._damping_ratio = damping_ratio
        self._frequency = frequency
        self._goal = start_position if goal is None else goal
        self._position = start_position
        self._velocity = 0.0

    def __repr__(self) -> str:
        return (
            f"Spring(position={self._position!r}, velocity={self._velocity!r}, "
            f"goal={self._goal!r}, frequency={self._frequency!r}, "
            f"damping_ratio={self._damping_ratio!r})"
        )

    def advance(self, delta_time: float) -> float:
        """Advance the simulation by `delta_time` seconds.

        Returns:
            The new position.

        Raises:
            InvalidInput: If delta_time is NaN or infinite.
        """
        if not math.isfinite(delta_time):
            raise InvalidInput(f"delta_time must be finite, got {delta_time!r}")

        self._position, self._velocity = advance(
            self._position,
            self._velocity,
            self._goal,
            self._frequency,
            self._damping_ratio,
            delta_time,
        )
        return self._position

    def can_sleep(self) -> bool:
        """True once offset and speed are too small to be visible."""
        return is_settled(self._position, self._velocity, self._goal)

    def get_goal(self) -> float:
        return self._goal

    def set_goal(self, goal: float) -> None:
        self._goal = goal

    def get_position(self) -> float:
        return self._position

    def set_position(self, position: float) -> None:
        """Teleport the spring; velocity is kept."""
        self._position = position

    def get_velocity(self) -> float:
        return self._velocity

    def set_velocity(self, velocity: float) -> None:
        self._velocity = velocity

    def get_frequency(self) -> float:
        return self._frequency

    def set_frequency(self, frequency: float) -> None:
        if not converges(frequency, self._damping_ratio):
            raise InvalidParameters(frequency, self._damping_ratio)

        self._frequency = frequency

    def get_damping_ratio(self) -> float:
        return self._damping_ratio

    def set_damping_ratio(self, damping_ratio: float) -> None:
        if not converges(self._frequency, damping_ratio):
            raise InvalidParameters(self._frequency, damping_ratio)

        self._damping_ratio = damping_ratio

    def set_parameters(self, frequency: float, damping_ratio: float) -> None:
        """Replace both parameters at once, validating them as a pair."""
        if not converges(frequency, damping_ratio):
            raise InvalidParameters(frequency, damping_ratio)

        self._frequency = frequency
        self._damping_ratio = damping_ratio
