"""Exceptions raised by spring_mobility."""


class InvalidParameters(ValueError):
    """Frequency and damping ratio would make the spring diverge."""

    def __init__(self, frequency: float, damping_ratio: float):
        super().__init__(
            f"Spring will not converge: frequency * damping_ratio must be >= 0 "
            f"(frequency={frequency!r}, damping_ratio={damping_ratio!r})"
        )
        self.frequency = frequency
        self.damping_ratio = damping_ratio


class InvalidInput(ValueError):
    """A step was requested with a non-finite time delta."""
