"""Spring-mobility building blocks.

This package contains a closed-form damped spring integrator, its pure math
core, and a GrADyS-SIM NG handler that uses it to move nodes toward goals.
It is intended to be imported by a larger project.
"""

from .config import SpringMobilityConfiguration
from .errors import InvalidInput, InvalidParameters
from .handler import SpringMobilityHandler
from .spring import Spring
from .core import (
    advance,
    converges,
    is_settled,
    stable_sine_ratio,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidInput",
    "InvalidParameters",
    "Spring",
    "SpringMobilityConfiguration",
    "SpringMobilityHandler",
    "advance",
    "converges",
    "is_settled",
    "stable_sine_ratio",
]
