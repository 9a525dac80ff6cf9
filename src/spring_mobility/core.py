"""Pure mathematical functions for damped spring motion.

This module contains stateless operations for:
- Closed-form stepping of a damped harmonic oscillator
- Numerically stable evaluation near the regime boundaries
- Convergence and settle checks

The ODE solved by every step function is:

    f^2 * (X(t) - g) + 2*d*f*X'(t) + X''(t) = 0
    X(0) = p0,  X'(0) = v0

where f is the undamped angular frequency (rad/s), d the damping ratio and
g the goal. The solution takes one of three forms for 0 <= d < 1, d = 1 and
d > 1.

All functions operate on plain floats and return (position, velocity)
tuples, making them easy to test and reuse independently of `Spring`.
"""

import math
from typing import Tuple

TAU = 2.0 * math.pi

# Threshold below which sin(x*c)/c is replaced by its Maclaurin expansion
EPS = 1e-5

# Squared settle limits: ~1/3840 of a unit range, 0.01 units/s
SLEEP_OFFSET_SQ_LIMIT = (1.0 / 3840.0) ** 2
SLEEP_VELOCITY_SQ_LIMIT = 1e-2 ** 2


def converges(frequency: float, damping_ratio: float) -> bool:
    """Return True if a spring with these parameters settles on its goal."""
    return frequency * damping_ratio >= 0


def stable_sine_ratio(sine: float, divisor: float, length: float) -> float:
    """Evaluate sin(length * divisor) / divisor without blowing up near 0.

    `sine` must already hold sin(length * divisor). When the divisor is not
    small the plain ratio is returned. Otherwise the Maclaurin expansion
    with respect to the divisor is used:

        sin(l*c)/c = l - (l^3*c^2)/6 + (l^5*c^4)/120 + O(c^6)

    written in Horner form as l + ((l*l)*(c*c)*(c*c)/20 - c*c)*(l*l*l)/6.

    Args:
        sine: Precomputed sin(length * divisor).
        divisor: The term approaching zero (c, or f*c).
        length: The remaining factor of the sine argument (f*dt, or dt).

    Returns:
        The ratio, finite for any finite inputs.
    """
    if divisor > EPS:
        return sine / divisor

    divisor_sq = divisor ** 2
    return length + ((((length ** 2) * divisor_sq * divisor_sq) / 20 - divisor_sq) * (length ** 3)) / 6


def step_free(
    position: float,
    velocity: float,
    goal: float,
    dt: float,
) -> Tuple[float, float]:
    """Advance a spring with zero frequency (no restoring force)."""
    goal_distance = position - goal
    return (goal_distance + velocity * dt + goal, velocity)


def step_critically_damped(
    position: float,
    velocity: float,
    goal: float,
    angular_frequency: float,
    dt: float,
) -> Tuple[float, float]:
    """Advance a critically damped spring (d == 1).

    The solution has the form (A + B*t) * exp(-f*t).

    Args:
        position: Current position.
        velocity: Current velocity.
        goal: Target position.
        angular_frequency: Undamped angular frequency in rad/s.
        dt: Time step in seconds.

    Returns:
        New (position, velocity).
    """
    q = math.exp(-angular_frequency * dt)
    w = dt * q

    w_scaled = w * angular_frequency
    c0 = q + w_scaled
    c2 = q - w_scaled
    c3 = w * (angular_frequency ** 2)

    goal_distance = position - goal
    new_position = goal_distance * c0 + velocity * w + goal
    new_velocity = velocity * c2 - goal_distance * c3

    return (new_position, new_velocity)


def step_underdamped(
    position: float,
    velocity: float,
    goal: float,
    angular_frequency: float,
    damping_ratio: float,
    dt: float,
) -> Tuple[float, float]:
    """Advance an underdamped spring (0 <= d < 1).

    Damping ratios approaching 1 make c = sqrt(1 - d^2) tiny, and low
    frequencies make f*c tiny. Both sin(.)/c and sin(.)/(f*c) are grouped
    and evaluated with `stable_sine_ratio`.
    """
    frequency_step = angular_frequency * dt

    q = math.exp(-damping_ratio * frequency_step)
    c = math.sqrt(1 - damping_ratio ** 2)

    c_frequency_step = c * frequency_step
    i = math.cos(c_frequency_step)
    j = math.sin(c_frequency_step)

    # z = sin(dt*f*c)/c, y = sin(dt*f*c)/(f*c)
    z = stable_sine_ratio(j, c, frequency_step)
    y = stable_sine_ratio(j, angular_frequency * c, dt)

    goal_distance = position - goal
    new_position = (goal_distance * (i + z * damping_ratio) + velocity * y) * q + goal
    new_velocity = (velocity * (i - z * damping_ratio) - goal_distance * (z * angular_frequency)) * q

    return (new_position, new_velocity)


def step_overdamped(
    position: float,
    velocity: float,
    goal: float,
    angular_frequency: float,
    damping_ratio: float,
    dt: float,
) -> Tuple[float, float]:
    """Advance an overdamped spring (d > 1).

    The solution is a sum of two decaying exponentials with real distinct
    rates r1 = -f*(d - c) and r2 = -f*(d + c), c = sqrt(d^2 - 1):

        X(t) - g = co1*exp(r1*t) + co2*exp(r2*t)

    with co2 = (v0 - (p0 - g)*r1) / (r2 - r1) and r2 - r1 = -2*f*c.
    `angular_frequency` must be non-zero.
    """
    c = math.sqrt(damping_ratio ** 2 - 1)

    r1 = -angular_frequency * (damping_ratio - c)
    r2 = -angular_frequency * (damping_ratio + c)

    ec1 = math.exp(r1 * dt)
    ec2 = math.exp(r2 * dt)

    goal_distance = position - goal
    co2 = (goal_distance * r1 - velocity) / (2 * angular_frequency * c)
    co1 = ec1 * (goal_distance - co2)
    co_ec2 = co2 * ec2

    new_position = co1 + co_ec2 + goal
    new_velocity = co1 * r1 + co_ec2 * r2

    return (new_position, new_velocity)


def advance(
    position: float,
    velocity: float,
    goal: float,
    frequency: float,
    damping_ratio: float,
    dt: float,
) -> Tuple[float, float]:
    """Advance a spring state by dt seconds.

    The regime is picked from the damping ratio on every call, so the
    ratio may change between calls.

    Args:
        position: Current position.
        velocity: Current velocity.
        goal: Target position.
        frequency: Undamped frequency in Hz.
        damping_ratio: Damping ratio; frequency * damping_ratio must be >= 0.
        dt: Time step in seconds.

    Returns:
        New (position, velocity).
    """
    if frequency == 0:
        return step_free(position, velocity, goal, dt)

    # The ODE only sees f^2 and d*f, so (-f, -d) behaves exactly like (f, d).
    if frequency < 0:
        frequency = -frequency
        damping_ratio = -damping_ratio

    angular_frequency = frequency * TAU

    if damping_ratio == 1:
        return step_critically_damped(position, velocity, goal, angular_frequency, dt)
    elif damping_ratio < 1:
        return step_underdamped(position, velocity, goal, angular_frequency, damping_ratio, dt)
    else:
        return step_overdamped(position, velocity, goal, angular_frequency, damping_ratio, dt)


def is_settled(position: float, velocity: float, goal: float) -> bool:
    """Check whether remaining offset and speed are below the sleep limits."""
    return (
        velocity ** 2 <= SLEEP_VELOCITY_SQ_LIMIT
        and (goal - position) ** 2 <= SLEEP_OFFSET_SQ_LIMIT
    )
