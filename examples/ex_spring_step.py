"""Core-only example (no GrADyS-SIM runtime required).

This script animates one value with `spring_mobility.Spring` and prints a
table of position/velocity until the spring can sleep, then moves the goal
and repeats. It uses the preset values of the "Bouncy" profile in main.py.

It intentionally does NOT build a GrADyS-SIM NG simulation. For the full
integration example (handler + protocol + visualization), use `main.py` and
`protocol.py` at the repository root.

Usage:
    python ./examples/ex_spring_step.py
"""

from spring_mobility import Spring, SpringMobilityConfiguration


def animate(spring: Spring, dt: float, max_time: float = 10.0) -> float:
    """Step until the spring can sleep; return the elapsed time."""
    print(f"{'t (s)':>6} | {'position':>10} | {'velocity':>10}")
    print("-" * 34)

    elapsed = 0.0
    step = 0
    print_every = max(1, int(round(0.1 / dt)))
    while not spring.can_sleep() and elapsed < max_time:
        spring.advance(dt)
        elapsed += dt
        step += 1
        if step % print_every == 0:
            print(f"{elapsed:6.2f} | {spring.get_position():10.4f} | {spring.get_velocity():10.4f}")

    return elapsed


def main():
    config = SpringMobilityConfiguration(
        update_rate=1 / 60,
        frequency=1.0,
        damping_ratio=0.25,
    )

    spring = Spring(0.0, config.frequency, config.damping_ratio, goal=10.0)
    print(f"Spring: frequency={config.frequency} Hz, damping_ratio={config.damping_ratio}")
    print("Goal: 0 -> 10")
    settle_time = animate(spring, config.update_rate)
    print(f"Settled after {settle_time:.2f} s at {spring.get_position():.4f}")
    print()

    spring.set_goal(-5.0)
    spring.set_damping_ratio(1.0)
    print("Goal: 10 -> -5, damping_ratio -> 1.0")
    settle_time = animate(spring, config.update_rate)
    print(f"Settled after {settle_time:.2f} s at {spring.get_position():.4f}")


if __name__ == "__main__":
    main()
