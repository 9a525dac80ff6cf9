"""Plot step responses of a 1 Hz spring for several damping ratios.

Each curve starts at 0 with the goal at 1 and is stepped at 60 Hz with
`Spring.advance`, so the plot shows exactly what the integrator produces:
- d < 1 overshoots and rings
- d = 1 reaches the goal fastest without overshoot
- d > 1 creeps in slowly
"""

from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt

from spring_mobility import Spring


def step_response(frequency: float, damping_ratio: float, t: np.ndarray) -> np.ndarray:
    spring = Spring(0.0, frequency, damping_ratio, goal=1.0)
    out = np.empty_like(t)
    out[0] = spring.get_position()
    for k in range(1, len(t)):
        out[k] = spring.advance(t[k] - t[k - 1])
    return out


def main() -> None:
    t = np.linspace(0.0, 3.0, 181)

    plt.figure(figsize=(8.5, 5.5))
    plt.axhline(1.0, color="0.35", linestyle="--", linewidth=1.5, label="goal")

    for d in (0.0, 0.25, 0.5, 1.0, 2.0, 4.0):
        plt.plot(t, step_response(1.0, d, t), linewidth=2, label=rf"$d={d}$")

    plt.axhline(0.0, color="0.85", linewidth=1)

    plt.title("Spring step response (f = 1 Hz)")
    plt.xlabel("t (s)")
    plt.ylabel("position")
    plt.grid(True, alpha=0.25)
    plt.legend(loc="best")
    plt.tight_layout()

    out = "damping_regimes.png"
    plt.savefig(out, dpi=160)
    print(f"Saved: {out}")


if __name__ == "__main__":
    main()
