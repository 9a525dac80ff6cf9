"""Plot spring telemetry from spring_telemetry.csv.

Creates one figure with:
- distance to goal vs time
- speed vs time

Run:
    python plot_telemetry.py

By default, reads ./spring_telemetry.csv (written by protocol.py at the end
of a main.py run).
"""

from __future__ import annotations

import os

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

# Offset below which a spring is allowed to sleep
SETTLE_OFFSET = 1.0 / 3840.0


def main() -> int:
    script_dir = os.path.dirname(os.path.abspath(__file__))
    csv_path = os.path.join(script_dir, "spring_telemetry.csv")

    if not os.path.exists(csv_path):
        print(f"CSV not found: {csv_path}")
        return 1

    df = pd.read_csv(csv_path)

    required_cols = {"t", "x", "y", "z", "vx", "vy", "vz", "gx", "gy", "gz"}
    missing = required_cols - set(df.columns)
    if missing:
        print(f"Missing columns in CSV: {sorted(missing)}")
        return 1

    if df.empty:
        print("CSV is empty.")
        return 0

    df = df.apply(pd.to_numeric, errors="coerce").dropna().sort_values("t")

    offset = df[["x", "y", "z"]].to_numpy() - df[["gx", "gy", "gz"]].to_numpy()
    df["distance"] = np.linalg.norm(offset, axis=1)
    df["speed"] = np.linalg.norm(df[["vx", "vy", "vz"]].to_numpy(), axis=1)

    fig, (ax_d, ax_v) = plt.subplots(2, 1, sharex=True, figsize=(10, 6))
    fig.suptitle("Spring telemetry")

    ax_d.plot(df["t"], df["distance"], linewidth=1.2)
    ax_d.axhline(SETTLE_OFFSET, color="k", linewidth=0.8, linestyle="--", alpha=0.5, label="settle offset")
    ax_d.set_yscale("symlog", linthresh=SETTLE_OFFSET)
    ax_d.set_ylabel("||p - goal|| (m)")
    ax_d.grid(True, alpha=0.3)
    ax_d.legend(loc="best")

    ax_v.plot(df["t"], df["speed"], linewidth=1.0)
    ax_v.set_ylabel("||v|| (m/s)")
    ax_v.set_xlabel("time (s)")
    ax_v.grid(True, alpha=0.3)

    fig.tight_layout()
    plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
