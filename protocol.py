"""
Protocol demonstrating spring-based mobility using SpringMobilityHandler.

Uses direct method calls instead of standard GrADyS mobility commands.
"""

import logging
import os

from gradysim.protocol.interface import IProtocol
from gradysim.protocol.messages.telemetry import Telemetry

import pandas as pd

TELEMETRY_CSV = "spring_telemetry.csv"


class SpringProtocol(IProtocol):
    """Protocol that moves a node's goal through waypoints via SpringMobilityHandler."""

    def __init__(self):
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self.node_id = None
        self.initial_position = None
        self.goal = None
        self.df = None
        self.spring_handler = None

        self._waypoints = [
            (30.0, 0.0, 10.0),
            (30.0, 30.0, 20.0),
            (0.0, 30.0, 10.0),
            (-20.0, -10.0, 0.0),
            (0.0, 0.0, 0.0),
        ]
        self._waypoint_index = 0

    def initialize(self):
        """Initialize and set the first goal."""
        self.node_id = self.provider.get_id()
        self._waypoint_index = 0
        self.goal = self._waypoints[self._waypoint_index]

        handlers = getattr(self.provider, "handlers", {}) or {}
        self.spring_handler = handlers.get("SpringMobilityHandler")

        if self.spring_handler is None:
            self._logger.warning("Node %s: SpringMobilityHandler not available", self.node_id)
            return

        self.initial_position = self.spring_handler.get_node_position(self.node_id)
        self.spring_handler.set_goal(self.node_id, self.goal)
        print(f"Node {self.node_id} initialized, goal: {self.goal}")

        self.df = pd.DataFrame(columns=[
            "t",
            "x", "y", "z",
            "vx", "vy", "vz",
            "gx", "gy", "gz",
        ])
        self._record_sample()

        self.schedule_next_goal_timer(5.0)

    def schedule_next_goal_timer(self, timeout: float):
        self.provider.schedule_timer("next_goal_timer", self.provider.current_time() + timeout)

    def handle_timer(self, timer: str):
        """Advance through waypoints; once the last is reached, stay there."""
        if timer == "next_goal_timer":
            if self.spring_handler:
                self._waypoint_index = min(self._waypoint_index + 1, len(self._waypoints) - 1)
                self.goal = self._waypoints[self._waypoint_index]
                self.spring_handler.set_goal(self.node_id, self.goal)
                self._logger.debug("Node %s: new goal %s", self.node_id, self.goal)
            self.schedule_next_goal_timer(5.0)

    def handle_packet(self, message: str):
        pass

    def handle_telemetry(self, telemetry: Telemetry) -> None:
        """Collect time, position, velocity and goal on telemetry."""
        if self.df is None:
            return
        self._record_sample()

    def _record_sample(self) -> None:
        pos = self.spring_handler.get_node_position(self.node_id)
        vel = self.spring_handler.get_node_velocity(self.node_id)
        if pos is None or vel is None:
            return
        t = self.provider.current_time()
        goal = self.goal or (0.0, 0.0, 0.0)
        self.df.loc[len(self.df)] = [t, pos[0], pos[1], pos[2], vel[0], vel[1], vel[2], goal[0], goal[1], goal[2]]

    def finish(self):
        """Called when simulation ends."""
        if self.initial_position is None or self.spring_handler is None:
            return

        final_position = self.spring_handler.get_node_position(self.node_id)
        error = tuple(p - g for p, g in zip(final_position, self.goal))
        error_norm = sum(e ** 2 for e in error) ** 0.5

        print()
        print("=" * 60)
        print("SIMULATION RESULTS")
        print("=" * 60)
        print(f"Node {self.node_id}")
        print(f"  Initial position: ({self.initial_position[0]:.2f}, {self.initial_position[1]:.2f}, {self.initial_position[2]:.2f})")
        print(f"  Final position:   ({final_position[0]:.2f}, {final_position[1]:.2f}, {final_position[2]:.2f})")
        print(f"  Final goal:       ({self.goal[0]:.2f}, {self.goal[1]:.2f}, {self.goal[2]:.2f})")
        print(f"  Distance to goal: {error_norm:.4f} m")
        print(f"  Settled:          {self.spring_handler.is_node_settled(self.node_id)}")
        print("=" * 60)

        if self.df is None or len(self.df) < 2:
            return

        csv_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), TELEMETRY_CSV)
        self.df.to_csv(csv_path, index=False)
        print(f"Telemetry saved to {csv_path}")

        try:
            import matplotlib.pyplot as plt

            fig, axes = plt.subplots(3, 1, sharex=True, figsize=(10, 8))
            for ax, axis in zip(axes, ("x", "y", "z")):
                line = ax.plot(self.df["t"], self.df[axis], label=axis)[0]
                ax.plot(
                    self.df["t"],
                    self.df[f"g{axis}"],
                    label=f"{axis}_goal",
                    linestyle="--",
                    drawstyle="steps-post",
                    color=line.get_color(),
                )
                ax.set_ylabel(f"{axis} (m)")
                ax.grid(True)
                ax.legend(loc="best")
            axes[-1].set_xlabel("time (s)")

            fig.suptitle(f"Node {self.node_id}: position and goal vs time")
            plt.tight_layout(rect=(0, 0, 1, 0.96))
            plt.show()
        except ImportError:
            print("matplotlib not available; skipping plots")
