"""Simple spring-based mobility example with visualization.

This script builds a GrADyS-SIM simulation with a single node moved by
SpringMobilityHandler. SpringProtocol sets the node's goal in initialize()
and then moves it through a list of waypoints via a timer (every 5 seconds).

Initial node position is set in builder.add_node().
"""

import logging

# Suppress websockets handshake warnings
logging.getLogger('websockets').setLevel(logging.CRITICAL)

from gradysim.simulator.handler.communication import CommunicationHandler, CommunicationMedium
from gradysim.simulator.handler.timer import TimerHandler
from gradysim.simulator.handler.visualization import VisualizationHandler, VisualizationConfiguration
from gradysim.simulator.simulation import SimulationBuilder, SimulationConfiguration
from spring_mobility import SpringMobilityHandler, SpringMobilityConfiguration
from protocol import SpringProtocol


# ============================================================
# Spring presets (choose by editing ONE variable)
#
# Profiles: Snappy, Smooth, Bouncy, Sluggish, Custom
# - Snappy/Smooth are critically damped: fastest approach without overshoot.
# - Bouncy overshoots the goal a few times before settling.
# - Sluggish is overdamped and creeps in slowly.
# ============================================================

SPRING_PROFILE: str = "Bouncy"  # Choose spring profile here


CUSTOM_SPRING_CONFIG = SpringMobilityConfiguration(
    update_rate=1 / 60,        # Update at 60 Hz
    frequency=1.5,             # Undamped frequency: 1.5 Hz
    damping_ratio=0.8,         # Slight overshoot
    sleep_when_settled=True,   # Stop updating once the node is at rest
    send_telemetry=True,       # Enable telemetry
    telemetry_decimation=1,    # Send telemetry every update
)


SPRING_PRESETS: dict[str, SpringMobilityConfiguration] = {
    "Snappy": SpringMobilityConfiguration(
        update_rate=1 / 60,
        frequency=3.0,
        damping_ratio=1.0,
    ),
    "Smooth": SpringMobilityConfiguration(
        update_rate=1 / 60,
        frequency=0.8,
        damping_ratio=1.0,
    ),
    "Bouncy": SpringMobilityConfiguration(
        update_rate=1 / 60,
        frequency=1.0,
        damping_ratio=0.25,
    ),
    "Sluggish": SpringMobilityConfiguration(
        update_rate=0.04,
        frequency=0.5,
        damping_ratio=2.0,
    ),
    "Custom": CUSTOM_SPRING_CONFIG,
}


def main():
    """Execute the spring mobility simulation."""

    # Simulation parameters
    duration = 30  # Simulation duration in seconds
    debug = False  # Simulation debug mode
    real_time = True  # Simulation real time mode - True to see movement in real-time
    builder = SimulationBuilder(
        SimulationConfiguration(
            duration=duration,
            debug=debug,
            real_time=real_time
        )
    )

    # Add the communication handler
    medium = CommunicationMedium(
        transmission_range=200,
        delay=0.0,
        failure_rate=0.0
    )
    builder.add_handler(CommunicationHandler(medium))

    # Add the timer handler
    builder.add_handler(TimerHandler())

    # Add the spring mobility handler
    # - The protocol sets a goal position.
    # - The handler pulls the node toward it with one spring per axis.
    # - Once every axis has settled the handler stops scheduling updates until
    #   a new goal arrives.
    profile = (SPRING_PROFILE or "").strip()
    spring_config = SPRING_PRESETS.get(profile)
    if spring_config is None:
        valid = ", ".join(sorted(SPRING_PRESETS.keys()))
        raise ValueError(f"Unknown SPRING_PROFILE={SPRING_PROFILE!r}. Valid options: {valid}")

    print(
        "Spring preset: "
        f"{profile} "
        f"(update_rate={spring_config.update_rate:.4f}, "
        f"frequency={spring_config.frequency}, damping_ratio={spring_config.damping_ratio})"
    )
    builder.add_handler(SpringMobilityHandler(spring_config))

    # Add the visualization handler
    vis_config = VisualizationConfiguration(
        open_browser=True,
        update_rate=0.1  # Update visualization every 0.1 seconds
    )
    builder.add_handler(VisualizationHandler(vis_config))

    # Add a single node at the origin
    builder.add_node(SpringProtocol, (0, 0, 0))

    # Build and start simulation
    simulation = builder.build()
    print("=" * 60)
    print("Starting spring mobility simulation")
    print("Node goal is set by SpringProtocol (and changes every 5 seconds)")
    print("Visualization will open in browser automatically")
    print("=" * 60)
    try:
        simulation.start_simulation()
    except (BrokenPipeError, EOFError) as e:
        logging.getLogger(__name__).debug(f"Ignored visualization shutdown error: {e}")
    finally:
        print("=" * 60)
        print("Simulation completed!")
        print("=" * 60)


if __name__ == "__main__":
    main()
