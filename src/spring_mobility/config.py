"""
Configuration dataclass for the spring mobility handler.
"""

from dataclasses import dataclass


@dataclass
class SpringMobilityConfiguration:
    """
    Configuration parameters for the SpringMobilityHandler.

    Every node gets one spring per axis (x, y, z), all sharing these parameters.

    Attributes:
        update_rate: Time interval (in seconds) between spring updates. This is
            the delta time passed to every spring step.
            Typical: 1/60–0.05 s.
        frequency: Undamped frequency of each spring (Hz). Higher is snappier.
            Typical: 0.5–5 Hz.
        damping_ratio: 0 undamped, < 1 overshoots, 1 critical, > 1 sluggish.
            frequency * damping_ratio must be >= 0.
        sleep_when_settled: If True, stop scheduling updates once every node's
            springs can sleep. Setting a new goal wakes the handler up.
        send_telemetry: If True, emit Telemetry messages after position updates.
        telemetry_decimation: Emit telemetry every N spring updates (default: 1).
    """
    update_rate: float
    frequency: float
    damping_ratio: float
    sleep_when_settled: bool = True
    send_telemetry: bool = True
    telemetry_decimation: int = 1
