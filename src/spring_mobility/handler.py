"""Spring-driven mobility handler for GrADyS-SIM NG.

Each registered node is pulled toward a goal position by three independent
scalar springs (x, y, z). The handler advances them on a fixed period and
stops rescheduling itself once every node has settled.
"""

import logging
from typing import Dict, Optional, Tuple

from gradysim.simulator.event import EventLoop
from gradysim.simulator.node import Node
from gradysim.simulator.handler.interface import INodeHandler
from gradysim.protocol.messages.telemetry import Telemetry

from .config import SpringMobilityConfiguration
from .spring import Spring

logger = logging.getLogger(__name__)

Vector = Tuple[float, float, float]


class SpringMobilityHandler(INodeHandler):
    """Spring-driven mobility handler for GrADyS-SIM NG."""

    def __init__(self, config: SpringMobilityConfiguration):
        self._config = config
        self._loop: EventLoop = None
        self._nodes: Dict[int, Node] = {}

        self._springs: Dict[int, Tuple[Spring, Spring, Spring]] = {}
        self._settled: Dict[int, bool] = {}

        self._update_counter: Dict[int, int] = {}
        self._update_scheduled = False

    def get_label(self) -> str:
        return "SpringMobilityHandler"

    def register_node(self, node: Node):
        node_id = node.id
        springs = tuple(
            Spring(coordinate, self._config.frequency, self._config.damping_ratio)
            for coordinate in node.position
        )
        self._nodes[node_id] = node
        self._springs[node_id] = springs
        self._settled[node_id] = True
        self._update_counter[node_id] = 0

    def inject(self, event_loop: EventLoop):
        self._loop = event_loop

    def initialize(self):
        if self._nodes:
            self._schedule_update()

    def finish(self):
        pass

    def finalize(self):
        settled = sum(1 for value in self._settled.values() if value)
        logger.debug("SpringMobilityHandler: %d/%d nodes settled at end", settled, len(self._nodes))

    def after_simulation_step(self, iteration: int, time: float):
        pass

    def set_goal(self, node_id: int, goal: Vector) -> None:
        springs = self._springs[node_id]
        for spring, coordinate in zip(springs, goal):
            spring.set_goal(coordinate)
        self._wake(node_id)

    def set_spring_parameters(self, node_id: int, frequency: float, damping_ratio: float) -> None:
        springs = self._springs[node_id]
        for spring in springs:
            spring.set_parameters(frequency, damping_ratio)
        self._wake(node_id)

    def get_goal(self, node_id: int) -> Optional[Vector]:
        springs = self._springs.get(node_id)
        return tuple(spring.get_goal() for spring in springs) if springs is not None else None

    def get_node_velocity(self, node_id: int) -> Optional[Vector]:
        springs = self._springs.get(node_id)
        return tuple(spring.get_velocity() for spring in springs) if springs is not None else None

    def get_node_position(self, node_id: int) -> Optional[Vector]:
        node = self._nodes.get(node_id)
        return node.position if node is not None else None

    def is_node_settled(self, node_id: int) -> bool:
        return self._settled[node_id]

    def _wake(self, node_id: int) -> None:
        if self._settled[node_id]:
            logger.debug("SpringMobilityHandler: node %s woke up", node_id)
        self._settled[node_id] = False
        self._schedule_update()

    def _schedule_update(self) -> None:
        if self._update_scheduled or self._loop is None:
            return
        self._loop.schedule_event(
            self._loop.current_time + self._config.update_rate,
            self._mobility_update,
        )
        self._update_scheduled = True

    def _mobility_update(self):
        self._update_scheduled = False
        dt = self._config.update_rate
        sleep_when_settled = self._config.sleep_when_settled

        for node_id, node in self._nodes.items():
            if sleep_when_settled and self._settled[node_id]:
                continue

            springs = self._springs[node_id]
            node.position = tuple(spring.advance(dt) for spring in springs)

            settled = all(spring.can_sleep() for spring in springs)
            if settled and not self._settled[node_id]:
                logger.debug("SpringMobilityHandler: node %s settled at %s", node_id, node.position)
            self._settled[node_id] = settled

            self._update_counter[node_id] += 1
            if self._should_emit_telemetry(node_id):
                self._emit_telemetry(node)

        if sleep_when_settled and all(self._settled.values()):
            logger.debug("SpringMobilityHandler: all nodes settled, going idle at t=%s", self._loop.current_time)
            return

        self._schedule_update()

    def _should_emit_telemetry(self, node_id: int) -> bool:
        if not self._config.send_telemetry:
            return False

        count = self._update_counter[node_id]
        return (count % self._config.telemetry_decimation) == 0

    def _emit_telemetry(self, node: Node):
        telemetry = Telemetry(current_position=node.position)

        def send_telemetry():
            node.protocol_encapsulator.handle_telemetry(telemetry)

        self._loop.schedule_event(
            self._loop.current_time,
            send_telemetry,
            f"Node {node.id} handle_telemetry",
        )
