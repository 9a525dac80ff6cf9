"""
Tests for SpringMobilityHandler.

The handler is exercised with a minimal in-memory event loop and node so no
simulation has to be built.
"""

import pytest
from spring_mobility import InvalidParameters, SpringMobilityConfiguration, SpringMobilityHandler


class FakeEventLoop:
    """Just enough of gradysim's EventLoop: a time-ordered queue of callbacks."""

    def __init__(self):
        self.current_time = 0.0
        self.events = []

    def schedule_event(self, timestamp, callback, context=""):
        self.events.append((timestamp, callback))

    def run(self, max_events=10000):
        processed = 0
        while self.events and processed < max_events:
            self.events.sort(key=lambda event: event[0])
            timestamp, callback = self.events.pop(0)
            self.current_time = timestamp
            callback()
            processed += 1
        return processed


class FakeEncapsulator:
    def __init__(self):
        self.telemetry = []

    def handle_telemetry(self, telemetry):
        self.telemetry.append(telemetry)


class FakeNode:
    def __init__(self, node_id, position):
        self.id = node_id
        self.position = position
        self.protocol_encapsulator = FakeEncapsulator()


def make_handler(**overrides):
    params = dict(update_rate=0.02, frequency=2.0, damping_ratio=1.0)
    params.update(overrides)
    handler = SpringMobilityHandler(SpringMobilityConfiguration(**params))
    loop = FakeEventLoop()
    node = FakeNode(0, (1.0, 2.0, 3.0))
    handler.register_node(node)
    handler.inject(loop)
    return handler, loop, node


class TestRegistration:
    """Test node registration."""

    def test_label(self):
        handler, _, _ = make_handler()
        assert handler.get_label() == "SpringMobilityHandler"

    def test_springs_start_at_node_position(self):
        handler, _, node = make_handler()
        assert handler.get_goal(node.id) == (1.0, 2.0, 3.0)
        assert handler.get_node_velocity(node.id) == (0.0, 0.0, 0.0)
        assert handler.get_node_position(node.id) == (1.0, 2.0, 3.0)
        assert handler.is_node_settled(node.id) is True

    def test_invalid_config_raises(self):
        with pytest.raises(InvalidParameters):
            make_handler(frequency=2.0, damping_ratio=-1.0)

    def test_unknown_node(self):
        handler, _, _ = make_handler()
        assert handler.get_node_position(99) is None
        assert handler.get_node_velocity(99) is None
        assert handler.get_goal(99) is None
        with pytest.raises(KeyError):
            handler.set_goal(99, (0.0, 0.0, 0.0))


class TestUpdateLoop:
    """Test the periodic spring update and idle behaviour."""

    def test_initialize_schedules_first_update(self):
        handler, loop, _ = make_handler()
        handler.initialize()
        assert len(loop.events) == 1
        assert loop.events[0][0] == pytest.approx(0.02)

    def test_settled_nodes_go_idle(self):
        """Nothing to do at the start: one update, then no rescheduling."""
        handler, loop, node = make_handler()
        handler.initialize()
        assert loop.run() == 1
        assert node.position == (1.0, 2.0, 3.0)

    def test_moves_to_goal_and_sleeps(self):
        handler, loop, node = make_handler()
        handler.initialize()
        handler.set_goal(node.id, (11.0, -2.0, 3.0))
        assert handler.is_node_settled(node.id) is False
        assert len(loop.events) == 1

        processed = loop.run()
        assert processed < 10000
        assert not loop.events
        assert handler.is_node_settled(node.id) is True
        assert node.position == pytest.approx((11.0, -2.0, 3.0), abs=1e-3)

    def test_position_moves_toward_goal(self):
        handler, loop, node = make_handler(send_telemetry=False)
        handler.set_goal(node.id, (11.0, 2.0, 3.0))
        loop.run(max_events=5)
        x, y, z = node.position
        assert 1.0 < x < 11.0
        assert y == 2.0
        assert z == 3.0
        assert handler.get_node_velocity(node.id)[0] > 0.0

    def test_wakes_up_on_new_goal(self):
        handler, loop, node = make_handler()
        handler.set_goal(node.id, (2.0, 2.0, 3.0))
        loop.run()
        assert not loop.events

        handler.set_goal(node.id, (2.0, 5.0, 3.0))
        assert len(loop.events) == 1
        loop.run()
        assert node.position == pytest.approx((2.0, 5.0, 3.0), abs=1e-3)

    def test_set_goal_twice_schedules_once(self):
        handler, loop, node = make_handler()
        handler.set_goal(node.id, (2.0, 2.0, 3.0))
        handler.set_goal(node.id, (4.0, 2.0, 3.0))
        handler.initialize()
        assert len(loop.events) == 1

    def test_keeps_running_without_sleep(self):
        handler, loop, node = make_handler(sleep_when_settled=False, send_telemetry=False)
        handler.initialize()
        assert loop.run(max_events=50) == 50
        assert len(loop.events) == 1
        assert node.position == (1.0, 2.0, 3.0)

    def test_spring_parameters_update(self):
        handler, loop, node = make_handler()
        handler.set_spring_parameters(node.id, 4.0, 0.3)
        with pytest.raises(InvalidParameters):
            handler.set_spring_parameters(node.id, 4.0, -0.3)
        handler.set_goal(node.id, (5.0, 2.0, 3.0))
        loop.run()
        assert node.position == pytest.approx((5.0, 2.0, 3.0), abs=1e-3)


class TestTelemetry:
    """Test telemetry emission."""

    def test_decimation(self):
        handler, loop, node = make_handler(sleep_when_settled=False, telemetry_decimation=3)
        handler.initialize()
        # Six updates plus the two telemetry events they queue
        loop.run(max_events=8)
        assert len(node.protocol_encapsulator.telemetry) == 2

    def test_disabled(self):
        handler, loop, node = make_handler(send_telemetry=False)
        handler.set_goal(node.id, (2.0, 2.0, 3.0))
        loop.run()
        assert node.protocol_encapsulator.telemetry == []

    def test_reports_current_position(self):
        handler, loop, node = make_handler()
        handler.set_goal(node.id, (2.0, 2.0, 3.0))
        loop.run(max_events=2)
        telemetry = node.protocol_encapsulator.telemetry
        assert len(telemetry) == 1
        assert telemetry[0].current_position == node.position
