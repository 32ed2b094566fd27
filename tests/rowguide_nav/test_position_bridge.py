"""Tests for PositionBridge and the position sinks."""

from __future__ import annotations

import asyncio
import logging

import pytest
from mocks import FailingPositionSink, MockPositionSink
from rowguide_core.ipc import IPCSerializer
from rowguide_core.protocols import PositionSink
from rowguide_nav.ipc import InProcessPositionSink, PositionBridge, PositionPublisher


class TestPositionBridge:
    """Test fire-and-forget delivery."""

    def test_notify_without_loop_queues(self, bridge: PositionBridge, mock_sink: MockPositionSink) -> None:
        assert bridge.notify_position(0, 1) == 1
        assert bridge.notify_position(0, 2) == 2
        assert bridge.pending == 2
        assert mock_sink.positions == []

    @pytest.mark.asyncio
    async def test_flush_delivers_in_order(
        self, bridge: PositionBridge, mock_sink: MockPositionSink
    ) -> None:
        for step in range(5):
            bridge.notify_position(0, step)
        await bridge.flush()

        assert mock_sink.coordinates() == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]
        assert [p["sequence"] for p in mock_sink.positions] == [1, 2, 3, 4, 5]
        assert bridge.pending == 0
        assert bridge.delivered == 5

    @pytest.mark.asyncio
    async def test_drain_runs_in_background(
        self, bridge: PositionBridge, mock_sink: MockPositionSink
    ) -> None:
        bridge.notify_position(1, 0)
        assert mock_sink.positions == []
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert mock_sink.coordinates() == [(1, 0)]

    @pytest.mark.asyncio
    async def test_marks_and_positions_share_order(
        self, bridge: PositionBridge, mock_sink: MockPositionSink
    ) -> None:
        bridge.notify_position(0, 0)
        bridge.notify_marks({"marked_steps": {"0-0": 1}, "marked_rows": {}})
        bridge.notify_position(0, 1)
        await bridge.flush()

        assert [kind for kind, _ in mock_sink.messages] == ["position", "marks", "position"]
        assert mock_sink.marks[0]["sequence"] == 2

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = FailingPositionSink(failures=1)
        bridge = PositionBridge(sink)
        bridge.notify_position(0, 0)
        bridge.notify_position(0, 1)

        with caplog.at_level(logging.ERROR, logger="rowguide_nav.ipc.bridge"):
            await bridge.flush()

        assert sink.coordinates() == [(0, 1)]
        assert bridge.failed == 1
        assert bridge.delivered == 1
        assert "store unavailable" in caplog.text


class TestInProcessPositionSink:
    """Test the asyncio.Queue sink."""

    def test_protocol(self) -> None:
        assert isinstance(InProcessPositionSink(), PositionSink)

    @pytest.mark.asyncio
    async def test_events_are_wrapped(self) -> None:
        sink = InProcessPositionSink()
        await sink.send_position({"row": 1, "step": 2})
        await sink.send_marks({"marked_steps": {}})
        assert sink.drain() == [
            {"type": "position", "data": {"row": 1, "step": 2}},
            {"type": "marks", "data": {"marked_steps": {}}},
        ]

    @pytest.mark.asyncio
    async def test_drops_oldest_when_full(self) -> None:
        sink = InProcessPositionSink(maxsize=2)
        for step in range(3):
            await sink.send_position({"row": 0, "step": step})

        events = sink.drain()
        assert [e["data"]["step"] for e in events] == [1, 2]
        assert sink.dropped == 1

    @pytest.mark.asyncio
    async def test_with_bridge(self) -> None:
        sink = InProcessPositionSink()
        bridge = PositionBridge(sink)
        bridge.notify_position(2, 3)
        await bridge.flush()
        event = sink.queue.get_nowait()
        assert event["data"]["row"] == 2
        assert event["data"]["step"] == 3


class TestPositionPublisher:
    """Test the ZeroMQ publisher."""

    def test_protocol(self) -> None:
        assert isinstance(PositionPublisher(), PositionSink)

    @pytest.mark.asyncio
    async def test_send_when_disconnected_is_noop(self) -> None:
        publisher = PositionPublisher()
        assert not publisher.is_connected
        await publisher.send_position({"row": 0, "step": 0})

    @pytest.mark.asyncio
    async def test_publish_roundtrip(self) -> None:
        import zmq
        import zmq.asyncio

        publisher = PositionPublisher(port=0)
        publisher.connect()
        context = zmq.asyncio.Context()
        subscriber = context.socket(zmq.SUB)
        subscriber.setsockopt(zmq.SUBSCRIBE, b"")
        subscriber.connect(f"tcp://127.0.0.1:{publisher.port}")
        try:
            # PUB drops messages until the subscription has propagated
            received = None
            for _ in range(50):
                await publisher.send_position({"row": 4, "step": 1, "sequence": 1})
                if await subscriber.poll(timeout=100):
                    received = await subscriber.recv()
                    break
            assert received is not None
            msg_type, payload = IPCSerializer().deserialize_message(received)
            assert msg_type == "position"
            assert payload["row"] == 4
        finally:
            subscriber.close(linger=0)
            context.term()
            publisher.disconnect()
        assert not publisher.is_connected
