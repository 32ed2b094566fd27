"""
Rowguide Position Publisher

ZeroMQ PUB socket for publishing positions and marks to an out-of-process
store.
"""

from __future__ import annotations

import logging
from typing import Any

import zmq
import zmq.asyncio
from rowguide_core.ipc import IPCSerializer, SerializationFormat

logger = logging.getLogger(__name__)


class PositionPublisher:
    """
    Publishes position messages via ZeroMQ PUB socket.

    Message types:
    - position: committed (row, step) with sequence number
    - marks: current step and row marks
    """

    DEFAULT_PORT = 5557

    def __init__(
        self,
        port: int = DEFAULT_PORT,
        host: str = "127.0.0.1",
        format: SerializationFormat = "msgpack",
    ):
        """
        Args:
            port: Port to bind; 0 binds a random free port
            host: Interface to bind
            format: Wire format (msgpack or json)
        """
        self._port = port
        self._host = host
        self._context: zmq.asyncio.Context | None = None
        self._socket: zmq.asyncio.Socket | None = None
        self._serializer = IPCSerializer(format=format)

    @property
    def port(self) -> int:
        return self._port

    def connect(self) -> None:
        """Bind publisher socket"""
        self._context = zmq.asyncio.Context()
        self._socket = self._context.socket(zmq.PUB)
        if self._port == 0:
            self._port = self._socket.bind_to_random_port(f"tcp://{self._host}")
        else:
            self._socket.bind(f"tcp://{self._host}:{self._port}")
        logger.info(f"Position publisher bound to port {self._port}")

    def disconnect(self) -> None:
        """Close publisher socket"""
        if self._socket:
            self._socket.close(linger=0)
            self._socket = None
        if self._context:
            self._context.term()
            self._context = None
        logger.info("Position publisher disconnected")

    async def send(self, msg_type: str, payload: dict[str, Any]) -> None:
        if not self._socket:
            return

        data = self._serializer.serialize_message(msg_type, payload)

        try:
            await self._socket.send(data)
        except zmq.ZMQError as e:
            logger.error(f"ZMQ send error: {e}")

    async def send_position(self, position: dict[str, Any]) -> None:
        await self.send("position", position)

    async def send_marks(self, marks: dict[str, Any]) -> None:
        await self.send("marks", marks)

    @property
    def is_connected(self) -> bool:
        return self._socket is not None
