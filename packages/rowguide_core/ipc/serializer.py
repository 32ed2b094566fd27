"""IPC Serializer for Rowguide.

Encodes position and mark messages for the external store. msgpack is the
wire default; JSON is available for debugging a subscriber by hand.
"""

from __future__ import annotations

import json
from typing import Any, Literal, cast

import msgpack

SerializationFormat = Literal["json", "msgpack"]


class IPCSerializer:
    """Message serializer for the position bridge.

    Usage:
        serializer = IPCSerializer()
        data = serializer.serialize_message("position", {"row": 2, "step": 5})
        msg_type, payload = serializer.deserialize_message(data)
    """

    def __init__(self, format: SerializationFormat = "msgpack"):
        if format not in ("json", "msgpack"):
            raise ValueError(f"Unknown serialization format: {format}")
        self._format = format

    @property
    def format(self) -> SerializationFormat:
        return self._format

    def serialize(self, data: dict[str, Any]) -> bytes:
        if self._format == "json":
            return json.dumps(data, sort_keys=True).encode("utf-8")
        return cast(bytes, msgpack.packb(data, use_bin_type=True))

    def deserialize(self, payload: bytes) -> dict[str, Any]:
        """Decode bytes; the top-level value must be a mapping."""
        if self._format == "json":
            result = json.loads(payload.decode("utf-8"))
        else:
            result = msgpack.unpackb(payload, raw=False, strict_map_key=False)

        if not isinstance(result, dict):
            raise ValueError(f"Expected dict, got {type(result).__name__}")
        return result

    def serialize_message(
        self,
        msg_type: str,
        payload: dict[str, Any] | None = None,
    ) -> bytes:
        """Wrap payload in the {"type", "payload"} envelope and encode it."""
        return self.serialize({
            "type": msg_type,
            "payload": payload or {},
        })

    def deserialize_message(self, data: bytes) -> tuple[str, dict[str, Any]]:
        msg = self.deserialize(data)
        return msg.get("type", ""), msg.get("payload", {})
