"""IPC communication utilities for Rowguide."""

from rowguide_core.ipc.serializer import IPCSerializer, SerializationFormat

__all__ = [
    "IPCSerializer",
    "SerializationFormat",
]
