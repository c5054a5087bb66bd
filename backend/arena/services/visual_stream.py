"""
Visual stream collaborator boundary.

The arena only needs a handful of calls from a live-video provider. Its
status is reported for display and never gates battle transitions.
"""
from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import List, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class ConnectionStatus(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    STREAMING = "streaming"
    ERROR = "error"
    AUTHENTICATING = "authenticating"
    RECONNECTING = "reconnecting"
    FAILED = "failed"


class VisualStreamError(RuntimeError):
    """Raised by stream clients when the provider rejects a call."""


@runtime_checkable
class VisualStreamClient(Protocol):
    status: ConnectionStatus

    async def connect(self) -> None: ...

    async def start_stream(self, prompt: str) -> str: ...

    async def interact(self, prompt: str) -> None: ...

    async def end_stream(self) -> None: ...

    async def disconnect(self) -> None: ...


class NullVisualStream:
    """Offline stream client: records prompts and never renders anything."""

    def __init__(self) -> None:
        self.status = ConnectionStatus.DISCONNECTED
        self.stream_id: Optional[str] = None
        self.prompts: List[str] = []

    async def connect(self) -> None:
        self.status = ConnectionStatus.CONNECTED

    async def start_stream(self, prompt: str) -> str:
        if self.status not in (ConnectionStatus.CONNECTED, ConnectionStatus.STREAMING):
            raise VisualStreamError(f"cannot start stream while {self.status.value}")
        self.stream_id = uuid.uuid4().hex
        self.prompts.append(prompt)
        self.status = ConnectionStatus.STREAMING
        logger.debug("null stream started: %s", self.stream_id)
        return self.stream_id

    async def interact(self, prompt: str) -> None:
        if self.status != ConnectionStatus.STREAMING:
            raise VisualStreamError("no active stream")
        self.prompts.append(prompt)

    async def end_stream(self) -> None:
        self.stream_id = None
        if self.status == ConnectionStatus.STREAMING:
            self.status = ConnectionStatus.CONNECTED

    async def disconnect(self) -> None:
        self.stream_id = None
        self.status = ConnectionStatus.DISCONNECTED
