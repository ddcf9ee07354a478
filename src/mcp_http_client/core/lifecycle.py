from __future__ import annotations

import enum
import time
import typing as t
from dataclasses import dataclass

from ..errors import StateError

NOT_INITIALIZED_MESSAGE = "Client must be initialized before making requests"


class ClientState(str, enum.Enum):
    UNCONNECTED = "UNCONNECTED"
    CONNECTED = "CONNECTED"
    INITIALIZED = "INITIALIZED"


@dataclass
class Lifecycle:
    """Per-client connection state.

    ``INITIALIZED`` is terminal: there is no transition out of it and a
    repeated handshake leaves it untouched.
    """

    state: ClientState = ClientState.UNCONNECTED
    initialized_at: t.Optional[float] = None

    @property
    def initialized(self) -> bool:
        return self.state is ClientState.INITIALIZED

    def mark_connected(self) -> None:
        if self.state is ClientState.UNCONNECTED:
            self.state = ClientState.CONNECTED

    def mark_initialized(self) -> None:
        if self.initialized:
            return
        self.initialized_at = time.time()
        self.state = ClientState.INITIALIZED

    def require_initialized(self) -> None:
        if not self.initialized:
            raise StateError(NOT_INITIALIZED_MESSAGE)
