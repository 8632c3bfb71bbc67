"""
Global test configuration.

Puts src/ on the path and provides test doubles for the robot transport
and the pacing sleep, so no test opens a socket to a real robot or
waits on the wall clock.
"""
import sys
from pathlib import Path

import pytest

_src_path = Path(__file__).parent.parent / "src"
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from business_logic.services.actuator_channel import TransportError


class RecordingTransport:
    """
    Transport double that records every payload instead of sending it.

    ``fail_on`` holds 1-based indexes of program sends that should raise
    TransportError (brake release still succeeds).
    """

    def __init__(self, program_port: int = 30002, fail_on: set[int] | None = None):
        self.sent: list[tuple[str, int, bytes]] = []
        self._program_port = program_port
        self._fail_on = fail_on or set()
        self._program_attempts = 0

    def send(self, host: str, port: int, payload: bytes) -> None:
        if port == self._program_port:
            self._program_attempts += 1
            if self._program_attempts in self._fail_on:
                raise TransportError(host, port, "Connection refused")
        self.sent.append((host, port, payload))

    def programs(self) -> list[str]:
        return [p.decode("ascii") for _, port, p in self.sent if port == self._program_port]


class SleepRecorder:
    """Awaitable stand-in for asyncio.sleep that only records delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def sleep():
    return SleepRecorder()


@pytest.fixture
def make_transport():
    """Factory for transports that fail on selected program sends."""
    return RecordingTransport
