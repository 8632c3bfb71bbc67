"""
Integration tests for TcpTransport against real loopback listeners.

Each listener stands in for one robot port: it accepts connections and
reads each one until the client closes it.
"""

import socket
import sys
import threading
from pathlib import Path

import pytest

# Add src to path
_src_path = Path(__file__).parent.parent.parent / "src"
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from business_logic.services.actuator_channel import (
    ActuatorChannel,
    TcpTransport,
    TransportError,
    build_program,
)


class Listener:
    """Accepts ``expected`` connections and stores what each one sent."""

    def __init__(self, expected: int):
        self.received: list[bytes] = []
        self._expected = expected
        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.bind(("127.0.0.1", 0))
        self._server.listen()
        self._server.settimeout(5)
        self.port = self._server.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self):
        try:
            for _ in range(self._expected):
                conn, _ = self._server.accept()
                with conn:
                    chunks = []
                    while True:
                        data = conn.recv(4096)
                        if not data:
                            break
                        chunks.append(data)
                    self.received.append(b"".join(chunks))
        finally:
            self._server.close()

    def join(self):
        self._thread.join(timeout=5)


def _closed_port() -> int:
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class TestTcpTransport:
    """Tests for TcpTransport."""

    def test_sends_payload_and_closes(self):
        listener = Listener(expected=1)

        TcpTransport(connect_timeout=2).send("127.0.0.1", listener.port, b"brake release\n")
        listener.join()

        assert listener.received == [b"brake release\n"]

    def test_one_connection_per_send(self):
        listener = Listener(expected=2)
        transport = TcpTransport(connect_timeout=2)

        transport.send("127.0.0.1", listener.port, b"first")
        transport.send("127.0.0.1", listener.port, b"second")
        listener.join()

        assert listener.received == [b"first", b"second"]

    def test_refused_connection_raises_transport_error(self):
        port = _closed_port()

        with pytest.raises(TransportError) as exc_info:
            TcpTransport(connect_timeout=2).send("127.0.0.1", port, b"x")

        assert exc_info.value.port == port
        assert isinstance(exc_info.value.__cause__, OSError)


class TestActuatorChannelOverTcp:
    """End-to-end pick over two real ports."""

    def test_pick_up_hits_both_ports(self):
        dashboard = Listener(expected=1)
        urscript = Listener(expected=1)
        channel = ActuatorChannel(
            host="127.0.0.1",
            control_port=dashboard.port,
            program_port=urscript.port,
            transport=TcpTransport(connect_timeout=2)
        )

        channel.pick_up(2)
        dashboard.join()
        urscript.join()

        assert dashboard.received == [b"brake release\n"]
        assert urscript.received == [build_program(2).encode("ascii")]

    def test_unreachable_robot_raises(self):
        channel = ActuatorChannel(
            host="127.0.0.1",
            control_port=_closed_port(),
            program_port=_closed_port(),
            transport=TcpTransport(connect_timeout=1)
        )

        with pytest.raises(TransportError):
            channel.pick_up(1)
