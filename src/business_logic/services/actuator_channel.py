"""
Actuator Channel - Sends pick-and-place programs to the robot arm.

The robot controller listens on two TCP ports:

- the dashboard (control) port, which takes short commands such as
  ``brake release``
- the URScript (program) port, which takes a complete motion program

Every message goes over a fresh connection: connect, write everything,
close. Nothing is read back, so a delivered program looks exactly like a
lost one at this layer. Callers pace their commands instead of waiting
for an acknowledgment.
"""

import logging
import socket
import sys
from pathlib import Path
from typing import Protocol

# Add src to path for imports
_src_path = Path(__file__).parent.parent.parent
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from domain.value_objects import Slot

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DASHBOARD_PORT = 29999
URSCRIPT_PORT = 30002

BRAKE_RELEASE_COMMAND = "brake release\n"

# {slot} is the only substitution point. Everything else, including the
# comment lines, is the exact 7-bit text the controller has always been
# sent: the non-ASCII letters of the Danish comments go out as "?".
URSCRIPT_TEMPLATE = """
def move_item_to_shipment_box():
    SBOX_X = 3
    SBOX_Y = 3
    ITEM_X = {slot}
    ITEM_Y = 1
    DOWN_Z = 1

    # Denne funktion flytter robotarmen til de ?nskede koordinater (x, y, z)
    def moveto(x, y, z = 0):
        SEP = 0.1
        # Robotten bruger 'p_target' som sit m?lpunkt i 3D-rummet
        p_target = p[x*SEP, -0.45 + y*SEP, 0.25 + z*SEP, d2r(180), 0, 0]
        # movej flytter armen j?vnt fra punkt til punkt
        movej(get_inverse_kin(p_target), a=1.2, v=0.25)
    end

    # Flyt over den boks, hvor varen ligger
    moveto(ITEM_X, ITEM_Y)
    # K?r ned for at samle varen op
    moveto(ITEM_X, ITEM_Y, -DOWN_Z)
    # G? op igen med varen
    moveto(ITEM_X, ITEM_Y)
    # K?r over til forsendelsesboksen (S)
    moveto(SBOX_X, SBOX_Y)
    # K?r ned for at aflevere varen
    moveto(SBOX_X, SBOX_Y, -DOWN_Z)
    # G? op igen ? klar til n?ste vare
    moveto(SBOX_X, SBOX_Y)
end
"""


class TransportError(ConnectionError):
    """
    Raised when a message cannot be delivered to the robot.

    Covers refused/reset connections, timeouts and failed writes.
    """

    def __init__(self, host: str, port: int, reason: str):
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"{host}:{port} - {reason}")


def build_program(slot: Slot | int) -> str:
    """
    Build the pick-and-place program for one unit stored in ``slot``.

    Args:
        slot: Storage box number (positive integer)

    Returns:
        URScript program text

    Raises:
        ValueError: If slot is not a positive integer

    Examples:
        >>> "ITEM_X = 2" in build_program(2)
        True
    """
    slot = Slot.of(slot)
    return URSCRIPT_TEMPLATE.replace("{slot}", str(slot.number))


class ActuatorTransport(Protocol):
    """
    Protocol for delivering one payload to one port of the robot.

    Implementations must not reuse connections between calls.
    """

    def send(self, host: str, port: int, payload: bytes) -> None:
        """
        Deliver ``payload`` to ``host:port``.

        Raises:
            TransportError: If the connection or write fails
        """
        ...


class TcpTransport:
    """Connect, write, close. One connection per payload."""

    def __init__(self, connect_timeout: float | None = 5.0):
        """
        Args:
            connect_timeout: Seconds to wait for connect/write (None blocks)
        """
        self._connect_timeout = connect_timeout

    def send(self, host: str, port: int, payload: bytes) -> None:
        try:
            with socket.create_connection((host, port), timeout=self._connect_timeout) as conn:
                conn.sendall(payload)
        except OSError as e:
            raise TransportError(host, port, str(e) or e.__class__.__name__) from e
        logger.debug("Sent %d bytes to %s:%d", len(payload), host, port)


class ActuatorChannel:
    """
    Command channel to one robot controller.

    Turns a storage slot into a program and delivers it with the
    two-step handshake: release the brake on the dashboard port, then
    send the program to the URScript port.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        control_port: int = DASHBOARD_PORT,
        program_port: int = URSCRIPT_PORT,
        transport: ActuatorTransport | None = None
    ):
        """
        Initialize the channel.

        Args:
            host: Robot controller (or simulator) address
            control_port: Dashboard port for brake commands
            program_port: Port that executes URScript programs
            transport: Delivery mechanism (creates TcpTransport if None)
        """
        self._host = host
        self._control_port = control_port
        self._program_port = program_port
        self._transport = transport or TcpTransport()
        self._programs_sent = 0

    @property
    def host(self) -> str:
        return self._host

    @property
    def programs_sent(self) -> int:
        """Number of programs handed to the transport without error."""
        return self._programs_sent

    def release_brake(self) -> None:
        """Send the brake release command to the dashboard port."""
        self._send(self._control_port, BRAKE_RELEASE_COMMAND)

    def execute(self, program: str) -> None:
        """
        Release the brake, then send ``program`` for execution.

        Two independent exchanges; if the first fails the program is
        not sent.

        Raises:
            TransportError: If either exchange fails
        """
        self.release_brake()
        self._send(self._program_port, program)
        self._programs_sent += 1

    def pick_up(self, slot: Slot | int) -> None:
        """
        Retrieve one unit from ``slot`` into the shipment box.

        Raises:
            ValueError: If slot is invalid
            TransportError: If the robot cannot be reached
        """
        program = build_program(slot)
        logger.info("Sending pick program for box %s to %s", slot, self._host)
        self.execute(program)

    def _send(self, port: int, message: str) -> None:
        # Controller expects 7-bit text
        self._transport.send(self._host, port, message.encode("ascii"))
