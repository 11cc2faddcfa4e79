"""Connection state enumeration.

Defines the lifecycle states of the single backend connection.
"""

from enum import Enum


class ConnectionState(str, Enum):
    """Lifecycle state of the backend connection.

    State transitions:
    - DISCONNECTED: No transport, or the last one closed. The watchdog reconnects.
    - CONNECTING: A transport exists and its opening handshake is in flight.
    - OPEN: The transport is open and frames can be sent.

    There is no terminal state; the client cycles for as long as it runs.
    """

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
