"""Application layer: protocol framing, connection lifecycle and the session state machine."""
