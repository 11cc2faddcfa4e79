"""
Chatbot WebSocket Protocol - framing

Wire format: ``"<2-char tag>:<payload>"``, UTF-8 text. CONFIRMED frames carry a
payload that is itself a full frame of the same format.

Usage:
    from chatbot_client.application.protocol import decode, encode

    raw = encode(EventCode.USER_PROMPT, "Hello")
    frame = decode("09:11:")
    confirmation = decode_confirmation(frame)
"""

from .codec import SEPARATOR, decode, decode_confirmation, encode

__all__ = [
    "SEPARATOR",
    "decode",
    "decode_confirmation",
    "encode",
]
