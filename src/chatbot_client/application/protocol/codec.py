"""
Chatbot WebSocket Protocol - Frame codec

Stateless encode/decode of wire frames. Payloads are never escaped: decode
slices the payload at a fixed offset, so a payload may contain ``:`` freely.
"""

from chatbot_client.domain.enums import EventCode
from chatbot_client.domain.exceptions import MalformedFrameError
from chatbot_client.domain.models import Confirmation, Frame
from chatbot_client.domain.models.frame import TAG_LENGTH

SEPARATOR = ":"


# =============================================================================
# ENCODING
# =============================================================================


def encode(code: EventCode | str, payload: str = "") -> str:
    """
    Encode a frame for the wire.

    Args:
        code: The event code, or a raw two-character tag
        payload: The frame payload (sent verbatim)

    Returns:
        The ``"<tag>:<payload>"`` string

    Raises:
        ValueError: If the code is UNRECOGNIZED or the tag is not two characters
    """
    if isinstance(code, EventCode):
        if not code.is_recognized:
            raise ValueError("cannot encode an unrecognized event code")
        tag = code.value
    else:
        tag = code
    if len(tag) != TAG_LENGTH:
        raise ValueError(f"event tag must be exactly {TAG_LENGTH} characters, got {tag!r}")
    return f"{tag}{SEPARATOR}{payload}"


# =============================================================================
# DECODING
# =============================================================================


def decode(raw: str | bytes) -> Frame:
    """
    Decode a raw wire message into a Frame.

    The tag is the first two characters and the payload starts at offset 3; the
    character between them is skipped without being checked. A bare tag
    (``"05"``) is a frame with an empty payload; the backend sends
    ASSISTANT_WAIT, ASSISTANT_FINISH and the CONFIRMED inner tag that way.
    Unknown tags decode successfully.

    Args:
        raw: The message as received; bytes are read as UTF-8

    Returns:
        The decoded Frame

    Raises:
        MalformedFrameError: If the message is too short to hold a tag
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedFrameError(repr(raw), f"not valid UTF-8 ({e.reason})") from e

    if len(raw) < TAG_LENGTH:
        raise MalformedFrameError(raw, f"shorter than the {TAG_LENGTH}-character event tag")

    return Frame(tag=raw[:TAG_LENGTH], payload=raw[TAG_LENGTH + 1 :])


def decode_confirmation(frame: Frame) -> Confirmation:
    """
    Unwrap a CONFIRMED frame into the command it acknowledges.

    Args:
        frame: A frame whose code is CONFIRMED

    Returns:
        Confirmation naming the acknowledged code and its (usually empty) payload

    Raises:
        ValueError: If the frame is not a CONFIRMED frame
        MalformedFrameError: If the wrapped frame cannot be decoded
    """
    if frame.code is not EventCode.CONFIRMED:
        raise ValueError(f"expected a CONFIRMED frame, got tag {frame.tag!r}")
    inner = decode(frame.payload)
    return Confirmation(of=inner.code, tag=inner.tag, payload=inner.payload)
