"""Unit tests for the frame codec.

Tests cover:
- Encoding with and without payloads
- Decoding, including bare tags, colons inside payloads and unknown tags
- Malformed input
- Nested CONFIRMED decoding
"""

import pytest

from chatbot_client.application.protocol import decode, decode_confirmation, encode
from chatbot_client.domain.enums import EventCode
from chatbot_client.domain.exceptions import MalformedFrameError
from chatbot_client.domain.models import Confirmation, Frame


class TestEncode:
    """Test frame encoding."""

    def test_encode_with_payload(self):
        assert encode(EventCode.USER_PROMPT, "Hello") == "01:Hello"

    def test_encode_empty_payload_keeps_separator(self):
        assert encode(EventCode.RESET_HISTORY) == "10:"

    def test_encode_does_not_escape_separator(self):
        assert encode(EventCode.SYSTEM_PROMPT, "a:b:c") == "02:a:b:c"

    def test_encode_raw_tag(self):
        assert encode("13", "x") == "13:x"

    def test_encode_rejects_unrecognized(self):
        with pytest.raises(ValueError):
            encode(EventCode.UNRECOGNIZED, "x")

    def test_encode_rejects_bad_tag_length(self):
        with pytest.raises(ValueError):
            encode("123", "x")


class TestDecode:
    """Test frame decoding."""

    def test_decode_output_frame(self):
        frame = decode("04:Hello there")
        assert frame == Frame(tag="04", payload="Hello there")
        assert frame.code is EventCode.ASSISTANT_OUTPUT

    def test_decode_splits_on_first_separator_only(self):
        assert decode("04:<p>time: 12:30</p>").payload == "<p>time: 12:30</p>"

    def test_decode_bare_tag(self):
        """The backend sends ASSISTANT_WAIT and ASSISTANT_FINISH without a separator."""
        assert decode("03") == Frame(tag="03", payload="")
        assert decode("06").code is EventCode.PING

    def test_decode_unknown_tag_succeeds(self):
        frame = decode("42:future")
        assert frame.code is EventCode.UNRECOGNIZED
        assert frame.payload == "future"

    def test_decode_bytes(self):
        assert decode("04:héllo".encode()) == Frame(tag="04", payload="héllo")

    @pytest.mark.parametrize("raw", ["", "0"])
    def test_decode_too_short(self, raw):
        with pytest.raises(MalformedFrameError):
            decode(raw)

    def test_decode_payload_starts_at_fixed_offset(self):
        """The character after the tag is skipped whatever it is."""
        assert decode("04xHello") == Frame(tag="04", payload="Hello")
        assert decode("04 ") == Frame(tag="04", payload="")

    def test_decode_rejects_invalid_utf8(self):
        with pytest.raises(MalformedFrameError):
            decode(b"04:\xff\xfe")

    @pytest.mark.parametrize(
        ("code", "payload"),
        [
            (EventCode.USER_PROMPT, "What is 2:3?"),
            (EventCode.ASSISTANT_OUTPUT, ""),
            (EventCode.CONFIRMED, "11:"),
        ],
    )
    def test_round_trip(self, code, payload):
        assert decode(encode(code, payload)) == Frame.of(code, payload)


class TestDecodeConfirmation:
    """Test nested CONFIRMED decoding."""

    def test_confirmation_with_inner_separator(self):
        confirmation = decode_confirmation(decode("09:11:"))
        assert confirmation == Confirmation(of=EventCode.ENABLE_HISTORY, tag="11", payload="")

    def test_confirmation_with_bare_inner_tag(self):
        """The backend confirms commands as "09:01", without an inner separator."""
        confirmation = decode_confirmation(decode("09:01"))
        assert confirmation.of is EventCode.USER_PROMPT
        assert confirmation.payload == ""

    def test_confirmation_ignores_character_after_inner_tag(self):
        confirmation = decode_confirmation(decode("09:11x"))
        assert confirmation.of is EventCode.ENABLE_HISTORY
        assert confirmation.payload == ""

    def test_confirmation_of_unknown_code(self):
        confirmation = decode_confirmation(decode("09:77:"))
        assert confirmation.of is EventCode.UNRECOGNIZED
        assert confirmation.tag == "77"

    def test_empty_confirmation_is_malformed(self):
        with pytest.raises(MalformedFrameError):
            decode_confirmation(decode("09:"))

    def test_rejects_non_confirmed_frame(self):
        with pytest.raises(ValueError):
            decode_confirmation(decode("04:11:"))
