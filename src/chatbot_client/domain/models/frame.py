"""Protocol frame value objects."""

from pydantic import BaseModel, Field, field_validator

from chatbot_client.domain.enums import EventCode

TAG_LENGTH = 2


class Frame(BaseModel):
    """One protocol message: a two-character tag and its payload.

    The raw tag is kept as received so frames with tags this client does not
    know survive decoding; ``code`` gives the typed view of it.
    """

    tag: str = Field(..., description="Two-character event tag as sent on the wire")
    payload: str = Field(default="", description="Everything after the separator")

    model_config = {"frozen": True}

    @field_validator("tag")
    @classmethod
    def _tag_has_two_characters(cls, value: str) -> str:
        if len(value) != TAG_LENGTH:
            raise ValueError(f"tag must be exactly {TAG_LENGTH} characters, got {value!r}")
        return value

    @property
    def code(self) -> EventCode:
        return EventCode.from_tag(self.tag)

    @classmethod
    def of(cls, code: EventCode, payload: str = "") -> "Frame":
        return cls(tag=code.value, payload=payload)


class Confirmation(BaseModel):
    """Typed content of a CONFIRMED frame: which client command was acknowledged."""

    of: EventCode
    tag: str
    payload: str = ""

    model_config = {"frozen": True}
