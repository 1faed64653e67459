"""Errors raised by the codec.

Every error derives from `CodecError` so gateway code can reject an inbound
event with a single `except` clause. None of these are retryable: encode and
decode are deterministic, so the same input fails the same way.
"""

from __future__ import annotations


class CodecError(Exception):
    """Base class for all codec failures."""


class InvalidInteraction(CodecError, ValueError):
    """An interaction violates a field or per-variant invariant."""


class UnsupportedVersion(CodecError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"Unsupported encoder version: {tag!r}")
        self.tag = tag


class UnencodableValue(CodecError):
    """A field value cannot be written without corrupting the envelope."""

    def __init__(self, tag: str, reason: str) -> None:
        super().__init__(f"Cannot encode field {tag!r}: {reason}")
        self.tag = tag
        self.reason = reason


class UnsupportedForPositionalEncoding(CodecError):
    pass


class CustomDataTooLong(CodecError):
    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(f"Encoded string is {length} characters, limit is {max_length}")
        self.length = length
        self.max_length = max_length


class MalformedEnvelope(CodecError):
    """The string does not follow `version~payload[~custom_data]`."""


class UnknownField(CodecError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown field tag: {tag!r}")
        self.tag = tag


class DuplicateField(CodecError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"Field tag repeated in payload: {tag!r}")
        self.tag = tag


class UnknownInteractionKind(CodecError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown interaction kind: {value!r}")
        self.value = value


class MissingField(CodecError):
    """A required field tag is absent.

    `tag` is the first missing tag in canonical order; `missing` holds all of them.
    """

    def __init__(self, tag: str, missing: tuple[str, ...] = ()) -> None:
        self.tag = tag
        self.missing = missing or (tag,)
        super().__init__(f"Missing required field(s): {', '.join(self.missing)}")


class CorruptArgs(CodecError):
    """The args field could not be restored to a JSON array."""
