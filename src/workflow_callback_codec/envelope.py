"""Outer `version~payload[~custom_data]` structure.

The splitter only isolates the version tag and payload. Custom data appended by
the caller (or by the system the string travels through) is returned verbatim
and never re-split, so it may itself contain `~`.
"""

from __future__ import annotations

from dataclasses import dataclass

from workflow_callback_codec.errors import CustomDataTooLong, MalformedEnvelope

SECTION_DELIMITER = "~"
ENVELOPE_HELP = "expected format: version~payload[~custom_data]"


@dataclass(frozen=True, slots=True)
class Envelope:
    version_tag: str
    payload: str
    custom_data: str | None = None


def join_envelope(
    version_tag: str,
    payload: str,
    custom_data: str | None = None,
    max_length: int | None = None,
) -> str:
    encoded = f"{version_tag}{SECTION_DELIMITER}{payload}"
    if custom_data is not None:
        if not isinstance(custom_data, str):
            raise TypeError(f"custom_data must be a string, got {type(custom_data).__name__}")
        encoded = f"{encoded}{SECTION_DELIMITER}{custom_data}"

    if max_length is not None and len(encoded) > max_length:
        raise CustomDataTooLong(len(encoded), max_length)
    return encoded


def split_envelope(encoded: str) -> Envelope:
    version_tag, sep, remainder = encoded.partition(SECTION_DELIMITER)
    if not sep:
        raise MalformedEnvelope(f"Missing version delimiter {SECTION_DELIMITER!r}; {ENVELOPE_HELP}")
    if len(version_tag) != 1:
        raise MalformedEnvelope(
            f"Version tag must be a single character, got {version_tag!r}; {ENVELOPE_HELP}"
        )

    payload, sep, custom_data = remainder.partition(SECTION_DELIMITER)
    return Envelope(
        version_tag=version_tag,
        payload=payload,
        custom_data=custom_data if sep else None,
    )
