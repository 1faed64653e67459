"""Public encode/decode entry points.

These are the only operations callers (the HTTP gateway, binding shims) need:

    encoded = encode(Signal(...), custom_data="user data", max_length=255)
    decoded = decode(encoded)
    decoded.interaction, decoded.custom_data

The registry is passed explicitly; `DEFAULT_REGISTRY` is only the default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from workflow_callback_codec.envelope import join_envelope, split_envelope
from workflow_callback_codec.errors import InvalidInteraction
from workflow_callback_codec.interaction import (
    Execute,
    Interaction,
    Query,
    Signal,
    SignalWithoutArgs,
)
from workflow_callback_codec.versions import DEFAULT_REGISTRY, VersionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Decoded:
    interaction: Interaction
    custom_data: str | None = None


def encode(
    interaction: Interaction,
    version: str | None = None,
    custom_data: str | None = None,
    max_length: int | None = None,
    *,
    registry: VersionRegistry = DEFAULT_REGISTRY,
) -> str:
    """Encode an interaction into a compact envelope string.

    Args:
        interaction: The Execute, Signal or Query to encode.
        version: Version tag to encode under. Defaults to the registry default.
        custom_data: Opaque data appended after the payload, returned verbatim by `decode`.
        max_length: Upper bound on the length of the whole encoded string.
        registry: Version table to resolve `version` against.

    Returns:
        The encoded string.

    Raises:
        UnsupportedVersion: `version` is not registered.
        UnencodableValue: A field contains a reserved character.
        UnsupportedForPositionalEncoding: The selected ruleset cannot carry this shape.
        CustomDataTooLong: The result exceeds `max_length`.
    """
    if not isinstance(interaction, (Execute, Signal, Query)):
        raise InvalidInteraction(f"Not an interaction: {type(interaction).__name__}")

    tag = registry.default_version() if version is None else version
    ruleset = registry.ruleset_for(tag)
    payload = ruleset.encode_payload(interaction)
    encoded = join_envelope(tag, payload, custom_data=custom_data, max_length=max_length)

    logger.debug(
        "Encoded interaction",
        extra={"version": tag, "kind": interaction.kind.value, "length": len(encoded)},
    )
    return encoded


def decode(encoded: str, *, registry: VersionRegistry = DEFAULT_REGISTRY) -> Decoded:
    """Decode an envelope string produced by `encode`.

    Anything after the second `~` is returned as `custom_data` without being parsed.

    Raises:
        MalformedEnvelope: The string is not `version~payload[~custom_data]`.
        UnsupportedVersion: The version tag is not registered.
        CodecError: Any payload-level failure from the selected ruleset.
    """
    envelope = split_envelope(encoded)
    ruleset = registry.ruleset_for(envelope.version_tag)
    interaction = ruleset.decode_payload(envelope.payload)

    logger.debug(
        "Decoded interaction",
        extra={
            "version": envelope.version_tag,
            "kind": interaction.kind.value,
            "length": len(encoded),
        },
    )
    return Decoded(interaction=interaction, custom_data=envelope.custom_data)


def encode_signal_no_args(
    fields: SignalWithoutArgs | Signal,
    version: str | None = None,
    custom_data: str | None = None,
    max_length: int | None = None,
    *,
    registry: VersionRegistry = DEFAULT_REGISTRY,
) -> str:
    """Encode an argument-free Signal, by default with the positional layout.

    An explicit `version` is honored, so producers can pin the tagged layout
    for consumers that have not picked up the positional one.
    """
    signal = fields if isinstance(fields, Signal) else fields.to_signal()
    tag = registry.signal_no_args_version() if version is None else version
    return encode(signal, tag, custom_data, max_length, registry=registry)
