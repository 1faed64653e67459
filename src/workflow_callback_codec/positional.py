"""Positional payload codec for argument-free Signals.

A workflow blocking on an external event is the most common reason to mint a
callback string, and the unblocking call carries no arguments of its own. For
that shape the field tags are redundant, so the payload is just the five
values in a fixed order:

    namespace,task_queue,workflow_id,run_id,signal_name

The version tag alone identifies this layout, so decoding never has to guess
between positional and tagged payloads.
"""

from __future__ import annotations

from workflow_callback_codec.errors import MalformedEnvelope, UnsupportedForPositionalEncoding
from workflow_callback_codec.interaction import Interaction, InteractionKind, Signal
from workflow_callback_codec.tagged import (
    FIELD_DELIMITER,
    FIELD_LAYOUTS,
    RESERVED_CHARACTERS,
    require_delimiter_free,
)

SIGNAL_LAYOUT = FIELD_LAYOUTS[InteractionKind.SIGNAL]


def encode_payload(interaction: Interaction) -> str:
    if not isinstance(interaction, Signal):
        raise UnsupportedForPositionalEncoding(
            f"Positional encoding only supports Signal, got {type(interaction).__name__}"
        )
    if interaction.args:
        raise UnsupportedForPositionalEncoding(
            "Positional encoding does not carry args; use the tagged encoding instead"
        )
    return FIELD_DELIMITER.join(
        require_delimiter_free(tag, getattr(interaction, attr)) for tag, attr in SIGNAL_LAYOUT
    )


def decode_payload(payload: str) -> Signal:
    values = payload.split(FIELD_DELIMITER)
    if len(values) != len(SIGNAL_LAYOUT):
        raise MalformedEnvelope(
            f"Positional signal payload needs {len(SIGNAL_LAYOUT)} values, got {len(values)}"
        )
    for (tag, _attr), value in zip(SIGNAL_LAYOUT, values):
        found = sorted(RESERVED_CHARACTERS.intersection(value))
        if found:
            raise MalformedEnvelope(
                f"Positional value for {tag} contains reserved character(s) {found}"
            )
    return Signal(**{attr: value for (_tag, attr), value in zip(SIGNAL_LAYOUT, values)})
