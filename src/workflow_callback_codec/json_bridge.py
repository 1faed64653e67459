"""JSON representation of interactions.

Binding shims in other runtimes hand interactions over as JSON objects with a
`"type"` discriminant:

    {"type": "Signal", "namespace": "ns", "task_queue": "tq", "workflow_id": "wf",
     "run_id": "r1", "signal_name": "go", "args": []}

Field validation goes through pydantic; every failure surfaces as
`InvalidInteraction`.
"""

from __future__ import annotations

import dataclasses
import json

from pydantic import TypeAdapter, ValidationError

from workflow_callback_codec.codec import decode, encode
from workflow_callback_codec.errors import InvalidInteraction
from workflow_callback_codec.interaction import Execute, Interaction, InteractionKind, Query, Signal
from workflow_callback_codec.versions import DEFAULT_REGISTRY, VersionRegistry

TYPE_KEY = "type"

_VARIANTS: dict[InteractionKind, type[Execute] | type[Signal] | type[Query]] = {
    InteractionKind.EXECUTE: Execute,
    InteractionKind.SIGNAL: Signal,
    InteractionKind.QUERY: Query,
}
_ADAPTERS: dict[InteractionKind, TypeAdapter] = {
    kind: TypeAdapter(cls) for kind, cls in _VARIANTS.items()
}
_FIELD_NAMES: dict[InteractionKind, frozenset[str]] = {
    kind: frozenset(f.name for f in dataclasses.fields(cls)) for kind, cls in _VARIANTS.items()
}


def interaction_from_dict(data: object) -> Interaction:
    if not isinstance(data, dict):
        raise InvalidInteraction(f"Interaction must be a JSON object, got {type(data).__name__}")

    fields = dict(data)
    type_value = fields.pop(TYPE_KEY, None)
    if type_value is None:
        raise InvalidInteraction(f"Interaction is missing the {TYPE_KEY!r} key")
    try:
        kind = InteractionKind(type_value)
    except ValueError as e:
        raise InvalidInteraction(f"Unknown interaction type: {type_value!r}") from e

    if fields.get("args", ()) is None:
        del fields["args"]
    unexpected = sorted(set(fields) - _FIELD_NAMES[kind])
    if unexpected:
        raise InvalidInteraction(f"Unexpected field(s) for {kind.value}: {', '.join(unexpected)}")

    try:
        return _ADAPTERS[kind].validate_python(fields)
    except (ValidationError, InvalidInteraction) as e:
        raise InvalidInteraction(f"Invalid {kind.value}: {e}") from e


def interaction_from_json(json_text: str | bytes) -> Interaction:
    try:
        data = json.loads(json_text)
    except ValueError as e:
        raise InvalidInteraction(f"Interaction is not valid JSON: {e}") from e
    return interaction_from_dict(data)


def interaction_to_json(interaction: Interaction) -> str:
    body = _ADAPTERS[interaction.kind].dump_python(interaction, mode="json")
    return json.dumps(
        {TYPE_KEY: interaction.kind.value, **body},
        separators=(",", ":"),
        ensure_ascii=False,
    )


def encode_from_json(
    json_text: str | bytes,
    version: str | None = None,
    custom_data: str | None = None,
    max_length: int | None = None,
    *,
    registry: VersionRegistry = DEFAULT_REGISTRY,
) -> str:
    return encode(
        interaction_from_json(json_text),
        version,
        custom_data,
        max_length,
        registry=registry,
    )


def decode_to_json(encoded: str, *, registry: VersionRegistry = DEFAULT_REGISTRY) -> str:
    """Decode `encoded` and render the interaction as JSON. Custom data is dropped."""

    return interaction_to_json(decode(encoded, registry=registry).interaction)
