"""Generic field-tagged payload codec.

A payload is a comma-separated list of `tag:value` pairs. The kind tag `E`
always comes first, followed by the variant's fields in a fixed order:

    Execute: E N T W Y A
    Signal:  E N T W R S A
    Query:   E N T W R S A

Identifier fields are written verbatim and must not contain a reserved
character. Args are written as compact JSON wrapped in unpadded base64url,
whose alphabet contains none of the reserved characters. Empty args are
written as an empty value (`A:`). Decoding accepts standard JSON only, so
`NaN`, `Infinity` and numbers outside the float range are corrupt args.

This layout is frozen for version tag `A`. Changing it requires a new tag.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
import string
from collections.abc import Sequence

from pydantic import JsonValue

from workflow_callback_codec.envelope import SECTION_DELIMITER
from workflow_callback_codec.errors import (
    CorruptArgs,
    DuplicateField,
    MalformedEnvelope,
    MissingField,
    UnencodableValue,
    UnknownField,
    UnknownInteractionKind,
)
from workflow_callback_codec.interaction import (
    MAX_ARGS_DEPTH,
    Execute,
    Interaction,
    InteractionKind,
    Query,
    Signal,
)

FIELD_DELIMITER = ","
KEY_DELIMITER = ":"
RESERVED_CHARACTERS = frozenset({SECTION_DELIMITER, FIELD_DELIMITER, KEY_DELIMITER})

TAG_KIND = "E"
TAG_NAMESPACE = "N"
TAG_TASK_QUEUE = "T"
TAG_WORKFLOW_ID = "W"
TAG_WORKFLOW_TYPE = "Y"
TAG_RUN_ID = "R"
TAG_NAME = "S"
TAG_ARGS = "A"

# (tag, attribute) pairs in canonical order, excluding the kind and args tags.
_TARGET_FIELDS = (
    (TAG_NAMESPACE, "namespace"),
    (TAG_TASK_QUEUE, "task_queue"),
    (TAG_WORKFLOW_ID, "workflow_id"),
)
FIELD_LAYOUTS: dict[InteractionKind, tuple[tuple[str, str], ...]] = {
    InteractionKind.EXECUTE: (*_TARGET_FIELDS, (TAG_WORKFLOW_TYPE, "workflow_type")),
    InteractionKind.SIGNAL: (*_TARGET_FIELDS, (TAG_RUN_ID, "run_id"), (TAG_NAME, "signal_name")),
    InteractionKind.QUERY: (*_TARGET_FIELDS, (TAG_RUN_ID, "run_id"), (TAG_NAME, "query_type")),
}
_VARIANTS: dict[InteractionKind, type[Execute] | type[Signal] | type[Query]] = {
    InteractionKind.EXECUTE: Execute,
    InteractionKind.SIGNAL: Signal,
    InteractionKind.QUERY: Query,
}
KNOWN_TAGS = frozenset(
    {TAG_KIND, TAG_ARGS}
    | {tag for layout in FIELD_LAYOUTS.values() for tag, _attr in layout}
)

_BASE64URL_ALPHABET = frozenset(string.ascii_letters + string.digits + "-_")


def require_delimiter_free(tag: str, value: str) -> str:
    """Return `value` unchanged, or fail if it contains a reserved character."""

    found = sorted(RESERVED_CHARACTERS.intersection(value))
    if found:
        raise UnencodableValue(tag, f"value {value!r} contains reserved character(s) {found}")
    return value


def encode_args(args: Sequence[JsonValue]) -> str:
    if not args:
        return ""
    try:
        text = json.dumps(list(args), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise UnencodableValue(TAG_ARGS, f"args are not JSON serializable: {e}") from e
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"{text} is out of range for a JSON number")
    return number


def _nesting_depth(value: JsonValue) -> int:
    depth = 0
    pending = [(value, 0)]
    while pending:
        item, level = pending.pop()
        depth = max(depth, level)
        if isinstance(item, list):
            pending.extend((child, level + 1) for child in item)
        elif isinstance(item, dict):
            pending.extend((child, level + 1) for child in item.values())
    return depth


def decode_args(value: str) -> tuple[JsonValue, ...]:
    if not value:
        return ()
    if not _BASE64URL_ALPHABET.issuperset(value):
        raise CorruptArgs("args contain characters outside the base64url alphabet")

    padded = value + "=" * (-len(value) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
        decoded = json.loads(
            raw.decode("utf-8"), parse_constant=_reject_constant, parse_float=_finite_float
        )
    except (binascii.Error, ValueError, RecursionError) as e:
        raise CorruptArgs(f"args could not be decoded: {e}") from e

    if not isinstance(decoded, list):
        raise CorruptArgs(f"args must decode to a JSON array, got {type(decoded).__name__}")
    if _nesting_depth(decoded) > MAX_ARGS_DEPTH:
        raise CorruptArgs(f"args are nested deeper than {MAX_ARGS_DEPTH} levels")
    return tuple(decoded)


def _layout_for(interaction: Interaction) -> tuple[tuple[str, str], ...]:
    match interaction:
        case Execute():
            return FIELD_LAYOUTS[InteractionKind.EXECUTE]
        case Signal():
            return FIELD_LAYOUTS[InteractionKind.SIGNAL]
        case Query():
            return FIELD_LAYOUTS[InteractionKind.QUERY]
        case _:
            raise TypeError(f"Not an interaction: {type(interaction).__name__}")


def encode_payload(interaction: Interaction) -> str:
    layout = _layout_for(interaction)
    pairs = [(TAG_KIND, interaction.kind.value)]
    for tag, attr in layout:
        pairs.append((tag, require_delimiter_free(tag, getattr(interaction, attr))))
    pairs.append((TAG_ARGS, encode_args(interaction.args)))
    return FIELD_DELIMITER.join(f"{tag}{KEY_DELIMITER}{value}" for tag, value in pairs)


def parse_fields(payload: str) -> dict[str, str]:
    """Split a payload into a tag -> value mapping, rejecting unknown or repeated tags."""

    fields: dict[str, str] = {}
    for piece in payload.split(FIELD_DELIMITER):
        tag, sep, value = piece.partition(KEY_DELIMITER)
        if not sep:
            raise MalformedEnvelope(f"Field {piece!r} is not a tag{KEY_DELIMITER}value pair")
        if KEY_DELIMITER in value:
            raise MalformedEnvelope(f"Field {piece!r} has more than one {KEY_DELIMITER!r}")
        if tag not in KNOWN_TAGS:
            raise UnknownField(tag)
        if tag in fields:
            raise DuplicateField(tag)
        fields[tag] = value
    return fields


def decode_payload(payload: str) -> Interaction:
    fields = parse_fields(payload)

    kind_value = fields.pop(TAG_KIND, None)
    if kind_value is None:
        raise MissingField(TAG_KIND)
    try:
        kind = InteractionKind(kind_value)
    except ValueError as e:
        raise UnknownInteractionKind(kind_value) from e

    layout = FIELD_LAYOUTS[kind]
    allowed = {tag for tag, _attr in layout} | {TAG_ARGS}
    for tag in fields:
        if tag not in allowed:
            raise UnknownField(tag)

    missing = tuple(tag for tag, _attr in layout if tag not in fields)
    if missing:
        raise MissingField(missing[0], missing)

    # Strings produced before args were carried have no `A` field.
    args = decode_args(fields.get(TAG_ARGS, ""))
    values = {attr: fields[tag] for tag, attr in layout}
    return _VARIANTS[kind](**values, args=args)
