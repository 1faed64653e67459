"""Workflow Callback Codec.

Compact, versioned text encoding for workflow interactions (execute, signal,
query), small enough to ride in length-limited third-party fields such as an
interactive-message callback id:

- `encode` / `decode` for any interaction
- `encode_signal_no_args` for the positional fast path
- a JSON bridge for callers in other runtimes
"""

__version__ = "0.1.0"

from workflow_callback_codec.codec import Decoded, decode, encode, encode_signal_no_args
from workflow_callback_codec.errors import (
    CodecError,
    CorruptArgs,
    CustomDataTooLong,
    DuplicateField,
    InvalidInteraction,
    MalformedEnvelope,
    MissingField,
    UnencodableValue,
    UnknownField,
    UnknownInteractionKind,
    UnsupportedForPositionalEncoding,
    UnsupportedVersion,
)
from workflow_callback_codec.interaction import (
    Execute,
    Interaction,
    InteractionKind,
    Query,
    Signal,
    SignalWithoutArgs,
)
from workflow_callback_codec.json_bridge import (
    decode_to_json,
    encode_from_json,
    interaction_from_json,
    interaction_to_json,
)
from workflow_callback_codec.versions import DEFAULT_REGISTRY, Ruleset, VersionRegistry

__all__ = [
    "__version__",
    "DEFAULT_REGISTRY",
    "CodecError",
    "CorruptArgs",
    "CustomDataTooLong",
    "Decoded",
    "DuplicateField",
    "Execute",
    "Interaction",
    "InteractionKind",
    "InvalidInteraction",
    "MalformedEnvelope",
    "MissingField",
    "Query",
    "Ruleset",
    "Signal",
    "SignalWithoutArgs",
    "UnencodableValue",
    "UnknownField",
    "UnknownInteractionKind",
    "UnsupportedForPositionalEncoding",
    "UnsupportedVersion",
    "VersionRegistry",
    "decode",
    "decode_to_json",
    "encode",
    "encode_from_json",
    "encode_signal_no_args",
    "interaction_from_json",
    "interaction_to_json",
]
