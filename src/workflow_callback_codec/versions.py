"""Version tag -> payload ruleset registry.

Each encoded string starts with a single-character version tag naming the
ruleset that produced its payload. Rulesets are only ever added, never changed
in place, so strings minted under an older tag stay decodable indefinitely.

Registered tags:

- `A`: tagged fields, args as unpadded base64url JSON (`tagged.py`)
- `B`: positional argument-free Signal (`positional.py`)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from workflow_callback_codec import positional, tagged
from workflow_callback_codec.errors import UnsupportedVersion
from workflow_callback_codec.interaction import Interaction

TAGGED_VERSION = "A"
POSITIONAL_SIGNAL_VERSION = "B"


@dataclass(frozen=True, slots=True)
class Ruleset:
    tag: str
    name: str
    encode_payload: Callable[[Interaction], str]
    decode_payload: Callable[[str], Interaction]


STANDARD_RULESETS: tuple[Ruleset, ...] = (
    Ruleset(
        tag=TAGGED_VERSION,
        name="tagged",
        encode_payload=tagged.encode_payload,
        decode_payload=tagged.decode_payload,
    ),
    Ruleset(
        tag=POSITIONAL_SIGNAL_VERSION,
        name="positional-signal",
        encode_payload=positional.encode_payload,
        decode_payload=positional.decode_payload,
    ),
)


class VersionRegistry:
    """Immutable table of rulesets keyed by version tag.

    `default_version` is used by `encode` when the caller does not pin a
    version; `signal_no_args_version` is used by `encode_signal_no_args`.
    """

    def __init__(
        self,
        rulesets: Iterable[Ruleset],
        *,
        default_version: str,
        signal_no_args_version: str,
    ) -> None:
        table: dict[str, Ruleset] = {}
        for ruleset in rulesets:
            tag = ruleset.tag
            if len(tag) != 1 or not tag.isprintable():
                raise ValueError(f"Version tag must be one printable character: {tag!r}")
            if tag in tagged.RESERVED_CHARACTERS:
                raise ValueError(f"Version tag must not be a reserved character: {tag!r}")
            if tag in table:
                raise ValueError(f"Version tag registered twice: {tag!r}")
            table[tag] = ruleset

        for default in (default_version, signal_no_args_version):
            if default not in table:
                raise ValueError(f"Default version is not registered: {default!r}")

        self._rulesets: Mapping[str, Ruleset] = MappingProxyType(table)
        self._default_version = default_version
        self._signal_no_args_version = signal_no_args_version

    @classmethod
    def standard(
        cls,
        *,
        default_version: str = TAGGED_VERSION,
        signal_no_args_version: str = POSITIONAL_SIGNAL_VERSION,
    ) -> VersionRegistry:
        return cls(
            STANDARD_RULESETS,
            default_version=default_version,
            signal_no_args_version=signal_no_args_version,
        )

    def ruleset_for(self, tag: str) -> Ruleset:
        try:
            return self._rulesets[tag]
        except KeyError as e:
            raise UnsupportedVersion(tag) from e

    def default_version(self) -> str:
        return self._default_version

    def signal_no_args_version(self) -> str:
        return self._signal_no_args_version

    def versions(self) -> tuple[str, ...]:
        return tuple(self._rulesets)

    def __contains__(self, tag: object) -> bool:
        return tag in self._rulesets

    def __repr__(self) -> str:
        return (
            f"VersionRegistry(versions={self.versions()!r}, "
            f"default_version={self._default_version!r})"
        )


DEFAULT_REGISTRY = VersionRegistry.standard()
