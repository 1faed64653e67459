"""Workflow interaction commands.

An interaction is one of three closed variants:

- `Execute`: start a new workflow run (no run id exists yet)
- `Signal`: deliver a named signal to a running workflow
- `Query`: run a named query against a running workflow

Values are immutable and validated at construction time. `args` is always
stored as a tuple, and any nested tuples inside it as lists, so a value equals
its decoded copy whichever sequence types the caller passed.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import JsonValue

from workflow_callback_codec.errors import InvalidInteraction


class InteractionKind(str, Enum):
    EXECUTE = "Execute"
    SIGNAL = "Signal"
    QUERY = "Query"


def _require_text(name: str, value: object, *, non_empty: bool) -> None:
    if not isinstance(value, str):
        raise InvalidInteraction(f"{name} must be a string, got {type(value).__name__}")
    if non_empty and not value:
        raise InvalidInteraction(f"{name} must not be empty")


# Deepest nesting allowed inside args; each element of `args` is depth 1.
# Kept well under the interpreter recursion limit.
MAX_ARGS_DEPTH = 100


def _to_json_value(value: object, where: str, depth: int) -> JsonValue:
    """Return `value` with nested tuples turned into lists, or fail."""

    if depth > MAX_ARGS_DEPTH:
        raise InvalidInteraction(f"{where} is nested deeper than {MAX_ARGS_DEPTH} levels")
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return value
    elif isinstance(value, (list, tuple)):
        return [_to_json_value(item, where, depth + 1) for item in value]
    elif isinstance(value, dict):
        if all(isinstance(key, str) for key in value):
            return {key: _to_json_value(item, where, depth + 1) for key, item in value.items()}
    raise InvalidInteraction(f"{where} is not a JSON value: {value!r}")


def _normalize_args(value: object) -> tuple[JsonValue, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes, dict)) or not isinstance(value, Iterable):
        raise InvalidInteraction(f"args must be a sequence, got {type(value).__name__}")
    return tuple(
        _to_json_value(item, f"args[{position}]", 1) for position, item in enumerate(value)
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class _WorkflowTarget:
    namespace: str
    task_queue: str
    workflow_id: str

    def _validate_target(self) -> None:
        _require_text("namespace", self.namespace, non_empty=True)
        _require_text("task_queue", self.task_queue, non_empty=True)
        _require_text("workflow_id", self.workflow_id, non_empty=True)


@dataclass(frozen=True, slots=True, kw_only=True)
class Execute(_WorkflowTarget):
    """Start a new run of `workflow_type`."""

    workflow_type: str
    args: tuple[JsonValue, ...] = field(default=())

    def __post_init__(self) -> None:
        self._validate_target()
        _require_text("workflow_type", self.workflow_type, non_empty=False)
        object.__setattr__(self, "args", _normalize_args(self.args))

    @property
    def kind(self) -> InteractionKind:
        return InteractionKind.EXECUTE

    def with_args(self, args: Iterable[JsonValue] | None) -> Execute:
        return dataclasses.replace(self, args=() if args is None else args)


@dataclass(frozen=True, slots=True, kw_only=True)
class Signal(_WorkflowTarget):
    """Deliver `signal_name` to an existing run."""

    run_id: str
    signal_name: str
    args: tuple[JsonValue, ...] = field(default=())

    def __post_init__(self) -> None:
        self._validate_target()
        if self.run_id is None:
            raise InvalidInteraction("run_id is required for Signal")
        _require_text("run_id", self.run_id, non_empty=False)
        _require_text("signal_name", self.signal_name, non_empty=False)
        object.__setattr__(self, "args", _normalize_args(self.args))

    @property
    def kind(self) -> InteractionKind:
        return InteractionKind.SIGNAL

    def with_args(self, args: Iterable[JsonValue] | None) -> Signal:
        return dataclasses.replace(self, args=() if args is None else args)


@dataclass(frozen=True, slots=True, kw_only=True)
class Query(_WorkflowTarget):
    """Run `query_type` against an existing run."""

    run_id: str
    query_type: str
    args: tuple[JsonValue, ...] = field(default=())

    def __post_init__(self) -> None:
        self._validate_target()
        if self.run_id is None:
            raise InvalidInteraction("run_id is required for Query")
        _require_text("run_id", self.run_id, non_empty=False)
        _require_text("query_type", self.query_type, non_empty=False)
        object.__setattr__(self, "args", _normalize_args(self.args))

    @property
    def kind(self) -> InteractionKind:
        return InteractionKind.QUERY

    def with_args(self, args: Iterable[JsonValue] | None) -> Query:
        return dataclasses.replace(self, args=() if args is None else args)


Interaction = Execute | Signal | Query


@dataclass(frozen=True, slots=True, kw_only=True)
class SignalWithoutArgs(_WorkflowTarget):
    """The fields of a Signal that carries no arguments.

    Useful for routing webhook events back to a workflow: the event itself is
    attached as the Signal's argument once the gateway decodes the string.
    """

    run_id: str
    signal_name: str

    def to_signal(self) -> Signal:
        return Signal(
            namespace=self.namespace,
            task_queue=self.task_queue,
            workflow_id=self.workflow_id,
            run_id=self.run_id,
            signal_name=self.signal_name,
        )
