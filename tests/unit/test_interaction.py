"""Unit tests for the interaction model."""

from __future__ import annotations

import dataclasses

import pytest

from workflow_callback_codec.errors import InvalidInteraction
from workflow_callback_codec.interaction import (
    MAX_ARGS_DEPTH,
    Execute,
    InteractionKind,
    Query,
    Signal,
    SignalWithoutArgs,
)


def test_args_are_normalized_to_tuple() -> None:
    base = {"namespace": "n", "task_queue": "t", "workflow_id": "w", "run_id": "r"}
    from_list = Signal(**base, signal_name="s", args=[1, {"k": [True, None]}])
    from_tuple = Signal(**base, signal_name="s", args=(1, {"k": [True, None]}))

    assert from_list.args == (1, {"k": [True, None]})
    assert from_list == from_tuple


def test_args_default_to_empty() -> None:
    execute = Execute(namespace="n", task_queue="t", workflow_id="w", workflow_type="run")
    assert execute.args == ()


@pytest.mark.parametrize("field", ["namespace", "task_queue", "workflow_id"])
def test_empty_identifiers_are_rejected(field: str) -> None:
    values = {"namespace": "n", "task_queue": "t", "workflow_id": "w"}
    values[field] = ""

    with pytest.raises(InvalidInteraction, match=field):
        Query(**values, run_id="r", query_type="q")


def test_run_id_is_required_for_signal_and_query() -> None:
    with pytest.raises(InvalidInteraction, match="run_id"):
        Signal(namespace="n", task_queue="t", workflow_id="w", run_id=None, signal_name="s")

    with pytest.raises(InvalidInteraction, match="run_id"):
        Query(namespace="n", task_queue="t", workflow_id="w", run_id=None, query_type="q")


def test_execute_has_no_run_id() -> None:
    assert "run_id" not in {f.name for f in dataclasses.fields(Execute)}
    with pytest.raises(TypeError):
        Execute(namespace="n", task_queue="t", workflow_id="w", workflow_type="x", run_id="r")


def test_empty_run_id_and_name_are_allowed() -> None:
    signal = Signal(namespace="n", task_queue="t", workflow_id="w", run_id="", signal_name="")
    assert signal.run_id == ""
    assert signal.signal_name == ""


def test_non_string_fields_are_rejected() -> None:
    with pytest.raises(InvalidInteraction, match="workflow_type"):
        Execute(namespace="n", task_queue="t", workflow_id="w", workflow_type=7)


@pytest.mark.parametrize(
    "bad_args",
    ["not-a-list", {"a": 1}, [object()], [float("nan")], [{1: "x"}]],
)
def test_non_json_args_are_rejected(bad_args: object) -> None:
    with pytest.raises(InvalidInteraction):
        Execute(namespace="n", task_queue="t", workflow_id="w", workflow_type="x", args=bad_args)


def test_nested_tuples_are_stored_as_lists(signal: Signal) -> None:
    attached = signal.with_args([(1, 2), {"pair": ("a", "b")}])

    assert attached.args == ([1, 2], {"pair": ["a", "b"]})
    assert attached == signal.with_args([[1, 2], {"pair": ["a", "b"]}])


def test_args_nested_past_the_limit_are_rejected(signal: Signal) -> None:
    value: list = []
    for _ in range(MAX_ARGS_DEPTH):
        value = [value]

    with pytest.raises(InvalidInteraction, match="nested deeper"):
        signal.with_args([value])


def test_self_referencing_args_are_rejected(signal: Signal) -> None:
    loop: list = []
    loop.append(loop)

    with pytest.raises(InvalidInteraction):
        signal.with_args([loop])


def test_kind_matches_variant(signal: Signal, execute: Execute, query: Query) -> None:
    assert signal.kind is InteractionKind.SIGNAL
    assert execute.kind is InteractionKind.EXECUTE
    assert query.kind is InteractionKind.QUERY


def test_interactions_are_immutable(signal: Signal) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        signal.workflow_id = "other"  # type: ignore[misc]


def test_with_args_returns_validated_copy(signal: Signal) -> None:
    event = {"type": "block_actions", "actions": [{"action_id": "approve"}]}

    attached = signal.with_args([event])

    assert attached.args == (event,)
    assert attached.workflow_id == signal.workflow_id
    assert signal.args == ()
    assert attached.with_args(None).args == ()

    with pytest.raises(InvalidInteraction):
        signal.with_args([object()])


@pytest.mark.parametrize("bad_args", [{"event": 1}, "abc", b"abc", 42])
def test_with_args_rejects_non_sequences(
    signal: Signal, execute: Execute, query: Query, bad_args: object
) -> None:
    for interaction in (signal, execute, query):
        with pytest.raises(InvalidInteraction, match="args must be a sequence"):
            interaction.with_args(bad_args)  # type: ignore[arg-type]


def test_signal_without_args_converts_to_signal(
    signal_fields: SignalWithoutArgs, signal: Signal
) -> None:
    assert signal_fields.to_signal() == signal
