"""Unit tests for the JSON bridge used by binding shims."""

from __future__ import annotations

import json

import pytest

from workflow_callback_codec.errors import InvalidInteraction, UnsupportedVersion
from workflow_callback_codec.interaction import Execute, Query, Signal
from workflow_callback_codec.json_bridge import (
    decode_to_json,
    encode_from_json,
    interaction_from_dict,
    interaction_from_json,
    interaction_to_json,
)


def test_interaction_to_json_puts_type_first(signal: Signal) -> None:
    text = interaction_to_json(signal)

    assert text.startswith('{"type":"Signal",')
    assert json.loads(text) == {
        "type": "Signal",
        "namespace": "test-namespace",
        "task_queue": "template-taskqueue",
        "workflow_id": "1",
        "run_id": "r1",
        "signal_name": "go",
        "args": [],
    }


def test_json_round_trip(signal: Signal, execute: Execute, query: Query) -> None:
    for interaction in (signal, execute, query):
        assert interaction_from_json(interaction_to_json(interaction)) == interaction


def test_from_json_parses_execute() -> None:
    interaction = interaction_from_json(
        '{"type": "Execute", "namespace": "ns", "task_queue": "tq", '
        '"workflow_id": "wf", "workflow_type": "run", "args": [{"arg1": "value1"}]}'
    )

    assert interaction == Execute(
        namespace="ns",
        task_queue="tq",
        workflow_id="wf",
        workflow_type="run",
        args=[{"arg1": "value1"}],
    )


@pytest.mark.parametrize("args", [None, "omitted"])
def test_missing_or_null_args_are_empty(args: object) -> None:
    data = {
        "type": "Query",
        "namespace": "ns",
        "task_queue": "tq",
        "workflow_id": "wf",
        "run_id": "r",
        "query_type": "state",
    }
    if args != "omitted":
        data["args"] = args

    assert interaction_from_dict(data).args == ()


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2]",
        '{"namespace": "ns"}',
        '{"type": "Cancel", "namespace": "ns"}',
        '{"type": "Execute", "namespace": "ns", "task_queue": "tq", "workflow_id": "wf", '
        '"workflow_type": "run", "run_id": "r"}',
        '{"type": "Signal", "namespace": "ns", "task_queue": "tq", "workflow_id": "wf", '
        '"signal_name": "go"}',
        '{"type": "Signal", "namespace": 5, "task_queue": "tq", "workflow_id": "wf", '
        '"run_id": "r", "signal_name": "go"}',
        '{"type": "Signal", "namespace": "", "task_queue": "tq", "workflow_id": "wf", '
        '"run_id": "r", "signal_name": "go"}',
    ],
)
def test_invalid_json_interactions_are_rejected(text: str) -> None:
    with pytest.raises(InvalidInteraction):
        interaction_from_json(text)


def test_encode_from_json_matches_encode(signal: Signal) -> None:
    encoded = encode_from_json(interaction_to_json(signal), custom_data="user")
    assert encoded == "A~E:Signal,N:test-namespace,T:template-taskqueue,W:1,R:r1,S:go,A:~user"


def test_decode_to_json_drops_custom_data(execute: Execute) -> None:
    text = decode_to_json(encode_from_json(interaction_to_json(execute), custom_data="extra"))

    assert json.loads(text) == json.loads(interaction_to_json(execute))


def test_decode_to_json_propagates_codec_errors() -> None:
    with pytest.raises(UnsupportedVersion):
        decode_to_json("Z~garbage")
