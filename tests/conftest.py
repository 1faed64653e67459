"""Test configuration and fixtures."""

import logging

import pytest

from workflow_callback_codec.interaction import Execute, Query, Signal, SignalWithoutArgs


@pytest.fixture
def signal() -> Signal:
    """Provide the argument-free Signal used throughout the gateway docs."""
    return Signal(
        namespace="test-namespace",
        task_queue="template-taskqueue",
        workflow_id="1",
        run_id="r1",
        signal_name="go",
    )


@pytest.fixture
def signal_fields() -> SignalWithoutArgs:
    """Provide the fast-path input matching the `signal` fixture."""
    return SignalWithoutArgs(
        namespace="test-namespace",
        task_queue="template-taskqueue",
        workflow_id="1",
        run_id="r1",
        signal_name="go",
    )


@pytest.fixture
def execute() -> Execute:
    """Provide an Execute carrying a JSON object argument."""
    return Execute(
        namespace="test-namespace",
        task_queue="test-task-queue",
        workflow_id="some-super-long-uuid-string",
        workflow_type="some-wf-function-name",
        args=[{"arg1": "value1"}],
    )


@pytest.fixture
def query() -> Query:
    """Provide a Query with positional arguments."""
    return Query(
        namespace="test-namespace",
        task_queue="test-task-queue",
        workflow_id="wf-7",
        run_id="run-7",
        query_type="current_state",
        args=["verbose", 3],
    )


@pytest.fixture
def restore_root_logging():
    """Restore root handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
