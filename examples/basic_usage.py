#!/usr/bin/env python3
"""Mint and read back a callback id for an approval workflow.

This demonstrates using the codec components directly:

* load settings from `.env`
* encode an argument-free Signal as a callback id, with custom data appended
* decode it the way the gateway does and attach the inbound event as the argument
"""

from __future__ import annotations

import argparse
from typing import Sequence

from workflow_callback_codec import CodecError, SignalWithoutArgs, decode, encode_signal_no_args
from workflow_callback_codec.config import CodecSettings
from workflow_callback_codec.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Encode and decode a workflow callback id.")
    parser.add_argument("--namespace", default="default", help="Workflow namespace")
    parser.add_argument("--task-queue", required=True, help="Task queue of the workflow")
    parser.add_argument("--workflow-id", required=True, help="Workflow id to signal")
    parser.add_argument("--run-id", default="", help="Run id to signal (optional)")
    parser.add_argument("--signal", default="approval", help="Signal name")
    parser.add_argument("--custom-data", default=None, help="Opaque data appended to the id")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = CodecSettings()
    configure_logging(settings.log_level)

    fields = SignalWithoutArgs(
        namespace=args.namespace,
        task_queue=args.task_queue,
        workflow_id=args.workflow_id,
        run_id=args.run_id,
        signal_name=args.signal,
    )

    try:
        callback_id = encode_signal_no_args(
            fields,
            custom_data=args.custom_data,
            max_length=settings.max_length,
            registry=settings.build_registry(),
        )
        decoded = decode(callback_id)
    except CodecError as exc:
        print(f"Failed: {exc}")
        return 1

    event = {"type": "block_actions", "user": "U123"}
    routed = decoded.interaction.with_args([event])

    print(f"Callback id ({len(callback_id)} chars): {callback_id}")
    print(f"Custom data: {decoded.custom_data!r}")
    print(f"Routed interaction: {routed}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
