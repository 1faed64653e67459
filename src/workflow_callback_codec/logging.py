"""JSON log lines for services that encode or decode callback strings.

`codec.encode` and `codec.decode` log one DEBUG line per call with the
envelope context passed through `extra`. The formatter lifts that context to
top-level keys so log pipelines can filter on it directly:

    {"timestamp": ..., "level": "DEBUG", "logger": "workflow_callback_codec.codec",
     "message": "Decoded interaction", "version": "A", "kind": "Signal", "length": 63}

- `version`: the envelope's version tag
- `kind`: the interaction variant (`Execute`, `Signal` or `Query`)
- `length`: length of the whole encoded string

Any other `extra` keys land under `"extra"`. Payload values and custom data
are never logged.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

CODEC_CONTEXT_KEYS: tuple[str, ...] = ("version", "kind", "length")

# Attributes every LogRecord carries, plus the ones `Formatter.format` adds.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object with codec context at the top level."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        attached = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        for key in CODEC_CONTEXT_KEYS:
            if key in attached:
                payload[key] = attached.pop(key)
        if attached:
            payload["extra"] = attached

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str | int, stream: TextIO | None = None) -> None:
    """Send root logging to `stream` (stdout by default) as JSON lines.

    Calling it again replaces the handler instead of adding a second one.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
