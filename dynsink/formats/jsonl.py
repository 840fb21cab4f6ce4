"""JSON-lines output format."""

from __future__ import annotations

import json

from dynsink.formats.base import StreamFormat
from dynsink.models.events import Event


class JsonOutputFormat(StreamFormat):
    """One canonical JSON object per line.

    Keys are sorted and separators compact, so identical events always
    produce identical bytes.
    """

    format_name = "json"

    def encode(self, event: Event) -> bytes:
        record = {
            "body": event.body_text,
            "tags": event.tags,
            "host": event.host,
            "priority": event.priority.value,
            "timestamp": event.timestamp.isoformat(),
        }
        line = json.dumps(record, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        return (line + "\n").encode("utf-8")
