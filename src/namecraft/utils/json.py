"""JSON serialization helpers for namecraft.

Every CLI command answers the front end with one JSON document on stdout.
- Path objects are written as strings so the front end can pass them straight
  back to another command.
- datetime objects are written in ISO 8601.

Design:
- Custom encoder handles datetime and Path objects.
- pydantic records are dumped with ``to_record()`` before they reach the
  encoder; the encoder only sees plain containers.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder that understands datetime and Path values."""

    def default(self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to a JSON-serializable form.

        Returns:
            - datetime: ISO 8601 string
            - Path: string
            - Otherwise: falls back to the base class (TypeError)
        """
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def dumps(data: Any) -> str:  # noqa: ANN401
    """Serialize *data* compactly with DateTimeEncoder, keeping non-ASCII as-is."""
    return json.dumps(data, cls=DateTimeEncoder, ensure_ascii=False)
