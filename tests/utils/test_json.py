"""Tests for namecraft.utils.json."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from namecraft.utils.json import DateTimeEncoder, dumps


def test_encodes_path_and_datetime() -> None:
    data = {
        "path": Path("a") / "b.txt",
        "when": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    }
    parsed = json.loads(json.dumps(data, cls=DateTimeEncoder))
    assert parsed["path"] == str(Path("a") / "b.txt")
    assert parsed["when"] == "2024-01-02T03:04:05+00:00"


def test_dumps_keeps_unicode() -> None:
    assert dumps({"name": "照片.jpg"}) == '{"name": "照片.jpg"}'


def test_unknown_type_raises() -> None:
    with pytest.raises(TypeError):
        dumps({"x": object()})
