"""Tests for the namecraft CLI commands.

Each command must print one JSON document on stdout; failures print
``{"error": ...}`` and exit with code 1.
"""

import base64
import json
import os
from pathlib import Path
from typing import Any, Dict
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from namecraft.cli.commands import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("NAMECRAFT_NO_RICH", "1")
    for var in (
        "NAMECRAFT_THUMBNAIL_WIDTH",
        "NAMECRAFT_THUMBNAIL_HEIGHT",
        "NAMECRAFT_THUMBNAIL_QUALITY",
        "NAMECRAFT_LAUNCH_OPENER",
    ):
        monkeypatch.delenv(var, raising=False)


def _doc(output: str) -> Dict[str, Any]:
    """Return the JSON document printed by a command."""
    for line in output.splitlines():
        if line.startswith("{"):
            return json.loads(line)
    raise AssertionError(f"no JSON document in output: {output!r}")


def test_rename(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("A")
    result = runner.invoke(app, ["rename", str(tmp_path / "a.txt"), str(tmp_path / "b.txt")])
    assert result.exit_code == 0
    assert _doc(result.output) == {"ok": True}
    assert (tmp_path / "b.txt").read_text() == "A"


def test_rename_existing_target(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("A")
    (tmp_path / "b.txt").write_text("B")
    result = runner.invoke(app, ["rename", str(tmp_path / "a.txt"), str(tmp_path / "b.txt")])
    assert result.exit_code == 1
    assert "already exists" in _doc(result.output)["error"]
    assert (tmp_path / "a.txt").read_text() == "A"
    assert (tmp_path / "b.txt").read_text() == "B"


def test_safe_name(tmp_path: Path) -> None:
    (tmp_path / "beach.jpg").touch()
    result = runner.invoke(app, ["safe-name", str(tmp_path), "beach.jpg"])
    assert result.exit_code == 0
    assert _doc(result.output) == {"name": "beach(1).jpg"}


def test_temp_name(tmp_path: Path) -> None:
    result = runner.invoke(app, ["temp-name", str(tmp_path), "clip.mp4"])
    assert result.exit_code == 0
    name = _doc(result.output)["name"]
    assert name.startswith("~temp_clip_")
    assert name.endswith(".mp4")


def test_apply_swap(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("A")
    (tmp_path / "b.txt").write_text("B")
    pairs = json.dumps([[str(tmp_path / "a.txt"), "b.txt"], [str(tmp_path / "b.txt"), "a.txt"]])
    result = runner.invoke(app, ["apply", pairs])
    assert result.exit_code == 0
    doc = _doc(result.output)
    assert doc["success"] is True
    assert len(doc["renamed"]) == 2
    assert (tmp_path / "a.txt").read_text() == "B"


def test_apply_failure_rolls_back(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("A")
    (tmp_path / "taken.txt").write_text("T")
    pairs = json.dumps([[str(tmp_path / "a.txt"), "taken.txt"]])
    result = runner.invoke(app, ["apply", pairs])
    assert result.exit_code == 1
    doc = _doc(result.output)
    assert doc["success"] is False
    assert doc["rolledBack"] is True
    assert (tmp_path / "a.txt").read_text() == "A"


def test_apply_from_stdin_with_conflict_resolution(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("A")
    (tmp_path / "taken.txt").write_text("T")
    pairs = json.dumps([[str(tmp_path / "a.txt"), "taken.txt"]])
    result = runner.invoke(app, ["apply", "-", "--resolve-conflicts"], input=pairs)
    assert result.exit_code == 0
    assert (tmp_path / "taken(1).txt").read_text() == "A"


def test_apply_malformed_list() -> None:
    result = runner.invoke(app, ["apply", '{"not": "a list"}'])
    assert result.exit_code == 1
    assert "error" in _doc(result.output)


def test_info(tmp_path: Path) -> None:
    path = tmp_path / "clip.MKV"
    path.write_bytes(b"abc")
    os.utime(path, ns=(1_700_000_000_000_000_000, 1_700_000_000_000_000_000))
    result = runner.invoke(app, ["info", str(path)])
    assert result.exit_code == 0
    doc = _doc(result.output)
    assert doc["fullName"] == "clip.MKV"
    assert doc["isVideo"] is True
    assert doc["size"] == 3
    assert doc["timeString"] == "2023-11-14 22:13:20"


def test_info_missing(tmp_path: Path) -> None:
    result = runner.invoke(app, ["info", str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "not found" in _doc(result.output)["error"]


def test_file_time_never_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["file-time", str(tmp_path / "nope")])
    assert result.exit_code == 0
    assert _doc(result.output)["seconds"] > 0


def test_thumbnail(tmp_path: Path) -> None:
    video = tmp_path / "clip.mp4"
    video.touch()
    result = runner.invoke(
        app, ["thumbnail", str(video), "--width", "120", "--height", "80"]
    )
    assert result.exit_code == 0
    data = base64.b64decode(_doc(result.output)["data"])
    assert data[:2] == b"\xff\xd8"


def test_thumbnail_size_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    video = tmp_path / "clip.mp4"
    video.touch()
    monkeypatch.setenv("NAMECRAFT_THUMBNAIL_WIDTH", "32")
    with patch(
        "namecraft.cli.commands.synthesize_video_thumbnail", return_value="xx"
    ) as synth:
        result = runner.invoke(app, ["thumbnail", str(video)])
    assert result.exit_code == 0
    assert synth.call_args.args[1:] == (32, 120)
    assert synth.call_args.kwargs["quality"] == 80


def test_thumbnail_missing(tmp_path: Path) -> None:
    result = runner.invoke(app, ["thumbnail", str(tmp_path / "gone.mp4")])
    assert result.exit_code == 1
    assert "error" in _doc(result.output)


def test_exists_is_file_basename(tmp_path: Path) -> None:
    path = tmp_path / "song.flac"
    path.touch()
    assert _doc(runner.invoke(app, ["exists", str(path)]).output) == {"result": True}
    assert _doc(runner.invoke(app, ["is-file", str(tmp_path)]).output) == {
        "result": False
    }
    assert _doc(runner.invoke(app, ["basename", str(path)]).output) == {
        "result": "song"
    }


def test_list(tmp_path: Path) -> None:
    (tmp_path / "B.jpg").touch()
    (tmp_path / "a.jpg").touch()
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.jpg").touch()

    result = runner.invoke(app, ["list", str(tmp_path)])
    assert result.exit_code == 0
    names = [Path(f).name for f in _doc(result.output)["files"]]
    assert names == ["a.jpg", "B.jpg", "c.jpg"]

    result = runner.invoke(app, ["list", str(tmp_path), "--no-recursive", "--desc"])
    names = [Path(f).name for f in _doc(result.output)["files"]]
    assert names == ["B.jpg", "a.jpg"]


def test_list_by_time(tmp_path: Path) -> None:
    old = tmp_path / "old.txt"
    new = tmp_path / "new.txt"
    old.touch()
    new.touch()
    os.utime(old, (1_000_000, 1_000_000))
    os.utime(new, (2_000_000, 2_000_000))
    result = runner.invoke(app, ["list", str(tmp_path), "--sort", "time", "--desc"])
    names = [Path(f).name for f in _doc(result.output)["files"]]
    assert names == ["new.txt", "old.txt"]


def test_list_missing(tmp_path: Path) -> None:
    result = runner.invoke(app, ["list", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "error" in _doc(result.output)


def test_open_and_reveal(tmp_path: Path, mocker: Any) -> None:
    popen = mocker.patch("namecraft.fs.launch.subprocess.Popen")
    video = tmp_path / "clip.mp4"
    video.touch()
    player = tmp_path / "player"
    player.touch()

    result = runner.invoke(app, ["open", str(video), "--app", str(player)])
    assert result.exit_code == 0
    assert popen.call_args.args[0] == [str(player), str(video)]

    result = runner.invoke(app, ["reveal", str(video)])
    assert result.exit_code == 0
    assert _doc(result.output) == {"ok": True}


def test_open_missing(tmp_path: Path, mocker: Any) -> None:
    mocker.patch("namecraft.fs.launch.subprocess.Popen")
    result = runner.invoke(app, ["open", str(tmp_path / "gone.mp4")])
    assert result.exit_code == 1
    assert "not found" in _doc(result.output)["error"]


def test_version() -> None:
    from namecraft.__about__ import __version__

    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_config_set_then_thumbnail_uses_it(tmp_path: Path) -> None:
    result = runner.invoke(app, ["config", "set", "thumbnail.width", "48"])
    assert result.exit_code == 0
    assert _doc(result.output) == {"key": "thumbnail.width", "value": 48}
    assert "width = 48" in (tmp_path / "xdg" / "namecraft" / "config.toml").read_text()

    result = runner.invoke(app, ["config", "get", "thumbnail.width"])
    assert _doc(result.output) == {"key": "thumbnail.width", "value": 48}

    video = tmp_path / "clip.mp4"
    video.touch()
    with patch(
        "namecraft.cli.commands.synthesize_video_thumbnail", return_value="xx"
    ) as synth:
        runner.invoke(app, ["thumbnail", str(video)])
    assert synth.call_args.args[1:] == (48, 120)


def test_config_get_default() -> None:
    result = runner.invoke(app, ["config", "get", "launch.opener"])
    assert result.exit_code == 0
    assert _doc(result.output) == {"key": "launch.opener", "value": ""}


def test_config_rejects_unknown_key() -> None:
    result = runner.invoke(app, ["config", "set", "colour", "red"])
    assert result.exit_code == 1
    assert "Unknown setting" in _doc(result.output)["error"]


def test_config_rejects_bad_integer() -> None:
    result = runner.invoke(app, ["config", "set", "thumbnail.quality", "high"])
    assert result.exit_code == 1
    assert "expects an integer" in _doc(result.output)["error"]
