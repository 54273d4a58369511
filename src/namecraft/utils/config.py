"""Config utility for persistent namecraft settings.

Settings live in ``$XDG_CONFIG_HOME/namecraft/config.toml`` (default
``~/.config/namecraft/config.toml``). Uses tomli/tomli-w for TOML parsing and
writing.

Known keys:
- ``thumbnail.width`` / ``thumbnail.height``: placeholder thumbnail size.
- ``thumbnail.quality``: JPEG quality of the placeholder thumbnail.
- ``launch.opener``: program used instead of the platform default opener.
"""

import contextlib
import os
from pathlib import Path
from typing import Any, Optional, TypeVar, cast

import tomli
import tomli_w

DEFAULT_THUMBNAIL_WIDTH = 160
DEFAULT_THUMBNAIL_HEIGHT = 120
DEFAULT_THUMBNAIL_QUALITY = 80

KNOWN_SETTINGS: dict[str, Any] = {
    "thumbnail.width": DEFAULT_THUMBNAIL_WIDTH,
    "thumbnail.height": DEFAULT_THUMBNAIL_HEIGHT,
    "thumbnail.quality": DEFAULT_THUMBNAIL_QUALITY,
    "launch.opener": "",
}

T = TypeVar("T")


def get_config_dir() -> Path:
    """Return the namecraft config directory, honouring XDG_CONFIG_HOME."""
    xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config_home / "namecraft"


def get_config_file() -> Path:
    """Return the path of config.toml (it may not exist)."""
    return get_config_dir() / "config.toml"


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    with config_file.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Optional[Any]:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="thumbnail.width" will attempt
    ``data["thumbnail"]["width"]`` returning None if any level is missing.
    """
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "NAMECRAFT_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "thumbnail.width" -> "NAMECRAFT_THUMBNAIL_WIDTH".
    """
    return prefix + dotted_key.replace(".", "_").upper()


def set_setting(key: str, value: Any) -> None:  # noqa: ANN401
    """Write *value* under the dotted *key* in config.toml, creating it if needed."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    section = data
    for part in parents:
        section = section.setdefault(part, {})
    section[leaf] = value
    with get_config_file().open("wb") as f:
        tomli_w.dump(data, f)


def _coerce_str(value: str, default: Any) -> Any:  # noqa: ANN401
    """Best-effort conversion of a string setting to the type of *default*."""
    if isinstance(default, bool):
        return value.lower() in {"1", "true", "yes", "on"}
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            return default
    if isinstance(default, float):
        with contextlib.suppress(ValueError):
            return float(value)
        return default
    return value


def setting_default(key: str) -> Any:  # noqa: ANN401
    """Return the built-in default of a known setting.

    Raises:
        ValueError: If *key* is not one of KNOWN_SETTINGS.
    """
    if key not in KNOWN_SETTINGS:
        known = ", ".join(sorted(KNOWN_SETTINGS))
        raise ValueError(f"Unknown setting {key!r}. Known settings: {known}")
    return KNOWN_SETTINGS[key]


def parse_setting(key: str, raw: str) -> Any:  # noqa: ANN401
    """Convert a command-line string to the typed value stored for *key*.

    Raises:
        ValueError: If *key* is not a known setting or *raw* does not parse
            as that setting's type.
    """
    default = setting_default(key)
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"Setting {key} expects an integer, got {raw!r}") from None
    return raw


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: Optional[T] = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"thumbnail.quality"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from a CLI option (``None`` when not provided).

    Returns:
        The resolved value, coerced to the type of *default* where possible.
    """
    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return cast(T, _coerce_str(os.environ[env_var], default))

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        if isinstance(file_val, str):
            return cast(T, _coerce_str(file_val, default))
        if isinstance(default, bool) and not isinstance(file_val, bool):
            return default
        if isinstance(default, int) and not isinstance(default, bool):
            if isinstance(file_val, int) and not isinstance(file_val, bool):
                return cast(T, file_val)
            return default
        return cast(T, file_val)

    return default
