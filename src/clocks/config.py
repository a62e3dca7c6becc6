from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from clocks.errors import ConfigError, ConfigNotFound, ConfigParseError

logger = logging.getLogger(__name__)

_ENV_NAME = "WORLDCLOCK_CONFIG"
_DEFAULT_RELATIVE_PATH = Path(".config") / "worldclock.toml"


@dataclass(frozen=True)
class ClockSpec:
    name: str | None = None
    tz: str | None = None


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    override = env.get(_ENV_NAME, "").strip()
    if override:
        return Path(override).expanduser()
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigError(_DEFAULT_RELATIVE_PATH, "could not determine home directory") from exc
    return home / _DEFAULT_RELATIVE_PATH


def _as_optional_str(value: Any, *, path: Path, key: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise ConfigParseError(path, f"`{key}` must be a string, got {type(value).__name__}.")


def _parse_one_clock(raw: Any, *, path: Path, index: int) -> ClockSpec:
    if not isinstance(raw, dict):
        raise ConfigParseError(path, f"`clocks[{index}]` must be a table.")
    # unknown keys are ignored so newer configs keep working
    return ClockSpec(
        name=_as_optional_str(raw.get("name"), path=path, key=f"clocks[{index}].name"),
        tz=_as_optional_str(raw.get("tz"), path=path, key=f"clocks[{index}].tz"),
    )


def parse_clock_specs(text: str, path: Path) -> list[ClockSpec]:
    try:
        decoded = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigParseError(path, f"invalid TOML: {exc}") from exc

    raw_clocks = decoded.get("clocks", [])
    if not isinstance(raw_clocks, list):
        raise ConfigParseError(path, "`clocks` must be an array of tables ([[clocks]]).")
    return [_parse_one_clock(raw, path=path, index=i) for i, raw in enumerate(raw_clocks)]


def load_clock_specs(path: Path) -> list[ClockSpec]:
    """Read ``path`` and return its clocks in file order.

    Raises ConfigNotFound when the file is missing and ConfigParseError when
    it is not valid TOML or a clock field has the wrong type.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigNotFound(path) from exc
    except UnicodeDecodeError as exc:
        raise ConfigParseError(path, f"file is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ConfigError(path, f"could not read config file: {exc.strerror or exc}") from exc

    specs = parse_clock_specs(text, path)
    logger.debug("Loaded %d clock(s) from %s", len(specs), path)
    return specs
