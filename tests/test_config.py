from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from clocks.config import ClockSpec, default_config_path, load_clock_specs
from clocks.errors import ConfigError, ConfigNotFound, ConfigParseError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "worldclock.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_clock_specs_keeps_file_order(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
[[clocks]]

[[clocks]]
tz = "Europe/Berlin"

[[clocks]]
name = "Costa Rica"
tz = "America/Costa_Rica"

[[clocks]]
name = "Alpha"
""",
    )
    assert load_clock_specs(path) == [
        ClockSpec(),
        ClockSpec(tz="Europe/Berlin"),
        ClockSpec(name="Costa Rica", tz="America/Costa_Rica"),
        ClockSpec(name="Alpha"),
    ]


def test_load_clock_specs_keeps_emoji_names_verbatim(tmp_path: Path) -> None:
    path = _write(tmp_path, '[[clocks]]\nname = "💻"\n\n[[clocks]]\nname = "🏠"\ntz = "Europe/Berlin"\n')
    specs = load_clock_specs(path)
    assert [spec.name for spec in specs] == ["💻", "🏠"]


def test_empty_file_yields_no_clocks(tmp_path: Path) -> None:
    assert load_clock_specs(_write(tmp_path, "")) == []


def test_explicit_empty_clock_list_yields_no_clocks(tmp_path: Path) -> None:
    assert load_clock_specs(_write(tmp_path, "clocks = []\n")) == []


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        'theme = "dark"\n\n[[clocks]]\ntz = "Asia/Tokyo"\ncolor = "red"\n',
    )
    assert load_clock_specs(path) == [ClockSpec(tz="Asia/Tokyo")]


def test_missing_file_raises_config_not_found(tmp_path: Path) -> None:
    path = tmp_path / "nope.toml"
    with pytest.raises(ConfigNotFound, match="not found") as excinfo:
        load_clock_specs(path)
    assert excinfo.value.path == path
    assert str(path) in str(excinfo.value)
    assert not path.exists()


def test_malformed_toml_raises_parse_error_with_path(tmp_path: Path) -> None:
    path = _write(tmp_path, "[[clocks]]\nname = \n")
    with pytest.raises(ConfigParseError, match="invalid TOML") as excinfo:
        load_clock_specs(path)
    assert str(path) in str(excinfo.value)


def test_non_string_field_names_the_field(tmp_path: Path) -> None:
    path = _write(tmp_path, '[[clocks]]\nname = "ok"\n\n[[clocks]]\nname = 42\n')
    with pytest.raises(ConfigParseError, match=r"clocks\[1\]\.name"):
        load_clock_specs(path)


def test_non_string_tz_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path, "[[clocks]]\ntz = [1, 2]\n")
    with pytest.raises(ConfigParseError, match=r"clocks\[0\]\.tz"):
        load_clock_specs(path)


def test_clocks_must_be_an_array(tmp_path: Path) -> None:
    path = _write(tmp_path, 'clocks = "Europe/Berlin"\n')
    with pytest.raises(ConfigParseError, match="array of tables"):
        load_clock_specs(path)


def test_clock_entries_must_be_tables(tmp_path: Path) -> None:
    path = _write(tmp_path, "clocks = [1, 2]\n")
    with pytest.raises(ConfigParseError, match="must be a table"):
        load_clock_specs(path)


def test_invalid_utf8_raises_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "worldclock.toml"
    path.write_bytes(b'[[clocks]]\nname = "\xff\xfe"\n')
    with pytest.raises(ConfigParseError, match="UTF-8"):
        load_clock_specs(path)


def test_unreadable_path_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_clock_specs(tmp_path)
    assert not isinstance(excinfo.value, ConfigNotFound)
    assert str(tmp_path) in str(excinfo.value)


class TestDefaultConfigPath:
    def test_uses_env_override(self, tmp_path: Path) -> None:
        target = tmp_path / "custom.toml"
        assert default_config_path({"WORLDCLOCK_CONFIG": str(target)}) == target

    def test_blank_env_override_falls_back_to_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        path = default_config_path({"WORLDCLOCK_CONFIG": "   "})
        assert path == tmp_path / ".config" / "worldclock.toml"

    def test_defaults_to_user_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_config_path({}) == tmp_path / ".config" / "worldclock.toml"

    def test_unknown_home_raises_config_error(self) -> None:
        with patch("clocks.config.Path.home", side_effect=RuntimeError("no home")):
            with pytest.raises(ConfigError, match="home directory"):
                default_config_path({})
