from __future__ import annotations

from pathlib import Path


class WorldClockError(Exception):
    """Base error for anything that aborts a worldclock run."""


class ConfigError(WorldClockError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class ConfigNotFound(ConfigError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, "config file not found")


class ConfigParseError(ConfigError):
    pass


class InvalidTimezone(WorldClockError):
    def __init__(self, tz: str) -> None:
        super().__init__(f"Unknown timezone: {tz!r}")
        self.tz = tz
