from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Sequence

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11
    import tomli as tomllib

from boxgrade.errors import UserFacingError


@dataclass(frozen=True)
class Config:
    directories: tuple[str, ...] | None = None
    power_on: bool | None = None
    assume_yes: bool = False

    def require_directories(self) -> tuple[str, ...]:
        if self.directories is None:
            raise UserFacingError(
                "Error: No Vagrant directories configured.\n"
                "Set [vagrant] directories in the config file or pass --directory."
            )
        return self.directories

    def vagrant_power_on(self) -> bool:
        return True if self.power_on is None else self.power_on

    def with_overrides(
        self,
        *,
        directories: Sequence[str] | None = None,
        power_on: bool | None = None,
        assume_yes: bool | None = None,
    ) -> "Config":
        updated = self
        if directories:
            updated = replace(updated, directories=_expand_directories(directories))
        if power_on is not None:
            updated = replace(updated, power_on=power_on)
        if assume_yes is not None:
            updated = replace(updated, assume_yes=assume_yes)
        return updated


def _expand_directories(directories: Sequence[str]) -> tuple[str, ...]:
    return tuple(str(Path(directory).expanduser()) for directory in directories)


def _require_bool(data: dict[str, Any], key: str, source: Path) -> bool | None:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise UserFacingError(f"Error: '{key}' in {source} must be true or false")


def _parse_config(data: dict[str, Any], source: Path) -> Config:
    vagrant = data.get("vagrant", {})
    if not isinstance(vagrant, dict):
        raise UserFacingError(f"Error: [vagrant] in {source} must be a table")

    directories = vagrant.get("directories")
    if directories is not None:
        if not isinstance(directories, list) or not all(isinstance(d, str) for d in directories):
            raise UserFacingError(
                f"Error: 'directories' in {source} must be a list of paths"
            )
        directories = _expand_directories(directories)

    return Config(
        directories=directories,
        power_on=_require_bool(vagrant, "power_on", source),
        assume_yes=bool(_require_bool(data, "assume_yes", source)),
    )


def load_config(path: Path) -> Config:
    if not path.exists():
        return Config()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise UserFacingError(f"Error: Could not read config file '{path}': {exc}") from exc

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise UserFacingError(f"Error: Invalid config file '{path}': {exc}") from exc
    return _parse_config(data, path)
