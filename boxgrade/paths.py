from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILE_ENV = "BOXGRADE_CONFIG"
XDG_CONFIG_HOME_ENV = "XDG_CONFIG_HOME"


def _config_home() -> Path:
    xdg = os.getenv(XDG_CONFIG_HOME_ENV)
    if xdg:
        return Path(xdg).expanduser()
    return Path.home() / ".config"


def default_config_file() -> Path:
    override = os.getenv(CONFIG_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return _config_home() / "boxgrade" / "config.toml"
