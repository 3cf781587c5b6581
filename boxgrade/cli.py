from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any


def add_config_args(parser: argparse.ArgumentParser, default_config: Path) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=default_config,
        help=f"Config file (default: {default_config})",
    )
    parser.add_argument(
        "-d",
        "--directory",
        dest="directories",
        action="append",
        metavar="DIR",
        help="Vagrant directory to process; repeatable, replaces the configured list",
    )
    parser.add_argument("-y", "--yes", action="store_true", help="Run topgrade with -y")
    parser.add_argument(
        "--no-power-on",
        action="store_true",
        help="Skip boxes that are not running instead of powering them on",
    )


def add_run_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Print the vagrant commands that would change box state instead of running them",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def config_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "directories": getattr(args, "directories", None),
        "power_on": False if getattr(args, "no_power_on", False) else None,
        "assume_yes": True if getattr(args, "yes", False) else None,
    }
