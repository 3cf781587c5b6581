from __future__ import annotations

import logging
import os
import shutil
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path

from boxgrade.config import Config
from boxgrade.errors import UserFacingError
from boxgrade.power import temporary_power_on
from boxgrade.status import VagrantBox
from boxgrade.terminal import print_separator
from boxgrade.vagrant import VagrantClient

logger = logging.getLogger(__name__)

DEFAULT_BOX_NAME = "default"
PREFIX_ENV_VAR = "TOPGRADE_PREFIX"
REMOTE_COMMAND = "topgrade"


@dataclass
class RunReport:
    upgraded: list[VagrantBox] = field(default_factory=list)
    skipped: list[VagrantBox] = field(default_factory=list)


def find_vagrant(binary: str = "vagrant") -> str:
    path = shutil.which(binary)
    if path is None:
        raise UserFacingError(f"Error: Command not found: {binary}")
    return path


def topgrade_prefix(box: VagrantBox) -> str:
    if box.name == DEFAULT_BOX_NAME:
        return Path(os.path.abspath(box.directory)).name
    return box.name


def build_topgrade_command(prefix: str, assume_yes: bool) -> str:
    command = f"env {PREFIX_ENV_VAR}={prefix} {REMOTE_COMMAND}"
    if assume_yes:
        command += " -y"
    return command


def run_vagrant_boxes(vagrant: VagrantClient, config: Config) -> RunReport:
    """Run topgrade inside every box of every configured Vagrant directory.

    Boxes that are not running are brought up first (unless power-on is
    disabled, in which case they are skipped) and put back into the state
    they were found in once topgrade finishes or fails.
    """
    directories = config.require_directories()
    report = RunReport()

    print_separator("Vagrant")

    for directory in directories:
        boxes = vagrant.get_boxes(directory)
        logger.debug("Boxes in %s: %s", directory, boxes)
        for box, status in boxes:
            with ExitStack() as stack:
                if not status.is_powered_on():
                    if not config.vagrant_power_on():
                        print(f"Skipping powered off box {box}")
                        report.skipped.append(box)
                        continue
                    stack.enter_context(temporary_power_on(vagrant, box, status))

                print(f"Running Topgrade in {box}")
                command = build_topgrade_command(topgrade_prefix(box), config.assume_yes)
                vagrant.ssh(box, command)
                report.upgraded.append(box)
    return report
