from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

_HEADER_LINES = 2


class StatusParseError(ValueError):
    """Raised when `vagrant status` output does not match the expected table."""


class BoxStatus(Enum):
    POWER_OFF = "poweroff"
    RUNNING = "running"
    SAVED = "saved"
    ABORTED = "aborted"

    @classmethod
    def from_token(cls, token: str) -> "BoxStatus":
        try:
            return cls(token.lower())
        except ValueError:
            raise StatusParseError(f"Unknown box status: {token!r}") from None

    def is_powered_on(self) -> bool:
        return self is BoxStatus.RUNNING


@dataclass(frozen=True)
class VagrantBox:
    name: str
    directory: str

    def __str__(self) -> str:
        return f"{self.name} @ {self.directory}"


def _box_table_lines(output: str) -> list[str]:
    lines: list[str] = []
    for line in output.split("\n")[_HEADER_LINES:]:
        if not line or line.startswith("\r"):
            break
        lines.append(line)
    return lines


def parse_status(output: str, directory: str) -> list[tuple[VagrantBox, BoxStatus]]:
    """Parse the box table of `vagrant status` output run in `directory`.

    The first two lines are the banner and a blank separator. Box rows follow
    until the first empty line (or a bare carriage return on Windows hosts);
    everything after that is explanatory text and is ignored.
    """
    boxes: list[tuple[VagrantBox, BoxStatus]] = []
    for line in _box_table_lines(output):
        logger.debug("Vagrant line: %r", line)
        elements = line.split()
        if len(elements) < 2:
            raise StatusParseError(
                f"Error: Could not parse vagrant status line {line!r} in {directory}"
            )
        name, token = elements[0], elements[1]
        try:
            status = BoxStatus.from_token(token)
        except StatusParseError as exc:
            raise StatusParseError(
                f"Error: Could not parse vagrant status line {line!r} in {directory}: {exc}"
            ) from exc
        box = VagrantBox(name=name, directory=str(directory))
        logger.debug("%r: %s", box, status)
        boxes.append((box, status))
    return boxes
