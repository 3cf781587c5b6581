from __future__ import annotations

import logging
from types import TracebackType

from boxgrade.status import BoxStatus, VagrantBox
from boxgrade.vagrant import VagrantClient, VagrantError

logger = logging.getLogger(__name__)

_BRING_UP_SUBCOMMANDS = {
    BoxStatus.POWER_OFF: "up",
    BoxStatus.ABORTED: "up",
    BoxStatus.SAVED: "resume",
}
_RESTORE_SUBCOMMANDS = {
    BoxStatus.POWER_OFF: "halt",
    BoxStatus.ABORTED: "halt",
    BoxStatus.SAVED: "suspend",
}


def bring_up_subcommand(status: BoxStatus) -> str:
    try:
        return _BRING_UP_SUBCOMMANDS[status]
    except KeyError:
        raise RuntimeError(f"Box in state {status.value!r} does not need powering on") from None


def restore_subcommand(status: BoxStatus) -> str:
    try:
        return _RESTORE_SUBCOMMANDS[status]
    except KeyError:
        raise RuntimeError(f"Box in state {status.value!r} has nothing to restore") from None


class TemporaryPowerOn:
    """A box powered on by us that must be returned to its original state.

    Only `create` builds one, after the bring-up command succeeded. Leaving the
    `with` block issues the matching halt/suspend exactly once. A failing
    restore is logged and dropped so it never replaces the error that may be
    unwinding through the block.
    """

    def __init__(self, vagrant: VagrantClient, box: VagrantBox, status: BoxStatus) -> None:
        self.vagrant = vagrant
        self.box = box
        self.status = status
        self._released = False

    @classmethod
    def create(cls, vagrant: VagrantClient, box: VagrantBox, status: BoxStatus) -> "TemporaryPowerOn":
        subcommand = bring_up_subcommand(status)
        print(f"Powering on {box}")
        vagrant.execute([subcommand, box.name], cwd=box.directory)
        return cls(vagrant, box, status)

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True

        subcommand = restore_subcommand(self.status)
        print(f"Powering off {self.box}")
        try:
            self.vagrant.execute([subcommand, self.box.name], cwd=self.box.directory)
        except VagrantError as exc:
            logger.warning("Could not restore %s to %s: %s", self.box, self.status.value, exc)

    def __enter__(self) -> "TemporaryPowerOn":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()


def temporary_power_on(vagrant: VagrantClient, box: VagrantBox, status: BoxStatus) -> TemporaryPowerOn:
    return TemporaryPowerOn.create(vagrant, box, status)
