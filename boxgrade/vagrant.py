from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from boxgrade.status import BoxStatus, VagrantBox, parse_status

logger = logging.getLogger(__name__)


class VagrantError(RuntimeError):
    """Raised when a vagrant command cannot be started or exits non-zero."""


class VagrantClient:
    def __init__(self, path: str = "vagrant", *, dry_run: bool = False) -> None:
        self.path = path
        self.dry_run = dry_run

    def _run(
        self,
        args: list[str],
        *,
        cwd: str,
        capture_output: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        argv = [self.path, *args]
        try:
            proc = subprocess.run(
                argv,
                check=False,
                text=True,
                capture_output=capture_output,
                cwd=cwd,
            )
        except FileNotFoundError as exc:
            if exc.filename == cwd:
                raise VagrantError(f"Error: Vagrant directory does not exist: {cwd}") from exc
            raise VagrantError(f"Error: Command not found: {self.path}") from exc
        except OSError as exc:
            cmd = shlex.join(argv)
            raise VagrantError(f"Error: Could not run command '{cmd}' in {cwd}: {exc}") from exc

        if proc.returncode != 0:
            cmd = shlex.join(argv)
            stderr = (proc.stderr or "").strip()
            stdout = (proc.stdout or "").strip()
            details = stderr or stdout
            if details:
                raise VagrantError(
                    f"Error: Command failed (exit {proc.returncode}) in {cwd}: {cmd}\n{details}"
                )
            raise VagrantError(f"Error: Command failed (exit {proc.returncode}) in {cwd}: {cmd}")
        return proc

    def check_output(self, args: list[str], *, cwd: str) -> str:
        """Run a read-only command and return its stdout; runs even in dry-run mode."""
        return self._run(args, cwd=cwd, capture_output=True).stdout or ""

    def execute(self, args: list[str], *, cwd: str) -> None:
        """Run a state-changing command with output streamed to the terminal."""
        if self.dry_run:
            print(f"Dry running: {shlex.join([Path(self.path).name, *args])} (in {cwd})")
            return
        self._run(args, cwd=cwd)

    def get_boxes(self, directory: str) -> list[tuple[VagrantBox, BoxStatus]]:
        output = self.check_output(["status"], cwd=directory)
        logger.debug("Vagrant output in %s: %s", directory, output)
        return parse_status(output, directory)

    def ssh(self, box: VagrantBox, command: str) -> None:
        # No machine name: vagrant picks the primary box in multi-machine directories.
        self.execute(["ssh", "-c", command], cwd=box.directory)
