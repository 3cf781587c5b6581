from __future__ import annotations

import subprocess

import pytest

from boxgrade import vagrant as vagrant_module


class FakeRun:
    """Stands in for subprocess.run, recording each vagrant invocation."""

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], str]] = []
        self.status_output: dict[str, str] = {}
        self.returncodes: dict[str, int] = {}

    def __call__(self, argv, **kwargs) -> subprocess.CompletedProcess[str]:
        args = list(argv[1:])
        cwd = kwargs.get("cwd")
        self.calls.append((args, cwd))
        returncode = self.returncodes.get(args[0], 0)
        stdout = self.status_output.get(cwd, "") if args[0] == "status" else None
        stderr = f"{args[0]} failed" if returncode else None
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)

    @property
    def commands(self) -> list[list[str]]:
        return [args for args, _cwd in self.calls]


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    runner = FakeRun()
    monkeypatch.setattr(vagrant_module.subprocess, "run", runner)
    return runner
