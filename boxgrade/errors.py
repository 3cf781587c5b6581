from __future__ import annotations

import subprocess
import sys
from typing import Callable, TypeVar

from boxgrade.status import StatusParseError
from boxgrade.vagrant import VagrantError

T = TypeVar("T")


class UserFacingError(RuntimeError):
    """Error with user-facing text; caller should print and return non-zero."""


def main_guard(fn: Callable[[], T]) -> T:
    """Run fn and convert known errors to CLI output/exit code."""
    try:
        return fn()
    except (UserFacingError, VagrantError, StatusParseError) as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc
    except FileNotFoundError as exc:
        print(f"Error: Command not found: {exc.filename or 'unknown'}", file=sys.stderr)
        raise SystemExit(1) from exc
    except subprocess.SubprocessError as exc:
        print(f"Error: Command execution failed: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except OSError as exc:
        print(f"Error: OS command failure: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
