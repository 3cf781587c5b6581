from __future__ import annotations

import shutil
import time

SEPARATOR_CHAR = "―"
_MAX_WIDTH = 80


def separator_line(title: str, width: int | None = None) -> str:
    if width is None:
        width = min(shutil.get_terminal_size().columns, _MAX_WIDTH)
    head = f"{SEPARATOR_CHAR} {time.strftime('%H:%M:%S')} - {title} "
    return head + SEPARATOR_CHAR * max(width - len(head), 0)


def print_separator(title: str) -> None:
    print()
    print(separator_line(title))
