from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

from tqdm import tqdm

"""Progress display with tqdm (TTY only).

Reading a large sparse table is the only step slow enough to show progress
for. In non-TTY environments (CI, pipes) no bar is created so no ANSI control
sequences reach the captured output.
"""

__all__ = [
    "is_tty_enabled",
    "track_rows",
]

T = TypeVar("T")


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


def track_rows(rows: Iterable[T], total: int | None = None, *, description: str = "Reading rows") -> Iterator[T]:
    """Iterate rows, wrapping them in a tqdm bar when attached to a TTY."""
    if not is_tty_enabled():
        yield from rows
        return
    bar: Any = tqdm(
        rows,
        total=total,
        desc=description,
        unit="row",
        leave=False,
        ncols=80,
        ascii=True,
    )
    try:
        yield from bar
    finally:
        bar.close()
