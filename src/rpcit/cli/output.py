"""Value rendering for stdout and the diagnostic stream.

Strings are written verbatim.  Anything else is pretty, highlighted JSON
when the stream is a terminal and Rich is available, compact JSON
otherwise.  Every value is followed by a newline.
"""

from __future__ import annotations

import json
from typing import Any, TextIO

from rpcit.cli.console import get_rich_console


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def to_compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def write_value(stream: TextIO, value: Any) -> None:
    """Write *value* to *stream* followed by a newline."""
    if isinstance(value, str):
        stream.write(value + "\n")
        return
    if _is_tty(stream):
        rich_console = get_rich_console(stream)
        if rich_console is not None:
            rich_console.print_json(data=value)
            return
    stream.write(to_compact_json(value) + "\n")
    stream.flush()
