"""CLI console helpers with optional Rich support.

This module avoids module-level imports of Rich so bootstrap paths
(``--help``, ``--version``) and non-TTY output keep working even when
Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO


def _load_rich_console_class() -> type[Any] | None:
	"""Return ``rich.console.Console`` or ``None`` when Rich is missing."""
	try:
		from rich.console import Console
	except ModuleNotFoundError:
		return None
	return Console


def get_rich_console(file: TextIO | None = None) -> Any | None:
	"""Create a Rich console targeting *file* (default stderr), if possible."""
	console_class = _load_rich_console_class()
	if console_class is None:
		return None
	if file is None:
		return console_class(stderr=True)
	return console_class(file=file)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		rich_console = get_rich_console()
		if rich_console is None:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def error(self, message: str, *, label: str = "Error", hint: str | None = None) -> None:
		"""Render an error line (and optional hint) without markup parsing."""
		rich_console = get_rich_console()
		if rich_console is None:
			print(f"{label}: {message}", file=sys.stderr)
			if hint:
				print(f"Hint: {hint}", file=sys.stderr)
			return
		from rich.text import Text

		rich_console.print(Text.assemble((f"{label}: ", "bold red"), message))
		if hint:
			rich_console.print(Text.assemble(("Hint: ", "yellow"), hint))


console = _ConsoleProxy()


def configure_logging(verbose: bool) -> None:
	"""Route ``rpcit`` log records to stderr.

	DEBUG with ``--verbose``, WARNING otherwise.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	root = logging.getLogger("rpcit")
	root.setLevel(level)
	for handler in list(root.handlers):
		root.removeHandler(handler)

	handler: logging.Handler
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
	else:
		handler = RichHandler(console=get_rich_console(), show_path=False)
	root.addHandler(handler)
	root.propagate = False
