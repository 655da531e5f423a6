"""Allow ``python -m rpcit`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m rpcit`` behaves identically to the ``rpcit`` console
script.
"""

from __future__ import annotations

from rpcit.cli.app import cli

if __name__ == "__main__":
    cli()
