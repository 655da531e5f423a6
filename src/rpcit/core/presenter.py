"""Response presenter — chooses what to print and the exit status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rpcit.core.models import RpcResponse

EXIT_OK: int = 0
EXIT_RPC_ERROR: int = 1


@dataclass(frozen=True, slots=True)
class Presentation:
    """What the CLI should emit for a response.

    ``output`` is ``None`` when nothing should be written.
    """

    output: Any
    exit_code: int


def present(response: RpcResponse, *, raw: bool = False) -> Presentation:
    """Select the raw envelope or the unwrapped error/result.

    Raw mode always exits ``0``; otherwise the exit status is ``1`` when
    the response carries an error.
    """
    if raw:
        return Presentation(output=dict(response.raw), exit_code=EXIT_OK)
    if response.has_error:
        return Presentation(output=response.error, exit_code=EXIT_RPC_ERROR)
    return Presentation(output=response.result, exit_code=EXIT_OK)
