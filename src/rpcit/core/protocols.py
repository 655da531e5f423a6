"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can substitute fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from rpcit.core.models import EndpointTarget


class Transport(Protocol):
    """Contract for the network collaborator.

    Any object that implements :meth:`post` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def post(self, target: EndpointTarget, payload: dict[str, Any]) -> Any:
        """POST *payload* as JSON to *target* and return the decoded body.

        Network and decoding errors propagate unmodified; implementations
        must not retry.
        """
        ...  # pragma: no cover


class Signer(Protocol):
    """Contract for the cryptographic signing collaborator."""

    def sign(
        self,
        request: dict[str, Any],
        account: str,
        keys: Sequence[str],
    ) -> dict[str, Any]:
        """Return a signed copy of the canonical *request* dict.

        The returned dict is a complete JSON-RPC request; whatever
        authentication fields it carries are opaque to the caller.
        *request* itself must not be mutated.
        """
        ...  # pragma: no cover
