"""Shared pytest fixtures and configuration for the rpcit test suite.

Guidelines
----------
* No network access in any test — the transport is faked or backed by
  ``httpx.MockTransport``.
* Core tests must be pure — no side effects.
* Tests must not depend on the caller's environment variables.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from rpcit.core.models import EndpointTarget


class FakeTransport:
    """Records every POST and answers with queued bodies."""

    def __init__(self, *responses: Any) -> None:
        self.responses: list[Any] = list(responses)
        self.calls: list[tuple[EndpointTarget, dict[str, Any]]] = []
        self.closed: bool = False

    def __enter__(self) -> FakeTransport:
        return self

    def __exit__(self, *_args: object) -> None:
        self.closed = True

    def post(self, target: EndpointTarget, payload: dict[str, Any]) -> Any:
        self.calls.append((target, payload))
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


class FakeSigner:
    """Adds a marker field instead of a real signature."""

    def __init__(self) -> None:
        self.calls: list[tuple[dict[str, Any], str, list[str]]] = []

    def sign(
        self, request: dict[str, Any], account: str, keys: Sequence[str],
    ) -> dict[str, Any]:
        self.calls.append((request, account, list(keys)))
        signed = dict(request)
        signed["params"] = {"__signed": {"account": account, "params": request.get("params")}}
        return signed


@pytest.fixture(autouse=True)
def _clean_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RPCIT_ACCOUNT", raising=False)
    monkeypatch.delenv("RPCIT_KEY", raising=False)
