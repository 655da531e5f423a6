"""httpx backed implementation of :class:`~rpcit.core.protocols.Transport`.

This module is the **only** place in the codebase that imports
``httpx``.  Unlike the other adapters it does not translate errors:
``httpx.HTTPError`` and body-decoding errors reach the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from rpcit.core.models import EndpointTarget
from rpcit.version import __version__

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Concrete :class:`Transport` that POSTs JSON with an ``httpx.Client``.

    Usage::

        with HttpxTransport(timeout=30) as transport:
            body = transport.post(target, {"jsonrpc": "2.0", ...})

    Parameters
    ----------
    client:
        Optional pre-configured client (tests pass one built on
        ``httpx.MockTransport``).  A client passed in is not closed by
        :meth:`close`.
    timeout:
        Seconds to wait for the round trip, or ``None`` to wait forever.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        self._owns_client: bool = client is None
        self._client: httpx.Client = client if client is not None else httpx.Client(
            timeout=timeout,
            headers={"User-Agent": f"rpcit/{__version__}"},
        )

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def post(self, target: EndpointTarget, payload: dict[str, Any]) -> Any:
        """POST *payload* to *target* and return the decoded JSON body.

        The HTTP status is not checked: JSON-RPC servers commonly answer
        errors with a non-2xx status and a valid error envelope.

        Raises
        ------
        httpx.HTTPError
            On connection, timeout or protocol failures.
        json.JSONDecodeError
            When the body is not valid JSON.
        """
        kwargs: dict[str, Any] = {}
        if target.auth is not None:
            kwargs["auth"] = target.auth
        response = self._client.request(target.method, target.url, json=payload, **kwargs)
        logger.debug("%s %s -> HTTP %s", target.method, target.url, response.status_code)
        return response.json()
