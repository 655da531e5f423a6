"""Request builder — assigns sequence ids and assembles envelopes."""

from __future__ import annotations

from rpcit.core.models import JSONRPC_VERSION, ParameterValue, RpcRequest


class RequestBuilder:
    """Builds JSON-RPC 2.0 requests with strictly increasing ids.

    The counter is owned by the instance: two builders never share ids
    and the first request of each builder has id ``1``.
    """

    def __init__(self) -> None:
        self._seq_no: int = 0

    @property
    def last_id(self) -> int:
        """Id of the most recently built request (``0`` before the first)."""
        return self._seq_no

    def build(self, method: str, params: ParameterValue = None) -> RpcRequest:
        """Return a new request for *method*.

        ``params`` is included only when it is not ``None``; otherwise the
        field is left out of the envelope entirely.
        """
        self._seq_no += 1
        return RpcRequest(
            id=self._seq_no,
            method=method,
            params=params,
            has_params=params is not None,
            jsonrpc=JSONRPC_VERSION,
        )
