"""Dispatcher — the JSON-RPC client that ties builder, signer and transport.

This is the central service consumed by the CLI layer.  It depends on a
:class:`~rpcit.core.protocols.Transport` (and, for signed calls, a
:class:`~rpcit.core.protocols.Signer`) injected at construction time,
keeping the core free of any network imports.

Guarantees
----------
* The endpoint address is parsed exactly once, in ``__init__``.
* Transport errors propagate unmodified — no wrapping, no retry.
* A response whose id differs from the request id is accepted.
"""

from __future__ import annotations

import logging
from urllib.parse import unquote, urlsplit

from rpcit.core.models import Credential, EndpointTarget, ParameterValue, RpcRequest, RpcResponse
from rpcit.core.protocols import Signer, Transport
from rpcit.core.request_builder import RequestBuilder
from rpcit.core.signing import RequestSigner
from rpcit.exceptions import InvalidAddressError, SigningError

logger = logging.getLogger(__name__)


def parse_endpoint(address: str) -> EndpointTarget:
    """Parse *address* into an :class:`EndpointTarget` with method ``POST``.

    Raises
    ------
    InvalidAddressError
        If *address* is not an absolute ``http``/``https`` URL.
    """
    stripped = address.strip()
    try:
        parts = urlsplit(stripped)
        port = parts.port
    except ValueError as exc:
        raise InvalidAddressError(f"Invalid address: {stripped}") from exc
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidAddressError(
            f"Invalid address: {stripped}",
            hint="Address must start with http:// or https://",
        )
    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"
    return EndpointTarget(
        scheme=parts.scheme,
        host=parts.hostname,
        path=path,
        port=port,
        username=unquote(parts.username) if parts.username is not None else None,
        password=unquote(parts.password) if parts.password is not None else None,
    )


class RpcClient:
    """Builds, optionally signs, and sends JSON-RPC requests to one endpoint.

    Parameters
    ----------
    address:
        Endpoint URL, parsed once into :attr:`target`.
    transport:
        Any object satisfying the :class:`Transport` protocol.
    signer:
        Optional :class:`RequestSigner`; required for signed calls.
    builder:
        Optional :class:`RequestBuilder`; a fresh one (ids from 1) is
        created when omitted.
    """

    def __init__(
        self,
        address: str,
        transport: Transport,
        *,
        signer: RequestSigner | None = None,
        builder: RequestBuilder | None = None,
    ) -> None:
        self.target: EndpointTarget = parse_endpoint(address)
        self._transport: Transport = transport
        self._signer: RequestSigner | None = signer
        self._builder: RequestBuilder = builder if builder is not None else RequestBuilder()

    @classmethod
    def with_signer(
        cls,
        address: str,
        transport: Transport,
        signer: Signer,
        *,
        missing_hint: str | None = None,
    ) -> RpcClient:
        """Convenience constructor wrapping a raw :class:`Signer` primitive."""
        return cls(
            address,
            transport,
            signer=RequestSigner(signer, missing_hint=missing_hint),
        )

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def build_request(self, method: str, params: ParameterValue = None) -> RpcRequest:
        return self._builder.build(method, params)

    def sign_request(self, credential: Credential, request: RpcRequest) -> RpcRequest:
        """Sign *request* with *credential*.

        Raises
        ------
        SigningError
            When no signer is configured, the credential is incomplete,
            or the signing primitive fails.
        """
        if self._signer is None:
            raise SigningError("No signer configured for this client")
        return self._signer.sign(credential, request)

    def send(self, request: RpcRequest) -> RpcResponse:
        """POST *request* to the endpoint and return the response."""
        logger.debug("POST %s (request id %s)", self.target.url, request.id)
        payload = self._transport.post(self.target, request.to_dict())
        response = RpcResponse.from_payload(payload)
        # Some proxies omit the id when the result is empty; tolerate it.
        if not response.has_error and response.id != request.id:
            logger.debug(
                "Response id %r does not match request id %r", response.id, request.id,
            )
        return response

    # ------------------------------------------------------------------
    # Compositions
    # ------------------------------------------------------------------

    def call(self, method: str, params: ParameterValue = None) -> RpcResponse:
        return self.send(self.build_request(method, params))

    def signed_call(
        self,
        credential: Credential,
        method: str,
        params: ParameterValue = None,
    ) -> RpcResponse:
        request = self.build_request(method, params)
        return self.send(self.sign_request(credential, request))
