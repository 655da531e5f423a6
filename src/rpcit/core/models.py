"""Domain models for rpcit.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and conversion to/from wire dicts.  They
carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from rpcit.exceptions import InvalidResponseError

ParameterValue = Union[str, int, float, bool, None, dict[str, Any], list[Any]]
"""Any JSON-compatible value produced by the parameter parser."""

JSONRPC_VERSION: str = "2.0"


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Credential:
    """Account identifier and private key used to sign a request."""

    account: str
    key: str = field(repr=False)
    """WIF-encoded private key; not shown in ``repr``."""

    @property
    def complete(self) -> bool:
        """``True`` when both the account and the key are non-empty."""
        return bool(self.account) and bool(self.key)


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EndpointTarget:
    """An endpoint address parsed once into its transport components."""

    scheme: str
    host: str
    path: str
    port: int | None = None
    method: str = "POST"
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    @property
    def netloc(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return host if self.port is None else f"{host}:{self.port}"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.netloc}{self.path}"

    @property
    def auth(self) -> tuple[str, str] | None:
        """Basic auth credentials taken from the address, if any."""
        if not self.username and not self.password:
            return None
        return (self.username or "", self.password or "")


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

_ENVELOPE_KEYS: frozenset[str] = frozenset({"id", "jsonrpc", "method", "params"})


@dataclass(frozen=True, slots=True)
class RpcRequest:
    """A JSON-RPC 2.0 request envelope.

    ``params`` is only serialised when present.  ``extra`` holds any
    additional top-level fields injected by a signing primitive; they
    are passed through verbatim.
    """

    id: int
    method: str
    params: ParameterValue = None
    has_params: bool = False
    jsonrpc: str = JSONRPC_VERSION
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation (``params`` omitted when absent)."""
        payload: dict[str, Any] = {
            "id": self.id,
            "jsonrpc": self.jsonrpc,
            "method": self.method,
        }
        if self.has_params:
            payload["params"] = self.params
        payload.update(self.extra)
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> RpcRequest:
        """Rebuild a request from a wire dict, e.g. one returned by a signer."""
        return cls(
            id=payload["id"],
            method=payload["method"],
            params=payload.get("params"),
            has_params="params" in payload,
            jsonrpc=payload.get("jsonrpc", JSONRPC_VERSION),
            extra={k: v for k, v in payload.items() if k not in _ENVELOPE_KEYS},
        )


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RpcResponse:
    """A JSON-RPC 2.0 response as received from the endpoint.

    ``raw`` keeps the complete decoded body so that raw mode can emit it
    unchanged.  Exactly one of ``result`` / ``error`` is expected, but
    this is not enforced.
    """

    raw: Mapping[str, Any]

    @property
    def id(self) -> Any:
        return self.raw.get("id")

    @property
    def result(self) -> Any:
        return self.raw.get("result")

    @property
    def error(self) -> Any:
        return self.raw.get("error")

    @property
    def has_error(self) -> bool:
        """``True`` for any error value except ``null``, ``false``, ``0`` and ``""``.

        Empty objects and arrays still count as errors.
        """
        error = self.raw.get("error")
        if isinstance(error, (dict, list)):
            return True
        return bool(error)

    @classmethod
    def from_payload(cls, payload: Any) -> RpcResponse:
        """Wrap a decoded JSON body.

        Raises
        ------
        InvalidResponseError
            When *payload* is not a JSON object.
        """
        if not isinstance(payload, Mapping):
            raise InvalidResponseError(
                f"Expected a JSON-RPC response object, got {type(payload).__name__}.",
            )
        return cls(raw=dict(payload))
