"""Core / service layer — pure request pipeline logic.

Rules
-----
* No ``print()`` calls.
* No network or terminal I/O; stdin is reached only through a reader
  callable supplied by the caller.
* No imports from ``cli`` or ``infra``.
"""

from rpcit.core.client import RpcClient, parse_endpoint
from rpcit.core.models import (
    Credential,
    EndpointTarget,
    ParameterValue,
    RpcRequest,
    RpcResponse,
)
from rpcit.core.params import classify_tokens, parse_params
from rpcit.core.presenter import Presentation, present
from rpcit.core.protocols import Signer, Transport
from rpcit.core.request_builder import RequestBuilder
from rpcit.core.signing import RequestSigner

__all__: list[str] = [
    "Credential",
    "EndpointTarget",
    "ParameterValue",
    "Presentation",
    "RequestBuilder",
    "RequestSigner",
    "RpcClient",
    "RpcRequest",
    "RpcResponse",
    "Signer",
    "Transport",
    "classify_tokens",
    "parse_endpoint",
    "parse_params",
    "present",
]
