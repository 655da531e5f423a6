"""Infrastructure layer — adapters for the network and signing collaborators.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must satisfy the protocols in :mod:`rpcit.core.protocols`.
"""

from rpcit.infra.http_transport import HttpxTransport
from rpcit.infra.rpc_auth_signer import RpcAuthSigner

__all__: list[str] = [
    "HttpxTransport",
    "RpcAuthSigner",
]
