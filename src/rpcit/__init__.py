"""rpcit — command-line JSON-RPC 2.0 client.

Turns CLI tokens into a JSON-RPC request, optionally signs it with
account credentials, sends it and prints the response.
"""

from rpcit.version import __version__

__all__: list[str] = ["__version__"]
