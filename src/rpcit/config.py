"""Configuration defaults and environment lookup.

Nothing here performs I/O beyond reading the (injectable) environment
mapping; the CLI layer decides when to call these helpers.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from rpcit.core.models import Credential


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

DEFAULT_ADDRESS: str = "https://api.steemit.com"
"""Endpoint used when no address flag is given."""

NAMED_ADDRESSES: dict[str, str] = {
    "dev": "https://api.steemitdev.com",
    "stage": "https://api.steemitstage.com",
}
"""Fixed endpoints selectable through ``--dev`` / ``--stage``."""


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

ACCOUNT_ENV_VAR: str = "RPCIT_ACCOUNT"
KEY_ENV_VAR: str = "RPCIT_KEY"


def load_credential(environ: Mapping[str, str] | None = None) -> Credential:
    """Read the signing credential from *environ* (default ``os.environ``).

    Unset variables are returned as empty strings; validation happens in
    :class:`~rpcit.core.signing.RequestSigner` so that the error surfaces
    at the point of signing.
    """
    env = os.environ if environ is None else environ
    return Credential(
        account=env.get(ACCOUNT_ENV_VAR, ""),
        key=env.get(KEY_ENV_VAR, ""),
    )


# ---------------------------------------------------------------------------
# Resolved invocation options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Options:
    """Options of a single invocation, after argument parsing."""

    address: str = DEFAULT_ADDRESS
    raw: bool = False
    sign: bool = False
    verbose: bool = False
    timeout: float | None = None

    def as_dict(self) -> dict[str, object]:
        return {
            "address": self.address,
            "raw": self.raw,
            "sign": self.sign,
            "verbose": self.verbose,
            "timeout": self.timeout,
        }
