"""Steem JSON-RPC auth signer — implementation of :class:`~rpcit.core.protocols.Signer`.

This module is the **only** place in the codebase that imports
``ecdsa`` and ``base58``.

Envelope
--------
The original params are replaced by a ``__signed`` object::

    {"jsonrpc": "2.0", "method": m, "id": i,
     "params": {"__signed": {"account": ..., "nonce": ..., "params": ...,
                             "signatures": [...], "timestamp": ...}}}

``params`` is base64 of the compact JSON of the original params and the
signed digest is::

    sha256(K + nonce + sha256(timestamp + account + method + params))
    K = sha256("steem_jsonrpc_auth")

Each key produces a 65-byte compact recoverable secp256k1 signature,
hex encoded, whose first byte is ``31 + recovery id``.
"""

from __future__ import annotations

import base64
import hashlib
import json
import os
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

import base58
import ecdsa
from ecdsa.util import sigdecode_string, sigencode_string_canonize

SIGNING_CONSTANT: bytes = hashlib.sha256(b"steem_jsonrpc_auth").digest()

_WIF_VERSION: int = 0x80
_COMPRESSED_HEADER_OFFSET: int = 31
_NONCE_SIZE: int = 8
_MAX_SIGN_ATTEMPTS: int = 256


# ---------------------------------------------------------------------------
# Key handling
# ---------------------------------------------------------------------------

def decode_wif(wif: str) -> ecdsa.SigningKey:
    """Decode a WIF private key into an ``ecdsa.SigningKey``.

    Raises
    ------
    ValueError
        On a bad checksum, version byte or payload length.
    """
    payload = base58.b58decode_check(wif.strip())
    if not payload or payload[0] != _WIF_VERSION:
        raise ValueError("Private key has an unexpected version byte")
    secret = payload[1:]
    # Compressed-pubkey WIFs carry a trailing 0x01 flag.
    if len(secret) == 33 and secret[-1] == 0x01:
        secret = secret[:-1]
    if len(secret) != 32:
        raise ValueError("Private key has an unexpected length")
    return ecdsa.SigningKey.from_string(secret, curve=ecdsa.SECP256k1)


def is_canonical(signature: bytes) -> bool:
    """Return ``True`` for a 64-byte ``r || s`` the chain accepts as canonical."""
    r, s = signature[:32], signature[32:]
    return (
        not r[0] & 0x80
        and not (r[0] == 0 and not r[1] & 0x80)
        and not s[0] & 0x80
        and not (s[0] == 0 and not s[1] & 0x80)
    )


def _recovery_id(
    key: ecdsa.SigningKey, signature: bytes, digest: bytes,
) -> int:
    candidates = ecdsa.VerifyingKey.from_public_key_recovery_with_digest(
        signature,
        digest,
        ecdsa.SECP256k1,
        hashfunc=hashlib.sha256,
        sigdecode=sigdecode_string,
    )
    own = key.get_verifying_key().to_string()
    for recid, candidate in enumerate(candidates):
        if candidate.to_string() == own:
            return recid
    raise ValueError("Unable to determine signature recovery id")


def sign_digest(key: ecdsa.SigningKey, digest: bytes) -> bytes:
    """Sign a 32-byte *digest*, returning a 65-byte compact signature."""
    for attempt in range(1, _MAX_SIGN_ATTEMPTS + 1):
        entropy = hashlib.sha256(digest + bytes([attempt % 256])).digest()
        signature = key.sign_digest_deterministic(
            digest,
            hashfunc=hashlib.sha256,
            sigencode=sigencode_string_canonize,
            extra_entropy=entropy,
        )
        if is_canonical(signature):
            recid = _recovery_id(key, signature, digest)
            return bytes([_COMPRESSED_HEADER_OFFSET + recid]) + signature
    raise ValueError("Unable to produce a canonical signature")


# ---------------------------------------------------------------------------
# Message hashing
# ---------------------------------------------------------------------------

def hash_message(
    timestamp: str, account: str, method: str, params: str, nonce: bytes,
) -> bytes:
    """Return the digest that each key signs."""
    first = hashlib.sha256(
        (timestamp + account + method + params).encode("utf-8"),
    ).digest()
    return hashlib.sha256(SIGNING_CONSTANT + nonce + first).digest()


def _iso_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Signer
# ---------------------------------------------------------------------------

class RpcAuthSigner:
    """Concrete :class:`Signer` producing steem ``__signed`` envelopes.

    Parameters
    ----------
    clock:
        Returns the ISO-8601 timestamp to embed.  Defaults to the current
        UTC time with millisecond precision.
    nonce_factory:
        Returns the 8 nonce bytes.  Defaults to :func:`os.urandom`.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], str] | None = None,
        nonce_factory: Callable[[], bytes] | None = None,
    ) -> None:
        self._clock: Callable[[], str] = clock or _iso_timestamp
        self._nonce_factory: Callable[[], bytes] = nonce_factory or (
            lambda: os.urandom(_NONCE_SIZE)
        )

    def sign(
        self,
        request: dict[str, Any],
        account: str,
        keys: Sequence[str],
    ) -> dict[str, Any]:
        """Return a signed copy of *request*.

        Raises
        ------
        ValueError
            When *request* has no params or a key cannot be decoded.
        """
        if request.get("params") is None:
            raise ValueError("Unable to sign a request without params")

        params = base64.b64encode(
            json.dumps(
                request["params"], separators=(",", ":"), ensure_ascii=False,
            ).encode("utf-8"),
        ).decode("ascii")
        nonce = self._nonce_factory()
        timestamp = self._clock()
        digest = hash_message(timestamp, account, request["method"], params, nonce)

        signatures = [sign_digest(decode_wif(key), digest).hex() for key in keys]

        return {
            "jsonrpc": request.get("jsonrpc", "2.0"),
            "method": request["method"],
            "id": request["id"],
            "params": {
                "__signed": {
                    "account": account,
                    "nonce": nonce.hex(),
                    "params": params,
                    "signatures": signatures,
                    "timestamp": timestamp,
                },
            },
        }
