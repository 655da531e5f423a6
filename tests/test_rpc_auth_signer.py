"""Tests for the steem JSON-RPC auth signer (infra/rpc_auth_signer.py).

Keys are generated per test; signatures are checked by verification and
public-key recovery rather than against fixed bytes.
"""

from __future__ import annotations

import base64
import hashlib
import json

import base58
import ecdsa
import pytest
from ecdsa.util import sigdecode_string

from rpcit.infra.rpc_auth_signer import (
    SIGNING_CONSTANT,
    RpcAuthSigner,
    decode_wif,
    hash_message,
    is_canonical,
    sign_digest,
)

TIMESTAMP = "2026-10-19T12:00:00.000Z"
NONCE = bytes.fromhex("0102030405060708")


def _new_key() -> tuple[ecdsa.SigningKey, str]:
    key = ecdsa.SigningKey.generate(curve=ecdsa.SECP256k1)
    wif = base58.b58encode_check(b"\x80" + key.to_string()).decode("ascii")
    return key, wif


def _signer() -> RpcAuthSigner:
    return RpcAuthSigner(clock=lambda: TIMESTAMP, nonce_factory=lambda: NONCE)


def _request(params: object = ("user",)) -> dict:
    return {"id": 4, "jsonrpc": "2.0", "method": "conveyor.get_user_data", "params": list(params)}


# ---------------------------------------------------------------------------
# WIF decoding
# ---------------------------------------------------------------------------

class TestDecodeWif:
    def test_round_trip(self) -> None:
        key, wif = _new_key()
        assert decode_wif(wif).to_string() == key.to_string()

    def test_compressed_flag_accepted(self) -> None:
        key, _ = _new_key()
        wif = base58.b58encode_check(b"\x80" + key.to_string() + b"\x01").decode("ascii")
        assert decode_wif(wif).to_string() == key.to_string()

    def test_bad_checksum(self) -> None:
        _, wif = _new_key()
        tampered = wif[:-1] + ("1" if wif[-1] != "1" else "2")
        with pytest.raises(ValueError):
            decode_wif(tampered)

    def test_wrong_version_byte(self) -> None:
        key, _ = _new_key()
        wif = base58.b58encode_check(b"\x81" + key.to_string()).decode("ascii")
        with pytest.raises(ValueError, match="version"):
            decode_wif(wif)

    def test_wrong_length(self) -> None:
        wif = base58.b58encode_check(b"\x80" + b"\x01" * 20).decode("ascii")
        with pytest.raises(ValueError, match="length"):
            decode_wif(wif)


# ---------------------------------------------------------------------------
# Low-level signing
# ---------------------------------------------------------------------------

class TestSignDigest:
    def test_signature_verifies_and_recovers(self) -> None:
        key, _ = _new_key()
        digest = hashlib.sha256(b"message").digest()

        signature = sign_digest(key, digest)

        assert len(signature) == 65
        assert 31 <= signature[0] <= 34
        assert is_canonical(signature[1:])
        verifying_key = key.get_verifying_key()
        assert verifying_key.verify_digest(signature[1:], digest, sigdecode=sigdecode_string)
        candidates = ecdsa.VerifyingKey.from_public_key_recovery_with_digest(
            signature[1:],
            digest,
            ecdsa.SECP256k1,
            hashfunc=hashlib.sha256,
            sigdecode=sigdecode_string,
        )
        assert candidates[signature[0] - 31].to_string() == verifying_key.to_string()

    def test_is_canonical_rejects_high_bit(self) -> None:
        assert not is_canonical(b"\x80" + b"\x01" * 63)
        assert not is_canonical(b"\x01" * 32 + b"\x80" + b"\x01" * 31)

    def test_is_canonical_rejects_needless_zero_padding(self) -> None:
        assert not is_canonical(b"\x00\x01" + b"\x01" * 62)
        assert is_canonical(b"\x00\x80" + b"\x01" * 62)


class TestHashMessage:
    def test_matches_documented_construction(self) -> None:
        inner = hashlib.sha256(b"ts" + b"acct" + b"meth" + b"cGFyYW1z").digest()
        expected = hashlib.sha256(SIGNING_CONSTANT + NONCE + inner).digest()
        assert hash_message("ts", "acct", "meth", "cGFyYW1z", NONCE) == expected

    def test_constant(self) -> None:
        assert SIGNING_CONSTANT == hashlib.sha256(b"steem_jsonrpc_auth").digest()


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------

class TestRpcAuthSigner:
    def test_envelope_shape(self) -> None:
        _, wif = _new_key()
        signed = _signer().sign(_request(), "alice", [wif])

        assert signed["id"] == 4
        assert signed["jsonrpc"] == "2.0"
        assert signed["method"] == "conveyor.get_user_data"
        envelope = signed["params"]["__signed"]
        assert envelope["account"] == "alice"
        assert envelope["nonce"] == "0102030405060708"
        assert envelope["timestamp"] == TIMESTAMP
        assert json.loads(base64.b64decode(envelope["params"])) == ["user"]
        assert len(envelope["signatures"]) == 1

    def test_params_are_compact_json(self) -> None:
        _, wif = _new_key()
        signed = _signer().sign(_request(params=({"a": 1},)), "alice", [wif])
        assert base64.b64decode(signed["params"]["__signed"]["params"]) == b'[{"a":1}]'

    def test_signature_covers_message_digest(self) -> None:
        key, wif = _new_key()
        signed = _signer().sign(_request(), "alice", [wif])
        envelope = signed["params"]["__signed"]

        digest = hash_message(
            TIMESTAMP, "alice", "conveyor.get_user_data", envelope["params"], NONCE,
        )
        signature = bytes.fromhex(envelope["signatures"][0])
        assert key.get_verifying_key().verify_digest(
            signature[1:], digest, sigdecode=sigdecode_string,
        )

    def test_one_signature_per_key(self) -> None:
        keys = [_new_key()[1], _new_key()[1]]
        signed = _signer().sign(_request(), "alice", keys)
        assert len(signed["params"]["__signed"]["signatures"]) == 2

    def test_original_request_not_mutated(self) -> None:
        _, wif = _new_key()
        request = _request()
        _signer().sign(request, "alice", [wif])
        assert request == _request()

    def test_request_without_params_rejected(self) -> None:
        _, wif = _new_key()
        request = {"id": 1, "jsonrpc": "2.0", "method": "m"}
        with pytest.raises(ValueError, match="without params"):
            _signer().sign(request, "alice", [wif])

    def test_default_clock_format(self) -> None:
        _, wif = _new_key()
        signed = RpcAuthSigner().sign(_request(), "alice", [wif])
        envelope = signed["params"]["__signed"]
        assert envelope["timestamp"].endswith("Z")
        assert len(envelope["timestamp"]) == len(TIMESTAMP)
        assert len(bytes.fromhex(envelope["nonce"])) == 8
