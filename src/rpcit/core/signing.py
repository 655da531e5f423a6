"""Request signer — credential checks around the external signing primitive.

This service delegates the cryptography to a
:class:`~rpcit.core.protocols.Signer` injected at construction time.
It is responsible for:

* Refusing to sign when the credential is incomplete, before the
  primitive is touched.
* Passing the canonical request, the account and a one-element key
  list to the primitive.
* Ensuring only :class:`~rpcit.exceptions.SigningError` escapes.

The authentication fields the primitive injects are not interpreted.
"""

from __future__ import annotations

import logging

from rpcit.core.models import Credential, RpcRequest
from rpcit.core.protocols import Signer
from rpcit.exceptions import SigningError

logger = logging.getLogger(__name__)


class RequestSigner:
    """Produces signed copies of requests; the original is never mutated.

    Parameters
    ----------
    signer:
        Any object satisfying the :class:`Signer` protocol.
    missing_hint:
        Guidance attached to the error raised for an incomplete
        credential, e.g. which environment variables to set.
    """

    def __init__(self, signer: Signer, *, missing_hint: str | None = None) -> None:
        self._signer: Signer = signer
        self._missing_hint: str | None = missing_hint

    def sign(self, credential: Credential, request: RpcRequest) -> RpcRequest:
        """Return a signed variant of *request*.

        Raises
        ------
        SigningError
            When the credential is incomplete or the primitive fails.
        """
        if not credential.complete:
            raise SigningError(
                "Credentials missing",
                hint=self._missing_hint,
            )
        logger.debug("Signing request %s as %s", request.id, credential.account)
        try:
            signed = self._signer.sign(
                request.to_dict(), credential.account, [credential.key],
            )
            return RpcRequest.from_dict(signed)
        except SigningError:
            raise
        except Exception as exc:
            raise SigningError("Unable to sign request") from exc
