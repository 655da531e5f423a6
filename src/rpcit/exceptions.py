"""Custom exception hierarchy for rpcit.

Every error the pipeline raises on its own behalf inherits from
:class:`RpcitError`.  The underlying cause, when there is one, is
attached with ``raise ... from exc`` and is available as
:attr:`RpcitError.cause`.

Transport failures (``httpx.HTTPError`` and friends) are deliberately
*not* part of this hierarchy — they reach the CLI error boundary
unmodified.

Hierarchy
---------
RpcitError
├── InvalidParamError
├── SigningError
├── InvalidAddressError
└── InvalidResponseError
"""

from __future__ import annotations


class RpcitError(Exception):
    """Base exception for all rpcit errors.

    Every user-visible error condition raised by rpcit maps to a
    subclass of this exception so that the CLI error boundary can
    render a clean message without a stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""

    @property
    def cause(self) -> BaseException | None:
        """The exception this error was raised from, if any."""
        return self.__cause__


# --- Parameter parsing ------------------------------------------------------

class InvalidParamError(RpcitError):
    """Raised when a CLI token or stdin payload cannot be turned into params."""


# --- Signing ----------------------------------------------------------------

class SigningError(RpcitError):
    """Raised when credentials are missing or the signing primitive fails."""


# --- Endpoint / response ----------------------------------------------------

class InvalidAddressError(RpcitError):
    """Raised when the endpoint address is not an absolute http(s) URL."""


class InvalidResponseError(RpcitError):
    """Raised when the endpoint answers with something other than a JSON object."""


def describe_error(exc: BaseException) -> str:
    """Render *exc* followed by the message of each chained cause.

    ``InvalidParamError("Unable to parse 'a'")`` raised from a
    ``JSONDecodeError`` renders as
    ``"Unable to parse 'a': Expecting value: line 1 column 1 (char 0)"``.
    """
    parts: list[str] = []
    current: BaseException | None = exc
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        parts.append(text)
        current = current.__cause__
    return ": ".join(parts)
