"""Parameter parser — turns CLI tokens (or stdin) into JSON-RPC params.

Grammar
-------
* A single ``-`` token reads stdin as one JSON document.
* A single ``_`` token reads stdin as newline-delimited JSON, one
  positional param per non-blank line.
* If any token looks like ``key=value`` or ``key:=value`` every token is
  parsed as a keyword pair and the result is an object.
* Otherwise every token is a positional param and the result is an
  array.

Within a token, a leading ``:`` marks the rest as JSON; anything else
is taken verbatim as a string.

Classification (:func:`classify_tokens`) and interpretation
(:func:`parse_params`) are kept apart so each can be tested on its own.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Union

from rpcit.core.models import ParameterValue
from rpcit.exceptions import InvalidParamError

KEYWORD_PATTERN: re.Pattern[str] = re.compile(r"[0-9a-z]+:?=.+", re.IGNORECASE)

JSON_PREFIX: str = ":"
STDIN_DOCUMENT: str = "-"
STDIN_LINES: str = "_"

StdinReader = Callable[[], Union[bytes, str]]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def loads_strict(text: str) -> Any:
    """Decode *text* as JSON, rejecting the non-standard NaN and Infinity literals."""
    return json.loads(text, parse_constant=_reject_constant)


# ---------------------------------------------------------------------------
# Classification (pure)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StdinDocument:
    """Params are the single JSON document read from stdin."""


@dataclass(frozen=True, slots=True)
class StdinLines:
    """Params are one JSON value per non-blank stdin line."""


@dataclass(frozen=True, slots=True)
class Keyword:
    """Every token is a ``key=value`` / ``key:=value`` pair."""

    tokens: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Positional:
    """Every token is a positional param."""

    tokens: tuple[str, ...]


ParamForm = Union[StdinDocument, StdinLines, Keyword, Positional]


def is_keyword_token(token: str) -> bool:
    """Return ``True`` when *token* has the ``key=value`` shape."""
    return KEYWORD_PATTERN.fullmatch(token) is not None


def classify_tokens(tokens: Sequence[str]) -> ParamForm:
    """Decide which form *tokens* take, without parsing any value."""
    if len(tokens) == 1 and tokens[0] == STDIN_DOCUMENT:
        return StdinDocument()
    if len(tokens) == 1 and tokens[0] == STDIN_LINES:
        return StdinLines()
    if any(is_keyword_token(token) for token in tokens):
        return Keyword(tuple(tokens))
    return Positional(tuple(tokens))


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

def parse_value(token: str) -> ParameterValue:
    """Parse a single token.

    ``:<json>`` is decoded as JSON; everything else is returned verbatim.

    Raises
    ------
    ValueError
        When the ``:``-prefixed remainder is not valid JSON.  ``NaN`` and
        ``Infinity`` are rejected.
    """
    if token.startswith(JSON_PREFIX):
        return loads_strict(token[len(JSON_PREFIX):])
    return token


def parse_keyword_token(token: str) -> tuple[str, ParameterValue]:
    """Split ``key=value`` / ``key:=value`` into ``(key, parsed value)``.

    Only the first ``=`` separates key from value.
    """
    idx = token.find("=")
    if idx == -1:
        raise InvalidParamError(
            "Missing key=value pair",
            hint=f"Got {token!r}; once one param is given by keyword, all must be.",
        )
    raw_value = token[idx + 1:]
    if idx > 0 and token[idx - 1] == JSON_PREFIX:
        raw_value = JSON_PREFIX + raw_value
        idx -= 1
    key = token[:idx]
    try:
        value = parse_value(raw_value)
    except ValueError as exc:
        raise InvalidParamError(f"Unable to parse '{key}'") from exc
    return key, value


def _parse_keyword(tokens: Sequence[str]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for token in tokens:
        key, value = parse_keyword_token(token)
        # Later duplicates overwrite earlier ones.
        params[key] = value
    return params


def _parse_positional(tokens: Sequence[str]) -> list[Any]:
    params: list[Any] = []
    for index, token in enumerate(tokens):
        try:
            params.append(parse_value(token))
        except ValueError as exc:
            raise InvalidParamError(
                f"Unable to parse param at index {index}",
            ) from exc
    return params


# ---------------------------------------------------------------------------
# Stdin forms
# ---------------------------------------------------------------------------

def _decode(data: bytes | str) -> str:
    # Malformed UTF-8 is replaced, not rejected.
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def parse_stdin_document(data: bytes | str) -> ParameterValue:
    """Decode the whole of *data* as one JSON document."""
    try:
        return loads_strict(_decode(data))
    except ValueError as exc:
        raise InvalidParamError("Unable to parse stdin") from exc


def parse_stdin_lines(data: bytes | str) -> list[Any]:
    """Decode each non-blank line of *data* as JSON, in order."""
    lines = (line.strip() for line in _decode(data).split("\n"))
    try:
        return [loads_strict(line) for line in lines if line]
    except ValueError as exc:
        raise InvalidParamError("Unable to parse stdin") from exc


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse_params(tokens: Sequence[str], read_stdin: StdinReader) -> ParameterValue:
    """Turn CLI *tokens* into a params value.

    Parameters
    ----------
    tokens:
        Argument tokens following the method name.
    read_stdin:
        Called with no arguments to obtain the whole of standard input.
        Only invoked for the ``-`` and ``_`` forms.

    Raises
    ------
    InvalidParamError
        When any token, keyword pair or stdin payload is malformed.
    """
    form = classify_tokens(tokens)
    if isinstance(form, StdinDocument):
        return parse_stdin_document(read_stdin())
    if isinstance(form, StdinLines):
        return parse_stdin_lines(read_stdin())
    if isinstance(form, Keyword):
        return _parse_keyword(form.tokens)
    return _parse_positional(form.tokens)
