"""CLI application entry point for rpcit.

This module is the **sole error boundary** for the entire application.
It catches :class:`~rpcit.exceptions.RpcitError`, transport errors,
``KeyboardInterrupt`` and any unexpected ``Exception``, writes a message
to stderr and returns a well-defined exit code.

Architecture notes
------------------
* No business logic lives here — parsing, building, signing and
  dispatch are delegated to the core and infrastructure layers.
* stdout carries only the rendered response; everything else goes to
  stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, NoReturn

import httpx

from rpcit import config
from rpcit.cli import exit_codes
from rpcit.cli.console import configure_logging, console
from rpcit.cli.output import write_value
from rpcit.exceptions import RpcitError, describe_error
from rpcit.version import __version__

if TYPE_CHECKING:
    from rpcit.infra.http_transport import HttpxTransport
    from rpcit.infra.rpc_auth_signer import RpcAuthSigner

_EPILOG = """\
Params:

  Params can be passed as positional or by keyword
    param1 param2 param3 OR bar=param2 foo=param1

  You can pass JSON by prefixing the param with a colon (:)
    :'{"foo": "bar"}' OR key:='{"foo": "bar"}'

  Params can be read from stdin by passing a dash (-)
    $ echo '["foo", "bar"]' | rpcit some_method -

  Pass an underscore (_) for newline separated JSON, one line per param
    $ printf '{"foo": "bar"}\\nfalse\\n' | rpcit baz _

Examples:

  Get latest global props
    $ rpcit get_dynamic_global_properties

  Get account info
    $ rpcit get_accounts :'["almost-digital"]'

  Get the account details for the first 100 accounts starting with foo
    $ rpcit lookup_accounts foo 100 | rpcit get_accounts _

  Get the chain properties from another node
    $ rpcit -a https://gtg.steem.house:8090 get_chain_properties

  Make a signed call
    $ RPCIT_ACCOUNT=admin RPCIT_KEY=5POSTINGWIF rpcit -s conveyor.get_user_data user
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with the general error code."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(exit_codes.GENERAL_ERROR, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    ``--address``, ``--dev`` and ``--stage`` share one destination, so the
    flag given last wins.
    """
    parser = _ArgumentParser(
        prog="rpcit",
        description="Make JSON-RPC 2.0 calls from the command line.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-a",
        "--address",
        metavar="URL",
        dest="address",
        default=config.DEFAULT_ADDRESS,
        help=f"address to the RPC server (default: {config.DEFAULT_ADDRESS})",
    )
    for name, url in config.NAMED_ADDRESSES.items():
        parser.add_argument(
            f"--{name}",
            dest="address",
            action="store_const",
            const=url,
            help=f"set address to {url}",
        )
    parser.add_argument(
        "-s",
        "--sign",
        action="store_true",
        help=(
            "sign the request using credentials from env vars "
            f"{config.ACCOUNT_ENV_VAR} and {config.KEY_ENV_VAR}"
        ),
    )
    parser.add_argument(
        "-r",
        "--raw",
        action="store_true",
        help="write the raw JSON-RPC 2.0 response to stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print debug info to stderr",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        metavar="SECONDS",
        type=float,
        default=None,
        help="give up on the request after SECONDS (default: wait forever)",
    )
    parser.add_argument("method", nargs="?", default=None, help="RPC method to call")
    parser.add_argument("params", nargs="*", default=[], help="method params")
    return parser


# ---------------------------------------------------------------------------
# Collaborator factories (patched in tests)
# ---------------------------------------------------------------------------

def _make_transport(options: config.Options) -> HttpxTransport:
    from rpcit.infra.http_transport import HttpxTransport

    return HttpxTransport(timeout=options.timeout)


def _make_signer() -> RpcAuthSigner:
    from rpcit.infra.rpc_auth_signer import RpcAuthSigner

    return RpcAuthSigner()


def _read_stdin() -> bytes:
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is not None:
        return buffer.read()
    return sys.stdin.read().encode("utf-8")


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_call(
    method: str,
    tokens: list[str],
    options: config.Options,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run one call: parse → build → (sign) → send → present."""
    from rpcit.core.client import RpcClient
    from rpcit.core.params import parse_params
    from rpcit.core.presenter import present
    from rpcit.core.signing import RequestSigner

    if options.verbose:
        write_value(
            sys.stderr,
            {"method": method, "params": tokens, "options": options.as_dict()},
        )

    params = parse_params(tokens, _read_stdin)

    with _make_transport(options) as transport:
        signer = None
        if options.sign:
            signer = RequestSigner(
                _make_signer(),
                missing_hint=(
                    f"Make sure to set {config.ACCOUNT_ENV_VAR} and {config.KEY_ENV_VAR}."
                ),
            )
        client = RpcClient(options.address, transport, signer=signer)

        request = client.build_request(method, params)
        if options.verbose:
            write_value(sys.stderr, request.to_dict())

        if options.sign:
            request = client.sign_request(config.load_credential(environ), request)
            if options.verbose:
                write_value(sys.stderr, request.to_dict())

        response = client.send(request)

    presentation = present(response, raw=options.raw)
    if presentation.output is not None:
        write_value(sys.stdout, presentation.output)
    return presentation.exit_code


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the rpcit CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)

    if args.method is None:
        console.print("No method specified. For usage see --help")
        return exit_codes.GENERAL_ERROR

    options = config.Options(
        address=args.address,
        raw=args.raw,
        sign=args.sign,
        verbose=args.verbose,
        timeout=args.timeout,
    )
    configure_logging(options.verbose)
    return _handle_call(args.method, list(args.params), options)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def run(argv: list[str] | None = None) -> int:
    """Call :func:`main` and map every failure to an exit code."""
    try:
        return main(argv)
    except RpcitError as exc:
        console.error(describe_error(exc), label=type(exc).__name__, hint=exc.hint)
        return exit_codes.GENERAL_ERROR
    except (httpx.HTTPError, json.JSONDecodeError) as exc:
        console.error(describe_error(exc), label=type(exc).__name__)
        return exit_codes.GENERAL_ERROR
    except KeyboardInterrupt:
        console.print("\nAborted by user.")
        return exit_codes.KEYBOARD_INTERRUPT
    except Exception as exc:  # noqa: BLE001
        console.error(
            f"{type(exc).__name__}: {exc}",
            label="Unexpected error",
            hint="Please report this issue.",
        )
        return exit_codes.GENERAL_ERROR


def cli() -> None:
    """Top-level entry point invoked by the console script."""
    sys.exit(run())
