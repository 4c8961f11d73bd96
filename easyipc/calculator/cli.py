"""Command line client for the calculator: ``cli add 1 2``."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .common import Add, CalculatorModel, ClientMessage, Div, Mul, Stop, Sub

_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1

_BINARY_OPERATIONS = {"add": Add, "sub": Sub, "div": Div, "mul": Mul}


def _i32(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if not _I32_MIN <= value <= _I32_MAX:
        raise argparse.ArgumentTypeError(f"{value} is not in {_I32_MIN}..={_I32_MAX}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(description="Send a calculation to the calculator server.")
    commands = parser.add_subparsers(dest="op", required=True)
    for name in _BINARY_OPERATIONS:
        command = commands.add_parser(name)
        command.add_argument("a", type=_i32)
        command.add_argument("b", type=_i32)
    commands.add_parser("stop")
    return parser


def to_message(args: argparse.Namespace) -> ClientMessage:
    """Turn parsed arguments into the message for the server."""
    if args.op == "stop":
        return Stop()
    return _BINARY_OPERATIONS[args.op](args.a, args.b)


def main(argv: Sequence[str] | None = None) -> int:
    """Send one request to the calculator server and print the reply."""
    args = build_parser().parse_args(argv)
    message = to_message(args)
    with CalculatorModel.client() as client:
        client.send(message)
        reply = client.receive()
    print(f"{message!r} => {reply!r}")
    return 0