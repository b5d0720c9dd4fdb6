"""CLI entrypoint for tidyfail.

`tidyfail run MODULE:FUNCTION [ARGS...]` runs an existing entry point under
the boundary without editing it.
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, NoReturn

from .boundary import run
from .config import BoundaryConfig
from .errors import ExitCode, fail
from .result import converting

USAGE_EXIT_CODE = 2

_MISSING = object()


@dataclass(frozen=True)
class ParserExit(Exception):
    code: int
    message: str = ""


class ThrowingArgumentParser(argparse.ArgumentParser):
    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:  # type: ignore[override]
        if message:
            self._print_message(message, sys.stderr if status else sys.stdout)
        raise ParserExit(status, message or "")

    def error(self, message: str) -> NoReturn:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self._print_message(f"{self.prog}: error: {message}\n", sys.stderr)
        raise ParserExit(USAGE_EXIT_CODE, f"{self.prog}: error: {message}\n")


def parse_target(value: str) -> str:
    v = value.strip()
    module_name, sep, attr_path = v.partition(":")
    if not sep or not module_name or not attr_path:
        raise argparse.ArgumentTypeError("target must be in the form <module:function>")
    return v


def build_parser() -> ThrowingArgumentParser:
    parser = ThrowingArgumentParser(prog="tidyfail")
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run an entry point under the failure boundary")
    run_p.add_argument("target", type=parse_target, help="module:function")
    run_p.add_argument("args", nargs=argparse.REMAINDER)
    run_p.set_defaults(_handler=handle_run)

    codes = sub.add_parser("codes", help="Print the exit code contract as JSON")
    codes.set_defaults(_handler=handle_codes)

    return parser


def resolve_target(target: str) -> Callable[..., Any]:
    """Import `module:attr.path` and return the callable it names."""

    module_name, _, attr_path = target.partition(":")
    with converting(f"Could not import module {module_name!r}", ImportError):
        obj: Any = importlib.import_module(module_name)

    for part in attr_path.split("."):
        obj = getattr(obj, part, _MISSING)
        if obj is _MISSING:
            fail(f"Module {module_name!r} has no attribute {attr_path!r}")

    if not callable(obj):
        fail(f"{target!r} is not callable")
    return obj


def _invoke(target: str, args: list[str]) -> Any:
    module_name = target.partition(":")[0]
    sys.argv = [module_name, *args]
    func = resolve_target(target)
    return func()


def handle_run(args: argparse.Namespace) -> NoReturn:
    target: str = args.target
    rest: list[str] = list(args.args or [])
    run(lambda: _invoke(target, rest))


def _print_codes() -> None:
    with converting("Invalid tidyfail configuration", ValueError):
        cfg = BoundaryConfig.from_env()
    payload = {
        "success": int(ExitCode.SUCCESS),
        "failure": int(ExitCode.FAILURE),
        "defect": cfg.defect_exit_code,
    }
    sys.stdout.write(json.dumps(payload, sort_keys=True))
    sys.stdout.write("\n")


def handle_codes(args: argparse.Namespace) -> NoReturn:
    run(_print_codes)


def main(argv: Iterable[str] | None = None) -> int:
    argv_list = list(argv) if argv is not None else sys.argv[1:]

    try:
        parser = build_parser()
        args = parser.parse_args(argv_list)
    except ParserExit as exc:
        # argparse already printed usage/help.
        return int(ExitCode.SUCCESS) if exc.code == 0 else USAGE_EXIT_CODE

    handler = getattr(args, "_handler")
    handler(args)
    return int(ExitCode.SUCCESS)


if __name__ == "__main__":
    raise SystemExit(main())
