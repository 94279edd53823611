"""
cc-run command line entry point.

Usage::

    cc-run                          # official Claude, third-party config hidden for the session
    cc-run <provider>               # Claude against glm, deepseek, minimax or a custom endpoint
    cc-run <provider> --claude      # also make the native claude command use <provider>
    cc-run --claude                 # make the native claude command official again
    cc-run [provider] -- <args>     # pass <args> through to claude

    cc-run list
    cc-run add <name> <endpoint>
    cc-run remove <name>
    cc-run token set <provider> [token]
    cc-run token clean <provider>
    cc-run proxy on|off|reset|status|help
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Tuple

from ccrun import __version__
from ccrun.commands import AdminCommands
from ccrun.engine import ReconciliationEngine
from ccrun.const import MANAGEMENT_COMMANDS
from ccrun.logger import _logger
from ccrun.models import CcRunError, UsageError
from ccrun.utils import split_passthrough_args, validate_dash_position

COMMANDS = MANAGEMENT_COMMANDS
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
PROXY_ACTIONS = ["on", "off", "reset", "status", "help"]


# ===========================================================================
# CLI argument parsing
# ===========================================================================
class CliArgumentParser(argparse.ArgumentParser):
    """Reports usage mistakes as UsageError (exit 1) instead of exiting with status 2."""

    def error(self, message: str) -> None:
        raise UsageError(message=f"Error: {message}", hint=self.format_usage().rstrip())


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level on stderr (default: WARNING, or CC_RUN_LOG_LEVEL)",
    )


def build_launch_parser() -> argparse.ArgumentParser:
    parser = CliArgumentParser(
        prog="cc-run",
        description="Claude launcher that switches between the official API and third-party endpoints.",
        epilog="Management commands: " + ", ".join(COMMANDS) + ". Arguments after -- are passed to claude.",
    )
    parser.add_argument("provider", nargs="?", default=None, help="Provider name (glm, deepseek, minimax or a custom endpoint)")
    parser.add_argument(
        "--claude",
        dest="persist",
        action="store_true",
        help="Configure the native claude command (with a provider: use it; without: restore official)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_common_arguments(parser)
    return parser


def build_command_parser() -> argparse.ArgumentParser:
    parser = CliArgumentParser(prog="cc-run")
    _add_common_arguments(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List the available endpoints")

    add_parser = subparsers.add_parser("add", help="Add or replace a custom endpoint")
    add_parser.add_argument("name", help="Endpoint name")
    add_parser.add_argument("endpoint", help="API base URL")

    remove_parser = subparsers.add_parser("remove", help="Remove a custom endpoint")
    remove_parser.add_argument("name", help="Endpoint name")

    token_parser = subparsers.add_parser("token", help="Manage saved API tokens")
    token_subparsers = token_parser.add_subparsers(dest="token_command", required=True)
    token_set = token_subparsers.add_parser("set", help="Save the token of a provider")
    token_set.add_argument("provider", help="Provider name")
    token_set.add_argument("token", nargs="?", default=None, help="Token (prompted for when omitted)")
    token_clean = token_subparsers.add_parser("clean", aliases=["clear"], help="Forget the token of a provider")
    token_clean.add_argument("provider", help="Provider name")

    proxy_parser = subparsers.add_parser("proxy", help="Manage the HTTP proxy")
    proxy_parser.add_argument("action", nargs="?", choices=PROXY_ACTIONS, default="help")

    return parser


def _first_positional(args: List[str]) -> Optional[str]:
    skip_next = False
    for arg in args:
        if skip_next:
            skip_next = False
            continue
        if arg == "--log-level":
            skip_next = True
            continue
        if not arg.startswith("-"):
            return arg
    return None


def parse_args(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, List[str]]:
    """Parse cc-run's own arguments and return them with the claude passthrough arguments."""
    argv = list(sys.argv[1:] if argv is None else argv)
    validate_dash_position(argv)
    own_args, passthrough_args = split_passthrough_args(argv)

    if _first_positional(own_args) in COMMANDS:
        return build_command_parser().parse_args(own_args), passthrough_args

    args = build_launch_parser().parse_args(own_args)
    args.command = None
    return args, passthrough_args


# ===========================================================================
# Dispatch
# ===========================================================================
def dispatch(
    args: argparse.Namespace,
    passthrough_args: List[str],
    engine: Optional[ReconciliationEngine] = None,
    commands: Optional[AdminCommands] = None,
) -> int:
    if args.command is None:
        engine = engine or ReconciliationEngine()
        if args.provider is None:
            if args.persist:
                return engine.restore_official(passthrough_args)
            return engine.run_official(passthrough_args)
        return engine.run_provider(args.provider, args.persist, passthrough_args)

    commands = commands or AdminCommands()
    if args.command == "list":
        return commands.list_endpoints()
    if args.command == "add":
        return commands.add(args.name, args.endpoint)
    if args.command == "remove":
        return commands.remove(args.name)
    if args.command == "token":
        if args.token_command == "set":
            return commands.token_set(args.provider, args.token)
        return commands.token_clean(args.provider)
    if args.command == "proxy":
        return getattr(commands, f"proxy_{args.action}")()
    raise ValueError(f"Unknown command: {args.command}")


def report_error(error: CcRunError) -> None:
    print(error.message, file=sys.stderr)
    if error.hint:
        print(error.hint, file=sys.stderr)


def run(
    argv: Optional[List[str]] = None,
    engine: Optional[ReconciliationEngine] = None,
    commands: Optional[AdminCommands] = None,
) -> int:
    """Run cc-run and return the exit code the process should terminate with."""
    try:
        args, passthrough_args = parse_args(argv)
        if args.log_level:
            _logger.set_level(args.log_level)
        return dispatch(args, passthrough_args, engine=engine, commands=commands)
    except CcRunError as e:
        report_error(e)
        return e.exit_code
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


def main(argv: Optional[List[str]] = None) -> None:
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
