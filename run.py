"""dungeonpath CLI entry point.

Provides subcommands for running the graph API server and for generating a
single dungeon straight to the terminal. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style, just_fix_windows_console
from dotenv import load_dotenv

just_fix_windows_console()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

EXIT_INFEASIBLE = 2


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    dungeonpath - procedural dungeon graph generator

    Generate a dungeon graph (main path, secondary paths, keys and locks) on
    the terminal, or run the JSON API server that hands graphs to a
    materialization client. Generation settings come from DUNGEON_* environment
    variables; CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                           Bind address for the web server (default: 0.0.0.0)
          PORT                           Port for the web server (default: 5000)
          DUNGEON_MIN_MAIN_PATH_LENGTH   Minimum main path rooms (default: 10)
          DUNGEON_MAX_MAIN_PATH_LENGTH   Maximum main path rooms (default: 10)
          DUNGEON_TURN_CHANCE            Probability of turning at each step (default: 0.25)
          DUNGEON_FAIL_IF_TOO_SHORT      Abort instead of shortening the main path (default: 0)

        Examples:
          # Print a dungeon for seed 42
          python run.py generate --seed 42

          # Same dungeon as JSON
          python run.py generate --seed 42 --json

          # Run the API server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeonpath",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"dungeonpath {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon graph API server",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a dungeon graph and print its ASCII map and summary (or JSON).",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Generation seed (default: random)")
    gen_parser.add_argument("--min-length", type=int, default=None, help="Minimum main path length")
    gen_parser.add_argument("--max-length", type=int, default=None, help="Maximum main path length")
    gen_parser.add_argument("--min-secondary", type=int, default=None, help="Minimum secondary path length")
    gen_parser.add_argument("--max-secondary", type=int, default=None, help="Maximum secondary path length")
    gen_parser.add_argument("--turn-chance", type=float, default=None, help="Turn probability in [0,1]")
    gen_parser.add_argument(
        "--fail-if-too-short",
        action="store_true",
        default=None,
        help="Abort when the main path cannot reach its length",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the graph as JSON")
    gen_parser.set_defaults(command="generate")

    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


_FLAG_FIELDS = {
    "seed": "seed",
    "min_length": "min_main_path_length",
    "max_length": "max_main_path_length",
    "min_secondary": "min_secondary_path_length",
    "max_secondary": "max_secondary_path_length",
    "turn_chance": "turn_chance",
    "fail_if_too_short": "fail_if_too_short",
}


def build_config(args: argparse.Namespace):
    """Environment config overridden by any CLI flag that was given."""
    from dungeonpath.dungeon import DungeonConfig

    overrides = {}
    for flag, field_name in _FLAG_FIELDS.items():
        val = getattr(args, flag, None)
        if val is not None:
            overrides[field_name] = val
    return DungeonConfig.from_mapping(overrides, base=DungeonConfig.from_env())


def _label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def _error(text: str) -> str:
    return f"{Fore.RED}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def run_generate(args: argparse.Namespace) -> int:
    from dungeonpath.dungeon import Dungeon, MainPathInfeasible
    from dungeonpath.dungeon.render import summary_lines

    try:
        config = build_config(args)
    except ValueError as exc:
        print(_error(f"[ERROR] {exc}"), file=sys.stderr)
        return 1
    try:
        dungeon = Dungeon(config)
    except MainPathInfeasible as exc:
        print(_error(f"[ERROR] {exc}"), file=sys.stderr)
        return EXIT_INFEASIBLE
    if getattr(args, "json", False):
        print(json.dumps(dungeon.to_dict(), indent=2))
        return 0
    print(dungeon.render())
    print()
    for line in summary_lines(dungeon):
        key, _, val = line.partition(" : ")
        print(f"{_label(key + ':'):24} {val}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from dungeonpath.server import start_server
    from dungeonpath.logging_utils import log

    title = f"{Fore.CYAN}{Style.BRIGHT}Dungeon Graph Server{Style.RESET_ALL}" if _COLOR_ENABLED else "Dungeon Graph Server"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    print(
        "\n".join(
            [
                divider,
                f"  {title}",
                divider,
                f"  {_label('Host:'):12} {host}",
                f"  {_label('Port:'):12} {port}",
                f"  {_label('Debug:'):12} {'YES' if debug else 'NO'}",
                divider,
                "",
            ]
        )
    )
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
