"""Delve CLI entry point.

Provides subcommands for generating a dungeon topology (written as JSON to
a file or stdout) and for running the HTTP API server. Accepts
configuration via flags and environment variables, with optional .env
loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

EXIT_OK = 0
EXIT_GENERATION_FAILURE = 1
EXIT_CONFIGURATION_ERROR = 2


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delve dungeon topology generator

    Generate a solvable room graph (single Entrance, single Exit, guaranteed
    minimum route) or run the HTTP API that serves them. CLI flags take
    precedence over environment variables.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                      Bind address for the API server (default: 0.0.0.0)
          PORT                      Port for the API server (default: 5000)
          DELVE_BRANCH_PROBABILITY  Chance a room sprouts a side corridor (default: 0.3)
          DELVE_LOOP_PROBABILITY    Chance adjacent rooms get an extra passage (default: 0.1)
          DELVE_MAX_ATTEMPTS        Generation attempts before giving up (default: 10)
          DELVE_LOG_LEVEL           debug|info|warn|error (default: info)

        Examples:
          # Generate a 10x10 dungeon with an 8-hop minimum route and print it
          python run.py generate --width 10 --height 10 --min-path 8 --seed 42

          # Write the export to a file
          python run.py generate --seed 42 --out exports/dungeon.json

          # Run the API server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="Delve",
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
        version=f"Delve {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon topology and export it as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--width", type=int, default=20, help="Grid width (default: 20)")
    gen_parser.add_argument("--height", type=int, default=20, help="Grid height (default: 20)")
    gen_parser.add_argument(
        "--min-path",
        dest="min_path",
        type=int,
        default=None,
        help="Minimum Entrance-to-Exit hops (default: 15)",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible layout (default: random)")
    gen_parser.add_argument("--branch-probability", dest="branch_probability", type=float, default=None)
    gen_parser.add_argument("--loop-probability", dest="loop_probability", type=float, default=None)
    gen_parser.add_argument("--max-attempts", dest="max_attempts", type=int, default=None)
    gen_parser.add_argument("--out", dest="out_path", default=None, help="Write the JSON export here instead of stdout")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon API server",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _run_generate(args, color: bool) -> int:
    from delve.logging_utils import get_logger
    from delve.topology import GenerationConfig, GridBounds, generate, graph_to_json, save_graph
    from delve.topology.bounds import DEFAULT_ESCAPE_PATH_LENGTH
    from delve.topology.errors import ConfigurationError, GenerationFailure

    def paint(prefix: str, tint: str) -> str:
        return f"{tint}{prefix}{Style.RESET_ALL}" if color else prefix

    # Events go to stderr so stdout stays a clean JSON document.
    log = get_logger("delve.cli", stream=sys.stderr)
    try:
        min_path = args.min_path if args.min_path is not None else DEFAULT_ESCAPE_PATH_LENGTH
        bounds = GridBounds(args.width, args.height, min_path)
        config = GenerationConfig.from_env(
            branch_probability=args.branch_probability,
            loop_probability=args.loop_probability,
            max_attempts=args.max_attempts,
        )
        graph = generate(bounds, args.seed, config, log=log)
    except ConfigurationError as e:
        print(f"{paint('[ERROR]', Fore.RED)} {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR
    except GenerationFailure as e:
        print(f"{paint('[ERROR]', Fore.RED)} {e}", file=sys.stderr)
        for i, reason in enumerate(e.reasons, 1):
            print(f"  attempt {i}: {reason}", file=sys.stderr)
        return EXIT_GENERATION_FAILURE

    if args.out_path:
        save_graph(graph, args.out_path)
        print(
            f"{paint('[OK]', Fore.GREEN)} {len(graph)} rooms, seed {graph.seed}, "
            f"{graph.attempts} attempt(s) -> {args.out_path}"
        )
    else:
        print(graph_to_json(graph))
    return EXIT_OK


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    # Disable colors if output is not a real terminal (e.g., during pytest capture)
    color = sys.stdout.isatty()
    if color:  # pragma: no cover - environment dependent
        _color_init()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _run_generate(args, color)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    title = f"{Fore.CYAN}{Style.BRIGHT}Delve API Bootup{Style.RESET_ALL}" if color else "Delve API Bootup"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))

    # Import server entrypoint only after environment is ready
    from delve.server import start_server

    start_server(host=host, port=port, debug=debug)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
