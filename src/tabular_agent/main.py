"""Main entry point for the tabular agent CLI.

Loads local files into a fresh session and dispatches tool calls against
them, either once (``--tool``) or interactively, or starts the API server.
"""

import argparse
import json
import sys

import yaml

from .config import Settings, get_settings
from .logging import setup_logging
from .session import AnalysisSession
from .types import ResultKind, ToolResult


def load_yaml_config(path: str = "config.yaml") -> dict:
    """Load configuration from a yaml file if it exists."""
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}


def build_settings(yaml_config: dict) -> Settings:
    """Settings with the yaml ``tabular_agent`` section layered over env vars."""
    overrides = yaml_config.get("tabular_agent") or {}
    if not overrides:
        return get_settings()
    return Settings(**overrides)


def _start_server(host: str, port: int) -> None:
    """Start the API server."""
    try:
        import uvicorn
        from .api import app
    except ImportError:
        print("Error: API dependencies not installed.")
        print("Install with: pip install tabular-agent[api]")
        sys.exit(1)

    print(f"Starting API server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    uvicorn.run(app, host=host, port=port)


def _print_result(result: ToolResult) -> None:
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2, default=str))


def parse_command(line: str) -> tuple[str, dict]:
    """Split ``toolName {"json": "args"}`` into a name and an argument dict."""
    name, _, raw_args = line.strip().partition(" ")
    arguments = json.loads(raw_args) if raw_args.strip() else {}
    if not isinstance(arguments, dict):
        raise ValueError("tool arguments must be a JSON object")
    return name, arguments


def run_repl(session: AnalysisSession) -> None:
    """Run the interactive loop: one tool call per line.

    Args:
        session: The session whose registry the calls operate on.
    """
    print("Tabular Agent ready. Enter `toolName {json args}`, `tools` or `exit`.")
    print("-" * 50)

    while True:
        try:
            user_input = input("> ")
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if user_input.lower() in ("exit", "quit"):
            print("Goodbye!")
            break

        if not user_input.strip():
            continue

        if user_input.strip() == "tools":
            for name in session.dispatcher.tools:
                print(f"- {name}")
            continue

        try:
            name, arguments = parse_command(user_input)
        except ValueError as e:
            print(f"Invalid command: {e}")
            continue
        _print_result(session.call(name, **arguments))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tabular agent CLI."""
    parser = argparse.ArgumentParser(description="Tabular Agent CLI")
    parser.add_argument(
        "files",
        nargs="*",
        help="Files (csv/json/jsonl/xlsx) to load before running tools"
    )
    parser.add_argument(
        "--tool",
        help="Run a single tool call and exit"
    )
    parser.add_argument(
        "--args",
        default="{}",
        help="JSON object with the tool arguments (default: {})"
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to a yaml config file (default: config.yaml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (also settable via TABULAR_AGENT_LOG_LEVEL env var)"
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the API server instead of CLI"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the API server (default: 8000)"
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for the API server (default: 127.0.0.1)"
    )
    args = parser.parse_args(argv)

    yaml_config = load_yaml_config(args.config)
    settings = build_settings(yaml_config)

    # cli > yaml > env
    setup_logging(args.log_level or settings.log_level)

    if args.serve:
        _start_server(args.host, args.port)
        return 0

    session = AnalysisSession.create(settings=settings)
    try:
        return _run_session(session, args)
    finally:
        session.close()


def _run_session(session: AnalysisSession, args: argparse.Namespace) -> int:
    for path in args.files:
        result = session.call("loadFile", path=path)
        if result.kind is ResultKind.HARD_FAILURE:
            print(f"Error: {result.error}", file=sys.stderr)
            return 1
        print(f"Loaded {result.value['id']} ({result.value['rowCount']} rows)", file=sys.stderr)

    if not args.tool:
        run_repl(session)
        return 0

    try:
        arguments = json.loads(args.args)
    except json.JSONDecodeError as e:
        print(f"Error: --args is not valid JSON: {e}", file=sys.stderr)
        return 2

    if not isinstance(arguments, dict):
        print("Error: --args must be a JSON object", file=sys.stderr)
        return 2

    result = session.call(args.tool, **arguments)
    _print_result(result)
    return 1 if result.kind is ResultKind.HARD_FAILURE else 0


if __name__ == "__main__":
    sys.exit(main())
