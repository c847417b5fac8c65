"""Command-line entry point for serving and simulating games."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rival-snake",
        description="Rival Snake game server and headless simulator.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play autopilot games and report the outcome.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config (overrides other flags).",
    )
    sim_p.add_argument("--grid-size", type=int, default=15)
    sim_p.add_argument("--games", type=int, default=100)
    sim_p.add_argument("--max-ticks", type=int, default=500)
    sim_p.add_argument("--seed", type=int, default=42)
    sim_p.add_argument(
        "--solo", action="store_true", help="Play without an AI opponent.",
    )
    sim_p.add_argument(
        "--revive", action="store_true", help="Respawn the AI after it dies.",
    )

    return parser


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from rival_snake.server.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from rival_snake.config import GameConfig
    from rival_snake.errors import ConfigurationError
    from rival_snake.simulation import simulate

    try:
        if args.config:
            config = GameConfig.load(args.config)
        else:
            config = GameConfig(
                grid_size=args.grid_size,
                has_opponent=not args.solo,
                revive_enabled=args.revive,
            )
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    result = simulate(
        config, num_games=args.games, max_ticks=args.max_ticks, seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``rival-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "simulate": _run_simulate,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
