from __future__ import annotations

import argparse
import sys

from .dynamic.ring import MAX_PLAYERS, MIN_PLAYERS


def _add_play_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--players",
        type=int,
        default=MIN_PLAYERS,
        help=f"Number of players around the bottle ({MIN_PLAYERS}-{MAX_PLAYERS})",
    )
    # If omitted, runs with a random seed for variety. Pass an int to reproduce.
    p.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")
    p.add_argument("--no-color", action="store_true", help="Disable colored output (default is colored)")
    p.add_argument("--mute", action="store_true", help="Do not ring the terminal bell on each spin")


def _add_serve_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--host", default=None, help="Bind address (default: $BIND or 127.0.0.1)")
    p.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 8000)")


def main(argv: list[str] | None = None) -> None:
    """Terminal play is the default mode; ``serve`` starts the web app.

    An explicit "play" subcommand is accepted and behaves the same as
    omitting it.
    """
    args_in = list(sys.argv[1:] if argv is None else argv)

    first_non_flag = next((t for t in args_in if not t.startswith("-")), None)
    if first_non_flag == "serve":
        args_in.remove("serve")
        parser = argparse.ArgumentParser(prog="spinbottle serve", description="Serve the spin-the-bottle web app")
        _add_serve_args(parser)
        args = parser.parse_args(args_in)

        from .web.app import main as serve

        serve(host=args.host, port=args.port)
        return

    if first_non_flag == "play":
        args_in.remove("play")

    parser = argparse.ArgumentParser(prog="spinbottle", description="Spin the bottle in the terminal")
    _add_play_args(parser)
    args = parser.parse_args(args_in)
    if not MIN_PLAYERS <= args.players <= MAX_PLAYERS:
        parser.error(f"--players must be between {MIN_PLAYERS} and {MAX_PLAYERS}")

    from .engine_play import run_play

    run_play(seed=args.seed, players=args.players, no_color=args.no_color, muted=args.mute)


if __name__ == "__main__":
    main()
