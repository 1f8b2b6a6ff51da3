"""Entry point: ``python -m geocoin``.

Supports two modes:
  - ``python -m geocoin``            → Launch the FastAPI server
  - ``python -m geocoin cli``        → Text-mode game on stdin/stdout
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from geocoin.api.session import GameSession

logger = logging.getLogger(__name__)

_HELP = (
    "commands: n | s | e | w  move one cell\n"
    "          look             list caches in reach\n"
    "          collect I J      take a coin from the cache at (I, J)\n"
    "          deposit I J      put a coin into the cache at (I, J)\n"
    "          goto LAT LNG     jump to a geographic position\n"
    "          save | reset | help | quit"
)


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--save-file", type=str, default="geocoin_save.json")
    p.add_argument("--radius", type=int, default=8)
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Geocoin: location-based coin collection game")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    _add_common(srv)

    # --- Text mode ---
    cli = sub.add_parser("cli", help="Play in the terminal")
    _add_common(cli)

    return parser


def _config_from(args: argparse.Namespace):
    from geocoin.config import GameConfig

    return GameConfig(
        world_seed=args.seed,
        save_file=args.save_file,
        neighborhood_size=args.radius,
        log_level=args.log_level,
    )


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app

    app = create_app(_config_from(args))
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def dispatch(session: GameSession, line: str, out: TextIO) -> bool:
    """Translate one command line into one game operation. Returns False to quit."""
    from geocoin.api.session import Direction
    from geocoin.core.models import GeoPoint, GridCell

    moves = {"n": Direction.north, "s": Direction.south, "e": Direction.east, "w": Direction.west}
    parts = line.split()
    if not parts:
        return True
    cmd, rest = parts[0].lower(), parts[1:]

    try:
        if cmd in ("quit", "q", "exit"):
            return False
        if cmd in moves:
            fresh = session.move(moves[cmd])
            pos = session.read(lambda w: w.player.position)
            print(f"You are at {pos.key}. {len(fresh)} new caches nearby.", file=out)
        elif cmd == "goto" and len(rest) == 2:
            session.set_position(GeoPoint(float(rest[0]), float(rest[1])))
            pos = session.read(lambda w: w.player.position)
            print(f"You are at {pos.key}.", file=out)
        elif cmd == "look":
            caches = session.read(lambda w: [(c.cell, c.view()) for c in w.nearby_caches()])
            if not caches:
                print("No caches in reach.", file=out)
            for cell, coins in sorted(caches, key=lambda item: (item[0].i, item[0].j)):
                ids = ", ".join(c.id for c in coins) or "No coins left"
                print(f"  {cell.key}: {ids}", file=out)
        elif cmd in ("collect", "deposit") and len(rest) == 2:
            cell = GridCell(int(rest[0]), int(rest[1]))
            op = session.collect if cmd == "collect" else session.deposit
            result = op(cell)
            wallet = session.read(lambda w: w.player.coins)
            detail = f" ({result.coin.id})" if result.coin else ""
            print(f"{cmd}: {result.status.value}{detail}. Coins in pocket: {wallet}", file=out)
        elif cmd == "save":
            session.save()
            print("Saved.", file=out)
        elif cmd == "reset":
            session.reset()
            print("World reset.", file=out)
        else:
            print(_HELP, file=out)
    except ValueError:
        print(_HELP, file=out)
    return True


def _run_cli(args: argparse.Namespace) -> None:
    from geocoin.api.session import GameSession
    from geocoin.utils.logging import setup_logging

    config = _config_from(args)
    setup_logging(config.log_level)

    session = GameSession(config)
    session.start()
    coins = session.read(lambda w: w.player.coins)
    print(f"Coins in pocket: {coins}. Type 'help' for commands.")
    try:
        for line in sys.stdin:
            if not dispatch(session, line, sys.stdout):
                break
    except KeyboardInterrupt:
        pass
    finally:
        session.stop()

    logger.info("Done. Game saved to %s", config.save_file)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])

    if args.command == "serve":
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
