import argparse
import json
import logging
import os
import random
from dataclasses import replace
from typing import Dict, List, Optional

from dotenv import load_dotenv

from config import load_config
from domain.engine import GameEngine
from players import RandomPlayer
from services.game_loop import GameLoop, Ticker

load_dotenv()

logger = logging.getLogger(__name__)


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(
    max_ticks: int,
    seed: Optional[int] = None,
    interval_ms: int = 0,
    show_board: bool = False,
) -> Dict:
    """
    Runs a single headless game driven by a RandomPlayer.

    Args:
        max_ticks: Upper limit on the number of loop steps.
        seed: Seed for both food placement and the player's choices.
        interval_ms: Delay between ticks; 0 runs as fast as possible.
        show_board: Print the board after the game ends.

    Returns:
        A dictionary summarizing the game (score, length, status, ticks).
    """
    config = load_config()
    if seed is not None:
        config = replace(config, seed=seed)

    engine = GameEngine(config)
    player = RandomPlayer(random.Random(seed))
    ticker = Ticker(interval_ms) if interval_ms > 0 else Ticker(1, sleep=lambda _: None)

    with GameLoop(engine, ticker=ticker) as loop:
        state = loop.run(max_ticks=max_ticks, controller=player)

    if show_board:
        print("\n" + state.print_board() + "\n")

    return {
        "score": state.score,
        "length": len(state.snake),
        "status": state.status.value,
        "death_reason": state.death_reason,
        "ticks": state.tick_count,
    }


def serve(host: str, port: int, debug: bool = False) -> None:
    """Run the Flask browser view."""
    from app import create_app

    create_app().run(host=host, port=port, debug=debug)


# -------------------------------
# Main Entry Point
# -------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Single-player grid snake game."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve the game in the browser")
    serve_parser.add_argument("--host", type=str, default="127.0.0.1",
                              help="Interface to bind")
    serve_parser.add_argument("--port", type=int, default=5000,
                              help="Port to listen on")
    serve_parser.add_argument("--debug", action="store_true",
                              help="Enable the Flask debugger")

    sim_parser = subparsers.add_parser("simulate", help="Play a headless game with a random player")
    sim_parser.add_argument("--ticks", type=int, default=1000,
                            help="Maximum number of ticks")
    sim_parser.add_argument("--seed", type=int, default=None,
                            help="Seed for food placement and player moves")
    sim_parser.add_argument("--interval-ms", type=int, default=0,
                            help="Milliseconds between ticks (0 = no delay)")
    sim_parser.add_argument("--show-board", action="store_true",
                            help="Print the final board")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        serve(args.host, args.port, debug=args.debug)
        return 0

    if args.ticks < 1:
        raise ValueError("--ticks must be at least 1")

    result = run_simulation(
        max_ticks=args.ticks,
        seed=args.seed,
        interval_ms=args.interval_ms,
        show_board=args.show_board,
    )

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
