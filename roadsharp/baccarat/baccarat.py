"""
Baccarat shoe simulator.

Deals a shoe, prints the roads as text and summarises the outcomes.
"""

import argparse
import json
import logging
import os
import sys
import time
from typing import Dict, List, Optional

from roadsharp.baccarat.game import BaccaratGame
from roadsharp.baccarat.rules import BaccaratRules
from roadsharp.common.outcome import Winner
from roadsharp.roadmap.constants import DerivedRoadType
from roadsharp.roadmap.layout import RoadmapConfig, layout_snapshot, render_text
from roadsharp.roadmap.statistics import outcomes_to_dataframe, win_rates

logger = logging.getLogger(__name__)

WINNER_SYMBOLS = {Winner.BANKER: "B", Winner.PLAYER: "P", Winner.TIE: "T"}

ROAD_TITLES = {
    "bead_plate": "Bead Plate",
    "big_road": "Big Road",
    DerivedRoadType.BIG_EYE_BOY.value: "Big Eye Boy",
    DerivedRoadType.SMALL_ROAD.value: "Small Road",
    DerivedRoadType.COCKROACH_PIG.value: "Cockroach Pig",
}


def configure_logging(verbose: bool = False) -> None:
    """Attach a console handler to the package logger."""
    root = logging.getLogger("roadsharp")
    if os.environ.get("ROADSHARP_DISABLE_LOGGING", "").lower() in ("1", "true", "yes"):
        root.setLevel(logging.ERROR)
    else:
        root.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        root.addHandler(handler)


def _symbol(cell) -> str:
    if hasattr(cell, "winner"):
        symbol = WINNER_SYMBOLS[cell.winner]
        # Lower case marks a cell carrying ties
        if getattr(cell, "tie_count", 0):
            symbol = symbol.lower()
        return symbol
    return "R" if cell.value else "b"


def run_simulation(
    num_rounds: Optional[int] = None,
    num_decks: int = 8,
    seed=None,
    config: Optional[RoadmapConfig] = None,
    verbose: bool = False,
) -> Dict:
    """
    Play one shoe and collect its roads and statistics.

    Args:
        num_rounds: Stop after this many rounds (default: play out the shoe)
        num_decks: Number of decks in the shoe
        seed: Shuffle seed for a reproducible shoe
        config: Roadmap display configuration
        verbose: Print the roads and a summary

    Returns:
        Dictionary with the snapshot, display grids and rates
    """
    config = config if config else RoadmapConfig()
    game = BaccaratGame(rules=BaccaratRules(num_decks=num_decks), config=config, seed=seed)

    start_time = time.time()
    outcomes = game.play_shoe(max_rounds=num_rounds)
    duration = time.time() - start_time

    snapshot = game.roadmap.snapshot()
    grids = layout_snapshot(snapshot, config)
    results = {
        "snapshot": snapshot,
        "grids": grids,
        "rates": win_rates(outcomes),
        "history": outcomes_to_dataframe(outcomes),
        "duration": duration,
    }

    if verbose:
        print(f"\nBaccarat Shoe ({len(outcomes)} rounds, seed={seed!r})")
        print("=" * 60)
        for name, grid in grids.items():
            print(f"\n{ROAD_TITLES[name]}:")
            print(render_text(grid, _symbol) or "(empty)")
        stats = snapshot.statistics
        print("\nOutcome Distribution:")
        print(f"  Banker wins: {stats.banker_wins}")
        print(f"  Player wins: {stats.player_wins}")
        print(f"  Ties: {stats.ties} ({snapshot.pre_game_ties} before the first decision)")
        print(f"  Naturals: {stats.naturals}")
        print(f"  Pairs: player {stats.player_pairs}, banker {stats.banker_pairs}")
        print(
            f"  Longest streaks: banker {stats.longest_banker_streak}, "
            f"player {stats.longest_player_streak}"
        )
        print("\nNext round if banker wins / if player wins:")
        for winner in (Winner.BANKER, Winner.PLAYER):
            prediction = game.roadmap.predict(winner)
            marks = ", ".join(
                f"{ROAD_TITLES[road.value]}="
                f"{'-' if value is None else ('red' if value else 'blue')}"
                for road, value in prediction.items()
            )
            print(f"  {winner.value}: {marks}")
        print("=" * 60)

    return results


def main(argv: Optional[List[str]] = None):
    """Main CLI interface for the shoe simulator."""
    parser = argparse.ArgumentParser(
        description="Baccarat road chart simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play out a full 8-deck shoe
  python -m roadsharp.baccarat.baccarat --seed 7

  # First 40 rounds on a 4-row display, as JSON
  python -m roadsharp.baccarat.baccarat --num_rounds 40 --rows 4 --json
        """,
    )

    parser.add_argument("--num_rounds", type=int, default=None, help="Stop after this many rounds")
    parser.add_argument("--num_decks", type=int, default=8, help="Number of decks in shoe (default: 8)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible shoe")
    parser.add_argument("--rows", type=int, default=6, help="Display rows per road (default: 6)")
    parser.add_argument(
        "--columns", type=int, default=40, help="Display columns per road (default: 40)"
    )
    parser.add_argument("--json", action="store_true", help="Print the roads as JSON")
    parser.add_argument("--verbose", action="store_true", help="Log every round")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    config = RoadmapConfig(rows=args.rows, display_columns=args.columns)
    results = run_simulation(
        num_rounds=args.num_rounds,
        num_decks=args.num_decks,
        seed=args.seed,
        config=config,
        verbose=not args.json,
    )
    if args.json:
        json.dump(results["snapshot"].to_dict(), sys.stdout, indent=2)
        print()


if __name__ == "__main__":
    main()
