# main.py
"""
Analyze a Hold'em situation from the command line.

    python main.py --hole AhKh --board QhJh2c --opponents 2 --samples 200 --seed 7
"""
import argparse
import asyncio
import sys

import numpy as np

from holdem_insight.logging_config import logger
from holdem_insight.core_poker_mechanics import InvalidCardError, InvalidHandError, parse_cards
from holdem_insight.preflop_ranges import Position
from holdem_insight.situation_report import SituationReport


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Hand strength, outs, threats, dangerous cards and sampled equity for Texas Hold'em",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    p.add_argument("--hole", required=True, help="Two hole cards, e.g. AhKh or 'Ah Kh'")
    p.add_argument("--board", default="", help="0-5 community cards, e.g. QhJh2c")
    p.add_argument("--opponents", type=int, default=1, help="Number of opponents")
    p.add_argument("--samples", type=int, default=None, help="Opponent holdings to sample (config default)")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible equity")
    p.add_argument("--position", choices=[pos.value for pos in Position], default=None,
                   help="Table position for the preflop range lookup")
    p.add_argument("--no-equity", action="store_true", help="Skip the equity simulation")
    return p


async def run(args: argparse.Namespace) -> int:
    hole = parse_cards(args.hole)
    board = parse_cards(args.board)
    position = Position(args.position) if args.position else None

    report = SituationReport(hole, board, opponent_count=args.opponents, position=position)

    if not args.no_equity:
        rng = np.random.default_rng(args.seed)
        await report.win_probability(samples=args.samples, rng=rng)

    for line in report.get_all_context_strings():
        print(line)
    for dc in report.dangerous.dangerous_cards[:10]:
        print(f"  {str(dc.card):>4} {dc.risk_level.value:<8} -{dc.impact_on_equity}%  {'; '.join(dc.threats)}")
    return 0


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except (InvalidCardError, InvalidHandError) as e:
        logger.error(f"Invalid input: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
