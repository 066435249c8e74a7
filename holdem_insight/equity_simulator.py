"""
equity_simulator.py

Sampled win/tie/lose probability against random opponent holdings.

calculate_win_probability(hole_cards=parse_cards('Ah Kh'), community_cards=parse_cards('Qh Jh 2c'), opponent_count=2)
"""
import asyncio
from enum import Enum
from typing import Callable, List, Optional, Sequence
import numpy as np

from holdem_insight.core_poker_mechanics import (
    Card, HandEvaluator, InvalidHandError, draw_cards, remaining_deck
)
from holdem_insight.monte_carlo_tracker import SimulationTracker
from holdem_insight.poker_types import WinProbability
from holdem_insight.settings import simulation_setting
from holdem_insight.logging_config import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


class Outcome(Enum):
    WIN = 0
    TIE = 1
    LOSE = 2


def compare_hands(
        hero_hole: Sequence[Card],
        opponent_holes: Sequence[Sequence[Card]],
        board: Sequence[Card]
    ) -> Outcome:
    """Showdown of the hero against every opponent on a 3-5 card board"""
    hero_key = HandEvaluator.hand_key(list(hero_hole) + list(board))
    opponent_keys = [HandEvaluator.hand_key(list(opp) + list(board)) for opp in opponent_holes]

    best_opponent = max(opponent_keys)
    if hero_key > best_opponent:
        return Outcome.WIN
    if hero_key == best_opponent:
        return Outcome.TIE
    return Outcome.LOSE


def _outcome_percentages(outcomes: Sequence[Outcome]) -> np.ndarray:
    """[win%, tie%, lose%] over a list of showdowns"""
    counts = np.zeros(3, dtype=np.float64)
    for outcome in outcomes:
        counts[outcome.value] += 1
    return counts / len(outcomes) * 100.0


def matchup_percentages(
        hero_hole: Sequence[Card],
        opponent_holes: Sequence[Sequence[Card]],
        board: Sequence[Card],
        stub: Sequence[Card],
        runouts: int,
        rng: np.random.Generator
    ) -> np.ndarray:
    """
    Win/tie/lose percentages of one fixed matchup.

    With `runouts == 0` (or a complete board) the hands are compared on the board as it
    stands; otherwise the board is completed `runouts` times from `stub`.
    """
    if runouts == 0 or len(board) == 5:
        return _outcome_percentages([compare_hands(hero_hole, opponent_holes, board)])

    missing = 5 - len(board)
    outcomes = []
    for _ in range(runouts):
        completion = draw_cards(stub, missing, rng)
        outcomes.append(compare_hands(hero_hole, opponent_holes, list(board) + completion))
    return _outcome_percentages(outcomes)


def _validate_cards(hole_cards: Sequence[Card], community_cards: Sequence[Card]):
    if len(hole_cards) != 2:
        raise InvalidHandError(f"Must have exactly 2 hole cards, got {len(hole_cards)}")
    if len(community_cards) > 5:
        raise InvalidHandError(f"Board cannot have more than 5 cards, got {len(community_cards)}")
    all_cards = list(hole_cards) + list(community_cards)
    if len(set(all_cards)) != len(all_cards):
        raise InvalidHandError("Duplicate cards in hole cards and board")


def clamp_opponent_count(opponent_count: int) -> int:
    max_opponents = simulation_setting('max_opponents')
    clamped = min(max(int(opponent_count), 1), max_opponents)
    if clamped != opponent_count:
        logger.warning(f"Opponent count {opponent_count} clamped to {clamped} (supported: 1-{max_opponents})")
    return clamped


def resolve_runouts(community_cards: Sequence[Card], runouts: Optional[int] = None) -> int:
    """Board completions per sample: none once the flop is out unless asked for, always some preflop"""
    if runouts is None:
        runouts = simulation_setting('runouts')
    if len(community_cards) < 3:
        runouts = max(runouts, simulation_setting('preflop_runouts'), 1)
    return runouts


def _summarize(outcomes: np.ndarray) -> WinProbability:
    win, tie, lose = (float(v) for v in outcomes.mean(axis=0))
    return WinProbability(
        win_percentage=win,
        tie_percentage=tie,
        lose_percentage=lose,
        equity=win + tie / 2,
        samples=int(outcomes.shape[0])
    )


async def calculate_win_probability(
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card],
        opponent_count: int = 1,
        samples: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
        tracker: Optional[SimulationTracker] = None,
        rng: Optional[np.random.Generator] = None,
        runouts: Optional[int] = None
    ) -> Optional[WinProbability]:
    """
    Estimate win/tie/lose probability against `opponent_count` random hands.

    Parameters
    ----------
    hole_cards : Sequence[Card]
        The player's two hole cards.
    community_cards : Sequence[Card]
        0 to 5 board cards.
    opponent_count : int
        Number of opponents, clamped to 1..simulation.max_opponents.
    samples : Optional[int]
        Opponent holdings to sample (simulation.samples when omitted).
    progress_callback : Optional[Callable[[int, int], None]]
        Called as (completed, total) after every sample.
    tracker : Optional[SimulationTracker]
        Cancellation token owned by the caller; a cancelled run returns None.
    rng : Optional[np.random.Generator]
        Random source, e.g. np.random.default_rng(42) for reproducible results.
    runouts : Optional[int]
        Board completions per sample (see resolve_runouts).

    Returns
    -------
    Optional[WinProbability]
        Averaged percentages, or None when the run was cancelled.
    """
    _validate_cards(hole_cards, community_cards)
    samples = samples if samples is not None else simulation_setting('samples')
    if samples < 1:
        raise ValueError(f"samples must be positive, got {samples}")

    opponent_count = clamp_opponent_count(opponent_count)
    runouts = resolve_runouts(community_cards, runouts)
    batch_size = max(1, simulation_setting('batch_size'))
    rng = rng if rng is not None else np.random.default_rng()

    if tracker is None:
        tracker = SimulationTracker(samples)
    else:
        # keep a pending cancel, restart the progress count
        tracker.total = samples
        tracker.completed = 0

    hero = list(hole_cards)
    board = list(community_cards)
    deck = remaining_deck(hero + board)

    logger.info(f"Equity run: {samples} samples vs {opponent_count} opponent(s), "
                f"{len(board)} board cards, {runouts} runouts per sample")

    outcomes = np.zeros((samples, 3), dtype=np.float64)
    completed = 0

    for batch_start in range(0, samples, batch_size):
        if batch_start > 0:
            # let the event loop run other work between batches
            await asyncio.sleep(0)
        if tracker.cancelled:
            logger.info(f"Equity run cancelled after {completed}/{samples} samples")
            return None

        batch_end = min(batch_start + batch_size, samples)
        for i in range(batch_start, batch_end):
            dealt = draw_cards(deck, 2 * opponent_count, rng)
            opponents: List[List[Card]] = [dealt[k:k + 2] for k in range(0, len(dealt), 2)]
            dealt_set = set(dealt)
            stub = [card for card in deck if card not in dealt_set]

            outcomes[i] = matchup_percentages(hero, opponents, board, stub, runouts, rng)
            completed += 1

            if tracker.record_progress(completed) and progress_callback is not None:
                progress_callback(completed, samples)

        logger.debug(tracker.get_progress_status())

    if tracker.cancelled:
        logger.info("Equity run cancelled during its last batch; result discarded")
        return None

    result = _summarize(outcomes)
    logger.info(f"Equity run finished: win {result.win_percentage:.1f}%, "
                f"tie {result.tie_percentage:.1f}%, equity {result.equity:.1f}%")
    return result


def simulate_win_probability(
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card],
        opponent_count: int = 1,
        samples: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
        tracker: Optional[SimulationTracker] = None,
        rng: Optional[np.random.Generator] = None,
        runouts: Optional[int] = None
    ) -> Optional[WinProbability]:
    """Blocking wrapper around calculate_win_probability for callers without an event loop"""
    return asyncio.run(calculate_win_probability(
        hole_cards,
        community_cards,
        opponent_count=opponent_count,
        samples=samples,
        progress_callback=progress_callback,
        tracker=tracker,
        rng=rng,
        runouts=runouts
    ))


def calculate_win_probability_vs_hand(
        hole_cards: Sequence[Card],
        opponent_cards: Sequence[Card],
        community_cards: Sequence[Card],
        iterations: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ) -> WinProbability:
    """Sampled run-outs of the player's hand against one known opponent hand"""
    if len(opponent_cards) != 2:
        raise InvalidHandError("Must have exactly 2 hole cards for each player")
    _validate_cards(hole_cards, community_cards)
    if set(opponent_cards) & (set(hole_cards) | set(community_cards)) or opponent_cards[0] == opponent_cards[1]:
        raise InvalidHandError("Opponent cards overlap the player's cards or the board")

    iterations = iterations if iterations is not None else simulation_setting('vs_hand_iterations')
    rng = rng if rng is not None else np.random.default_rng()
    board = list(community_cards)
    stub = remaining_deck(list(hole_cards) + list(opponent_cards) + board)

    percentages = matchup_percentages(
        list(hole_cards), [list(opponent_cards)], board, stub, max(1, iterations), rng
    )
    return _summarize(percentages.reshape(1, 3))


def equity_strength(equity: float) -> str:
    """Get strength category based on equity"""
    if equity >= 65:
        return 'favorite'
    if equity >= 52:
        return 'slight-favorite'
    if equity >= 48:
        return 'coin-flip'
    if equity >= 35:
        return 'underdog'
    return 'big-underdog'
