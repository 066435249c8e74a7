"""
draw_analysis.py

Outs and draw detection for the flop and turn
"""
from collections import Counter
from typing import List, Optional, Sequence, Tuple

from holdem_insight.core_poker_mechanics import Card, rank_to_string
from holdem_insight.poker_types import Draw, DrawType, OutsAnalysis
from holdem_insight.logging_config import get_logger

logger = get_logger(__name__)

# Ace-high down to the wheel; the Ace appears again as the low card
STRAIGHT_RANK_ORDER = (14, 13, 12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 14)

STRAIGHT_WINDOWS: Tuple[Tuple[int, ...], ...] = tuple(
    STRAIGHT_RANK_ORDER[i:i + 5] for i in range(len(STRAIGHT_RANK_ORDER) - 4)
)


def detect_flush_draw(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> Optional[Draw]:
    """Exactly four cards of one suit, at least one of them in the hole"""
    all_cards = list(hole_cards) + list(community_cards)
    suit_counts = Counter(card.suit for card in all_cards)
    hole_suits = {card.suit for card in hole_cards}

    for suit, count in suit_counts.items():
        if count == 4 and suit in hole_suits:
            return Draw(
                type=DrawType.FLUSH_DRAW,
                outs=13 - count,
                description=f"{suit.name.capitalize()} flush draw"
            )
    return None


def detect_straight_draws(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> List[Draw]:
    """
    Four of the five ranks of a straight window, with a hole card inside the window.
    An open-ended draw anywhere takes priority over a gutshot; at most one draw is reported.
    """
    present = {card.rank for card in list(hole_cards) + list(community_cards)}
    hole_ranks = {card.rank for card in hole_cards}

    candidates = []
    for window in STRAIGHT_WINDOWS:
        missing = [rank for rank in window if rank not in present]
        if len(missing) != 1:
            continue
        if not any(rank in hole_ranks for rank in window):
            continue
        candidates.append((window, missing[0]))

    for window, missing_rank in candidates:
        if missing_rank in (window[0], window[4]):
            return [Draw(
                type=DrawType.STRAIGHT_DRAW,
                outs=8,
                description="Open-ended straight draw"
            )]

    if candidates:
        _, missing_rank = candidates[0]
        return [Draw(
            type=DrawType.GUTSHOT,
            outs=4,
            description=f"Gutshot straight draw ({rank_to_string(missing_rank)})"
        )]

    return []


def detect_overcards(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> List[Draw]:
    """Hole ranks above every board card; each has three live cards for top pair"""
    if not community_cards:
        return []
    board_ranks = {card.rank for card in community_cards}
    highest_board = max(board_ranks)
    hole_ranks = [card.rank for card in hole_cards]

    # one draw per hole card, so an overpair counts both cards
    draws = []
    for rank in hole_ranks:
        if rank > highest_board and rank not in board_ranks:
            draws.append(Draw(
                type=DrawType.OVERCARD,
                outs=3,
                description=f"Overcard {rank_to_string(rank)} (for top pair)"
            ))
    return draws


def detect_pair_improvement(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> Optional[Draw]:
    """Pocket pair drawing to a set, or a paired hole card drawing to trips"""
    visible = Counter(card.rank for card in list(hole_cards) + list(community_cards))
    hole_ranks = [card.rank for card in hole_cards]
    board_ranks = {card.rank for card in community_cards}

    if hole_ranks[0] == hole_ranks[1]:
        rank = hole_ranks[0]
        label = f"Set draw (pair of {rank_to_string(rank)}s)"
    else:
        paired = [rank for rank in hole_ranks if rank in board_ranks]
        if not paired:
            return None
        rank = max(paired)
        label = f"Trips draw (paired {rank_to_string(rank)})"

    outs = 4 - visible[rank]
    if visible[rank] >= 3:
        label = f"Quads draw ({rank_to_string(rank)}s)"
    if outs <= 0:
        return None
    return Draw(type=DrawType.PAIR_DRAW, outs=outs, description=label)


def _build_analysis(draws: List[Draw], breakdown: List[str], clean_outs: int, street: Optional[str]) -> OutsAnalysis:
    total_outs = sum(draw.outs for draw in draws)

    # Rule of 4 and 2
    one_card_equity = min(clean_outs * 2 + 2, 100)
    if street == 'flop':
        turn_equity = one_card_equity
        river_equity = min(clean_outs * 4, 100)
    elif street == 'turn':
        turn_equity = 0
        river_equity = one_card_equity
    else:
        turn_equity = 0
        river_equity = 0

    return OutsAnalysis(
        draws=draws,
        total_outs=total_outs,
        clean_outs=clean_outs,
        one_card_equity=one_card_equity,
        turn_equity=turn_equity,
        river_equity=river_equity,
        breakdown=breakdown
    )


def calculate_outs(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> OutsAnalysis:
    """
    Collect every draw on the flop or turn and convert the outs to equity.

    Any other street (or a malformed hand) gives an empty analysis instead of an error.
    """
    if len(hole_cards) != 2 or len(community_cards) not in (3, 4):
        return _build_analysis([], [], 0, None)

    draws: List[Draw] = []
    breakdown: List[str] = []

    flush_draw = detect_flush_draw(hole_cards, community_cards)
    if flush_draw:
        draws.append(flush_draw)
        breakdown.append(f"{flush_draw.outs} flush outs")

    straight_draws = detect_straight_draws(hole_cards, community_cards)
    for draw in straight_draws:
        draws.append(draw)
        breakdown.append(f"{draw.outs} straight outs")

    for draw in detect_overcards(hole_cards, community_cards):
        draws.append(draw)
        breakdown.append(f"{draw.outs} overcard outs ({draw.description.split(' ')[1]})")

    pair_draw = detect_pair_improvement(hole_cards, community_cards)
    if pair_draw:
        draws.append(pair_draw)
        breakdown.append(f"{pair_draw.outs} pair improvement outs")

    clean_outs = sum(draw.outs for draw in draws)

    # Heuristic overlap: a flush draw and a straight draw usually share one out.
    # Not a card-by-card deduplication.
    if flush_draw and straight_draws:
        clean_outs -= 1
        breakdown.append("-1 duplicate (flush + straight)")

    street = 'flop' if len(community_cards) == 3 else 'turn'
    analysis = _build_analysis(draws, breakdown, clean_outs, street)
    logger.debug(f"Outs on the {street}: {analysis.total_outs} raw, {analysis.clean_outs} clean")
    return analysis


def draw_strength(equity: float) -> str:
    """Category label for a draw's equity percentage"""
    if equity >= 60:
        return 'monster-draw'
    if equity >= 40:
        return 'strong-draw'
    if equity >= 25:
        return 'medium-draw'
    if equity >= 15:
        return 'weak-draw'
    return 'no-draw'
