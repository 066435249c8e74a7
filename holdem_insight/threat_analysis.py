"""
threat_analysis.py

Board-texture threats: which opponent holdings could already beat the player,
how likely they are, and roughly how many two-card combos make them.
"""
from collections import Counter
from math import comb
from typing import List, Optional, Sequence

from holdem_insight.core_poker_mechanics import (
    Card, HandRank, evaluate_hand_strength, rank_to_string
)
from holdem_insight.draw_analysis import STRAIGHT_WINDOWS
from holdem_insight.poker_types import HandStrength, Likelihood, Threat, ThreatAnalysis
from holdem_insight.logging_config import get_logger

logger = get_logger(__name__)

# Approximate holdings, counted from the board alone (the player's cards are not removed)
ONE_RANK_STRAIGHT_COMBOS = 4
TWO_RANK_STRAIGHT_COMBOS = 16
LAST_CARD_QUADS_COMBOS = 1
PAIRED_BOARD_FULL_HOUSE_COMBOS = 66
TRIPS_BOARD_FULL_HOUSE_COMBOS = 78


def _beats(threat_rank: HandRank, your_rank: int) -> bool:
    return int(threat_rank) > your_rank


def check_flush_threats(
        community_cards: Sequence[Card],
        your_rank: int
    ) -> List[Threat]:
    """Three or more cards of a suit on board"""
    threats = []
    suit_counts = Counter(card.suit for card in community_cards)

    for suit, count in suit_counts.items():
        suit_name = suit.name.capitalize()
        suit_word = suit.name.lower()
        unseen_in_suit = 13 - count

        if count == 3:
            threats.append(Threat(
                hand_type='Flush',
                description=f"{suit_name} flush possible (needs 2 {suit_word} cards)",
                beats_you=_beats(HandRank.FLUSH, your_rank),
                likelihood=Likelihood.MEDIUM,
                required_hole_cards=f"Two {suit_word} cards",
                combos_count=comb(unseen_in_suit, 2),
                suit=suit,
                cards_needed=2
            ))
        elif count == 4:
            threats.append(Threat(
                hand_type='Flush',
                description=f"{suit_name} flush very likely (needs 1 {suit_word} card)",
                beats_you=_beats(HandRank.FLUSH, your_rank),
                likelihood=Likelihood.HIGH,
                required_hole_cards=f"Any {suit_word} card",
                combos_count=unseen_in_suit,
                suit=suit,
                cards_needed=1
            ))
        elif count == 5:
            threats.append(Threat(
                hand_type='Flush',
                description=f"{suit_name} flush on board - everyone has it",
                beats_you=False,
                likelihood=Likelihood.HIGH,
                combos_count=0,
                suit=suit
            ))

    return threats


def check_straight_threats(
        community_cards: Sequence[Card],
        your_rank: int
    ) -> List[Threat]:
    """Every straight window (wheel included) holding three or more board ranks"""
    threats = []
    board_ranks = {card.rank for card in community_cards}

    for window in STRAIGHT_WINDOWS:
        missing = tuple(rank for rank in window if rank not in board_ranks)
        if len(missing) > 2:
            continue

        if window[0] == 5:
            label = "Wheel (5-high) straight"
        else:
            label = f"{rank_to_string(window[0])}-high straight"

        if not missing:
            threats.append(Threat(
                hand_type='Straight',
                description=f"{label} on board",
                beats_you=False,
                likelihood=Likelihood.HIGH,
                combos_count=0,
                missing_ranks=missing
            ))
        elif len(missing) == 1:
            threats.append(Threat(
                hand_type='Straight',
                description=label,
                beats_you=_beats(HandRank.STRAIGHT, your_rank),
                likelihood=Likelihood.HIGH,
                required_hole_cards=f"Any {rank_to_string(missing[0])}",
                combos_count=ONE_RANK_STRAIGHT_COMBOS,
                missing_ranks=missing,
                cards_needed=1
            ))
        else:
            threats.append(Threat(
                hand_type='Straight',
                description=f"Possible {label}",
                beats_you=_beats(HandRank.STRAIGHT, your_rank),
                likelihood=Likelihood.LOW,
                required_hole_cards=f"{rank_to_string(missing[0])} and {rank_to_string(missing[1])}",
                combos_count=TWO_RANK_STRAIGHT_COMBOS,
                missing_ranks=missing,
                cards_needed=2
            ))

    return threats


def check_paired_board_threats(
        community_cards: Sequence[Card],
        your_rank: int
    ) -> List[Threat]:
    """Full house and quads threats from pairs, trips or quads on board"""
    threats = []
    rank_counts = Counter(card.rank for card in community_cards)

    for rank, count in rank_counts.items():
        name = rank_to_string(rank)

        if count == 2:
            threats.append(Threat(
                hand_type='Full House',
                description=f"Paired {name}s on board - full house possible",
                beats_you=_beats(HandRank.FULL_HOUSE, your_rank),
                likelihood=Likelihood.MEDIUM,
                required_hole_cards=f"Any pair or {name}",
                combos_count=PAIRED_BOARD_FULL_HOUSE_COMBOS
            ))
        elif count == 3:
            threats.append(Threat(
                hand_type='Full House',
                description=f"Trip {name}s on board - full house very likely",
                beats_you=_beats(HandRank.FULL_HOUSE, your_rank),
                likelihood=Likelihood.HIGH,
                required_hole_cards='Any pair',
                combos_count=TRIPS_BOARD_FULL_HOUSE_COMBOS
            ))
            threats.append(Threat(
                hand_type='Four of a Kind',
                description=f"Trip {name}s on board - quads possible",
                beats_you=_beats(HandRank.FOUR_OF_A_KIND, your_rank),
                likelihood=Likelihood.LOW,
                required_hole_cards=f"The last {name}",
                combos_count=LAST_CARD_QUADS_COMBOS
            ))
        elif count == 4:
            threats.append(Threat(
                hand_type='Four of a Kind',
                description=f"Quad {name}s on board - everyone has quads",
                beats_you=False,
                likelihood=Likelihood.HIGH,
                combos_count=0
            ))

    return threats


def check_set_threats(community_cards: Sequence[Card], your_rank: int) -> List[Threat]:
    """On an unpaired board any pocket pair of a board rank is a set"""
    rank_counts = Counter(card.rank for card in community_cards)
    if len(community_cards) < 3 or any(count >= 2 for count in rank_counts.values()):
        return []

    unique_ranks = list(rank_counts)
    display_ranks = ", ".join(rank_to_string(rank) for rank in unique_ranks)
    return [Threat(
        hand_type='Set',
        description='Pocket pairs could have flopped a set',
        beats_you=_beats(HandRank.THREE_OF_A_KIND, your_rank),
        likelihood=Likelihood.MEDIUM,
        required_hole_cards=f"Pocket {display_ranks}",
        combos_count=len(unique_ranks) * 3
    )]


def generate_threat_summary(threats: Sequence[Threat]) -> str:
    beating = [t for t in threats if t.beats_you]
    if not beating:
        return 'No current threats beat your hand'

    high = sum(1 for t in beating if t.likelihood == Likelihood.HIGH)
    medium = sum(1 for t in beating if t.likelihood == Likelihood.MEDIUM)

    if high > 0:
        return f"{high} high-likelihood threat{'s' if high > 1 else ''} beat{'s' if high == 1 else ''} your hand"
    if medium > 0:
        return f"{medium} possible threat{'s' if medium > 1 else ''} beat{'s' if medium == 1 else ''} your hand"
    return f"{len(beating)} low-likelihood threat{'s' if len(beating) > 1 else ''}"


def analyze_possible_threats(
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card],
        strength: Optional[HandStrength] = None
    ) -> ThreatAnalysis:
    """
    Union of the flush, straight, paired-board and set checks.

    Before the flop there is nothing to read, so the analysis is empty.
    `strength` is computed from the cards when not supplied; without two hole
    cards (or with more than five board cards) there is nothing to compare against
    and the analysis is empty as well.
    """
    unrankable = strength is None and (len(hole_cards) != 2 or len(community_cards) > 5)
    if len(community_cards) < 3 or unrankable:
        return ThreatAnalysis(
            threats=[],
            total_beating_combos=0,
            your_hand_rank=strength.rank if strength else 0,
            your_hand_name=strength.name if strength else '',
            summary='No current threats beat your hand'
        )

    if strength is None:
        strength = evaluate_hand_strength(hole_cards, community_cards)
    your_rank = strength.rank

    threats: List[Threat] = []
    threats.extend(check_flush_threats(community_cards, your_rank))
    threats.extend(check_straight_threats(community_cards, your_rank))
    threats.extend(check_paired_board_threats(community_cards, your_rank))
    threats.extend(check_set_threats(community_cards, your_rank))

    total_beating_combos = sum(t.combos_count or 0 for t in threats if t.beats_you)
    logger.debug(f"{len(threats)} threats, {total_beating_combos} beating combos vs {strength.name}")

    return ThreatAnalysis(
        threats=threats,
        total_beating_combos=total_beating_combos,
        your_hand_rank=your_rank,
        your_hand_name=strength.name,
        summary=generate_threat_summary(threats)
    )
