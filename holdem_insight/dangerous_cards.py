"""
dangerous_cards.py

Turn and river cards that would hurt the player: every unseen card is put on the
board and checked for completed flushes/straights, board pairs and new draws.
"""
from collections import Counter
from typing import List, Optional, Sequence, Set, Tuple

from holdem_insight.core_poker_mechanics import Card, evaluate_hand_strength, remaining_deck
from holdem_insight.draw_analysis import STRAIGHT_WINDOWS
from holdem_insight.threat_analysis import analyze_possible_threats
from holdem_insight.poker_types import (
    DangerousCard, DangerousCardsAnalysis, HandStrength, RiskLevel, StrengthTier, Threat
)
from holdem_insight.logging_config import get_logger

logger = get_logger(__name__)

COMPLETES_FLUSH_DROP = 30
COMPLETES_STRAIGHT_DROP = 25
PAIRS_BOARD_DROP = 15
NEW_DRAW_DROP = 8

STRENGTH_SCALING = {
    StrengthTier.NUTS: 0.6,
    StrengthTier.VERY_STRONG: 0.6,
    StrengthTier.STRONG: 1.0,
    StrengthTier.MEDIUM: 1.1,
    StrengthTier.WEAK: 1.3,
    StrengthTier.VERY_WEAK: 1.3,
}


def _four_card_windows(ranks: Set[int]) -> Set[Tuple[int, ...]]:
    """Straight windows with exactly four of their ranks present"""
    return {window for window in STRAIGHT_WINDOWS if sum(1 for r in window if r in ranks) == 4}


def completes_flush(card: Card, threats: Sequence[Threat]) -> bool:
    """The card is the one suited card a 4-flush board was waiting for"""
    return any(
        t.hand_type == 'Flush' and t.cards_needed == 1 and t.suit == card.suit
        for t in threats
    )


def completes_straight(card: Card, threats: Sequence[Threat]) -> bool:
    """The card fills the single missing rank of a straight window"""
    return any(
        t.hand_type == 'Straight' and t.cards_needed == 1 and card.rank in t.missing_ranks
        for t in threats
    )


def pairs_board(card: Card, community_cards: Sequence[Card]) -> bool:
    return any(c.rank == card.rank for c in community_cards)


def creates_flush_draw(card: Card, community_cards: Sequence[Card]) -> bool:
    """Board goes from three to four cards of the card's suit"""
    return sum(1 for c in community_cards if c.suit == card.suit) == 3


def creates_straight_draw(card: Card, community_cards: Sequence[Card]) -> bool:
    """Some straight window reaches four board ranks for the first time"""
    before = {c.rank for c in community_cards}
    after = before | {card.rank}
    return bool(_four_card_windows(after) - _four_card_windows(before))


def estimate_equity_drop(threats: Sequence[str], strength: HandStrength) -> int:
    drop = 0.0
    for threat in threats:
        if threat.startswith('Completes') and 'flush' in threat:
            drop += COMPLETES_FLUSH_DROP
        elif threat.startswith('Completes') and 'straight' in threat:
            drop += COMPLETES_STRAIGHT_DROP
        elif threat.startswith('Pairs board'):
            drop += PAIRS_BOARD_DROP
        elif threat.startswith('Creates'):
            drop += NEW_DRAW_DROP

    drop *= STRENGTH_SCALING.get(strength.strength, 1.0)
    # round half up, capped at 100
    return min(int(drop + 0.5), 100)


def determine_risk_level(threats: Sequence[str]) -> RiskLevel:
    if any(t.startswith('Completes') for t in threats):
        return RiskLevel.CRITICAL
    if any(t.startswith('Pairs board') for t in threats):
        return RiskLevel.HIGH
    if any(t.startswith('Creates') for t in threats):
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def generate_dangerous_summary(scary_cards: Sequence[DangerousCard], total_dangerous: int) -> str:
    if not scary_cards:
        if total_dangerous == 0:
            return 'No particularly dangerous cards to worry about'
        return f"{total_dangerous} cards create minor threats"

    critical = sum(1 for c in scary_cards if c.risk_level == RiskLevel.CRITICAL)
    high = sum(1 for c in scary_cards if c.risk_level == RiskLevel.HIGH)

    if critical > 0:
        return f"{critical} critical card{'s' if critical > 1 else ''} would complete draws against you"
    if high > 0:
        return f"{high} dangerous card{'s' if high > 1 else ''} to watch out for"
    return f"{len(scary_cards)} card{'s' if len(scary_cards) > 1 else ''} create significant threats"


def _card_threats(card: Card, community_cards: Sequence[Card], threats: Sequence[Threat]) -> List[str]:
    found = []
    if completes_flush(card, threats):
        found.append(f"Completes {card.suit.name.capitalize()} flush")
    if completes_straight(card, threats):
        found.append("Completes straight")
    if pairs_board(card, community_cards):
        found.append("Pairs board (full house risk)")
    if creates_straight_draw(card, community_cards):
        found.append("Creates new straight draw")
    if creates_flush_draw(card, community_cards):
        found.append("Creates new flush draw")
    return found


def identify_dangerous_cards(
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card],
        strength: Optional[HandStrength] = None,
        current_threats: Optional[Sequence[Threat]] = None
    ) -> DangerousCardsAnalysis:
    """
    Classify every unseen card by the damage it would do as the next community card.

    Only the flop and turn are analysed; on the river, or before the flop, the
    result is empty. Dangerous cards are sorted by risk tier, then by equity impact.
    """
    if len(community_cards) >= 5:
        return DangerousCardsAnalysis(
            dangerous_cards=[],
            scary_cards=[],
            safe_cards=[],
            summary='All cards dealt - no future threats'
        )
    if len(community_cards) < 3 or len(hole_cards) != 2:
        return DangerousCardsAnalysis(
            dangerous_cards=[],
            scary_cards=[],
            safe_cards=[],
            summary='Waiting for the flop'
        )

    if strength is None:
        strength = evaluate_hand_strength(hole_cards, community_cards)
    if current_threats is None:
        current_threats = analyze_possible_threats(hole_cards, community_cards, strength).threats

    remaining = remaining_deck(list(hole_cards) + list(community_cards))
    dangerous: List[DangerousCard] = []

    for card in remaining:
        threats = _card_threats(card, community_cards, current_threats)
        if not threats:
            continue
        dangerous.append(DangerousCard(
            card=card,
            threats=tuple(threats),
            risk_level=determine_risk_level(threats),
            impact_on_equity=estimate_equity_drop(threats, strength)
        ))

    # stable sort keeps deck order among equals
    dangerous.sort(key=lambda dc: (-dc.risk_level.order, -dc.impact_on_equity))

    scary = [dc for dc in dangerous if dc.risk_level in (RiskLevel.CRITICAL, RiskLevel.HIGH)]
    dangerous_set = {dc.card for dc in dangerous}
    safe = [card for card in remaining if card not in dangerous_set]

    logger.debug(f"{len(dangerous)} dangerous cards ({len(scary)} scary), {len(safe)} safe")
    return DangerousCardsAnalysis(
        dangerous_cards=dangerous,
        scary_cards=scary,
        safe_cards=safe,
        summary=generate_dangerous_summary(scary, len(dangerous))
    )
