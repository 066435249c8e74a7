"""
preflop_ranges.py

Static 6-max, 100BB opening/defending ranges by position
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional
import numpy as np

from holdem_insight.core_poker_mechanics import Card

STARTING_HANDS = 169  # 13 pairs + 78 suited + 78 offsuit


class PreflopAction(Enum):
    RAISE = 'raise'
    CALL = 'call'
    FOLD = 'fold'


class Position(Enum):
    UTG = 'UTG'
    MP = 'MP'
    CO = 'CO'
    BTN = 'BTN'
    SB = 'SB'
    BB = 'BB'


@dataclass(frozen=True)
class HandRecommendation:
    action: PreflopAction
    frequency: int  # 0-100 percentage
    raise_size: Optional[float] = None  # BB multiplier
    category: Optional[str] = None  # premium, strong, playable, marginal, fold


FOLD_RECOMMENDATION = HandRecommendation(PreflopAction.FOLD, 100, None, 'fold')


def _range(action: PreflopAction, raise_size: Optional[float], category: str, hands: str) -> Dict[str, HandRecommendation]:
    """
    Expand 'AA KK 77:80' into recommendations; a ':NN' suffix overrides the 100% frequency.
    """
    recs = {}
    for token in hands.split():
        hand, _, freq = token.partition(':')
        recs[hand] = HandRecommendation(action, int(freq) if freq else 100, raise_size, category)
    return recs


def _position(*ranges: Dict[str, HandRecommendation]) -> Dict[str, HandRecommendation]:
    merged = {}
    for part in ranges:
        merged.update(part)
    return merged


R, C = PreflopAction.RAISE, PreflopAction.CALL

PREFLOP_RANGES: Dict[Position, Dict[str, HandRecommendation]] = {
    Position.UTG: _position(
        _range(R, 2.5, 'premium', 'AA KK QQ JJ AKs AKo'),
        _range(R, 2.5, 'strong', 'TT 99 AQs AJs ATs KQs AQo'),
        _range(R, 2.5, 'playable', '88 77:80 KJs KTs:80 QJs JTs AJo KQo'),
        _range(R, 2.5, 'marginal', '66:60 QTs:60 A9s:50 ATo:80'),
    ),
    Position.MP: _position(
        _range(R, 2.5, 'premium', 'AA KK QQ JJ AKs AKo'),
        _range(R, 2.5, 'strong', 'TT 99 88 AQs AJs ATs KQs KJs QJs JTs AQo AJo KQo'),
        _range(R, 2.5, 'playable', '77 66 55:80 A9s KTs QTs T9s:80 ATo KJo'),
        _range(R, 2.5, 'marginal', 'A8s:60 K9s:50 QJo:80'),
    ),
    Position.CO: _position(
        _range(R, 2.5, 'premium', 'AA KK QQ JJ TT AKs AQs AKo AQo'),
        _range(R, 2.5, 'strong',
               '99 88 77 66 55 44 33 22 '
               'AJs ATs A9s A8s A7s A6s A5s A4s A3s A2s KQs KJs KTs K9s QJs QTs Q9s '
               'JTs J9s T9s T8s 98s 87s 76s 65s 54s '
               'AJo ATo KQo KJo QJo JTo'),
        _range(R, 2.5, 'playable',
               'K8s:80 K7s:70 Q8s:80 J8s:80 T7s:80 97s:80 86s:80 75s:80 '
               'A9o KTo QTo J9o:80 T9o'),
        _range(R, 2.5, 'marginal',
               'K6s:50 Q7s:60 J7s:60 T6s:60 96s:60 64s:60 53s:60 43s:60 A8o:80 K9o:80 Q9o:80'),
    ),
    Position.BTN: _position(
        _range(R, 2.5, 'premium', 'AA KK QQ JJ TT 99 AKs AQs AKo AQo'),
        _range(R, 2.5, 'strong',
               '88 77 66 55 44 33 22 '
               'AJs ATs A9s A8s A7s A6s A5s A4s A3s A2s '
               'KQs KJs KTs K9s K8s K7s K6s K5s K4s K3s K2s '
               'QJs QTs Q9s Q8s Q7s Q6s Q5s Q4s Q3s Q2s '
               'JTs J9s J8s J7s J6s J5s J4s T9s T8s T7s T6s T5s T4s '
               '98s 97s 96s 95s 87s 86s 85s 84s 76s 75s 74s 65s 64s 54s 53s 43s '
               'AJo ATo A9o A8o A7o A6o A5o A4o A3o A2o KQo KJo KTo K9o K8o K7o '
               'QJo QTo Q9o Q8o JTo J9o J8o T9o T8o 98o 87o'),
        _range(R, 2.5, 'playable',
               'J3s:80 T3s:80 94s:80 83s:80 73s:80 63s:80 '
               'K6o:80 Q7o:80 J7o:80 T7o:80 97o:80 86o:80 76o:80'),
    ),
    Position.SB: _position(
        _range(R, 3, 'premium', 'AA KK QQ JJ TT 99 AKs AQs AKo AQo'),
        _range(R, 3, 'strong',
               '88 77 66 55 44 33 22 '
               'AJs ATs A9s A8s A7s A6s A5s A4s A3s A2s KQs KJs KTs K9s QJs QTs JTs '
               'T9s 98s 87s 76s 65s 54s '
               'AJo ATo A9o A8o KQo KJo KTo QJo JTo'),
        _range(R, 3, 'playable', 'K8s:80 K7s:70 Q9s J9s T8s 97s:80 A7o K9o QTo T9o'),
    ),
    Position.BB: _position(
        _range(R, 3, 'premium', 'AA KK QQ JJ AKs AKo'),
        _range(C, None, 'strong',
               'TT 99 88 77 66 55 44 33 22 '
               'AQs AJs ATs A9s A8s A7s A6s A5s A4s A3s A2s '
               'KQs KJs KTs K9s K8s K7s K6s K5s QJs QTs Q9s Q8s JTs J9s J8s '
               'T9s T8s 98s 87s 76s 65s 54s '
               'AQo AJo ATo A9o KQo KJo KTo QJo QTo JTo'),
        _range(C, None, 'playable', 'A8o:80 K9o:80 Q9o:80 J9o:80 T9o 98o:80'),
    ),
}

_RANK_CHARS = {14: 'A', 13: 'K', 12: 'Q', 11: 'J', 10: 'T'}


def _rank_char(rank: int) -> str:
    return _RANK_CHARS.get(rank, str(rank))


def normalize_hand(card1: Card, card2: Card) -> str:
    """(A♥, K♥) -> 'AKs', (A♥, K♣) -> 'AKo', (A♥, A♣) -> 'AA'"""
    if card1.rank == card2.rank:
        return _rank_char(card1.rank) * 2
    high, low = (card1, card2) if card1.rank > card2.rank else (card2, card1)
    suffix = 's' if card1.suit == card2.suit else 'o'
    return f"{_rank_char(high.rank)}{_rank_char(low.rank)}{suffix}"


def get_recommendation(card1: Card, card2: Card, position: Position) -> HandRecommendation:
    """Range entry for the hand, or a 100% fold when it is outside the range"""
    return PREFLOP_RANGES[position].get(normalize_hand(card1, card2), FOLD_RECOMMENDATION)


def get_hands_for_action(position: Position, action: PreflopAction, min_frequency: int = 50) -> List[str]:
    return [
        hand for hand, rec in PREFLOP_RANGES[position].items()
        if rec.action == action and rec.frequency >= min_frequency
    ]


def _percent_of_hands(count: int) -> int:
    return int(count / STARTING_HANDS * 100 + 0.5)


def get_vpip(position: Position) -> int:
    """Share of starting hands played (raise or call at >= 50%)"""
    playable = [
        rec for rec in PREFLOP_RANGES[position].values()
        if rec.action in (PreflopAction.RAISE, PreflopAction.CALL) and rec.frequency >= 50
    ]
    return _percent_of_hands(len(playable))


def get_pfr(position: Position) -> int:
    """Share of starting hands raised at >= 50%"""
    raises = [
        rec for rec in PREFLOP_RANGES[position].values()
        if rec.action == PreflopAction.RAISE and rec.frequency >= 50
    ]
    return _percent_of_hands(len(raises))


def get_position_stats(position: Position) -> dict:
    return {
        'position': position.value,
        'vpip': get_vpip(position),
        'pfr': get_pfr(position),
        'total_hands': len(PREFLOP_RANGES[position]),
        'raise_hands': len(get_hands_for_action(position, PreflopAction.RAISE)),
        'call_hands': len(get_hands_for_action(position, PreflopAction.CALL)),
    }


def should_play_hand(recommendation: HandRecommendation, rng: Optional[np.random.Generator] = None) -> bool:
    """Mixed strategy: play the hand `frequency` percent of the time"""
    rng = rng if rng is not None else np.random.default_rng()
    return float(rng.random()) * 100 <= recommendation.frequency
