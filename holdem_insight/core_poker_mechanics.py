"""
core_poker_mechanics.py

Card model (deck, remaining cards, shuffling) and the 5-to-7 card hand ranker
"""
import itertools
from dataclasses import dataclass
from collections import Counter
from enum import Enum, IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple
import numpy as np

from holdem_insight.poker_types import HandStrength, StrengthTier
from holdem_insight.logging_config import get_logger

logger = get_logger(__name__)


class InvalidCardError(ValueError):
    """A card string could not be parsed"""


class InvalidHandError(ValueError):
    """Wrong number of hole/community cards, or duplicated cards"""


class Suit(Enum):
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


SUIT_SYMBOLS = {Suit.CLUBS: '♣', Suit.DIAMONDS: '♦', Suit.HEARTS: '♥', Suit.SPADES: '♠'}
SUIT_LETTERS = {Suit.CLUBS: 'c', Suit.DIAMONDS: 'd', Suit.HEARTS: 'h', Suit.SPADES: 's'}

RANK_NAMES = {
    14: "Ace", 13: "King", 12: "Queen", 11: "Jack",
    10: "Ten", 9: "Nine", 8: "Eight", 7: "Seven",
    6: "Six", 5: "Five", 4: "Four", 3: "Three", 2: "Two"
}


@dataclass(frozen=True)
class Card:
    rank: int  # 2-14 (2-10, J=11, Q=12, K=13, A=14)
    suit: Suit

    def __str__(self):
        return f"{rank_to_string(self.rank)}{SUIT_SYMBOLS[self.suit]}"

    def sort_key(self) -> Tuple[int, int]:
        """Rank-major (Ace first), suit-minor"""
        return (-self.rank, self.suit.value)


def rank_to_string(rank: int) -> str:
    """Convert rank number to readable string"""
    rank_map = {11: 'J', 12: 'Q', 13: 'K', 14: 'A'}
    return rank_map.get(rank, str(rank))


def card_to_str(card: Card) -> str:
    """Convert a Card into 'Ad', 'Ts', etc."""
    rank = 'T' if card.rank == 10 else rank_to_string(card.rank)
    return f"{rank}{SUIT_LETTERS[card.suit]}"


def parse_card(card_str: str) -> Card:
    """Convert a string like 'Ad', '10h' or 'K♠' into a Card."""
    rank_str_to_int = {
        '2': 2, '3': 3, '4': 4, '5': 5, '6': 6, '7': 7,
        '8': 8, '9': 9, 'T': 10, '10': 10, 'J': 11, 'Q': 12,
        'K': 13, 'A': 14
    }
    suit_str_to_suit = {
        'c': Suit.CLUBS, 'd': Suit.DIAMONDS, 'h': Suit.HEARTS, 's': Suit.SPADES,
        '♣': Suit.CLUBS, '♦': Suit.DIAMONDS, '♥': Suit.HEARTS, '♠': Suit.SPADES,
    }
    text = card_str.strip()
    if len(text) < 2:
        raise InvalidCardError(f"Cannot parse card '{card_str}'")
    rank = rank_str_to_int.get(text[:-1].upper())
    suit = suit_str_to_suit.get(text[-1].lower())
    if rank is None or suit is None:
        raise InvalidCardError(f"Cannot parse card '{card_str}'")
    return Card(rank, suit)


def parse_cards(cards_str: str) -> List[Card]:
    """Parse 'Ah Kd' / 'Ah,Kd' / 'AhKd' into cards."""
    text = cards_str.replace(',', ' ').strip()
    if not text:
        return []
    if ' ' in text:
        return [parse_card(token) for token in text.split()]
    # compact form: every card ends with a suit character
    cards = []
    token = ''
    for ch in text:
        token += ch
        if ch.lower() in 'cdhs♣♦♥♠' and len(token) >= 2:
            cards.append(parse_card(token))
            token = ''
    if token:
        raise InvalidCardError(f"Trailing characters '{token}' in '{cards_str}'")
    return cards


_FULL_DECK = tuple(
    Card(rank, suit)
    for rank in range(14, 1, -1)
    for suit in Suit
)


def full_deck() -> List[Card]:
    """All 52 cards, rank-major (Ace first), suit-minor"""
    return list(_FULL_DECK)


def remaining_deck(excluded: Iterable[Card]) -> List[Card]:
    """Cards of a full deck not in `excluded`; values outside the deck are ignored."""
    used = set(excluded)
    return [card for card in _FULL_DECK if card not in used]


def shuffle(deck: Sequence[Card], rng: Optional[np.random.Generator] = None) -> List[Card]:
    """Uniform random permutation (numpy's Fisher-Yates shuffle); returns a new list."""
    rng = rng if rng is not None else np.random.default_rng()
    return [deck[i] for i in rng.permutation(len(deck))]


def draw_cards(deck: Sequence[Card], count: int, rng: Optional[np.random.Generator] = None) -> List[Card]:
    """
    `count` distinct cards of `deck` in random order, sampled without replacement.
    The input is left untouched.
    """
    if count > len(deck):
        raise ValueError(f"Not enough cards available: need {count}, have {len(deck)}")
    rng = rng if rng is not None else np.random.default_rng()
    return [deck[i] for i in rng.choice(len(deck), size=count, replace=False)]


class HandRank(IntEnum):
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10


HAND_NAMES = {
    HandRank.ROYAL_FLUSH: 'Royal Flush',
    HandRank.STRAIGHT_FLUSH: 'Straight Flush',
    HandRank.FOUR_OF_A_KIND: 'Four of a Kind',
    HandRank.FULL_HOUSE: 'Full House',
    HandRank.FLUSH: 'Flush',
    HandRank.STRAIGHT: 'Straight',
    HandRank.THREE_OF_A_KIND: 'Three of a Kind',
    HandRank.TWO_PAIR: 'Two Pair',
    HandRank.ONE_PAIR: 'Pair',
    HandRank.HIGH_CARD: 'High Card',
}


class HandEvaluator:
    @staticmethod
    def _evaluate_5_cards(cards: Sequence[Card]) -> Tuple[HandRank, List[int]]:
        """Evaluate exactly 5 cards"""
        ranks = [card.rank for card in cards]
        suits = [card.suit for card in cards]

        rank_counts = Counter(ranks)
        suit_counts = Counter(suits)

        # Check for flush
        is_flush = len(suit_counts) == 1

        # Check for straight
        sorted_ranks = sorted(set(ranks))
        is_straight = False
        straight_high = 0

        # Regular straight
        if len(sorted_ranks) == 5 and sorted_ranks[-1] - sorted_ranks[0] == 4:
            is_straight = True
            straight_high = sorted_ranks[-1]
        # Ace-low straight (A,2,3,4,5)
        elif sorted_ranks == [2, 3, 4, 5, 14]:
            is_straight = True
            straight_high = 5  # In ace-low straight, 5 is the high card

        # Groups ordered by (count, rank) descending: primary group first, then kickers
        groups = sorted(rank_counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
        count_values = [count for _, count in groups]
        grouped_ranks = [rank for rank, _ in groups]

        if is_straight and is_flush:
            if straight_high == 14:
                return HandRank.ROYAL_FLUSH, [14]
            return HandRank.STRAIGHT_FLUSH, [straight_high]

        if count_values == [4, 1]:
            return HandRank.FOUR_OF_A_KIND, grouped_ranks

        if count_values == [3, 2]:
            return HandRank.FULL_HOUSE, grouped_ranks

        if is_flush:
            return HandRank.FLUSH, sorted(ranks, reverse=True)

        if is_straight:
            return HandRank.STRAIGHT, [straight_high]

        if count_values == [3, 1, 1]:
            return HandRank.THREE_OF_A_KIND, grouped_ranks

        if count_values == [2, 2, 1]:
            return HandRank.TWO_PAIR, grouped_ranks

        if count_values == [2, 1, 1, 1]:
            return HandRank.ONE_PAIR, grouped_ranks

        # High Card
        return HandRank.HIGH_CARD, sorted(ranks, reverse=True)

    @staticmethod
    def _check_cards(cards: Sequence[Card]):
        if not 5 <= len(cards) <= 7:
            raise InvalidHandError(f"Hand evaluation requires 5 to 7 cards, got {len(cards)}")
        if len(set(cards)) != len(cards):
            raise InvalidHandError("Hand evaluation received duplicate cards")

    @staticmethod
    def evaluate_hand(cards: Sequence[Card]) -> Tuple[HandRank, List[int]]:
        """
        Evaluate a 5-7 card hand and return (rank, tiebreakers) of its best 5 cards.
        Tiebreakers are in descending order of importance
        """
        rank, tiebreakers, _ = HandEvaluator._best_combination(cards)
        return rank, tiebreakers

    @staticmethod
    def hand_key(cards: Sequence[Card]) -> Tuple[int, Tuple[int, ...]]:
        """Totally ordered key: a larger key is a stronger hand, equal keys split the pot"""
        rank, tiebreakers = HandEvaluator.evaluate_hand(cards)
        return int(rank), tuple(tiebreakers)

    @staticmethod
    def find_best_five_cards(cards: Sequence[Card]) -> List[Card]:
        """Find the actual best 5-card hand, sorted high to low for display"""
        _, _, best_five = HandEvaluator._best_combination(cards)
        return sorted(best_five, key=lambda c: c.rank, reverse=True)

    @staticmethod
    def _best_combination(cards: Sequence[Card]) -> Tuple[HandRank, List[int], List[Card]]:
        HandEvaluator._check_cards(cards)

        best_rank = None
        best_tiebreakers: List[int] = []
        best_five: List[Card] = []

        # at most C(7,5) = 21 subsets
        for combo in itertools.combinations(cards, 5):
            rank, tiebreakers = HandEvaluator._evaluate_5_cards(combo)
            if best_rank is None or rank > best_rank or (rank == best_rank and tiebreakers > best_tiebreakers):
                best_rank = rank
                best_tiebreakers = tiebreakers
                best_five = list(combo)

        return best_rank, best_tiebreakers, best_five

    @staticmethod
    def _create_readable_description(rank: HandRank, tiebreakers: List[int]) -> str:
        """Create human-readable hand description"""
        rank_str = rank_to_string

        if rank == HandRank.ROYAL_FLUSH:
            return "Royal Flush"

        elif rank == HandRank.STRAIGHT_FLUSH:
            return f"Straight Flush, {rank_str(tiebreakers[0])} high"

        elif rank == HandRank.FOUR_OF_A_KIND:
            return f"Four {rank_str(tiebreakers[0])}s, {rank_str(tiebreakers[1])} kicker"

        elif rank == HandRank.FULL_HOUSE:
            return f"Full House, {rank_str(tiebreakers[0])}s full of {rank_str(tiebreakers[1])}s"

        elif rank == HandRank.FLUSH:
            cards_str = " ".join(rank_str(r) for r in tiebreakers)
            return f"Flush: {cards_str}"

        elif rank == HandRank.STRAIGHT:
            return f"Straight, {rank_str(tiebreakers[0])} high"

        elif rank == HandRank.THREE_OF_A_KIND:
            kickers = " ".join(rank_str(r) for r in tiebreakers[1:])
            return f"Three {rank_str(tiebreakers[0])}s, {kickers} kickers"

        elif rank == HandRank.TWO_PAIR:
            return (f"Two Pair: {rank_str(tiebreakers[0])}s and {rank_str(tiebreakers[1])}s, "
                    f"{rank_str(tiebreakers[2])} kicker")

        elif rank == HandRank.ONE_PAIR:
            kickers = " ".join(rank_str(r) for r in tiebreakers[1:])
            return f"Pair of {rank_str(tiebreakers[0])}s, {kickers} kickers"

        else:  # HIGH_CARD
            cards_str = " ".join(rank_str(r) for r in tiebreakers)
            return f"High Card: {cards_str}"


def categorize_strength(rank: HandRank, tiebreakers: Sequence[int]) -> StrengthTier:
    """Relative strength tier; pairs of Ten or better count as medium"""
    if rank >= HandRank.STRAIGHT_FLUSH:
        return StrengthTier.NUTS
    if rank >= HandRank.FULL_HOUSE:
        return StrengthTier.VERY_STRONG
    if rank >= HandRank.THREE_OF_A_KIND:
        return StrengthTier.STRONG
    if rank == HandRank.TWO_PAIR:
        return StrengthTier.MEDIUM
    if rank == HandRank.ONE_PAIR:
        return StrengthTier.MEDIUM if tiebreakers[0] >= 10 else StrengthTier.WEAK
    return StrengthTier.VERY_WEAK


def evaluate_hand_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandStrength:
    """
    Rank the best 5-card hand from 2 hole cards and 3-5 community cards.

    Raises InvalidHandError before the flop or on any other wrong cardinality.
    """
    if len(hole_cards) != 2 or not 3 <= len(community_cards) <= 5:
        raise InvalidHandError(
            f"Invalid hand: need 2 hole cards and 3-5 community cards, "
            f"got {len(hole_cards)} and {len(community_cards)}"
        )

    rank, tiebreakers = HandEvaluator.evaluate_hand(list(hole_cards) + list(community_cards))
    strength = HandStrength(
        rank=int(rank),
        name=HAND_NAMES[rank],
        description=HandEvaluator._create_readable_description(rank, tiebreakers),
        strength=categorize_strength(rank, tiebreakers),
    )
    logger.debug(f"Evaluated {' '.join(str(c) for c in hole_cards)} on "
                 f"{' '.join(str(c) for c in community_cards)}: {strength.description}")
    return strength


def basic_advice(strength: HandStrength) -> str:
    """One-line play hint for a strength tier"""
    advice = {
        StrengthTier.NUTS: 'The nuts! Maximize value with big bets',
        StrengthTier.VERY_STRONG: 'Very strong hand - bet for value',
        StrengthTier.STRONG: 'Strong hand - continue betting',
        StrengthTier.MEDIUM: 'Medium strength - consider pot control',
        StrengthTier.WEAK: 'Weak hand - proceed with caution',
        StrengthTier.VERY_WEAK: 'Very weak - consider checking or folding',
    }
    return advice.get(strength.strength, 'Evaluate based on position and opponents')
