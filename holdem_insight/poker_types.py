"""
poker_types.py

Analysis record classes broken out to avoid circular imports
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from holdem_insight.core_poker_mechanics import Card, Suit


class StrengthTier(Enum):
    NUTS = 'nuts'
    VERY_STRONG = 'very-strong'
    STRONG = 'strong'
    MEDIUM = 'medium'
    WEAK = 'weak'
    VERY_WEAK = 'very-weak'


class DrawType(Enum):
    FLUSH_DRAW = 'flush-draw'
    STRAIGHT_DRAW = 'straight-draw'
    GUTSHOT = 'gutshot'
    OVERCARD = 'overcard'
    PAIR_DRAW = 'pair-draw'


class Likelihood(Enum):
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'


class RiskLevel(Enum):
    CRITICAL = 'critical'
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'

    @property
    def order(self) -> int:
        return {'critical': 4, 'high': 3, 'medium': 2, 'low': 1}[self.value]


@dataclass(frozen=True)
class HandStrength:
    rank: int  # 1-10 (10=Royal Flush, 1=High Card)
    name: str
    description: str
    strength: StrengthTier


@dataclass(frozen=True)
class Draw:
    type: DrawType
    outs: int
    description: str


@dataclass
class OutsAnalysis:
    """Draws found pre-river plus outs totals and rule-of-4-and-2 equity estimates"""
    draws: List[Draw] = field(default_factory=list)
    total_outs: int = 0
    clean_outs: int = 0
    one_card_equity: int = 0
    turn_equity: int = 0
    river_equity: int = 0
    breakdown: List[str] = field(default_factory=list)

    @property
    def two_card_equity(self) -> int:
        return self.river_equity


@dataclass(frozen=True)
class Threat:
    hand_type: str
    description: str
    beats_you: bool
    likelihood: Likelihood
    required_hole_cards: Optional[str] = None
    combos_count: Optional[int] = None
    # board features the threat hinges on (read by the dangerous-card pass)
    suit: Optional['Suit'] = None
    missing_ranks: Tuple[int, ...] = ()
    cards_needed: int = 0


@dataclass
class ThreatAnalysis:
    threats: List[Threat]
    total_beating_combos: int
    your_hand_rank: int
    your_hand_name: str
    summary: str


@dataclass(frozen=True)
class DangerousCard:
    card: 'Card'
    threats: Tuple[str, ...]
    risk_level: RiskLevel
    impact_on_equity: int  # percentage points, 0-100

    @property
    def new_threats_created(self) -> int:
        return len(self.threats)


@dataclass
class DangerousCardsAnalysis:
    dangerous_cards: List[DangerousCard]
    scary_cards: List[DangerousCard]
    safe_cards: List['Card']
    summary: str


@dataclass(frozen=True)
class WinProbability:
    win_percentage: float
    tie_percentage: float
    lose_percentage: float
    equity: float  # win + tie / 2
    samples: int = 0
