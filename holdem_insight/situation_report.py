"""
situation_report.py

One call site for the whole analysis of a (hole cards, board, opponents) situation
"""
from typing import List, Optional, Sequence
import numpy as np

from holdem_insight.core_poker_mechanics import (
    Card, InvalidHandError, basic_advice, evaluate_hand_strength
)
from holdem_insight.draw_analysis import calculate_outs, draw_strength
from holdem_insight.threat_analysis import analyze_possible_threats
from holdem_insight.dangerous_cards import identify_dangerous_cards
from holdem_insight.equity_simulator import calculate_win_probability, equity_strength, ProgressCallback
from holdem_insight.monte_carlo_tracker import SimulationTracker
from holdem_insight.preflop_ranges import Position, get_recommendation
from holdem_insight.poker_types import (
    DangerousCardsAnalysis, HandStrength, OutsAnalysis, ThreatAnalysis, WinProbability
)
from holdem_insight.logging_config import get_logger

logger = get_logger(__name__)

STREET_NAMES = {0: 'preflop', 3: 'flop', 4: 'turn', 5: 'river'}


class SituationReport:
    """
    Run every analyzer for one situation and render descriptive strings.
    Nothing is cached between instances; build a new report when the cards change.
    """

    def __init__(
            self,
            hole_cards: Sequence[Card],
            community_cards: Sequence[Card],
            opponent_count: int = 1,
            position: Optional[Position] = None
        ):
        if len(hole_cards) != 2:
            raise InvalidHandError(f"Must have exactly 2 hole cards, got {len(hole_cards)}")
        self.hole_cards = list(hole_cards)
        self.community_cards = list(community_cards)
        self.opponent_count = opponent_count
        self.position = position

        self.strength: Optional[HandStrength] = None
        if len(self.community_cards) >= 3:
            self.strength = evaluate_hand_strength(self.hole_cards, self.community_cards)

        self.outs: OutsAnalysis = calculate_outs(self.hole_cards, self.community_cards)
        self.threats: ThreatAnalysis = analyze_possible_threats(
            self.hole_cards, self.community_cards, self.strength
        )
        self.dangerous: DangerousCardsAnalysis = identify_dangerous_cards(
            self.hole_cards, self.community_cards, self.strength, self.threats.threats
        )
        self.equity: Optional[WinProbability] = None

    @property
    def street(self) -> str:
        return STREET_NAMES.get(len(self.community_cards), 'unknown')

    async def win_probability(
            self,
            samples: Optional[int] = None,
            progress_callback: Optional[ProgressCallback] = None,
            tracker: Optional[SimulationTracker] = None,
            rng: Optional[np.random.Generator] = None
        ) -> Optional[WinProbability]:
        """Run the equity simulation and keep its result on the report"""
        self.equity = await calculate_win_probability(
            self.hole_cards,
            self.community_cards,
            opponent_count=self.opponent_count,
            samples=samples,
            progress_callback=progress_callback,
            tracker=tracker,
            rng=rng
        )
        return self.equity

    def cards_string(self) -> str:
        hole = " ".join(str(c) for c in self.hole_cards)
        board = " ".join(str(c) for c in self.community_cards) if self.community_cards else "Empty"
        return f"Hole cards: {hole} | Board: {board} ({self.street}) | Opponents: {self.opponent_count}"

    def current_hand_string(self) -> str:
        if self.strength is None:
            return "No made hand yet (preflop)"
        return f"Your current hand is {self.strength.description} ({self.strength.strength.value})"

    def advice_string(self) -> str:
        if self.strength is None:
            return "Play according to your preflop range"
        return basic_advice(self.strength)

    def preflop_string(self) -> Optional[str]:
        if self.position is None:
            return None
        rec = get_recommendation(self.hole_cards[0], self.hole_cards[1], self.position)
        size = f" to {rec.raise_size}BB" if rec.raise_size else ""
        return f"Preflop ({self.position.value}): {rec.action.value}{size} {rec.frequency}% of the time"

    def outs_string(self) -> str:
        if not self.outs.draws:
            return "No draws"
        draws = ", ".join(draw.description for draw in self.outs.draws)
        equity = self.outs.river_equity or self.outs.one_card_equity
        return (f"Draws: {draws} | {self.outs.clean_outs} clean outs, "
                f"~{equity}% to improve ({draw_strength(equity)})")

    def threats_string(self) -> str:
        return f"Threats: {self.threats.summary} ({self.threats.total_beating_combos} beating combos)"

    def dangerous_cards_string(self) -> str:
        worst = ", ".join(str(dc.card) for dc in self.dangerous.scary_cards[:5])
        if worst:
            return f"Dangerous cards: {self.dangerous.summary} (worst: {worst})"
        return f"Dangerous cards: {self.dangerous.summary}"

    def equity_string(self) -> Optional[str]:
        if self.equity is None:
            return None
        eq = self.equity
        return (f"Win {eq.win_percentage:.1f}% | Tie {eq.tie_percentage:.1f}% | "
                f"Lose {eq.lose_percentage:.1f}% | Equity {eq.equity:.1f}% ({equity_strength(eq.equity)})")

    def get_all_context_strings(self) -> List[str]:
        """All analysis as a list of descriptive strings"""
        context_strings = [
            self.cards_string(),
            self.preflop_string(),
            self.current_hand_string(),
            self.advice_string(),
            self.outs_string(),
            self.threats_string(),
            self.dangerous_cards_string(),
            self.equity_string(),
        ]
        return [s for s in context_strings if s]
