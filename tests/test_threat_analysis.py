"""
Unit tests for holdem_insight/threat_analysis.py
"""
import unittest

from holdem_insight.core_poker_mechanics import Suit, evaluate_hand_strength, parse_cards
from holdem_insight.threat_analysis import (
    analyze_possible_threats, check_flush_threats, check_paired_board_threats,
    check_set_threats, check_straight_threats, generate_threat_summary,
)
from holdem_insight.poker_types import Likelihood, Threat


def _threats_of(analysis, hand_type):
    return [t for t in analysis.threats if t.hand_type == hand_type]


class TestFlushThreats(unittest.TestCase):
    def test_three_suited_board(self):
        threats = check_flush_threats(parse_cards("9h 5h 2h"), your_rank=1)
        self.assertEqual(len(threats), 1)
        threat = threats[0]
        self.assertTrue(threat.beats_you)
        self.assertEqual(threat.likelihood, Likelihood.MEDIUM)
        self.assertEqual(threat.combos_count, 45)  # C(13 - 3, 2) unseen hearts
        self.assertEqual(threat.suit, Suit.HEARTS)
        self.assertEqual(threat.cards_needed, 2)

    def test_four_suited_board_counts_unseen_cards(self):
        threats = check_flush_threats(parse_cards("9s 5s 2s Js"), your_rank=6)
        self.assertEqual(len(threats), 1)
        self.assertEqual(threats[0].likelihood, Likelihood.HIGH)
        self.assertEqual(threats[0].combos_count, 9)
        self.assertEqual(threats[0].cards_needed, 1)
        self.assertFalse(threats[0].beats_you)

    def test_flush_on_board(self):
        threats = check_flush_threats(parse_cards("9s 5s 2s Js 3s"), your_rank=6)
        self.assertFalse(threats[0].beats_you)
        self.assertEqual(threats[0].combos_count, 0)


class TestStraightThreats(unittest.TestCase):
    def test_two_card_straights_on_connected_flop(self):
        threats = check_straight_threats(parse_cards("9c 8d 7h"), your_rank=2)
        self.assertEqual(len(threats), 3)
        for threat in threats:
            self.assertEqual(threat.likelihood, Likelihood.LOW)
            self.assertEqual(threat.cards_needed, 2)
            self.assertEqual(threat.combos_count, 16)
            self.assertTrue(threat.beats_you)

    def test_one_card_straights(self):
        threats = check_straight_threats(parse_cards("9c 8d 7h 6s"), your_rank=2)
        one_card = [t for t in threats if t.cards_needed == 1]
        self.assertEqual({t.missing_ranks for t in one_card}, {(10,), (5,)})
        for threat in one_card:
            self.assertEqual(threat.likelihood, Likelihood.HIGH)
            self.assertEqual(threat.combos_count, 4)

    def test_straight_on_board(self):
        threats = check_straight_threats(parse_cards("9c 8d 7h 6s 5c"), your_rank=5)
        on_board = [t for t in threats if not t.missing_ranks]
        self.assertEqual(len(on_board), 1)
        self.assertEqual(on_board[0].description, "9-high straight on board")
        self.assertFalse(on_board[0].beats_you)

    def test_wheel_window(self):
        threats = check_straight_threats(parse_cards("5c 4d 3h"), your_rank=1)
        descriptions = [t.description for t in threats]
        self.assertIn("Possible Wheel (5-high) straight", descriptions)


class TestPairedBoardAndSetThreats(unittest.TestCase):
    def test_paired_board(self):
        threats = check_paired_board_threats(parse_cards("Kc Kd 7h"), your_rank=2)
        self.assertEqual(len(threats), 1)
        self.assertEqual(threats[0].hand_type, 'Full House')
        self.assertEqual(threats[0].combos_count, 66)
        self.assertTrue(threats[0].beats_you)

    def test_trips_board(self):
        threats = check_paired_board_threats(parse_cards("Kc Kd Kh 7s 2d"), your_rank=4)
        by_type = {t.hand_type: t for t in threats}
        self.assertEqual(by_type['Full House'].combos_count, 78)
        self.assertEqual(by_type['Full House'].likelihood, Likelihood.HIGH)
        self.assertEqual(by_type['Four of a Kind'].combos_count, 1)

    def test_set_threat_only_on_unpaired_board(self):
        threats = check_set_threats(parse_cards("9h 5d 2c"), your_rank=2)
        self.assertEqual(len(threats), 1)
        self.assertEqual(threats[0].combos_count, 9)
        self.assertTrue(threats[0].beats_you)
        self.assertEqual(check_set_threats(parse_cards("9h 9d 2c"), your_rank=2), [])


class TestAnalyzePossibleThreats(unittest.TestCase):
    def test_quads_on_board_beat_nobody(self):
        analysis = analyze_possible_threats(parse_cards("Ah Qd"), parse_cards("Ks Kh Kd Kc 2s"))
        quads = _threats_of(analysis, 'Four of a Kind')
        self.assertEqual(len(quads), 1)
        self.assertFalse(quads[0].beats_you)
        self.assertEqual(quads[0].combos_count, 0)
        self.assertEqual(analysis.total_beating_combos, 0)
        self.assertEqual(analysis.summary, 'No current threats beat your hand')

    def test_beating_combos_sum(self):
        analysis = analyze_possible_threats(parse_cards("As Kd"), parse_cards("9h 5h 2h"))
        self.assertEqual(analysis.your_hand_name, 'High Card')
        # flush 45 + sets 9
        self.assertEqual(analysis.total_beating_combos, 54)
        self.assertEqual(analysis.summary, '2 possible threats beat your hand')

    def test_supplied_strength_is_used(self):
        hole, board = parse_cards("Ah Qd"), parse_cards("Kc Kd Kh 7s 2d")
        strength = evaluate_hand_strength(hole, board)
        analysis = analyze_possible_threats(hole, board, strength)
        self.assertEqual(analysis.your_hand_rank, 4)
        self.assertEqual(analysis.total_beating_combos, 79)
        self.assertEqual(analysis.summary, '1 high-likelihood threat beats your hand')

    def test_nuts_has_no_beating_threats(self):
        analysis = analyze_possible_threats(parse_cards("Th 9c"), parse_cards("Ah Kh Qh Jh 2c"))
        self.assertEqual(analysis.your_hand_rank, 10)
        self.assertFalse(any(t.beats_you for t in analysis.threats))

    def test_preflop_is_empty(self):
        analysis = analyze_possible_threats(parse_cards("Ah Qd"), [])
        self.assertEqual(analysis.threats, [])
        self.assertEqual(analysis.total_beating_combos, 0)

    def test_missing_hole_cards_give_an_empty_analysis(self):
        for hole in ([], parse_cards("Ah"), parse_cards("Ah Kd Qc")):
            analysis = analyze_possible_threats(hole, parse_cards("9h 5h 2h"))
            self.assertEqual(analysis.threats, [])
            self.assertEqual(analysis.total_beating_combos, 0)
            self.assertEqual(analysis.your_hand_rank, 0)
            self.assertEqual(analysis.summary, 'No current threats beat your hand')

    def test_held_flush_card_does_not_reduce_combos(self):
        analysis = analyze_possible_threats(parse_cards("Ah Kd"), parse_cards("9h 5h 2h"))
        flush = _threats_of(analysis, 'Flush')[0]
        self.assertEqual(flush.combos_count, 45)
        self.assertEqual(analysis.total_beating_combos, 54)

    def test_held_straight_card_does_not_reduce_combos(self):
        analysis = analyze_possible_threats(parse_cards("Td 5c"), parse_cards("9c 8d 7h 6s"))
        one_card = [t for t in _threats_of(analysis, 'Straight') if t.cards_needed == 1]
        self.assertEqual(len(one_card), 2)
        self.assertTrue(all(t.combos_count == 4 for t in one_card))
        self.assertFalse(any(t.beats_you for t in one_card))

    def test_last_quad_card_counts_when_held(self):
        analysis = analyze_possible_threats(parse_cards("Ks Qd"), parse_cards("Kc Kd Kh 7s 2d"))
        self.assertEqual(_threats_of(analysis, 'Four of a Kind')[0].combos_count, 1)

    def test_summary_low_likelihood(self):
        threat = Threat('Straight', 'Possible 9-high straight', True, Likelihood.LOW)
        self.assertEqual(generate_threat_summary([threat]), '1 low-likelihood threat')


if __name__ == '__main__':
    unittest.main()
