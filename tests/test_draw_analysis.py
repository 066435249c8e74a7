"""
Unit tests for holdem_insight/draw_analysis.py
"""
import unittest

from holdem_insight.core_poker_mechanics import parse_cards
from holdem_insight.draw_analysis import (
    STRAIGHT_WINDOWS, calculate_outs, detect_flush_draw, detect_overcards,
    detect_pair_improvement, detect_straight_draws, draw_strength,
)
from holdem_insight.poker_types import DrawType


class TestDrawDetectors(unittest.TestCase):
    def test_straight_windows_include_wheel(self):
        self.assertEqual(len(STRAIGHT_WINDOWS), 10)
        self.assertEqual(STRAIGHT_WINDOWS[0], (14, 13, 12, 11, 10))
        self.assertEqual(STRAIGHT_WINDOWS[-1], (5, 4, 3, 2, 14))

    def test_flush_draw_needs_a_hole_card(self):
        draw = detect_flush_draw(parse_cards("Ah Kh"), parse_cards("Qh Jh 2c"))
        self.assertEqual(draw.type, DrawType.FLUSH_DRAW)
        self.assertEqual(draw.outs, 9)
        self.assertEqual(draw.description, "Hearts flush draw")

        # four spades all on the board
        self.assertIsNone(detect_flush_draw(parse_cards("Ah Kd"), parse_cards("Qs Js 2s 7s")))

    def test_made_flush_is_not_a_draw(self):
        self.assertIsNone(detect_flush_draw(parse_cards("Ah Kh"), parse_cards("Qh Jh 2h")))

    def test_open_ended_straight_draw(self):
        draws = detect_straight_draws(parse_cards("9s 8d"), parse_cards("Kc 7h 6d"))
        self.assertEqual(len(draws), 1)
        self.assertEqual(draws[0].type, DrawType.STRAIGHT_DRAW)
        self.assertEqual(draws[0].outs, 8)

    def test_gutshot(self):
        draws = detect_straight_draws(parse_cards("9s 8d"), parse_cards("Jc 6h 5d"))
        self.assertEqual(len(draws), 1)
        self.assertEqual(draws[0].type, DrawType.GUTSHOT)
        self.assertEqual(draws[0].outs, 4)
        self.assertIn("7", draws[0].description)

    def test_straight_draw_must_use_a_hole_card(self):
        self.assertEqual(detect_straight_draws(parse_cards("2s 2d"), parse_cards("9c 8h 7d 6s")), [])

    def test_overcards(self):
        draws = detect_overcards(parse_cards("Ad Kc"), parse_cards("9h 7s 2c"))
        self.assertEqual(len(draws), 2)
        self.assertTrue(all(d.outs == 3 for d in draws))
        self.assertEqual(draws[0].description, "Overcard A (for top pair)")

    def test_overpair_counts_both_cards_as_overcards(self):
        draws = detect_overcards(parse_cards("Ad Ac"), parse_cards("Kh 7s 2c"))
        self.assertEqual(len(draws), 2)
        self.assertTrue(all(d.type == DrawType.OVERCARD and d.outs == 3 for d in draws))

    def test_overpair_outs_include_set_draw(self):
        analysis = calculate_outs(parse_cards("Ad Ac"), parse_cards("Kh 7s 2c"))
        types = [d.type for d in analysis.draws]
        self.assertEqual(types.count(DrawType.OVERCARD), 2)
        self.assertEqual(types.count(DrawType.PAIR_DRAW), 1)
        self.assertEqual(analysis.total_outs, 8)
        self.assertEqual(analysis.clean_outs, 8)

    def test_set_draw(self):
        draw = detect_pair_improvement(parse_cards("7s 7d"), parse_cards("2c 5h 9d"))
        self.assertEqual(draw.type, DrawType.PAIR_DRAW)
        self.assertEqual(draw.outs, 2)
        self.assertEqual(draw.description, "Set draw (pair of 7s)")

    def test_trips_draw(self):
        draw = detect_pair_improvement(parse_cards("Ac 9d"), parse_cards("9s 4h 2c"))
        self.assertEqual(draw.outs, 2)
        self.assertEqual(draw.description, "Trips draw (paired 9)")

    def test_quads_draw(self):
        draw = detect_pair_improvement(parse_cards("7s 7d"), parse_cards("7c 5h 9d"))
        self.assertEqual(draw.outs, 1)
        self.assertTrue(draw.description.startswith("Quads draw"))

    def test_no_pair_improvement_without_a_pair(self):
        self.assertIsNone(detect_pair_improvement(parse_cards("Ac Kd"), parse_cards("9s 4h 2c")))


class TestCalculateOuts(unittest.TestCase):
    def test_pocket_pair_on_dry_board(self):
        analysis = calculate_outs(parse_cards("7s 7d"), parse_cards("2c 5h 9d"))
        self.assertEqual(len(analysis.draws), 1)
        self.assertEqual(analysis.draws[0].type, DrawType.PAIR_DRAW)
        self.assertEqual(analysis.total_outs, 2)
        self.assertEqual(analysis.clean_outs, 2)
        self.assertEqual(analysis.one_card_equity, 6)
        self.assertEqual(analysis.turn_equity, 6)
        self.assertEqual(analysis.river_equity, 8)

    def test_combo_draw_on_flop(self):
        analysis = calculate_outs(parse_cards("Ah Kh"), parse_cards("Qh Jh 2c"))
        types = [d.type for d in analysis.draws]
        self.assertIn(DrawType.FLUSH_DRAW, types)
        self.assertIn(DrawType.STRAIGHT_DRAW, types)

        flush_and_straight = sum(d.outs for d in analysis.draws
                                 if d.type in (DrawType.FLUSH_DRAW, DrawType.STRAIGHT_DRAW))
        self.assertEqual(flush_and_straight, 17)
        # plus two overcards at 3 outs each
        self.assertEqual(analysis.total_outs, 23)
        self.assertEqual(analysis.clean_outs, 22)
        self.assertIn("-1 duplicate (flush + straight)", analysis.breakdown)
        self.assertEqual(analysis.one_card_equity, 46)
        self.assertEqual(analysis.river_equity, 88)

    def test_turn_uses_one_card_equity_to_the_river(self):
        analysis = calculate_outs(parse_cards("9s 8d"), parse_cards("Jc 6h 5d 2s"))
        self.assertEqual(analysis.clean_outs, 4)
        self.assertEqual(analysis.one_card_equity, 10)
        self.assertEqual(analysis.turn_equity, 0)
        self.assertEqual(analysis.river_equity, 10)
        self.assertEqual(analysis.two_card_equity, analysis.river_equity)

    def test_equity_formula_holds(self):
        spots = [("Ah Kh", "Qh Jh 2c"), ("9s 8d", "Kc 7h 6d"), ("Ac 9d", "9s 4h 2c"), ("7s 7d", "2c 5h 9d 3s")]
        for hole, board in spots:
            analysis = calculate_outs(parse_cards(hole), parse_cards(board))
            self.assertEqual(analysis.one_card_equity, min(analysis.clean_outs * 2 + 2, 100))
            self.assertLessEqual(analysis.clean_outs, analysis.total_outs)

    def test_no_draws_on_river(self):
        analysis = calculate_outs(parse_cards("Ah Kh"), parse_cards("Qh Jh 2c 3d 4s"))
        self.assertEqual(analysis.draws, [])
        self.assertEqual(analysis.total_outs, 0)
        self.assertEqual(analysis.clean_outs, 0)
        self.assertEqual(analysis.one_card_equity, 2)
        self.assertEqual(analysis.river_equity, 0)

    def test_no_draws_preflop(self):
        analysis = calculate_outs(parse_cards("Ah Kh"), [])
        self.assertEqual(analysis.draws, [])
        self.assertEqual(analysis.total_outs, 0)

    def test_draw_strength_thresholds(self):
        self.assertEqual(draw_strength(60), 'monster-draw')
        self.assertEqual(draw_strength(45), 'strong-draw')
        self.assertEqual(draw_strength(25), 'medium-draw')
        self.assertEqual(draw_strength(15), 'weak-draw')
        self.assertEqual(draw_strength(14.9), 'no-draw')


if __name__ == '__main__':
    unittest.main()
