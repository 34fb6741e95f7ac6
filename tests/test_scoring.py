import unittest

from tetris_board import new_board
from tetris_scoring import (COMBO_BANDS, LINE_SCORES, PERFECT_CLEAR_BONUS, ClearResult,
                            combo_bonus, level_for, score_lock)


class ScoringTests(unittest.TestCase):
    def test_line_scores_are_distinct(self):
        self.assertEqual(len(set(LINE_SCORES.values())), 4)

    def test_combo_bonus_is_non_decreasing(self):
        values = [combo_bonus(c) for c in range(30)]
        self.assertEqual(values, sorted(values))

    def test_combo_band_edges(self):
        self.assertEqual(combo_bonus(0), 0)
        self.assertEqual(combo_bonus(1), 0)
        self.assertEqual(combo_bonus(2), 50)
        self.assertEqual(combo_bonus(3), 50)
        self.assertEqual(combo_bonus(4), 100)
        self.assertEqual(combo_bonus(6), 100)
        self.assertEqual(combo_bonus(7), 150)
        self.assertEqual(combo_bonus(10), 200)
        self.assertEqual(combo_bonus(99), 200)

    def test_each_band_has_a_unique_lower_bound(self):
        lows = [low for low, _ in COMBO_BANDS]
        self.assertEqual(len(lows), len(set(lows)))

    def test_level(self):
        self.assertEqual(level_for(0), 1)
        self.assertEqual(level_for(9), 1)
        self.assertEqual(level_for(10), 2)
        self.assertEqual(level_for(35), 4)

    def test_no_lines_resets_combo(self):
        board = new_board(4, 4)
        board[3][0] = "T"
        self.assertEqual(score_lock(board, 0, 5), ClearResult())

    def test_clear_extends_combo(self):
        board = new_board(4, 4)
        board[3][0] = "T"
        r = score_lock(board, 2, 3)
        self.assertEqual(r, ClearResult(2, 4, False, LINE_SCORES[2] + combo_bonus(4)))

    def test_perfect_clear_bonus(self):
        r = score_lock(new_board(4, 4), 4, 0)
        self.assertTrue(r.perfect_clear)
        self.assertEqual(r.points, LINE_SCORES[4] + PERFECT_CLEAR_BONUS)


if __name__ == "__main__":
    unittest.main()
