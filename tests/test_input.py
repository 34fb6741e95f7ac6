import unittest

from tetris_input import KEYMAP, ShiftRepeat
from tetris_session import COMMANDS


class ShiftRepeatTests(unittest.TestCase):
    def test_press_fires_once_then_waits_for_das(self):
        shift = ShiftRepeat(das_ms=100, arr_ms=30)
        self.assertEqual(shift.update(16, True, False), "move_left")
        self.assertIsNone(shift.update(50, True, False))
        self.assertEqual(shift.update(50, True, False), "move_left")
        self.assertIsNone(shift.update(20, True, False))
        self.assertEqual(shift.update(10, True, False), "move_left")

    def test_release_and_switch_reset_the_charge(self):
        shift = ShiftRepeat(das_ms=100, arr_ms=30)
        shift.update(16, False, True)
        self.assertIsNone(shift.update(16, False, False))
        self.assertEqual(shift.update(16, False, True), "move_right")
        self.assertEqual(shift.update(16, True, False), "move_left")
        self.assertIsNone(shift.update(16, True, False))

    def test_both_keys_cancel_out(self):
        shift = ShiftRepeat(das_ms=0, arr_ms=0)
        self.assertIsNone(shift.update(16, True, True))

    def test_zero_arr_repeats_every_frame_after_das(self):
        shift = ShiftRepeat(das_ms=32, arr_ms=0)
        fired = [shift.update(16, False, True) for _ in range(4)]
        self.assertEqual(fired, ["move_right", None, "move_right", "move_right"])

    def test_every_name_is_a_session_command(self):
        self.assertTrue(set(KEYMAP.values()) <= set(COMMANDS))
        self.assertIn(ShiftRepeat(0, 0).update(1, True, False), COMMANDS)


if __name__ == "__main__":
    unittest.main()
