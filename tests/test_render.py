import unittest

from tetris_config import SessionConfig
from tetris_render import BoardWatch, format_time
from tetris_session import hard_drop, move_left, new_session, restart


class BoardWatchTests(unittest.TestCase):
    def test_rebuilds_only_when_the_board_snapshot_changes(self):
        s = new_session(SessionConfig(seed=5))
        watch = BoardWatch()
        self.assertTrue(watch.changed(s.board))
        self.assertFalse(watch.changed(move_left(s).board))
        self.assertTrue(watch.changed(hard_drop(s).board))

    def test_restart_always_rebuilds(self):
        s = new_session(SessionConfig(seed=5))
        watch = BoardWatch()
        watch.changed(s.board)
        fresh = restart(s)
        self.assertEqual(fresh.piece_id, s.piece_id)
        self.assertTrue(watch.changed(fresh.board))


class FormatTimeTests(unittest.TestCase):
    def test_minutes_and_seconds(self):
        self.assertEqual(format_time(180), "03:00")
        self.assertEqual(format_time(65), "01:05")
        self.assertEqual(format_time(0), "00:00")


if __name__ == "__main__":
    unittest.main()
