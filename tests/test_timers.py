import unittest
from dataclasses import replace

from tetris_config import SessionConfig
from tetris_piece import Piece
from tetris_session import gravity_tick, move_left, new_session, toggle_pause
from tetris_timers import Scheduler, gravity_interval


def grounded_session():
    s = replace(new_session(SessionConfig(seed=99)), current=Piece("O", 0, 4, 19))
    return gravity_tick(s)


class GravityIntervalTests(unittest.TestCase):
    def test_speeds_up_per_level_with_floor(self):
        self.assertEqual(gravity_interval(1), 1000)
        self.assertEqual(gravity_interval(2), 900)
        self.assertEqual(gravity_interval(10), 100)
        self.assertEqual(gravity_interval(25), 100)


class SchedulerTests(unittest.TestCase):
    def test_arms_gravity_and_countdown(self):
        sched = Scheduler(500)
        sched.sync(new_session(SessionConfig(seed=1)), 0)
        self.assertEqual(sched.due(999), [])
        self.assertEqual(sched.due(1000), [("countdown_tick", None), ("gravity_tick", None)])
        self.assertEqual(sched.due(1999), [])
        self.assertEqual(len(sched.due(2000)), 2)

    def test_level_changes_gravity_interval(self):
        sched = Scheduler(500)
        sched.sync(replace(new_session(SessionConfig(seed=1)), level=3), 0)
        self.assertEqual(sched.gravity_ms, 800)

    def test_lock_timer_follows_token(self):
        s = grounded_session()
        sched = Scheduler(500)
        sched.sync(s, 0)
        self.assertEqual(sched.lock_token, s.lock_token)
        self.assertEqual(sched.due(499), [])
        locked = sched.run_due(s, 500)
        self.assertEqual(locked.piece_id, s.piece_id + 1)
        self.assertIsNone(sched.lock_at)
        self.assertEqual(sched.gravity_at, 1500)

    def test_stale_lock_event_is_harmless_and_rearms(self):
        s = grounded_session()
        sched = Scheduler(500)
        sched.sync(s, 0)
        moved = move_left(s)
        after = sched.run_due(moved, 500)
        self.assertIs(after, moved)
        self.assertEqual(sched.lock_token, moved.lock_token)
        self.assertEqual(sched.lock_at, 1000)

    def test_same_frame_lock_does_not_drop_the_new_piece(self):
        s = grounded_session()
        sched = Scheduler(1000)
        sched.sync(s, 0)
        after = sched.run_due(s, 1000)
        self.assertEqual(after.piece_id, s.piece_id + 1)
        self.assertEqual(after.current, s.next_queue[0])
        self.assertEqual(sched.gravity_at, 2000)

    def test_each_timer_fires_at_most_once_per_call(self):
        sched = Scheduler(500)
        s = new_session(SessionConfig(seed=1))
        sched.sync(s, 0)
        after = sched.run_due(s, 3500)
        self.assertEqual(after.remaining_time, s.remaining_time - 1)
        self.assertEqual(after.current.y, s.current.y + 1)

    def test_pause_cancels_everything(self):
        s = grounded_session()
        sched = Scheduler(500)
        sched.sync(s, 0)
        sched.sync(toggle_pause(s), 100)
        self.assertEqual(sched.due(10 ** 6), [])

    def test_resume_rearms_full_lock_delay(self):
        s = grounded_session()
        sched = Scheduler(500)
        paused = toggle_pause(s)
        sched.sync(paused, 0)
        resumed = toggle_pause(paused)
        sched.sync(resumed, 300)
        self.assertEqual(sched.lock_at, 800)
        self.assertEqual(sched.countdown_at, 1300)


if __name__ == "__main__":
    unittest.main()
