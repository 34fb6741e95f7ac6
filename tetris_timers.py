"""Gravity, lock-delay and countdown timers, driven by an external millisecond clock"""
import logging
from typing import List, Optional, Tuple

from tetris_session import COMMANDS, Session

logger = logging.getLogger(__name__)

COUNTDOWN_MS = 1000


def gravity_interval(level: int) -> int:
    """Milliseconds between gravity steps: 1s at level 1, 100ms faster per level, floor 100ms."""
    return max(100, 1000 - (level - 1) * 100)


class Scheduler:
    """
    Keeps the three session timers in step with a Session.

    Call sync() after every command so timers are armed, re-armed or
    cancelled to match the new state, and run_due() once per frame with the
    current clock. Nothing runs while the session is paused or over.
    """

    def __init__(self, lock_delay_ms: int):
        self.lock_delay_ms = lock_delay_ms
        self.gravity_ms = 0
        self.gravity_at: Optional[int] = None
        self.lock_at: Optional[int] = None
        self.lock_token: Optional[int] = None
        self.countdown_at: Optional[int] = None
        self.piece_id: Optional[int] = None

    def cancel_all(self) -> None:
        self.gravity_at = None
        self.lock_at = None
        self.lock_token = None
        self.countdown_at = None
        self.piece_id = None

    def sync(self, s: Session, now: int) -> None:
        if s.game_over or s.paused:
            self.cancel_all()
            return

        # Gravity restarts for each new piece or level change
        interval = gravity_interval(s.level)
        if self.gravity_at is None or interval != self.gravity_ms or s.piece_id != self.piece_id:
            self.gravity_ms = interval
            self.gravity_at = now + interval
            self.piece_id = s.piece_id

        # One-shot lock timer follows the session's token
        if s.lock_pending:
            if s.lock_token != self.lock_token:
                self.lock_token = s.lock_token
                self.lock_at = now + self.lock_delay_ms
                logger.debug("lock timer armed for token %d, due at %d", s.lock_token, self.lock_at)
        else:
            self.lock_at = None
            self.lock_token = None

        if self.countdown_at is None:
            self.countdown_at = now + COUNTDOWN_MS

    def _pop_next(self, now: int, skip=()) -> Optional[Tuple[str, Optional[int]]]:
        if "countdown_tick" not in skip and self.countdown_at is not None and now >= self.countdown_at:
            self.countdown_at += COUNTDOWN_MS
            return "countdown_tick", None
        if "lock_delay_expire" not in skip and self.lock_at is not None and now >= self.lock_at:
            self.lock_at = None
            return "lock_delay_expire", self.lock_token
        if "gravity_tick" not in skip and self.gravity_at is not None and now >= self.gravity_at:
            self.gravity_at += self.gravity_ms
            return "gravity_tick", None
        return None

    def due(self, now: int) -> List[Tuple[str, Optional[int]]]:
        """Pop every timer that has elapsed by `now` as (command, token) pairs."""
        fired: List[Tuple[str, Optional[int]]] = []
        while True:
            event = self._pop_next(now, {name for name, _ in fired})
            if event is None:
                return fired
            fired.append(event)

    def run_due(self, s: Session, now: int) -> Session:
        """Fire elapsed timers one at a time, each at most once per call.

        The session is re-synced after every event, so a timer that the
        previous event cancelled or re-armed (gravity for a freshly spawned
        piece) is not fired against the new state.
        """
        fired = set()
        while True:
            event = self._pop_next(now, fired)
            if event is None:
                return s
            name, token = event
            fired.add(name)
            if name == "lock_delay_expire":
                s = COMMANDS[name](s, token)
            else:
                s = COMMANDS[name](s)
            self.sync(s, now)
