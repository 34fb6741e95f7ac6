"""
Game session state and the commands that drive it.

A Session is an immutable snapshot. Every command takes the current Session
and returns the next one; when a command's preconditions fail (paused, game
over, blocked move, no kick fits, hold already used) the very same object is
returned, so `new is old` tells a driver that nothing happened. The bag is
never drawn from or emptied in place: a transition that touches it works on
a copy, so two commands applied to the same snapshot see the same pieces.

Lock delay
----------
The engine does not keep time. When a grounded piece should start its lock
countdown the session sets `lock_pending` and bumps `lock_token`; the driver
arms a one-shot timer for that token and calls `lock_delay_expire(session,
token)` when it fires. A token that no longer matches (the piece moved and
re-armed, was hard-dropped, or the game ended) is ignored, so a late timer
can never lock the wrong piece.

Each successful move or rotation while grounded re-arms the countdown and
counts one reset; once `max_lock_resets` is reached the next grounded
move locks immediately. Becoming airborne clears both.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Optional, Tuple

from tetris_board import Board, clear_lines, ghost_y, is_valid, merge, new_board, visible_rows
from tetris_config import CONFIG, SessionConfig
from tetris_piece import Piece, spawn, translate, try_rotate
from tetris_rng import SevenBag
from tetris_scoring import (ClearResult, HARD_DROP_PER_CELL, SOFT_DROP_PER_CELL,
                            level_for, score_lock)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    config: SessionConfig
    bag: SevenBag = field(compare=False, repr=False)
    board: Board
    current: Optional[Piece]
    next_queue: Tuple[Piece, ...]
    hold: Optional[str] = None
    can_hold: bool = True
    score: int = 0
    lines: int = 0
    level: int = 1
    combo: int = 0
    last_clear: ClearResult = ClearResult()
    remaining_time: int = 0
    elapsed_time: int = 0
    game_over: bool = False
    paused: bool = False
    # lock delay bookkeeping
    lock_pending: bool = False
    lock_resets: int = 0
    lock_token: int = 0
    piece_id: int = 0


def new_session(config: Optional[SessionConfig] = None) -> Session:
    """Start a fresh game: empty board, fresh bag, full next queue, empty hold."""
    cfg = config if config is not None else SessionConfig.from_dict(CONFIG)
    bag = SevenBag(cfg.seed)
    bag.reset()
    current = spawn(bag.draw(), cfg.cols)
    queue = tuple(spawn(bag.draw(), cfg.cols) for _ in range(cfg.next_depth))
    logger.info("new session %dx%d (+%d hidden), next depth %d, %ds",
                cfg.cols, cfg.visible_rows, cfg.buffer_rows, cfg.next_depth, cfg.time_limit_s)
    return Session(
        config=cfg,
        bag=bag,
        board=new_board(cfg.rows, cfg.cols),
        current=current,
        next_queue=queue,
        remaining_time=cfg.time_limit_s,
    )


def restart(s: Session) -> Session:
    """Throw the session away and start over with the same config."""
    return new_session(s.config)


# -------------------------------------------------------------
# Internal transitions
# -------------------------------------------------------------

def _playable(s: Session) -> bool:
    return s.current is not None and not s.game_over and not s.paused


def _grounded(board: Board, piece: Piece) -> bool:
    return translate(board, piece, 0, 1) is None


def _cancel_lock(s: Session) -> Session:
    return replace(s, lock_pending=False, lock_resets=0)


def _arm_lock(s: Session) -> Session:
    return replace(s, lock_pending=True, lock_token=s.lock_token + 1)


def _end(s: Session, reason: str) -> Session:
    bag = s.bag.copy()
    bag.reset()
    logger.info("game over (%s): score %d, lines %d, level %d", reason, s.score, s.lines, s.level)
    return replace(_cancel_lock(s), bag=bag, game_over=True)


def _settle(s: Session, piece: Piece, points: int = 0) -> Session:
    """Commit a successful move or rotation and re-evaluate the lock state."""
    s = replace(s, current=piece, score=s.score + points)
    if not _grounded(s.board, piece):
        return _cancel_lock(s)
    if s.lock_resets >= s.config.max_lock_resets:
        return _lock(s)
    return _arm_lock(replace(s, lock_resets=s.lock_resets + 1))


def _promote(s: Session) -> Tuple[Piece, Tuple[Piece, ...], SevenBag]:
    """Pop the queue head and refill the tail from a copy of the bag."""
    bag = s.bag.copy()
    head = s.next_queue[0]
    tail = s.next_queue[1:] + (spawn(bag.draw(), s.config.cols),)
    return head, tail, bag


def _lock(s: Session) -> Session:
    piece = s.current
    board, cleared = clear_lines(merge(s.board, piece))
    result = score_lock(board, cleared, s.combo)
    lines = s.lines + cleared
    head, queue, bag = _promote(s)
    logger.debug("locked %s r%d at (%d,%d): %d lines, combo %d, +%d%s",
                 piece.t, piece.state, piece.x, piece.y, cleared, result.combo,
                 result.points, " (perfect clear)" if result.perfect_clear else "")
    s = replace(
        _cancel_lock(s),
        board=board,
        bag=bag,
        current=head,
        next_queue=queue,
        can_hold=True,
        score=s.score + result.points,
        lines=lines,
        level=level_for(lines),
        combo=result.combo,
        last_clear=result,
        piece_id=s.piece_id + 1,
    )
    if not is_valid(board, head):
        return _end(replace(s, current=None), f"{head.t} cannot spawn")
    return s


# -------------------------------------------------------------
# Commands
# -------------------------------------------------------------

def _shift(s: Session, dx: int) -> Session:
    if not _playable(s):
        return s
    moved = translate(s.board, s.current, dx, 0)
    if moved is None:
        return s
    return _settle(s, moved)


def move_left(s: Session) -> Session:
    return _shift(s, -1)


def move_right(s: Session) -> Session:
    return _shift(s, 1)


def soft_drop_step(s: Session) -> Session:
    if not _playable(s):
        return s
    moved = translate(s.board, s.current, 0, 1)
    if moved is None:
        return s
    return _settle(s, moved, SOFT_DROP_PER_CELL)


def hard_drop(s: Session) -> Session:
    if not _playable(s):
        return s
    piece = s.current
    gy = ghost_y(s.board, piece)
    dropped = replace(piece, y=gy)
    s = replace(_cancel_lock(s), current=dropped, score=s.score + (gy - piece.y) * HARD_DROP_PER_CELL)
    return _lock(s)


def _rotate(s: Session, cw: bool) -> Session:
    if not _playable(s):
        return s
    rotated = try_rotate(s.board, s.current, cw)
    if rotated is None:
        return s
    return _settle(s, rotated)


def rotate_clockwise(s: Session) -> Session:
    return _rotate(s, True)


def rotate_counter_clockwise(s: Session) -> Session:
    return _rotate(s, False)


def hold(s: Session) -> Session:
    """Stash the active piece; allowed once per piece until the next lock."""
    if not _playable(s) or not s.can_hold:
        return s
    cols = s.config.cols
    outgoing = s.current.t
    if s.hold is None:
        incoming = s.next_queue[0]
        if not is_valid(s.board, incoming):
            return s
        _, queue, bag = _promote(s)
    else:
        incoming = spawn(s.hold, cols)
        if not is_valid(s.board, incoming):
            return s
        queue, bag = s.next_queue, s.bag
    logger.debug("hold %s, now playing %s", outgoing, incoming.t)
    return replace(
        _cancel_lock(s),
        bag=bag,
        current=incoming,
        next_queue=queue,
        hold=outgoing,
        can_hold=False,
        piece_id=s.piece_id + 1,
    )


def toggle_pause(s: Session) -> Session:
    if s.game_over:
        return s
    if not s.paused:
        return replace(_cancel_lock(s), paused=True)
    s = replace(s, paused=False)
    if s.current is not None and _grounded(s.board, s.current):
        return _arm_lock(s)
    return s


def gravity_tick(s: Session) -> Session:
    if not _playable(s):
        return s
    moved = translate(s.board, s.current, 0, 1)
    if moved is not None:
        return _settle(s, moved)
    # grounded with no countdown running (spawned onto the stack, or resumed)
    if not s.lock_pending:
        return _arm_lock(s)
    return s


def lock_delay_expire(s: Session, token: Optional[int] = None) -> Session:
    """Lock the grounded piece if `token` still names the armed countdown."""
    if not _playable(s) or not s.lock_pending:
        return s
    if token is not None and token != s.lock_token:
        return s
    if not _grounded(s.board, s.current):
        return _cancel_lock(s)
    return _lock(s)


def countdown_tick(s: Session) -> Session:
    if s.game_over or s.paused:
        return s
    remaining = s.remaining_time - 1
    s = replace(s, remaining_time=max(0, remaining), elapsed_time=s.elapsed_time + 1)
    if remaining <= 0:
        return _end(s, "time up")
    return s


COMMANDS: Dict[str, Callable[[Session], Session]] = {
    "move_left": move_left,
    "move_right": move_right,
    "soft_drop_step": soft_drop_step,
    "hard_drop": hard_drop,
    "rotate_clockwise": rotate_clockwise,
    "rotate_counter_clockwise": rotate_counter_clockwise,
    "hold": hold,
    "toggle_pause": toggle_pause,
    "gravity_tick": gravity_tick,
    "lock_delay_expire": lock_delay_expire,
    "countdown_tick": countdown_tick,
}


# -------------------------------------------------------------
# Read accessors
# -------------------------------------------------------------

def visible_board(s: Session) -> Board:
    return visible_rows(s.board, s.config.buffer_rows)


def ghost_piece(s: Session) -> Optional[Piece]:
    if s.current is None:
        return None
    return replace(s.current, y=ghost_y(s.board, s.current))
