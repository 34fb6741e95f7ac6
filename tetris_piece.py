"""Piece model, spawning, translation and kick-resolved rotation"""
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple

from tetris_shapes import KICKS, PIECES, SHAPES, Matrix, top_offset
from tetris_board import Board, is_valid


@dataclass(frozen=True)
class Piece:
    t: str
    state: int  # rotation state 0=spawn,1=R,2=2,3=L
    x: int
    y: int

    @property
    def shape(self) -> Matrix:
        return SHAPES[self.t][self.state]

    def cells(self, x: Optional[int] = None, y: Optional[int] = None) -> Iterator[Tuple[int, int]]:
        """Yield absolute (row, col) of every occupied cell, optionally at another origin."""
        ox = self.x if x is None else x
        oy = self.y if y is None else y
        for r, row in enumerate(self.shape):
            for c, v in enumerate(row):
                if v:
                    yield oy + r, ox + c


def spawn(t: str, cols: int) -> Piece:
    """Rotation 0, centered, topmost occupied row on row 0 of the hidden buffer."""
    if t not in PIECES:
        raise ValueError(f"unknown piece type {t!r}")
    shape = SHAPES[t][0]
    x = (cols - len(shape[0])) // 2
    y = -top_offset(shape)
    return Piece(t, 0, x, y)


def translate(board: Board, piece: Piece, dx: int, dy: int) -> Optional[Piece]:
    """Return the piece moved by (dx, dy), or None if the target does not fit."""
    if is_valid(board, piece, piece.x + dx, piece.y + dy):
        return replace(piece, x=piece.x + dx, y=piece.y + dy)
    return None


def try_rotate(board: Board, piece: Piece, cw: bool = True) -> Optional[Piece]:
    """Try to rotate the piece through its kick table; return new piece or None if every kick fails."""
    old_state = piece.state
    new_state = (old_state + (1 if cw else -1)) % 4
    kicks = KICKS[piece.t][(old_state, new_state)]
    for dx, dy in kicks:
        test = Piece(piece.t, new_state, piece.x + dx, piece.y + dy)
        if is_valid(board, test):
            return test
    return None
