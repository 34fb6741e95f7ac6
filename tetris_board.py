"""Board helpers: validity, merge, line clearing, ghost"""
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from tetris_piece import Piece

# rows x cols of Optional[str] (piece type); row 0 is the top of the hidden buffer
Board = List[List[Optional[str]]]


def new_board(rows: int, cols: int) -> Board:
    return [[None] * cols for _ in range(rows)]


def is_valid(board: Board, piece: "Piece", x: Optional[int] = None, y: Optional[int] = None) -> bool:
    """True if the piece fits at (x, y), defaulting to its own position.

    Cells above row 0 are only checked against the side walls.
    """
    rows, cols = len(board), len(board[0])
    for by, bx in piece.cells(x, y):
        if bx < 0 or bx >= cols or by >= rows:
            return False
        if by >= 0 and board[by][bx]:
            return False
    return True


def merge(board: Board, piece: "Piece") -> Board:
    """Return a copy of the board with the piece written into it."""
    rows, cols = len(board), len(board[0])
    out = [row[:] for row in board]
    for by, bx in piece.cells():
        if 0 <= by < rows and 0 <= bx < cols:
            out[by][bx] = piece.t
    return out


def clear_lines(board: Board) -> Tuple[Board, int]:
    """Drop full rows and pad with empty rows on top; return (board, rows removed)."""
    cols = len(board[0])
    kept = [row[:] for row in board if not all(row)]
    cleared = len(board) - len(kept)
    return [[None] * cols for _ in range(cleared)] + kept, cleared


def is_empty(board: Board) -> bool:
    return not any(cell for row in board for cell in row)


def ghost_y(board: Board, piece: "Piece") -> int:
    """Return the y position where the piece would land if hard-dropped."""
    y = piece.y
    while is_valid(board, piece, piece.x, y + 1):
        y += 1
    return y


def visible_rows(board: Board, buffer_rows: int) -> Board:
    return [row[:] for row in board[buffer_rows:]]
