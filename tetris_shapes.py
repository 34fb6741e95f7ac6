"""Shape and wall-kick tables.

Every piece type has four rotation matrices (0=spawn, 1=R, 2=2, 3=L) and its
own kick table keyed by (from_state, to_state). Kick offsets are (dx, dy) with
dy growing downward, matching board row indices. Candidates are tried in
order and the first one that fits wins.

The tables are checked once at import; a missing or malformed entry raises
ShapeTableError.
"""
from typing import Dict, List, Tuple

PIECES = ["I", "J", "L", "O", "S", "T", "Z"]

Matrix = List[List[int]]
Kicks = Dict[Tuple[int, int], List[Tuple[int, int]]]

SHAPES: Dict[str, List[Matrix]] = {
    "I": [
        [[0,0,0,0],
         [1,1,1,1],
         [0,0,0,0],
         [0,0,0,0]],
        [[0,0,1,0],
         [0,0,1,0],
         [0,0,1,0],
         [0,0,1,0]],
        [[0,0,0,0],
         [0,0,0,0],
         [1,1,1,1],
         [0,0,0,0]],
        [[0,1,0,0],
         [0,1,0,0],
         [0,1,0,0],
         [0,1,0,0]],
    ],
    "J": [
        [[1,0,0],
         [1,1,1],
         [0,0,0]],
        [[0,1,1],
         [0,1,0],
         [0,1,0]],
        [[0,0,0],
         [1,1,1],
         [0,0,1]],
        [[0,1,0],
         [0,1,0],
         [1,1,0]],
    ],
    "L": [
        [[0,0,1],
         [1,1,1],
         [0,0,0]],
        [[0,1,0],
         [0,1,0],
         [0,1,1]],
        [[0,0,0],
         [1,1,1],
         [1,0,0]],
        [[1,1,0],
         [0,1,0],
         [0,1,0]],
    ],
    "O": [
        [[1,1],
         [1,1]],
        [[1,1],
         [1,1]],
        [[1,1],
         [1,1]],
        [[1,1],
         [1,1]],
    ],
    "S": [
        [[0,1,1],
         [1,1,0],
         [0,0,0]],
        [[0,1,0],
         [0,1,1],
         [0,0,1]],
        [[0,0,0],
         [0,1,1],
         [1,1,0]],
        [[1,0,0],
         [1,1,0],
         [0,1,0]],
    ],
    "T": [
        [[0,1,0],
         [1,1,1],
         [0,0,0]],
        [[0,1,0],
         [0,1,1],
         [0,1,0]],
        [[0,0,0],
         [1,1,1],
         [0,1,0]],
        [[0,1,0],
         [1,1,0],
         [0,1,0]],
    ],
    "Z": [
        [[1,1,0],
         [0,1,1],
         [0,0,0]],
        [[0,0,1],
         [0,1,1],
         [0,1,0]],
        [[0,0,0],
         [1,1,0],
         [0,1,1]],
        [[0,1,0],
         [1,1,0],
         [1,0,0]],
    ],
}

# J, L, S and Z share the usual SRS offsets
_JLSZ_KICKS: Kicks = {
    (0,1): [(0,0), (-1,0), (-1,-1), (0, 2), (-1, 2)],
    (1,0): [(0,0), ( 1,0), ( 1, 1), (0,-2), ( 1,-2)],
    (1,2): [(0,0), ( 1,0), ( 1, 1), (0,-2), ( 1,-2)],
    (2,1): [(0,0), (-1,0), (-1,-1), (0, 2), (-1, 2)],
    (2,3): [(0,0), ( 1,0), ( 1,-1), (0, 2), ( 1, 2)],
    (3,2): [(0,0), (-1,0), (-1, 1), (0,-2), (-1,-2)],
    (3,0): [(0,0), (-1,0), (-1, 1), (0,-2), (-1,-2)],
    (0,3): [(0,0), ( 1,0), ( 1,-1), (0, 2), ( 1, 2)],
}

# T gets a last-resort one-row climb on every transition
_T_KICKS: Kicks = {
    (0,1): [(0,0), (-1,0), (-1,-1), (0, 2), (-1, 2), (0,-1)],
    (1,0): [(0,0), ( 1,0), ( 1, 1), (0,-2), ( 1,-2), (0,-1)],
    (1,2): [(0,0), ( 1,0), ( 1, 1), (0,-2), ( 1,-2), (0,-1)],
    (2,1): [(0,0), (-1,0), (-1,-1), (0, 2), (-1, 2), (0,-1)],
    (2,3): [(0,0), ( 1,0), ( 1,-1), (0, 2), ( 1, 2), (0,-1)],
    (3,2): [(0,0), (-1,0), (-1, 1), (0,-2), (-1,-2), (0,-1)],
    (3,0): [(0,0), (-1,0), (-1, 1), (0,-2), (-1,-2), (0,-1)],
    (0,3): [(0,0), ( 1,0), ( 1,-1), (0, 2), ( 1, 2), (0,-1)],
}

_I_KICKS: Kicks = {
    (0,1): [(0,0), (-2,0), ( 1,0), (-2, 1), ( 1,-2)],
    (1,0): [(0,0), ( 2,0), (-1,0), ( 2,-1), (-1, 2)],
    (1,2): [(0,0), (-1,0), ( 2,0), (-1,-2), ( 2, 1)],
    (2,1): [(0,0), ( 1,0), (-2,0), ( 1, 2), (-2,-1)],
    (2,3): [(0,0), ( 2,0), (-1,0), ( 2,-1), (-1, 2)],
    (3,2): [(0,0), (-2,0), ( 1,0), (-2, 1), ( 1,-2)],
    (3,0): [(0,0), ( 1,0), (-2,0), ( 1, 2), (-2,-1)],
    (0,3): [(0,0), (-1,0), ( 2,0), (-1,-2), ( 2, 1)],
}

# Every O rotation is the same square
_O_KICKS: Kicks = {
    (0,1): [(0,0)], (1,0): [(0,0)],
    (1,2): [(0,0)], (2,1): [(0,0)],
    (2,3): [(0,0)], (3,2): [(0,0)],
    (3,0): [(0,0)], (0,3): [(0,0)],
}

KICKS: Dict[str, Kicks] = {
    "I": _I_KICKS,
    "J": _JLSZ_KICKS,
    "L": _JLSZ_KICKS,
    "O": _O_KICKS,
    "S": _JLSZ_KICKS,
    "T": _T_KICKS,
    "Z": _JLSZ_KICKS,
}

TRANSITIONS = [(s, (s + d) % 4) for s in range(4) for d in (1, -1)]


class ShapeTableError(ValueError):
    """A static shape or kick table is missing an entry or is malformed."""


def validate_tables(shapes: Dict[str, List[Matrix]], kicks: Dict[str, Kicks]) -> None:
    for t in PIECES:
        rotations = shapes.get(t)
        if rotations is None or len(rotations) != 4:
            raise ShapeTableError(f"{t}: expected 4 rotation matrices")
        for state, m in enumerate(rotations):
            if not m or any(len(row) != len(m[0]) for row in m):
                raise ShapeTableError(f"{t}[{state}]: ragged or empty matrix")
            if sum(v for row in m for v in row) != 4:
                raise ShapeTableError(f"{t}[{state}]: expected 4 occupied cells")
        table = kicks.get(t)
        if table is None:
            raise ShapeTableError(f"{t}: no kick table")
        for tr in TRANSITIONS:
            offsets = table.get(tr)
            if not offsets:
                raise ShapeTableError(f"{t}: no kicks for transition {tr}")
            if (0, 0) not in offsets:
                raise ShapeTableError(f"{t}: transition {tr} lacks the (0, 0) candidate")


def top_offset(matrix: Matrix) -> int:
    """Number of empty rows above the first occupied row."""
    for r, row in enumerate(matrix):
        if any(row):
            return r
    return len(matrix)


validate_tables(SHAPES, KICKS)
