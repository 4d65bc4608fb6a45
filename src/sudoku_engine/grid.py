# grid.py
# Plain 9x9 list-of-lists grids: 0 marks an empty cell, 1..9 a placed digit.

from typing import List, Tuple

SIZE = 9
BOX = 3
EMPTY = 0
DIGITS = tuple(range(1, SIZE + 1))

Grid = List[List[int]]
ClueMask = List[List[bool]]

# ---------- Construction / copying ----------

def empty_grid() -> Grid:
    return [[EMPTY] * SIZE for _ in range(SIZE)]

def grid_copy(g: Grid) -> Grid:
    return [row[:] for row in g]

def block_origin(row: int, col: int) -> Tuple[int, int]:
    return row - row % BOX, col - col % BOX

def count_filled(g: Grid) -> int:
    return sum(1 for r in range(SIZE) for c in range(SIZE) if g[r][c] != EMPTY)

def empty_cells(g: Grid) -> List[Tuple[int, int]]:
    return [(r, c) for r in range(SIZE) for c in range(SIZE) if g[r][c] == EMPTY]

def validate_shape(g) -> None:
    """Raise if ``g`` is not a 9x9 grid of integers in 0..9."""
    if not isinstance(g, (list, tuple)) or len(g) != SIZE:
        raise ValueError("grid must have exactly 9 rows")
    for r, row in enumerate(g):
        if not isinstance(row, (list, tuple)) or len(row) != SIZE:
            raise ValueError(f"row {r} must have exactly 9 cells")
        for c, v in enumerate(row):
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"cell ({r}, {c}) must be an int, got {type(v).__name__}")
            if not EMPTY <= v <= SIZE:
                raise ValueError(f"cell ({r}, {c}) holds {v}, expected 0..9")

# ---------- Text formats ----------

def to_string(g: Grid) -> str:
    return ''.join(str(g[r][c] or 0) for r in range(SIZE) for c in range(SIZE))

def from_string(s: str) -> Grid:
    s = s.strip().replace("\n", "").replace(" ", "")
    if len(s) != SIZE * SIZE:
        raise ValueError(f"expected 81 cells, got {len(s)}")
    grid = []
    k = 0
    for r in range(SIZE):
        row = []
        for c in range(SIZE):
            ch = s[k]; k += 1
            if ch in "0.":
                row.append(EMPTY)
            elif ch in "123456789":
                row.append(int(ch))
            else:
                raise ValueError(f"unexpected character {ch!r} at position {k - 1}")
        grid.append(row)
    return grid

def print_grid(g: Grid) -> str:
    lines = []
    for r in range(SIZE):
        if r % BOX == 0:
            lines.append("+-------+-------+-------+")
        row = []
        for c in range(SIZE):
            v = g[r][c]
            row.append(str(v) if v != EMPTY else ".")
            if c % BOX == BOX - 1:
                row.append("|")
        lines.append("| " + " ".join(row))
    lines.append("+-------+-------+-------+")
    return "\n".join(lines)
