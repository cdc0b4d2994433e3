from enum import IntEnum
from typing import List, Optional, Union

from .errors import RotationError
from .grid import Cell, Grid, Position


class Rotation(IntEnum):
    """Clockwise quarter turns."""

    R0 = 0
    R90 = 1
    R180 = 2
    R270 = 3

    @classmethod
    def from_degrees(cls, degrees: int) -> "Rotation":
        if degrees % 90 != 0:
            raise RotationError(f"rotation must be a multiple of 90, got {degrees}")
        return cls((degrees // 90) % 4)

    @property
    def degrees(self) -> int:
        return int(self) * 90


def rotate(block: Grid, turns: Union[Rotation, int]) -> Grid:
    t = int(turns) % 4
    h, w = block.height, block.width
    src = block.cells
    if t == 0:
        return block.copy()
    if t == 2:
        return Grid([[src[h - 1 - r][w - 1 - c] for c in range(w)] for r in range(h)])
    out: List[List[Optional[Cell]]] = [[None] * h for _ in range(w)]
    if t == 1:
        for i in range(h):
            for j in range(w):
                out[j][h - 1 - i] = src[i][j]
    else:
        for i in range(h):
            for j in range(w):
                out[w - 1 - j][i] = src[i][j]
    return Grid(out)


def rotate_point(r: int, c: int, height: int, width: int, turns: Union[Rotation, int]) -> Position:
    """Where (r, c) of a height x width block lands after ``rotate(block, turns)``."""
    for _ in range(int(turns) % 4):
        r, c = c, height - 1 - r
        height, width = width, height
    return r, c
