import logging
from enum import IntEnum
from typing import Dict, List, Optional, Union

from .errors import AmbiguousStartError, DimensionMismatchError
from .grid import Cell, Grid, Position
from .rotation import Rotation, rotate, rotate_point
from .wmap import WesnothMap

logger = logging.getLogger(__name__)


class Quadrant(IntEnum):
    """Clockwise from the top-left corner; quadrant k hosts player k + 1."""

    TL = 0
    TR = 1
    BR = 2
    BL = 3


def quadrant_origin(q: Quadrant, n: int, size: int) -> Position:
    far = n - size
    if q == Quadrant.TL:
        return 0, 0
    elif q == Quadrant.TR:
        return 0, far
    elif q == Quadrant.BR:
        return far, far
    else:
        return far, 0


def owner(r: int, c: int, n: int) -> Quadrant:
    """Quadrant that writes output cell (r, c) of an n x n map.

    On odd maps the corner placements overlap along the middle row and column.
    The overlap is split as a pinwheel: TL keeps the left half of the middle row
    and the center cell, and each other quadrant keeps the rotation of that strip.
    """
    m = n // 2
    if n % 2 == 0:
        if r < m:
            return Quadrant.TL if c < m else Quadrant.TR
        return Quadrant.BL if c < m else Quadrant.BR
    if (r == m and c == m) or (r <= m and c < m):
        return Quadrant.TL
    if r < m:
        return Quadrant.TR
    if c > m:
        return Quadrant.BR
    return Quadrant.BL


def _sample_start(q0: Grid, n: int) -> Optional[Position]:
    starts = q0.starts()
    if len(starts) > 1:
        players = ", ".join(str(p) for p in sorted(starts))
        raise AmbiguousStartError(
            f"sample quadrant holds several player starts ({players}); keep exactly one"
        )
    if n % 2 == 1 and (n // 2, n // 2) in starts.values():
        raise DimensionMismatchError(
            "a player start on the center cell cannot be given to four players"
        )
    return next(iter(starts.values()), None)


def symmetrize(grid: Grid, turns: Union[Rotation, int] = Rotation.R0) -> Grid:
    """Build a 4-fold rotationally symmetric copy of ``grid``.

    The top-left ceil(n/2) x ceil(n/2) block is the sample. It is rotated by
    ``turns`` clockwise quarter turns, then copied into the four corners rotated
    0, 90, 180 and 270 degrees. The sample's player start, if any, becomes
    players 1..4 at the matching positions.
    """
    n = grid.height
    if grid.width != n:
        raise DimensionMismatchError(
            f"{grid.height}x{grid.width} map is not square; quarter turns cannot tile it"
        )
    size = (n + 1) // 2
    q0 = rotate(grid.block(0, 0, size, size), turns)
    start = _sample_start(q0, n)

    out: List[List[Optional[Cell]]] = [[None] * n for _ in range(n)]
    starts: Dict[int, Position] = {}
    for q in Quadrant:
        placed = rotate(q0, q)
        r0, c0 = quadrant_origin(q, n, size)
        if start is not None:
            i, j = rotate_point(start[0], start[1], size, size, q)
            starts[int(q) + 1] = (r0 + i, c0 + j)
        for i, row in enumerate(placed.cells):
            for j, cell in enumerate(row):
                r, c = r0 + i, c0 + j
                if owner(r, c, n) == q:
                    out[r][c] = cell.without_player()

    for player, (r, c) in starts.items():
        out[r][c] = out[r][c].with_player(player)

    logger.debug(
        "symmetrized %dx%d map, sample %dx%d turned %d degrees, starts %s",
        n, n, size, size, Rotation(int(turns) % 4).degrees, starts,
    )
    return Grid(out)


class Symmetrizer:
    def __init__(self, wmap: WesnothMap, rotation_deg: int = 0) -> None:
        self.source = wmap
        self.rotation = Rotation.from_degrees(rotation_deg)
        self._result: Optional[WesnothMap] = None

    def symmetrized_map(self) -> WesnothMap:
        if self._result is None:
            grid = symmetrize(self.source.grid, self.rotation)
            self._result = WesnothMap(grid, source=self.source.source)
        return self._result
