import logging
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from .errors import (
    DuplicatePlayerMarkerError,
    EmptyMapError,
    InvalidCellError,
    RaggedRowError,
)

logger = logging.getLogger(__name__)

DELIMITER = ","

Position = Tuple[int, int]


class Cell(NamedTuple):
    terrain: str
    player: Optional[int] = None

    def render(self) -> str:
        if self.player is None:
            return self.terrain
        return f"{self.player} {self.terrain}"

    def without_player(self) -> "Cell":
        return Cell(self.terrain)

    def with_player(self, player: int) -> "Cell":
        return Cell(self.terrain, player)


class Grid:
    """Rectangular block of cells, row-major and 0-indexed.

    A Grid never shares row storage with the sequences it was built from, so
    callers may keep mutating their own lists afterwards.
    """

    def __init__(self, rows: Sequence[Sequence[Cell]]) -> None:
        if not rows or not rows[0]:
            raise EmptyMapError()
        width = len(rows[0])
        for r, row in enumerate(rows):
            if len(row) != width:
                raise RaggedRowError(r, width, len(row))
        self.cells: List[List[Cell]] = [list(row) for row in rows]
        self._check_cells()

    def _check_cells(self) -> None:
        seen: Dict[int, Position] = {}
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                terrain, player = cell
                if not terrain or DELIMITER in terrain or len(terrain.split()) != 1:
                    raise InvalidCellError(r, c, terrain, "terrain code must be one non-empty token")
                if player is None:
                    continue
                if player < 1:
                    raise InvalidCellError(r, c, cell.render(), "player start must be a positive integer")
                if player in seen:
                    raise DuplicatePlayerMarkerError(player, seen[player], (r, c))
                seen[player] = (r, c)

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def copy(self) -> "Grid":
        return Grid(self.cells)

    def at(self, r: int, c: int) -> Cell:
        return self.cells[r][c]

    def block(self, r0: int, c0: int, h: int, w: int) -> "Grid":
        if r0 < 0 or c0 < 0 or r0 + h > self.height or c0 + w > self.width:
            raise IndexError(
                f"block {h}x{w} at ({r0}, {c0}) outside {self.height}x{self.width} grid"
            )
        return Grid([row[c0:c0 + w] for row in self.cells[r0:r0 + h]])

    def starts(self) -> Dict[int, Position]:
        out: Dict[int, Position] = {}
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell.player is not None:
                    out[cell.player] = (r, c)
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        return f"Grid({self.height}x{self.width})"


def parse_cell(token: str, r: int = 0, c: int = 0) -> Cell:
    parts = token.split()
    if not parts:
        raise InvalidCellError(r, c, token, "empty terrain code")
    if len(parts) == 1:
        return Cell(parts[0])
    if len(parts) > 2:
        raise InvalidCellError(r, c, token, "expected '<player> <terrain>'")
    prefix, terrain = parts
    if not prefix.isdecimal() or int(prefix) == 0:
        raise InvalidCellError(r, c, token, "player start must be a positive integer")
    return Cell(terrain, int(prefix))


def parse(text: str) -> Grid:
    lines = text.replace("\r\n", "\n").split("\n")
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise EmptyMapError()

    rows = [
        [parse_cell(token, r, c) for c, token in enumerate(line.split(DELIMITER))]
        for r, line in enumerate(lines)
    ]
    grid = Grid(rows)
    logger.debug("parsed %dx%d map with %d start(s)", grid.height, grid.width, len(grid.starts()))
    return grid


def serialize(grid: Grid) -> str:
    lines = [DELIMITER.join(cell.render() for cell in row) for row in grid.cells]
    return "\n".join(lines) + "\n"
