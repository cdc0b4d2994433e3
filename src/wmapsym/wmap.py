import logging
from pathlib import Path
from typing import Optional, Union

from .errors import FormatError
from .grid import Grid, parse, serialize

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class WesnothMap:
    """A parsed map grid together with where it was read from."""

    def __init__(self, grid: Grid, source: Optional[str] = None) -> None:
        self.grid = grid
        self.source = source

    @classmethod
    def from_text(cls, text: str, source: Optional[str] = None) -> "WesnothMap":
        return cls(parse(text), source=source)

    @classmethod
    def load(cls, path: PathLike, encoding: str = "utf-8") -> "WesnothMap":
        try:
            with open(path, "r", encoding=encoding, newline="") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise FormatError(f"{path} is not valid {encoding}: {e.reason} at byte {e.start}") from e
        wmap = cls.from_text(text, source=str(path))
        logger.debug("loaded %s (%dx%d)", path, wmap.height, wmap.width)
        return wmap

    def to_text(self) -> str:
        return serialize(self.grid)

    def save(self, path: PathLike, encoding: str = "utf-8") -> None:
        text = self.to_text()
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(text)
        logger.info("wrote %s (%dx%d)", path, self.height, self.width)

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def width(self) -> int:
        return self.grid.width


def output_path(path: PathLike, prefix: str = "sym_") -> Path:
    p = Path(path)
    return p.with_name(prefix + p.name)
