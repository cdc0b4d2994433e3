class MapError(ValueError):
    """Base class for every failure raised while reading or converting a map."""


class FormatError(MapError):
    pass


class RaggedRowError(FormatError):
    def __init__(self, row: int, expected: int, got: int) -> None:
        super().__init__(f"row {row + 1} has {got} cells, expected {expected}")
        self.row = row
        self.expected = expected
        self.got = got


class EmptyMapError(FormatError):
    def __init__(self) -> None:
        super().__init__("map has no rows")


class DuplicatePlayerMarkerError(FormatError):
    def __init__(self, player: int, first: tuple, second: tuple) -> None:
        super().__init__(
            f"player {player} starts at both {first} and {second}"
        )
        self.player = player
        self.positions = (first, second)


class InvalidCellError(FormatError):
    def __init__(self, row: int, col: int, token: str, reason: str) -> None:
        super().__init__(f"cell ({row}, {col}) {token!r}: {reason}")
        self.row = row
        self.col = col
        self.token = token


class DimensionMismatchError(MapError):
    pass


class AmbiguousStartError(MapError):
    pass


class RotationError(MapError):
    pass
