from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .config import MAX_SIDE
from .lines import clear_blanks, merge_lines

Coord = Tuple[int, int]

_Reader = Callable[[int], List[int]]
_Writer = Callable[[int, Sequence[int]], None]

DIRECTIONS: Tuple[str, ...] = ('left', 'up', 'down', 'right')

# direction -> (compacted lines, swept lines, tiles slide toward index 0)
_MOVE_PLAN: Dict[str, Tuple[str, str, bool]] = {
    'up': ('col', 'row', True),
    'down': ('col', 'row', False),
    'left': ('row', 'col', True),
    'right': ('row', 'col', False),
}


def check_dimensions(width: int, height: int) -> None:
    for name, side in (('width', width), ('height', height)):
        if not 1 <= side <= MAX_SIDE:
            raise ValueError(f'{name} must be in 1..{MAX_SIDE}, got {side}')


@dataclass
class Board:
    """A width x height grid of tiles, stored row-major. 0 marks an empty cell."""
    width: int
    height: int
    cells: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        check_dimensions(self.width, self.height)
        if not self.cells:
            self.cells = [[0] * self.width for _ in range(self.height)]
            return
        if len(self.cells) != self.height:
            raise ValueError(f'expected {self.height} rows, got {len(self.cells)}')
        grid: List[List[int]] = []
        for row in self.cells:
            if len(row) != self.width:
                raise ValueError(f'expected rows of {self.width} cells, got {len(row)}')
            values = [int(v) for v in row]
            if any(v < 0 for v in values):
                raise ValueError('tile values must be non-negative')
            grid.append(values)
        self.cells = grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Board':
        """Builds a board whose dimensions are taken from a rectangular list of rows."""
        if not rows or not rows[0]:
            raise ValueError('rows must be non-empty')
        return cls(width=len(rows[0]), height=len(rows), cells=[list(r) for r in rows])

    @property
    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self.cells)

    # ---------- cell access ----------

    def at(self, r: int, c: int) -> int:
        return self.cells[r][c]

    def put(self, r: int, c: int, value: int) -> None:
        self.cells[r][c] = value

    def occupied(self, r: int, c: int) -> bool:
        return self.cells[r][c] != 0

    def coords(self) -> Iterator[Coord]:
        for r in range(self.height):
            for c in range(self.width):
                yield (r, c)

    def empty_cells(self) -> List[Coord]:
        return [(r, c) for (r, c) in self.coords() if self.cells[r][c] == 0]

    def tiles(self) -> List[int]:
        return [v for row in self.cells for v in row if v != 0]

    # ---------- line primitives ----------

    def get_row(self, r: int) -> List[int]:
        return list(self.cells[r])

    def get_col(self, c: int) -> List[int]:
        return [self.cells[r][c] for r in range(self.height)]

    def replace_row(self, r: int, values: Sequence[int]) -> None:
        if len(values) != self.width:
            raise ValueError(f'row needs {self.width} values, got {len(values)}')
        self.cells[r] = list(values)

    def replace_col(self, c: int, values: Sequence[int]) -> None:
        if len(values) != self.height:
            raise ValueError(f'column needs {self.height} values, got {len(values)}')
        for r in range(self.height):
            self.cells[r][c] = values[r]

    def row_indices(self, reverse: bool = False) -> List[int]:
        indices = list(range(self.height))
        return indices[::-1] if reverse else indices

    def col_indices(self, reverse: bool = False) -> List[int]:
        indices = list(range(self.width))
        return indices[::-1] if reverse else indices

    def _line_access(self, axis: str) -> Tuple[_Reader, _Writer, Callable[..., List[int]]]:
        if axis == 'row':
            return self.get_row, self.replace_row, self.row_indices
        return self.get_col, self.replace_col, self.col_indices

    # ---------- moves ----------

    def _compact(self, axis: str, pad_end: bool) -> None:
        get, replace, indices = self._line_access(axis)
        for i in indices():
            replace(i, clear_blanks(get(i), pad_end))

    def _slide(self, direction: str) -> 'Board':
        compact_axis, sweep_axis, toward_start = _MOVE_PLAN[direction]
        self._compact(compact_axis, toward_start)

        get, replace, indices = self._line_access(sweep_axis)
        order = indices(reverse=not toward_start)
        step = 1 if toward_start else -1
        # Walk away from the target edge; each line absorbs its far-side neighbour.
        for i in order[:-1]:
            src, dest = merge_lines(get(i + step), get(i))
            replace(i, dest)
            replace(i + step, src)

        self._compact(compact_axis, toward_start)
        return self

    def move_up(self) -> 'Board':
        return self._slide('up')

    def move_down(self) -> 'Board':
        return self._slide('down')

    def move_left(self) -> 'Board':
        return self._slide('left')

    def move_right(self) -> 'Board':
        return self._slide('right')

    def move(self, direction: str) -> 'Board':
        if direction not in _MOVE_PLAN:
            raise ValueError(f'unknown direction: {direction!r}')
        return self._slide(direction)

    # ---------- copies, spawning, wire format ----------

    def clone(self) -> 'Board':
        return Board(width=self.width, height=self.height, cells=[list(row) for row in self.cells])

    def spawn_tile(self, *values: int, rng=None) -> 'Board':
        from .spawn import spawn_tile
        return spawn_tile(self, *values, rng=rng)

    def serialize(self) -> str:
        from .codec import serialize
        return serialize(self)

    @classmethod
    def deserialize(cls, token: str, policy: Optional[str] = None) -> 'Board':
        from .codec import deserialize
        return deserialize(token, policy=policy)

    @staticmethod
    def bare_board_code(width: int, height: int) -> str:
        from .codec import bare_board_code
        return bare_board_code(width, height)

    def pretty(self) -> str:
        """Renders the grid as text, one row per line, values right-aligned."""
        return '\n'.join(' '.join(f'{v:5d}' for v in row) for row in self.cells)


def can_move(board: Board) -> bool:
    """True when some move could still change the board."""
    for r, c in board.coords():
        value = board.at(r, c)
        if value == 0:
            return True
        if c + 1 < board.width and board.at(r, c + 1) == value:
            return True
        if r + 1 < board.height and board.at(r + 1, c) == value:
            return True
    return False


def is_game_over(board: Board) -> bool:
    return not can_move(board)


def legal_directions(board: Board) -> List[str]:
    """Directions, in DIRECTIONS order, whose move changes the board."""
    return [d for d in DIRECTIONS if board.clone().move(d) != board]
