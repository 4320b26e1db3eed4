from __future__ import annotations

import random
from typing import Tuple

from .board import Board
from .errors import GameOver

SPAWN_VALUES: Tuple[int, ...] = (2, 4)


def spawn_tile(board: Board, *values: int, rng=None) -> Board:
    """Places one tile, drawn uniformly from VALUES, on a uniformly chosen empty cell.

    Raises GameOver without touching the board when no cell is empty.
    `rng` may be any random.Random; the module-level generator is used otherwise.
    """
    if not values:
        raise ValueError('spawn_tile needs at least one candidate value')
    empty = board.empty_cells()
    if not empty:
        raise GameOver(f'no empty cell on {board.width}x{board.height} board')
    source = rng if rng is not None else random
    r, c = source.choice(empty)
    board.put(r, c, source.choice(values))
    return board
