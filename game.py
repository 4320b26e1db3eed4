from __future__ import annotations

# Facade module that re-exports the 2048 core.
# The Flask app, the CLI entry point and the tests import from here.
# Single-responsibility modules live under twenty48_core/*.

try:
    from .twenty48_core.board import (  # type: ignore
        Board,
        Coord,
        DIRECTIONS,
        can_move,
        is_game_over,
        legal_directions,
    )
    from .twenty48_core.lines import clear_blanks, merge_lines  # type: ignore
    from .twenty48_core.spawn import SPAWN_VALUES, spawn_tile  # type: ignore
    from .twenty48_core.codec import MAX_TILE, bare_board_code, deserialize, serialize  # type: ignore
    from .twenty48_core.errors import GameOver, MalformedToken  # type: ignore
    from .twenty48_core.config import (  # type: ignore
        TOKEN_POLICY_PAD,
        TOKEN_POLICY_STRICT,
        Settings,
        load_settings,
    )
except ImportError:
    from twenty48_core.board import (  # type: ignore
        Board,
        Coord,
        DIRECTIONS,
        can_move,
        is_game_over,
        legal_directions,
    )
    from twenty48_core.lines import clear_blanks, merge_lines  # type: ignore
    from twenty48_core.spawn import SPAWN_VALUES, spawn_tile  # type: ignore
    from twenty48_core.codec import MAX_TILE, bare_board_code, deserialize, serialize  # type: ignore
    from twenty48_core.errors import GameOver, MalformedToken  # type: ignore
    from twenty48_core.config import (  # type: ignore
        TOKEN_POLICY_PAD,
        TOKEN_POLICY_STRICT,
        Settings,
        load_settings,
    )


def new_board(width: int = 4, height: int = 4) -> Board:
    """Empty board of the given size."""
    return Board(width=width, height=height)


def next_tokens(board: Board) -> dict:
    """Token of a moved copy of BOARD for each direction; None when the result cannot be encoded."""
    out = {}
    for direction in DIRECTIONS:
        moved = board.clone().move(direction)
        try:
            out[direction] = moved.serialize()
        except ValueError:
            out[direction] = None
    return out


def main() -> None:
    # CLI driver delegated to twenty48_core.cli
    try:
        from .twenty48_core.cli import main as _main  # type: ignore
    except ImportError:
        from twenty48_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
