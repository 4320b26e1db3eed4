from __future__ import annotations

import argparse
import random
from typing import List, Optional

from .board import can_move
from .codec import bare_board_code, deserialize
from .config import TOKEN_POLICY_STRICT, clamp_side, load_settings
from .errors import GameOver, MalformedToken
from .spawn import SPAWN_VALUES

COMMANDS = {
    'w': 'up', 'up': 'up',
    'a': 'left', 'left': 'left',
    's': 'down', 'down': 'down',
    'd': 'right', 'right': 'right',
}


def parse_command(text: str) -> Optional[str]:
    """Maps user input to a direction, 'quit', or None when unrecognised."""
    cmd = text.strip().lower()
    if cmd in ('q', 'quit', 'exit'):
        return 'quit'
    return COMMANDS.get(cmd)


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    parser = argparse.ArgumentParser(description='Play 2048 in the terminal; every position is a token')
    parser.add_argument('--width', type=int, default=settings.width, help='Board width (1-255)')
    parser.add_argument('--height', type=int, default=settings.height, help='Board height (1-255)')
    parser.add_argument('--token', default=None, help='Resume from a token instead of an empty board')
    parser.add_argument('--seed', type=int, default=settings.seed, help='RNG seed for tile spawns')
    parser.add_argument('--strict', action='store_true', help='Only accept canonical tokens')
    parser.add_argument('--decode', action='store_true', help='Print the board for --token and exit')
    args = parser.parse_args(argv)

    policy = TOKEN_POLICY_STRICT if args.strict else settings.token_policy
    token = args.token or bare_board_code(clamp_side(args.width), clamp_side(args.height))
    try:
        board = deserialize(token, policy=policy)
    except MalformedToken as e:
        print(f'error: bad token: {e}')
        return 2

    if args.decode:
        print(f'{board.width}x{board.height} board:')
        print(board.pretty())
        return 0

    rng = random.Random(args.seed)
    while True:
        try:
            board.spawn_tile(*SPAWN_VALUES, rng=rng)
        except GameOver:
            print(board.pretty())
            print('Game over.')
            return 0
        print(board.pretty())
        try:
            print('Token:', board.serialize())
        except ValueError as e:
            print(f'Token: unavailable ({e})')
        if not can_move(board):
            print('Game over.')
            return 0

        while True:
            try:
                text = input('Move (w/a/s/d, q to quit): ')
            except EOFError:
                return 0
            cmd = parse_command(text)
            if cmd == 'quit':
                return 0
            if cmd is None:
                print('Could not parse. Try again.')
                continue
            moved = board.clone().move(cmd)
            if moved == board:
                print('Nothing moves that way. Try again.')
                continue
            board = moved
            break


if __name__ == '__main__':
    raise SystemExit(main())
