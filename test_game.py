import random
import unittest

from game import (
    Board,
    GameOver,
    bare_board_code,
    deserialize,
    is_game_over,
    new_board,
    next_tokens,
)


def make_board(rows):
    return Board.from_rows(rows)


class Test2048Basics(unittest.TestCase):
    def test_new_board_is_empty(self):
        b = new_board()
        self.assertEqual((b.width, b.height), (4, 4))
        self.assertEqual(b.tiles(), [])

    def test_bare_code_round_trip(self):
        self.assertEqual(deserialize(bare_board_code(4, 4)), new_board(4, 4))

    def test_next_tokens_cover_every_direction(self):
        b = make_board([[2, 0], [0, 2]])
        tokens = next_tokens(b)
        self.assertEqual(set(tokens), {'left', 'up', 'down', 'right'})
        self.assertEqual(deserialize(tokens['up']).rows, ((2, 2), (0, 0)))
        self.assertEqual(deserialize(tokens['left']).rows, ((2, 0), (2, 0)))

    def test_next_tokens_mark_unencodable_moves(self):
        b = make_board([[32768, 32768]])
        tokens = next_tokens(b)
        self.assertIsNone(tokens['left'])
        self.assertIsNone(tokens['right'])
        self.assertEqual(tokens['up'], b.serialize())


class TestRandomPlayout(unittest.TestCase):
    def test_random_game_reaches_game_over_with_valid_tokens(self):
        rng = random.Random(2024)
        board = new_board(3, 3)
        token = board.serialize()
        for _ in range(2000):
            board = deserialize(token)
            try:
                board.spawn_tile(2, 4, rng=rng)
            except GameOver:
                break
            if is_game_over(board):
                break
            token = board.clone().move(rng.choice(['left', 'up', 'down', 'right'])).serialize()
        self.assertTrue(is_game_over(board) or not board.empty_cells())
        self.assertEqual(deserialize(board.serialize()), board)


if __name__ == '__main__':
    unittest.main()
