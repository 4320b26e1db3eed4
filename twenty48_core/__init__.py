"""
2048 core Python package.

Pure-logic pieces of the stateless sliding-tile game, kept apart from the
Flask app so they can be tested without a web client.
Modules:
- board.py: Board, directional moves, terminal-state helpers
- lines.py: clear_blanks / merge_lines over a single row or column
- spawn.py: random tile placement
- codec.py: binary token format (serialize / deserialize)
- config.py: environment-driven settings
- cli.py: terminal client
"""
