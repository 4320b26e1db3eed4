from __future__ import annotations

import base64
import binascii
import re
import struct
from typing import List, Optional

from .board import Board, check_dimensions
from .config import TOKEN_POLICIES, TOKEN_POLICY_STRICT, debug_enabled, default_token_policy
from .errors import MalformedToken

# Header: width byte, height byte. Body: little-endian uint16 per cell, row-major.
_HEADER = struct.Struct('<BB')
MAX_TILE = 0xFFFF
_NON_ALPHABET = re.compile(r'[^A-Za-z0-9+/]')


def _trace(msg: str) -> None:
    if debug_enabled():
        print(f"[token] {msg}")


def _reject(token: str, reason: str) -> MalformedToken:
    _trace(f"rejected {token!r}: {reason}")
    return MalformedToken(reason)


def serialize(board: Board) -> str:
    """Encodes a board as a base64 token with trailing zero bytes dropped."""
    flat: List[int] = [v for row in board.cells for v in row]
    for v in flat:
        if v > MAX_TILE:
            raise ValueError(f'tile {v} does not fit in 16 bits')
    fmt = '<BB' + 'H' * len(flat)
    raw = struct.pack(fmt, board.width, board.height, *flat).rstrip(b'\0')
    return base64.b64encode(raw).decode('ascii')


def bare_board_code(width: int, height: int) -> str:
    """Token for an empty board: just the header, the zero tiles are implied."""
    check_dimensions(width, height)
    return base64.b64encode(_HEADER.pack(width, height)).decode('ascii')


def _decode_base64(token: str, policy: str) -> bytes:
    try:
        if policy == TOKEN_POLICY_STRICT:
            return base64.b64decode(token, validate=True)
        # Lenient: drop anything outside the alphabet, then restore padding.
        cleaned = _NON_ALPHABET.sub('', token)
        return base64.b64decode(cleaned + '=' * (-len(cleaned) % 4), validate=True)
    except (binascii.Error, ValueError) as e:
        raise _reject(token, f'bad base64: {e}') from e


def deserialize(token: str, policy: Optional[str] = None) -> Board:
    """Decodes a token produced by serialize().

    policy 'pad' zero-fills a short body, 'strict' only accepts the exact
    token serialize() would emit for the decoded board. Defaults to the
    configured policy.
    """
    policy = policy or default_token_policy()
    if policy not in TOKEN_POLICIES:
        raise ValueError(f'unknown token policy: {policy!r}')

    raw = _decode_base64(token, policy)
    if len(raw) < _HEADER.size:
        raise _reject(token, 'missing width/height header')
    width, height = _HEADER.unpack_from(raw)
    if width == 0 or height == 0:
        raise _reject(token, f'empty dimensions {width}x{height}')

    body = raw[_HEADER.size:]
    expected = 2 * width * height
    if len(body) > expected:
        raise _reject(token, f'body has {len(body)} bytes, expected at most {expected}')
    body += b'\0' * (expected - len(body))

    board = Board(width=width, height=height)
    row_format = struct.Struct('<' + 'H' * width)
    for r in range(height):
        board.replace_row(r, list(row_format.unpack_from(body, r * row_format.size)))

    if policy == TOKEN_POLICY_STRICT and serialize(board) != token:
        raise _reject(token, 'token is not in canonical form')
    return board
