from __future__ import annotations

from typing import List, Sequence, Tuple


def clear_blanks(values: Sequence[int], pad_end: bool = True) -> List[int]:
    """Slides nonzero tiles to one end of a line, keeping their order.

    With pad_end=True the zeros go to the end (tiles slide toward index 0),
    otherwise they go to the start.
    """
    squashed = [v for v in values if v != 0]
    padding = [0] * (len(values) - len(squashed))
    return squashed + padding if pad_end else padding + squashed


def merge_lines(src: Sequence[int], dest: Sequence[int]) -> Tuple[List[int], List[int]]:
    """Merges line SRC into the neighbouring line DEST, index by index.

    Where both cells hold the same nonzero tile, the src cell empties and the
    dest cell doubles. Returns new (src, dest) lists.
    """
    if len(src) != len(dest):
        raise ValueError(f'line lengths differ: {len(src)} != {len(dest)}')
    new_src = list(src)
    new_dest = list(dest)
    for i, value in enumerate(new_src):
        # Matching empty cells are not a merge.
        if value != 0 and value == new_dest[i]:
            new_src[i] = 0
            new_dest[i] = value * 2
    return new_src, new_dest
