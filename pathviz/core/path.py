# pathviz/core/path.py
#!/usr/bin/env python3
from typing import List, Optional, Protocol, Tuple

from pathviz.core.types import Coord


class HasParents(Protocol):
    def parent(self, c: Coord) -> Optional[Coord]: ...


def reconstruct(result: HasParents, start: Coord, end: Coord) -> Tuple[Coord, ...]:
    """
    Walk parent pointers from END back towards START.

    The returned cells run from the one next to END to the one next to
    START; both endpoints are left out. An END without a parent yields an
    empty tuple, which is how "unreachable" is reported.
    """
    path: List[Coord] = []
    cur = result.parent(end)
    if cur is None:
        return ()
    while cur != start:
        path.append(cur)
        cur = result.parent(cur)
    return tuple(path)
