# pathviz/core/errors.py
#!/usr/bin/env python3
"""
Error taxonomy for the pathfinding core.

An unreachable end has no exception: it comes back as an empty path and an
end node without a parent.
"""

from typing import Tuple


class PathvizError(Exception):
    """Base class for every error raised by pathviz."""


class ConfigurationError(PathvizError):
    """A run was requested while START or END is not set."""


class OutOfBoundsError(PathvizError, ValueError):
    def __init__(self, coord: Tuple[int, int], width: int, height: int):
        self.coord = coord
        self.width = width
        self.height = height
        super().__init__(f"{coord} outside {width}x{height} board")


class MapFormatError(PathvizError, ValueError):
    """Map file or ASCII rows could not be turned into a board."""


class SearchCancelled(PathvizError):
    """The cancellation token was set between two node expansions."""
