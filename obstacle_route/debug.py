"""
Debug logging and text formatting helpers.

All planner modules log through children of the ``obstacle_route`` logger.
Nothing is printed unless a handler is attached, e.g. via setup_debug_logging().
"""

import logging
import sys
from typing import IO, Iterable, Optional, Union

from obstacle_route.geometry import PathVertex, Segment, Vector2

PACKAGE_LOGGER_NAME = "obstacle_route"

_debug_handler: Optional[logging.Handler] = None


def format_point(point: Union[PathVertex, Vector2]) -> str:
    """
    Render a point as "(x,y)".

    Integer coordinates are printed without decimals, anything else with
    six decimal places.
    """
    x, y = point.x, point.y
    if float(x).is_integer() and float(y).is_integer():
        return f"({int(x)},{int(y)})"
    return f"({x:f},{y:f})"


def format_segment(segment: Segment) -> str:
    return f"[{format_point(segment.start)}, {format_point(segment.end)}]"


def format_path(path: Iterable[PathVertex]) -> str:
    """Render a route as "[(start)-L(1,2)-R(3,4)(end)]" with side tags ("?" when untagged)."""
    parts = []
    for vertex in path:
        tag = vertex.side.value if vertex.side is not None else "?"
        parts.append(f"-{tag}{format_point(vertex)}")
    return "[(start)" + "".join(parts) + "(end)]"


def setup_debug_logging(
    level: int = logging.DEBUG,
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling it again replaces the previously attached handler.

    Parameters:
        level: Logging level for the package logger
        stream: Output stream (defaults to stderr)

    Returns:
        The package logger
    """
    global _debug_handler

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _debug_handler is not None:
        logger.removeHandler(_debug_handler)

    _debug_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _debug_handler.setFormatter(logging.Formatter("%(name)s %(levelname)s: %(message)s"))
    logger.addHandler(_debug_handler)
    logger.setLevel(level)
    return logger


def disable_debug_logging() -> None:
    """Detach the handler added by setup_debug_logging() and reset the level."""
    global _debug_handler

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _debug_handler is not None:
        logger.removeHandler(_debug_handler)
        _debug_handler = None
    logger.setLevel(logging.NOTSET)
