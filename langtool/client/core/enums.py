"""Core enumerations shared by requests, dispatching and the CLI."""

from enum import Enum


class Level(str, Enum):
    """Rule level of a check request.

    ``PICKY`` adds rules that are mostly useful for formal text.
    """

    DEFAULT = "default"
    PICKY = "picky"

    @property
    def is_default(self) -> bool:
        return self is Level.DEFAULT


class DispatchMode(str, Enum):
    """How fragments of a split request are sent to the server."""

    SEQUENTIAL = "sequential"
    CONCURRENT = "concurrent"
