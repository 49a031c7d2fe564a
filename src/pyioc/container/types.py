"""Container types and enums."""

from enum import Enum, auto


class Marker(Enum):
    """Declared marker kinds the resolver queries through ``has_marker``."""

    INJECT = auto()
    NAMED = auto()
    QUALIFIER = auto()
    SINGLETON = auto()
