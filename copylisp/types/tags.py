from __future__ import annotations
from enum import IntEnum


class Tag(IntEnum):
    CONS = 0
    ATOM = 1
    NATIVE = 2
    CLOSURE = 3


# Tags whose `first` and `second` fields are heap references the collector follows.
TRACED = frozenset((Tag.CONS, Tag.CLOSURE))
