from __future__ import annotations
from dataclasses import dataclass


# Objects per semispace; the store reserves twice this many cells.
DEFAULT_HEAP_SIZE = 4096

# Root registry bounds: slots registered at once, and nested scopes.
DEFAULT_MAX_ROOTS = 4096
DEFAULT_MAX_SCOPES = 512


@dataclass(frozen=True)
class Limits:
    heap_size: int = DEFAULT_HEAP_SIZE
    max_roots: int = DEFAULT_MAX_ROOTS
    max_scopes: int = DEFAULT_MAX_SCOPES

    def __post_init__(self):
        for name in ("heap_size", "max_roots", "max_scopes"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
