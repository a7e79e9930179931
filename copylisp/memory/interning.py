from __future__ import annotations


class InternTable:
    """Canonical storage for atom text.

    Two calls to `intern` with equal text return the very same `str` object,
    so atom text can be compared with `is`. Entries are never removed; the
    table is not part of the traced heap.
    """

    __slots__ = ("_strings",)

    def __init__(self):
        self._strings: dict[str, str] = {}

    def intern(self, text: str) -> str:
        # setdefault keeps the first object stored for this text
        return self._strings.setdefault(text, text)

    def __contains__(self, text: str) -> bool:
        return text in self._strings

    def __len__(self) -> int:
        return len(self._strings)
