"""
Identifier generation.

Every id in a battle comes from an IdGenerator that the caller owns and
threads through construction calls. Two simulations built from separate
generators never share counters.

Usage:
    ids = IdGenerator()
    ids.next("move-towards")   # "move-towards-1"
    ids.next("move-towards")   # "move-towards-2"
    ids.next("heal")           # "heal-1"
"""

from __future__ import annotations


class IdGenerator:
    """Monotonic counters keyed by prefix."""

    def __init__(self, counters: dict[str, int] | None = None):
        self._counters: dict[str, int] = dict(counters or {})

    def next(self, prefix: str) -> str:
        """Return the next id for a prefix, formatted as '<prefix>-<n>'."""
        value = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = value
        return f"{prefix}-{value}"

    def reserve(self, identifier: str) -> None:
        """
        Mark an id made elsewhere as taken.

        For a '<prefix>-<n>' id the prefix's counter moves up to at least
        n, so next() never hands it out again. Other ids are ignored.
        """
        prefix, _, number = identifier.rpartition("-")
        if not prefix or not number.isdigit():
            return
        self._counters[prefix] = max(self._counters.get(prefix, 0), int(number))

    def peek(self, prefix: str) -> int:
        """Last number issued for a prefix (0 if none yet)."""
        return self._counters.get(prefix, 0)

    def snapshot(self) -> dict[str, int]:
        """Copy of the counter table."""
        return dict(self._counters)

    def __repr__(self) -> str:
        return f"IdGenerator({self._counters!r})"
