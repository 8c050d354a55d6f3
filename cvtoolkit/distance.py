"""String edit distance and the most representative string of a set."""

from __future__ import annotations

from typing import Sequence

__all__ = ["edit_distance", "most_representative"]


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance: insertions, deletions and substitutions turning ``a`` into ``b``."""
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def most_representative(strings: Sequence[str]) -> str:
    """The string whose summed edit distance to all the others is smallest.

    Ties go to the earliest string.
    """
    if not strings:
        raise ValueError("need at least one string")
    return min(strings, key=lambda s: sum(edit_distance(s, other) for other in strings))