# ==============================================================================
# String Helpers
# ==============================================================================
"""
Helpers for collapsing repeated identifiers.

Session documents are written once per event, so scans over the session
index see the same session id many times.
"""

from collections.abc import Iterable


def remove_duplicates(values: Iterable[str]) -> list[str]:
    """
    Deduplicate values while preserving first-seen order.

    Args:
        values: Sequence of strings, possibly with repeats

    Returns:
        New list where each value appears once, in order of first occurrence

    Example:
        >>> remove_duplicates(["a", "b", "a", "c", "b"])
        ['a', 'b', 'c']
    """
    seen: set[str] = set()
    unique = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique.append(value)
    return unique
