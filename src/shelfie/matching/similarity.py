# ABOUTME: String distance and segment scoring primitives shared by both resolvers.
# ABOUTME: Levenshtein distance, containment-aware similarity, and closest-candidate selection.

from collections.abc import Callable, Sequence
from typing import TypeVar

from rapidfuzz.distance import Levenshtein

T = TypeVar("T")


def distance(a: str, b: str) -> int:
    """Classic Levenshtein edit distance (insert, delete, substitute all cost 1).

    Case-sensitive: callers lower-case their inputs when they want otherwise.
    """
    return Levenshtein.distance(a, b)


def similarity_score(segment: str, text: str) -> int:
    """Score how well ``segment`` matches ``text``. Higher is better.

    A segment found verbatim inside the text scores its own length, so longer
    exact matches are worth more. Otherwise the score is the longer length
    minus the edit distance, which can go negative for unrelated strings.
    """
    if segment in text:
        return len(segment)
    return max(len(segment), len(text)) - distance(segment, text)


def closest_match(
    target: str,
    candidates: Sequence[T],
    key: Callable[[T], str] | None = None,
) -> int | None:
    """Return the index of the candidate closest to ``target`` by edit distance.

    Both sides are lower-cased before comparison. Ties keep the first
    candidate in input order. Returns None for an empty candidate list.

    Args:
        target: The string to match against.
        candidates: Items to choose from.
        key: Extracts the comparable text from a candidate. Defaults to str().
    """
    wanted = target.lower()
    best_index: int | None = None
    best_distance = 0
    for index, candidate in enumerate(candidates):
        text = key(candidate) if key else str(candidate)
        dist = distance(wanted, (text or "").lower())
        if best_index is None or dist < best_distance:
            best_index = index
            best_distance = dist
    return best_index
