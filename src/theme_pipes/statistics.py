"""Statistical functions for text analysis.

This module provides reusable counting functions for token sequences,
with no project-specific dependencies.
"""

from collections.abc import Iterable


def count_occurrences(tokens: Iterable[str]) -> dict[str, int]:
    """Count how many times each token occurs.

    Every token is mapped to a count of 1 and the pairs are reduced by
    summation per token, so the result does not depend on input order.

    Args:
        tokens: Any collection of tokens

    Returns:
        Dictionary mapping each distinct token to its occurrence count

    Example:
        >>> count_occurrences(["apple", "orange", "banana", "apple", "banana"])
        {'apple': 2, 'orange': 1, 'banana': 2}
    """
    occurrences: dict[str, int] = {}

    for token in tokens:
        occurrences[token] = occurrences.get(token, 0) + 1

    return occurrences


def calculate_density(occurrences: dict[str, int], total_tokens: int) -> float:
    """Calculate the density of counted terms within a scope.

    The density is the sum of all counts divided by the total number of
    tokens in the scope (typically a chapter).

    Args:
        occurrences: Term counts {term: count}
        total_tokens: Number of tokens in the scope

    Returns:
        The density, or 0.0 when the scope holds no tokens

    Example:
        >>> calculate_density({"apple": 3, "orange": 2, "banana": 4}, 50)
        0.18
    """
    if total_tokens <= 0:
        return 0.0

    return sum(occurrences.values()) / total_tokens
