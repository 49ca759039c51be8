# addrverify/domain/similarity.py
from __future__ import annotations


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance: insert/delete/substitute each cost 1.

    Keeps the full (len(b)+1) x (len(a)+1) table; addresses are short.
    """
    if len(a) == 0:
        return len(b)
    if len(b) == 0:
        return len(a)

    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[j][i] = min(
                matrix[j][i - 1] + 1,
                matrix[j - 1][i] + 1,
                matrix[j - 1][i - 1] + cost,
            )

    return matrix[len(b)][len(a)]


def similarity_percent(normalized1: str, normalized2: str, distance: int) -> float:
    """
    (1 - distance / max_len) * 100, or 100 when both strings are empty.
    Advisory context for the oracle, not a verdict.

    Clamped to [0, 100]: /api/verify takes the distance from the client.
    """
    max_len = max(len(normalized1), len(normalized2))
    if max_len == 0:
        return 100.0
    return min(100.0, max(0.0, (1 - distance / max_len) * 100))
