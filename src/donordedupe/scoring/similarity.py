"""Edit-distance string similarity.

Pure, locale-independent functions. The dynamic-programming table costs
O(len(a) * len(b)) time and memory per call, which dominates a full scan.
"""

__all__ = ["levenshtein_distance", "normalized_similarity"]


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``.

    Insertions, deletions and substitutions all cost 1.

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.

    Returns
    -------
    int
        Edit distance.
    """
    m = len(a)
    n = len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = 1 + min(dp[i - 1][j], dp[i][j - 1], dp[i - 1][j - 1])

    return dp[m][n]


def normalized_similarity(a: str | None, b: str | None) -> float:
    """Similarity in [0, 1] derived from edit distance.

    Parameters
    ----------
    a : str | None
        First (already normalized) string.
    b : str | None
        Second (already normalized) string.

    Returns
    -------
    float
        ``1 - distance / max(len(a), len(b))``. Equal strings score 1.0;
        a missing or empty side scores 0.0.
    """
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0

    max_len = max(len(a), len(b))
    return 1.0 - levenshtein_distance(a, b) / max_len
