"""Approximate string matching over short vocabularies.

Edit distances here run on brand names, model names and plates, so the
full O(len(a) * len(b)) table is cheap and always computed.
"""

from vehicle_validation.models.vehicle import SimilarityResult


def levenshtein(a: str = "", b: str = "") -> int:
    """Case-insensitive Levenshtein distance.

    Examples:
        >>> levenshtein("Myvi", "myvee")
        2
        >>> levenshtein("", "abc")
        3
    """
    a = a.lower()
    b = b.lower()
    m, n = len(a), len(b)
    if not m:
        return n
    if not n:
        return m

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,  # deletion
                dp[i][j - 1] + 1,  # insertion
                dp[i - 1][j - 1] + cost,  # substitution
            )
    return dp[m][n]


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]; two empty strings score 1."""
    longest = max(len(a), len(b)) or 1
    return 1 - levenshtein(a, b) / longest


def best_match(text: str, candidates: list[str]) -> SimilarityResult:
    """Return the highest scoring candidate for ``text``.

    Empty input short-circuits to an empty result without scoring. There is
    no lower bound on the returned score; callers gate acceptance with their
    own threshold. Ties go to the earliest candidate (sorted() is stable).
    """
    if not text:
        return SimilarityResult(match="", score=0)

    scored = sorted(
        ((candidate, similarity(text, candidate)) for candidate in candidates),
        key=lambda pair: pair[1],
        reverse=True,
    )
    if not scored:
        return SimilarityResult(match="", score=0)

    match, score = scored[0]
    return SimilarityResult(match=match, score=score)
