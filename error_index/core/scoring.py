"""
Relevance scoring of a query against one text field.

The scorer is a small deterministic heuristic, not a language model:

1. An empty query matches everything (score 1.0).
2. Exact equality scores 1.0, substring containment 0.9.
3. Otherwise each query token of at least three characters is matched
   against the text tokens: exact word (1.0), containment either way (0.5),
   or a positional fuzzy match tolerating small typos (0.3).
4. The final score multiplies coverage (matched / total query tokens) by
   quality (accumulated weight / total query tokens), so partial coverage
   is penalised quadratically.
"""

from __future__ import annotations


EXACT_WEIGHT = 1.0
SUBSTRING_SCORE = 0.9
PARTIAL_WEIGHT = 0.5
FUZZY_WEIGHT = 0.3
FUZZY_RATIO = 0.7
MIN_TOKEN_LENGTH = 3
MAX_LENGTH_DELTA = 2


def score(query: str, text: str) -> float:
    """Score how well ``text`` matches ``query``.

    Args:
        query: The user's search input
        text: One field of an article (title, provider)

    Returns:
        A relevance score in [0, 1]

    Examples:
        >>> score("", "anything")
        1.0
        >>> score("timeout", "Timeout Error")
        0.9
    """
    query_lower = (query or "").strip().lower()
    if not query_lower:
        return 1.0

    text_lower = (text or "").strip().lower()
    if text_lower == query_lower:
        return 1.0
    if query_lower in text_lower:
        return SUBSTRING_SCORE

    query_tokens = [token for token in query_lower.split() if len(token) >= MIN_TOKEN_LENGTH]
    if not query_tokens:
        return 0.0
    text_tokens = text_lower.split()

    accumulated = 0.0
    matched = 0
    for token in query_tokens:
        weight = _match_token(token, text_tokens)
        if weight:
            accumulated += weight
            matched += 1

    total = len(query_tokens)
    return (matched / total) * (accumulated / total)


def _match_token(token: str, text_tokens: list[str]) -> float:
    """Return the weight of the best-ranked match for one query token.

    Exact matches are checked across all text tokens first; after that
    each text token is tried for containment, then fuzzy, and the first
    success wins.
    """
    if token in text_tokens:
        return EXACT_WEIGHT
    for candidate in text_tokens:
        if candidate in token or token in candidate:
            return PARTIAL_WEIGHT
        if fuzzy_match(token, candidate):
            return FUZZY_WEIGHT
    return 0.0


def fuzzy_match(left: str, right: str) -> bool:
    """Positional similarity check for tokens of similar length.

    Counts position-aligned equal characters over the shorter token's
    length. Tokens whose lengths differ by more than two never match.
    """
    if abs(len(left) - len(right)) > MAX_LENGTH_DELTA:
        return False
    shortest = min(len(left), len(right))
    if shortest == 0:
        return False
    common = sum(1 for a, b in zip(left, right) if a == b)
    return common / shortest >= FUZZY_RATIO
