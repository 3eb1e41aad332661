"""Food Search - Fuzzy matching of a query against logged food names.

The scorer is a small interface so the matching algorithm can be swapped
without touching the tracker.
"""

from typing import Protocol

from .models import Day, FoodMatch


SCORE_MATCH = 16
BONUS_BOUNDARY = 8
BONUS_CONSECUTIVE = 8
BONUS_EXACT = 2 * SCORE_MATCH
PENALTY_GAP_START = 3
PENALTY_GAP_EXTENSION = 1


class FuzzyScorer(Protocol):
    """Scores how well a query matches a candidate string."""

    def score(self, query: str, candidate: str) -> int | None:
        """Return a relevance score (higher is better) or None for no match."""


class SubsequenceScorer:
    """Subsequence matcher with smart case.

    Every query character must appear in the candidate, in order. Matching is
    case-insensitive unless the query contains an uppercase letter. Matches
    are rewarded for being consecutive or at the start of a word, and
    penalized for gaps between them and for unmatched characters around them.
    An exact match always scores highest.
    """

    def score(self, query: str, candidate: str) -> int | None:
        if not query:
            return None

        if not any(ch.isupper() for ch in query):
            needle, haystack = query.lower(), candidate.lower()
        else:
            needle, haystack = query, candidate

        best = None
        start = haystack.find(needle[0])
        while start != -1:
            score = self._score_from(needle, haystack, start)
            if score is None:
                # No later start can fit the rest of the query either
                break
            if best is None or score > best:
                best = score
            start = haystack.find(needle[0], start + 1)

        if best is not None and needle == haystack:
            best += BONUS_EXACT
        return best

    @staticmethod
    def _score_from(needle: str, haystack: str, start: int) -> int | None:
        score = -PENALTY_GAP_EXTENSION * start
        prev = None
        for ch in needle:
            pos = start if prev is None else haystack.find(ch, prev + 1)
            if pos == -1:
                return None

            score += SCORE_MATCH
            if pos == 0 or not haystack[pos - 1].isalnum():
                score += BONUS_BOUNDARY
            if prev is not None:
                gap = pos - prev - 1
                if gap == 0:
                    score += BONUS_CONSECUTIVE
                else:
                    score -= PENALTY_GAP_START + PENALTY_GAP_EXTENSION * (gap - 1)
            prev = pos

        score -= PENALTY_GAP_EXTENSION * (len(haystack) - prev - 1)
        return score


def search_foods(days: list[Day], query: str, scorer: FuzzyScorer) -> list[FoodMatch]:
    """Fuzzy search every food name across all days.

    Each distinct name appears once, represented by its most recently
    recorded entry.

    Args:
        days: Recorded days, in registry order
        query: Search text
        scorer: Matching algorithm

    Returns:
        Matches sorted by descending score
    """
    latest = {}
    for day in days:
        for food in day.foods:
            latest[food.name] = food

    matches = []
    for name, food in latest.items():
        score = scorer.score(query, name)
        if score is not None:
            matches.append(FoodMatch(food=food, score=score))

    matches.sort(key=lambda m: m.score, reverse=True)
    return matches
