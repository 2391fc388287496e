"""Fuzzy folder-name matching.

Similarity is the Sørensen-Dice coefficient over character bigrams of the
whitespace-stripped names, so "01 - Tax Returns" still finds
"01 - Tax Returns & Extensions" while unrelated names score near zero.
"""

import re
from collections import Counter
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Match:
    index: int
    name: str
    score: float


def similarity(first: str, second: str) -> float:
    """Return a similarity score in [0, 1] for two strings."""
    first = _WHITESPACE.sub("", first)
    second = _WHITESPACE.sub("", second)
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = Counter(first[i : i + 2] for i in range(len(first) - 1))
    second_bigrams = Counter(second[i : i + 2] for i in range(len(second) - 1))
    overlap = sum((first_bigrams & second_bigrams).values())
    return 2.0 * overlap / (len(first) + len(second) - 2)


def find_best_match(
    target: str,
    candidates: list[str],
    threshold: float = 0.0,
) -> Match | None:
    """Pick the candidate most similar to target, ignoring case.

    Ties go to the earliest candidate. Returns None when there are no
    candidates or the best score is below threshold.
    """
    needle = target.lower()
    best: Match | None = None
    for index, name in enumerate(candidates):
        score = similarity(needle, name.lower())
        if best is None or score > best.score:
            best = Match(index=index, name=name, score=score)

    if best is None or best.score <= 0.0 or best.score < threshold:
        return None
    return best
