"""Text normalization and fuzzy matching helpers."""
import re

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_search_term(term: str) -> str:
    """Replace punctuation with spaces, collapse whitespace, trim and lowercase."""
    if not term or not term.strip():
        return ""
    term = _NON_WORD.sub(" ", term)
    term = _WHITESPACE.sub(" ", term)
    return term.strip().lower()


def levenshtein_distance(source: str, target: str) -> int:
    """Edit distance with unit-cost insert, delete and substitute."""
    source = source.lower()
    target = target.lower()
    if not source:
        return len(target)
    if not target:
        return len(source)

    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i]
        for j, target_char in enumerate(target, start=1):
            cost = 0 if source_char == target_char else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def string_similarity(first: str, second: str) -> float:
    """
    1 - distance / longer length, case-insensitive.

    Defined as 0.0 when either string is empty.
    """
    if not first or not second:
        return 0.0
    if first.lower() == second.lower():
        return 1.0
    longest = max(len(first), len(second))
    return 1.0 - levenshtein_distance(first, second) / longest
