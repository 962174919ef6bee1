"""
Name similarity scoring for File Ripper.

Candidates are scored by the Levenshtein edit distance between the query and
their base name and ranked best match first. Selection uses an explicit
similarity threshold; the untouched ``len(name)`` starting score is never used
as a filter.
"""

from pathlib import PurePath
from typing import List, Optional
import logging

from ..models.candidate import CandidateEntry
from .cancellation import CancellationToken


logger = logging.getLogger(__name__)


def levenshtein_distance(a: str, b: str) -> int:
    """
    Compute the edit distance between two strings.

    The minimum number of single code point insertions, deletions or
    substitutions turning one string into the other. Uses one rolling row sized
    to the shorter string: O(len(a) * len(b)) time, O(min(len(a), len(b))) space.

    Args:
        a: First string
        b: Second string

    Returns:
        Non-negative edit distance; symmetric in a and b
    """
    if len(b) > len(a):
        a, b = b, a

    if not b:
        return len(a)

    # row[j] holds the distance between the consumed prefix of a and b[:j]
    row = list(range(len(b) + 1))

    for i, char_a in enumerate(a, 1):
        diagonal = row[0]
        row[0] = i
        for j, char_b in enumerate(b, 1):
            above = row[j]
            row[j] = min(
                above + 1,
                row[j - 1] + 1,
                diagonal + (char_a != char_b)
            )
            diagonal = above

    return row[-1]


def comparison_key(name: str, ignore_case: bool = False, compare_stem: bool = False) -> str:
    """
    Get the part of a file name that is compared with the query.

    Args:
        name: Base name of the file
        ignore_case: Lower-case the key
        compare_stem: Drop the final extension ("notes.txt" -> "notes")
    """
    key = PurePath(name).stem if compare_stem else name
    return key.lower() if ignore_case else key


def score_all(query: str, candidates: List[CandidateEntry], ignore_case: bool = False,
              compare_stem: bool = False,
              cancel_token: Optional[CancellationToken] = None) -> List[CandidateEntry]:
    """
    Score every candidate against the query and rank them in place.

    Args:
        query: Text to compare against each candidate name
        candidates: Candidates from a crawl; their scores are overwritten
        ignore_case: Compare lower-cased strings
        compare_stem: Compare against the name without its extension
        cancel_token: Optional token checked between candidates

    Returns:
        The same list, sorted by ascending score. Ties keep crawl order.
    """
    needle = query.lower() if ignore_case else query

    for candidate in candidates:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        key = comparison_key(candidate.name, ignore_case, compare_stem)
        candidate.score = levenshtein_distance(needle, key)

    candidates.sort(key=lambda c: c.score)
    logger.debug(f"Scored {len(candidates)} candidates against '{query}'")
    return candidates


def within_threshold(candidate: CandidateEntry, query: str, threshold: float,
                     compare_stem: bool = False, ignore_case: bool = False) -> bool:
    """
    Check whether a scored candidate is similar enough to keep.

    Args:
        candidate: Candidate already scored against query
        query: The query it was scored against
        threshold: Allowed distance as a fraction of the longer string
        compare_stem: Whether the candidate was scored against its stem
        ignore_case: Whether the candidate was scored case-insensitively

    Returns:
        True if score <= threshold * max(len(query), len(compared name))
    """
    key = comparison_key(candidate.name, ignore_case, compare_stem)
    if ignore_case:
        query = query.lower()
    return candidate.score <= threshold * max(len(query), len(key))


def select_matches(query: str, candidates: List[CandidateEntry],
                   threshold: Optional[float] = None,
                   max_results: Optional[int] = None,
                   compare_stem: bool = False,
                   ignore_case: bool = False) -> List[CandidateEntry]:
    """
    Pick the candidates to present from an already ranked list.

    Args:
        query: The query the candidates were scored against
        candidates: Candidates in ascending score order
        threshold: Optional similarity cut-off (see within_threshold)
        max_results: Optional cap on the number of results
        compare_stem: Whether the candidates were scored against their stems
        ignore_case: Whether the candidates were scored case-insensitively

    Returns:
        New list of selected candidates, best match first
    """
    if threshold is None:
        selected = list(candidates)
    else:
        selected = [c for c in candidates
                    if within_threshold(c, query, threshold, compare_stem, ignore_case)]

    if max_results is not None and max_results > 0:
        selected = selected[:max_results]

    return selected
