"""
Exercise name matching.

Exercise names are free text typed by users, so the same exercise shows
up as "Bench Press", "bench  press", "Bench-Press" or "Bench Pres".
One matcher resolves a query against logged names, with three modes:

``MatchMode.STRICT`` (records, skill map, most-logged grouping)
    1. Normalise both names: lowercase, hyphens/underscores to spaces,
       collapse whitespace, trim.
    2. Equal after normalisation -> match.
    3. Compare the digits of each name, concatenated.  If they differ,
       or only one side has digits -> no match ("11ft Shot" never
       matches "17ft Shot" or "ft Shot").  Splitting digits does not
       matter: "Bench 1 2" and "Bench 12" both carry "12".
    4. Otherwise match iff the Levenshtein distance is at most
       ``max_distance`` (one typo by default).
    An empty query matches nothing.

``MatchMode.SUBSTRING`` (exercise type classification)
    Substring in either direction, with and without spaces.  An empty
    query matches everything.

``MatchMode.LOOSE`` (free-text search, trend filtering)
    ``SUBSTRING``, or word overlap on words longer than two characters.
    An empty query matches everything.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, Optional, Sequence, TypeVar

from training_analytics.core.config import settings

_WHITESPACE_RE = re.compile(r"\s+")
_SEPARATOR_RE = re.compile(r"[-_]")
_DIGITS_RE = re.compile(r"\d+")

# Loose word matching ignores short words ("of", "db", ...)
_MIN_LOOSE_WORD_LENGTH = 3

# Near-duplicate grouping tolerates this many extra characters
_SIMILAR_LENGTH_SLACK = 2


class MatchMode(str, Enum):
    STRICT = "strict"
    SUBSTRING = "substring"
    LOOSE = "loose"


# ======================================================================
# Primitives
# ======================================================================


def normalize_name(name: str) -> str:
    """Lowercase, map ``-``/``_`` to spaces, collapse whitespace, trim."""
    lowered = _SEPARATOR_RE.sub(" ", (name or "").lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def extract_digits(name: str) -> str:
    """All digits in order of appearance, e.g. ``"3x 11ft"`` -> ``"311"``."""
    return "".join(_DIGITS_RE.findall(name))


def levenshtein_distance(s1: str, s2: str) -> int:
    """Classic edit distance (insert / delete / substitute, unit cost)."""
    if s1 == s2:
        return 0
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            if c1 == c2:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j] + 1,  # deletion
                                   current[j - 1] + 1,  # insertion
                                   previous[j - 1] + 1))  # substitution
        previous = current
    return previous[-1]


# ======================================================================
# Policies
# ======================================================================


def _strict_match(logged_name: str, query: str, max_distance: int) -> bool:
    if not query or not query.strip():
        return False

    name_norm = normalize_name(logged_name)
    query_norm = normalize_name(query)

    if name_norm == query_norm:
        return True

    name_digits = extract_digits(name_norm)
    query_digits = extract_digits(query_norm)
    if name_digits != query_digits:
        return False

    return levenshtein_distance(name_norm, query_norm) <= max_distance


def _substring_match(name_lower: str, query_lower: str) -> bool:
    name_compact = _WHITESPACE_RE.sub("", name_lower)
    query_compact = _WHITESPACE_RE.sub("", query_lower)
    return (query_lower in name_lower or name_lower in query_lower or query_compact in name_compact
            or name_compact in query_compact)


def _loose_match(logged_name: str, query: str, word_overlap: bool = True) -> bool:
    name_lower = (logged_name or "").lower().strip()
    query_lower = (query or "").lower().strip()

    if not query_lower:
        return True
    if not name_lower:
        return False
    if _substring_match(name_lower, query_lower):
        return True
    if not word_overlap:
        return False

    name_words = [w for w in name_lower.split() if len(w) >= _MIN_LOOSE_WORD_LENGTH]
    query_words = [w for w in query_lower.split() if len(w) >= _MIN_LOOSE_WORD_LENGTH]

    for qw in query_words:
        for nw in name_words:
            if qw in nw or nw in qw:
                return True

    return False


def matches(logged_name: str, query: str, mode: MatchMode = MatchMode.STRICT,
            max_distance: Optional[int] = None, ) -> bool:
    """Whether *logged_name* matches the user-typed *query*."""
    if mode is MatchMode.LOOSE:
        return _loose_match(logged_name, query)
    if mode is MatchMode.SUBSTRING:
        return _loose_match(logged_name, query, word_overlap=False)
    limit = settings.STRICT_MAX_EDIT_DISTANCE if max_distance is None else max_distance
    return _strict_match(logged_name, query, limit)


# ======================================================================
# Collection helpers
# ======================================================================

T = TypeVar("T")


def filter_matching(items: Iterable[T], query: str, mode: MatchMode = MatchMode.STRICT, attr: str = "name", ) -> list[T]:
    """Keep the items whose ``attr`` matches *query*, preserving order."""
    return [item for item in items if matches(getattr(item, attr) or "", query, mode)]


def names_similar(name1: str, name2: str) -> bool:
    """Near-duplicate spellings ("bench press" / "benchpress")."""
    n1 = _WHITESPACE_RE.sub("", name1.lower())
    n2 = _WHITESPACE_RE.sub("", name2.lower())

    if n1 == n2:
        return True
    if n1 in n2 or n2 in n1:
        return abs(len(n1) - len(n2)) <= _SIMILAR_LENGTH_SLACK
    return False


def group_names(names: Sequence[str]) -> dict[str, list[str]]:
    """Group names that strictly match each other.

    Returns ``{canonical: [members...]}`` where the canonical name is the
    longest spelling in the group (first one wins a tie).  Groups appear
    in order of their first member.
    """
    groups: dict[str, list[str]] = {}
    processed: set[str] = set()

    for name in names:
        if name in processed:
            continue
        members = [name]
        processed.add(name)
        for other in names:
            if other in processed:
                continue
            if matches(name, other, MatchMode.STRICT):
                members.append(other)
                processed.add(other)

        canonical = members[0]
        for member in members[1:]:
            if len(member) > len(canonical):
                canonical = member
        groups[canonical] = members

    return groups
