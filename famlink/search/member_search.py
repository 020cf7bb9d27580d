"""
Member lookup within a tree.

Substring search for the member picker, homonym disambiguation, and
fuzzy/phonetic lookup of members whose names are spelled differently.
"""

from typing import List, Iterable, Optional, Tuple, Collection

import phonetics
from rapidfuzz import fuzz

from ..core.member import Member


def search_members(
    members: Iterable[Member],
    term: str,
    exclude_ids: Collection[str] = (),
    limit: Optional[int] = 10
) -> List[Member]:
    """
    Find members whose name contains a search term.

    Matching is case-insensitive against the first name, last name and
    full name. Members whose full name starts with the term come first,
    then the rest in alphabetical order of full name.

    Args:
        members: Members of the tree
        term: Text typed by the user
        exclude_ids: Ids that must not be offered (e.g. already selected)
        limit: Maximum number of results, None for all

    Returns:
        Matching members

    Raises:
        ValueError: If the limit is negative
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be zero or more, got {limit}")
    if not term or not term.strip():
        return []

    needle = term.lower()
    excluded = set(exclude_ids)
    found = []

    for member in members:
        if not member.id or member.id in excluded:
            continue

        first = (member.first_name or '').lower()
        last = (member.last_name or '').lower()
        full = f"{member.first_name or ''} {member.last_name or ''}".lower()

        if needle in first or needle in last or needle in full:
            found.append((not full.startswith(needle), full, member))

    found.sort(key=lambda item: (item[0], item[1]))
    results = [member for _, _, member in found]

    if limit is not None:
        results = results[:limit]
    return results


def distinctive_info(member: Member, members: Iterable[Member]) -> str:
    """
    Build a suffix telling a member apart from namesakes.

    Args:
        member: Member being displayed
        members: Members of the tree

    Returns:
        "" if nobody else has the same first and last name, otherwise
        " (b. YEAR)", " (PLACE)" or " (ID: xxxx)", whichever is available first
    """
    has_homonym = any(
        other.id != member.id and
        other.first_name == member.first_name and
        other.last_name == member.last_name
        for other in members
    )
    if not has_homonym:
        return ''

    if member.birth_year is not None:
        return f" (b. {member.birth_year})"

    if member.birth_place is not None and str(member.birth_place):
        return f" ({member.birth_place})"

    return f" (ID: {(member.id or '')[-4:]})"


def get_metaphone(text: str) -> str:
    """
    Get Metaphone phonetic encoding of text.

    Args:
        text: Text to encode

    Returns:
        Metaphone code, "" for empty text
    """
    if not text:
        return ""
    return phonetics.metaphone(text)


def name_similarity(member1: Member, member2: Member) -> float:
    """
    Score how alike two members' names are.

    Args:
        member1: First member
        member2: Second member

    Returns:
        Score 0-100. Full names are compared with fuzzy matching; when the
        surnames sound alike, the first-name ratio is used if it is higher.
    """
    name1 = member1.full_name.lower()
    name2 = member2.full_name.lower()
    if not name1 or not name2:
        return 0.0

    score = fuzz.ratio(name1, name2)

    last1 = get_metaphone(member1.last_name)
    last2 = get_metaphone(member2.last_name)
    if last1 and last1 == last2 and member1.first_name and member2.first_name:
        given_score = fuzz.ratio(member1.first_name.lower(), member2.first_name.lower())
        score = max(score, given_score)

    return float(score)


def find_similar_members(
    member: Member,
    members: Iterable[Member],
    threshold: float = 85.0
) -> List[Tuple[Member, float]]:
    """
    Find members whose name could be a spelling variant of this member's.

    Args:
        member: Reference member
        members: Members of the tree
        threshold: Minimum similarity (0-100)

    Returns:
        (member, similarity) pairs, most similar first
    """
    matches = []
    for other in members:
        if other.id == member.id:
            continue

        similarity = name_similarity(member, other)
        if similarity >= threshold:
            matches.append((other, similarity))

    matches.sort(key=lambda m: m[1], reverse=True)
    return matches
