"""Member search helpers."""

from .member_search import (
    search_members,
    distinctive_info,
    find_similar_members,
    name_similarity,
    get_metaphone,
)

__all__ = [
    'search_members',
    'distinctive_info',
    'find_similar_members',
    'name_similarity',
    'get_metaphone',
]
