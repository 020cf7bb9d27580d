"""famlink - Relationship suggestions for family trees."""

__version__ = "0.1.0"

from .core.member import Member, BirthPlace
from .config import SuggestionConfig, default_config
from .matching import (
    MatchScorer,
    RelationClassifier,
    RelationLabel,
    SuggestionRanker,
    MatchResult,
    calculate_match_score,
    guess_relation,
    generate_suggestions,
)

__all__ = [
    'Member',
    'BirthPlace',
    'SuggestionConfig',
    'default_config',
    'MatchScorer',
    'RelationClassifier',
    'RelationLabel',
    'SuggestionRanker',
    'MatchResult',
    'calculate_match_score',
    'guess_relation',
    'generate_suggestions',
]
