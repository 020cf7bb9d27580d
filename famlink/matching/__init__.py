"""
Relationship suggestion engine.

This module scores how likely an existing tree member is related to a newly
added one, guesses the relationship, and ranks the candidates.
"""

from .scorer import MatchScorer, ScoreBreakdown, calculate_match_score
from .relation import RelationClassifier, RelationLabel, guess_relation
from .suggester import SuggestionRanker, MatchResult, generate_suggestions

__all__ = [
    'MatchScorer',
    'ScoreBreakdown',
    'calculate_match_score',
    'RelationClassifier',
    'RelationLabel',
    'guess_relation',
    'SuggestionRanker',
    'MatchResult',
    'generate_suggestions',
]
