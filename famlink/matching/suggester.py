"""
Suggestion ranking for a newly added family member.

Scores and classifies every other member of the tree, drops weak matches
and orders the rest by score.
"""

import logging
from typing import List, Dict, Any, Iterable, Optional
from dataclasses import dataclass

from ..config import SuggestionConfig, default_config
from ..core.member import Member
from .relation import RelationClassifier, RelationLabel
from .scorer import MatchScorer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchResult:
    """A candidate member with its score and probable relation."""
    member: Member
    score: int
    relation: RelationLabel

    def __str__(self) -> str:
        """Human-readable description."""
        return f"{self.member} - {self.relation.display_name()} ({self.score}%)"

    def to_dict(self, locale: str = "en") -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            'member': self.member.to_dict(),
            'score': self.score,
            'relation': self.relation.value,
            'relation_label': self.relation.display_name(locale),
        }


class SuggestionRanker:
    """
    Ranks the members of a tree as probable relatives of a new member.

    Every candidate other than the new member itself is scored and
    classified; candidates scoring at or below the configured threshold are
    dropped and the rest are sorted by score, highest first. Ties keep
    their input order.
    """

    def __init__(
        self,
        scorer: Optional[MatchScorer] = None,
        classifier: Optional[RelationClassifier] = None,
        config: Optional[SuggestionConfig] = None
    ):
        """
        Initialize the ranker.

        Args:
            scorer: Score engine (defaults to MatchScorer())
            classifier: Relation classifier (defaults to RelationClassifier())
            config: Suggestion settings (defaults to default_config)
        """
        self.scorer = scorer or MatchScorer()
        self.classifier = classifier or RelationClassifier()
        self.config = config or default_config

    def suggest(self, new_member: Member, all_members: Iterable[Member]) -> List[MatchResult]:
        """
        Build the ranked suggestion list for a new member.

        Args:
            new_member: The member just added to the tree
            all_members: Every member of the same tree (may include new_member)

        Returns:
            Suggestions scoring above the threshold, highest score first.
            An empty list is a normal outcome.
        """
        matches = []
        log = logger.info if self.config.log_suggestions else logger.debug

        for candidate in all_members:
            if candidate.id == new_member.id:
                continue

            score = self.scorer.score(new_member, candidate)
            if score <= self.config.min_score:
                continue

            relation = self.classifier.classify(new_member, candidate)
            matches.append(MatchResult(member=candidate, score=score, relation=relation))
            log("Suggesting %s for %s: %s (%d)", candidate.id, new_member.id, relation.value, score)

        # list.sort is stable, so equal scores keep input order
        matches.sort(key=lambda m: m.score, reverse=True)

        logger.debug("%d suggestion(s) for %s", len(matches), new_member.id)
        return matches

    def top(
        self,
        new_member: Member,
        all_members: Iterable[Member],
        limit: Optional[int] = None
    ) -> List[MatchResult]:
        """
        Return the first suggestions only.

        Args:
            new_member: The member just added to the tree
            all_members: Every member of the same tree
            limit: Maximum number of suggestions (defaults to config.max_results,
                None meaning no limit)

        Returns:
            Leading slice of suggest()

        Raises:
            ValueError: If the limit is negative
        """
        if limit is None:
            limit = self.config.max_results
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be zero or more, got {limit}")

        matches = self.suggest(new_member, all_members)
        if limit is not None:
            matches = matches[:limit]
        return matches


def generate_suggestions(new_member: Member, all_members: Iterable[Member]) -> List[MatchResult]:
    """Rank all_members for new_member with default settings."""
    return SuggestionRanker().suggest(new_member, all_members)
