"""
Match scoring engine for newly added family members.

Adds up independent point rules across surname, nationality, birth period
and place, and shared relatives, then clamps the total to 100.
"""

import logging
from typing import List, Optional
from dataclasses import dataclass, field

from ..core.member import Member

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScoreBreakdown:
    """Intermediate signals and fired rules behind a match score."""

    same_last_name: bool = False
    same_nationality: bool = False
    same_birth_period_and_place: bool = False
    same_birth_country: bool = False

    # Ids from the new member's lists that the existing member also lists
    shared_relatives: List[str] = field(default_factory=list)

    # Names of the rules that added points, in evaluation order
    rules: List[str] = field(default_factory=list)

    raw_score: int = 0
    score: int = 0

    def __str__(self) -> str:
        """Human-readable description."""
        return (
            f"Match Score: {self.score}\n"
            f"  Same last name: {self.same_last_name}\n"
            f"  Same nationality: {self.same_nationality}\n"
            f"  Same birth period and place: {self.same_birth_period_and_place}\n"
            f"  Shared relatives: {len(self.shared_relatives)}\n"
            f"  Rules: {', '.join(self.rules) or 'none'}"
        )


class MatchScorer:
    """
    Calculates a 0-100 compatibility score between two members.

    Point rules (all evaluated independently, then summed):
    - Same last name with shared relatives: 40
    - Born within 5 years in the same city: 30
    - Same nationality and same birth country: 15
    - Shared relatives: 50
    - Same last name: 10
    - Same nationality: 10
    """

    POINTS = {
        'last_name_and_relatives': 40,
        'birth_period_and_place': 30,
        'nationality_and_country': 15,
        'shared_relatives': 50,
        'last_name': 10,
        'nationality': 10,
    }

    MAX_SCORE = 100

    # Birth years further apart than this are not the same period
    BIRTH_YEAR_TOLERANCE = 5

    def score(self, new_member: Member, existing_member: Member) -> int:
        """
        Calculate the match score of an existing member for a new one.

        Args:
            new_member: The member just added to the tree
            existing_member: A member already in the tree

        Returns:
            Integer score between 0 and 100
        """
        return self.explain(new_member, existing_member).score

    def explain(self, new_member: Member, existing_member: Member) -> ScoreBreakdown:
        """
        Calculate the match score along with the signals behind it.

        Args:
            new_member: The member just added to the tree
            existing_member: A member already in the tree

        Returns:
            ScoreBreakdown whose score equals score(new_member, existing_member)
        """
        result = ScoreBreakdown()

        result.same_last_name = self._same_last_name(new_member, existing_member)
        result.same_nationality = self._same_nationality(new_member, existing_member)
        result.shared_relatives = self._shared_relatives(new_member, existing_member)
        result.same_birth_period_and_place = self._same_birth_period_and_place(
            new_member, existing_member
        )
        result.same_birth_country = self._same_value(
            new_member.birth_country, existing_member.birth_country
        )

        has_shared_relatives = len(result.shared_relatives) > 0

        checks = [
            ('last_name_and_relatives', result.same_last_name and has_shared_relatives),
            ('birth_period_and_place', result.same_birth_period_and_place),
            ('nationality_and_country', result.same_nationality and result.same_birth_country),
            ('shared_relatives', has_shared_relatives),
            ('last_name', result.same_last_name),
            ('nationality', result.same_nationality),
        ]

        total = 0
        for rule, matched in checks:
            if matched:
                total += self.POINTS[rule]
                result.rules.append(rule)

        result.raw_score = total
        result.score = min(total, self.MAX_SCORE)

        logger.debug(
            "Scored %s against %s: %d (%s)",
            new_member.id, existing_member.id, result.score, ', '.join(result.rules) or 'no rules',
        )
        return result

    def _same_last_name(self, new_member: Member, existing_member: Member) -> bool:
        """Case-insensitive surname equality; a missing surname never matches."""
        name1 = (new_member.last_name or '').strip().lower()
        name2 = (existing_member.last_name or '').strip().lower()
        return bool(name1) and name1 == name2

    def _same_nationality(self, new_member: Member, existing_member: Member) -> bool:
        """True if the two nationality lists share at least one value."""
        nationalities = set(existing_member.nationality or [])
        return any(n in nationalities for n in new_member.nationality or [])

    def _shared_relatives(self, new_member: Member, existing_member: Member) -> List[str]:
        """
        Find relative ids listed by both members.

        Walks the new member's parents, children and siblings in order and
        keeps every id the existing member lists in any of its own three
        lists. Only the existing member's lists are consulted, so a parent
        that does not list the new member back contributes nothing.
        """
        existing_relatives = existing_member.relative_ids()
        new_relatives = (
            list(new_member.parents_ids or []) +
            list(new_member.children_ids or []) +
            list(new_member.brothers_ids or [])
        )
        return [rid for rid in new_relatives if rid in existing_relatives]

    def _same_birth_period_and_place(self, new_member: Member, existing_member: Member) -> bool:
        """Born within BIRTH_YEAR_TOLERANCE years of each other in the same city."""
        year1 = new_member.birth_year
        year2 = existing_member.birth_year
        if year1 is None or year2 is None:
            return False

        if abs(year1 - year2) > self.BIRTH_YEAR_TOLERANCE:
            return False

        return self._same_value(new_member.birth_city, existing_member.birth_city)

    @staticmethod
    def _same_value(value1: Optional[str], value2: Optional[str]) -> bool:
        """Exact equality of two non-empty strings."""
        return bool(value1) and value1 == value2


_default_scorer = MatchScorer()


def calculate_match_score(new_member: Member, existing_member: Member) -> int:
    """Score an existing member for a new member with the default scorer."""
    return _default_scorer.score(new_member, existing_member)
