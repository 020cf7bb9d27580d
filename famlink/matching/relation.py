"""
Relationship inference between two family members.

Uses direct identity links first, then shared parents, then birth-year
gaps as a rough proxy for generation.
"""

import logging
from enum import Enum
from typing import Optional

from ..core.member import Member

logger = logging.getLogger(__name__)


class RelationLabel(Enum):
    """Probable role of an existing member relative to a new member."""
    UNKNOWN = "Unknown"
    PARENT = "Parent"
    CHILD = "Child"
    SIBLING = "Sibling"
    FIRST_COUSIN = "FirstCousin"
    DISTANT_COUSIN = "DistantCousin"
    POSSIBLE_AUNT_UNCLE = "PossibleAuntUncle"
    POSSIBLE_NIECE_NEPHEW = "PossibleNieceNephew"
    POSSIBLE_FAMILY_LINK = "PossibleFamilyLink"

    def display_name(self, locale: str = "en") -> str:
        """Human-readable label in the given locale ('en' or 'fr')."""
        names = DISPLAY_NAMES.get(locale, DISPLAY_NAMES['en'])
        return names[self]


DISPLAY_NAMES = {
    'en': {
        RelationLabel.UNKNOWN: "Unknown link",
        RelationLabel.PARENT: "Parent",
        RelationLabel.CHILD: "Child",
        RelationLabel.SIBLING: "Brother/Sister",
        RelationLabel.FIRST_COUSIN: "First cousin",
        RelationLabel.DISTANT_COUSIN: "Distant cousin",
        RelationLabel.POSSIBLE_AUNT_UNCLE: "Possible uncle/aunt",
        RelationLabel.POSSIBLE_NIECE_NEPHEW: "Possible nephew/niece",
        RelationLabel.POSSIBLE_FAMILY_LINK: "Possible family link (undefined)",
    },
    'fr': {
        RelationLabel.UNKNOWN: "Lien inconnu",
        RelationLabel.PARENT: "Parent",
        RelationLabel.CHILD: "Enfant",
        RelationLabel.SIBLING: "Frère/Sœur",
        RelationLabel.FIRST_COUSIN: "Cousin germain",
        RelationLabel.DISTANT_COUSIN: "Cousin éloigné",
        RelationLabel.POSSIBLE_AUNT_UNCLE: "Oncle/Tante potentiel",
        RelationLabel.POSSIBLE_NIECE_NEPHEW: "Neveu/Nièce potentiel",
        RelationLabel.POSSIBLE_FAMILY_LINK: "Lien familial possible (non défini)",
    },
}


class RelationClassifier:
    """
    Infers the probable relationship of an existing member to a new member.

    Rules are checked in order and the first match wins:
    1. Direct parent link in either direction (Parent / Child)
    2. Direct sibling link in either direction (Sibling)
    3. A parent id listed by both (Sibling)
    4. Cross-containment between the two parent lists (FirstCousin)
    5. Birth-year gap (DistantCousin / PossibleAuntUncle / PossibleNieceNephew)
    6. Fallback (PossibleFamilyLink)

    Links are not assumed to be symmetric, so both directions are checked.
    """

    # Birth-year gaps, in years
    COUSIN_MAX_AGE_GAP = 15
    GENERATION_MIN_AGE_GAP = 20

    def classify(
        self,
        new_member: Optional[Member],
        existing_member: Optional[Member]
    ) -> RelationLabel:
        """
        Guess how the existing member relates to the new member.

        Args:
            new_member: The member just added to the tree
            existing_member: A member already in the tree

        Returns:
            RelationLabel describing the existing member's role
        """
        if new_member is None or existing_member is None:
            return RelationLabel.UNKNOWN

        relation = self._classify(new_member, existing_member)
        logger.debug("Relation of %s to %s: %s", existing_member.id, new_member.id, relation.value)
        return relation

    def _classify(self, new_member: Member, existing_member: Member) -> RelationLabel:
        new_parents = new_member.parents_ids or []
        existing_parents = existing_member.parents_ids or []

        if existing_member.id in new_parents:
            return RelationLabel.PARENT
        if new_member.id in existing_parents:
            return RelationLabel.CHILD

        if existing_member.id in (new_member.brothers_ids or []):
            return RelationLabel.SIBLING
        if new_member.id in (existing_member.brothers_ids or []):
            return RelationLabel.SIBLING

        if any(pid in existing_parents for pid in new_parents):
            return RelationLabel.SIBLING

        # One level of cross-containment, not a real grandparent walk
        if new_parents and existing_parents:
            shared_grandparents = any(
                ep in new_parents or p in existing_parents
                for p in new_parents
                for ep in existing_parents
            )
            if shared_grandparents:
                return RelationLabel.FIRST_COUSIN

        return self._classify_by_age(new_member, existing_member)

    def _classify_by_age(self, new_member: Member, existing_member: Member) -> RelationLabel:
        """Use the birth-year gap as a generation proxy."""
        new_year = new_member.birth_year
        existing_year = existing_member.birth_year

        if new_year is not None and existing_year is not None:
            age_diff = new_year - existing_year

            if abs(age_diff) < self.COUSIN_MAX_AGE_GAP:
                return RelationLabel.DISTANT_COUSIN
            if age_diff > self.GENERATION_MIN_AGE_GAP:
                return RelationLabel.POSSIBLE_AUNT_UNCLE
            if age_diff < -self.GENERATION_MIN_AGE_GAP:
                return RelationLabel.POSSIBLE_NIECE_NEPHEW

        return RelationLabel.POSSIBLE_FAMILY_LINK


_default_classifier = RelationClassifier()


def guess_relation(
    new_member: Optional[Member],
    existing_member: Optional[Member]
) -> RelationLabel:
    """Classify a pair of members with the default classifier."""
    return _default_classifier.classify(new_member, existing_member)
