"""Tree-level statistics."""

from .tree_stats import (
    DistributionEntry,
    TreeSummary,
    UpcomingBirthday,
    surname_distribution,
    birth_country_distribution,
    nationality_distribution,
    tree_summary,
    upcoming_birthdays,
)

__all__ = [
    'DistributionEntry',
    'TreeSummary',
    'UpcomingBirthday',
    'surname_distribution',
    'birth_country_distribution',
    'nationality_distribution',
    'tree_summary',
    'upcoming_birthdays',
]
