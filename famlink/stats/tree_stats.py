"""Summary statistics over the members of one family tree."""

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import List, Dict, Any, Iterable, Optional

from ..core.member import Member

UNKNOWN_COUNTRY = "Unknown"


@dataclass(slots=True)
class DistributionEntry:
    """One bucket of a distribution."""
    label: str
    count: int
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {'label': self.label, 'count': self.count, 'percentage': self.percentage}


def _percent(count: int, total: int) -> int:
    """Whole percentage, halves rounded up."""
    return int(count * 100 / total + 0.5)


def _distribution(counts: Counter, total: int) -> List[DistributionEntry]:
    """Turn counts into entries sorted by count, ties in first-seen order."""
    entries = [
        DistributionEntry(label=label, count=count, percentage=_percent(count, total))
        for label, count in counts.items()
    ]
    entries.sort(key=lambda e: e.count, reverse=True)
    return entries


def surname_distribution(members: Iterable[Member]) -> List[DistributionEntry]:
    """Count members per last name.

    Members without a last name are left out of both the counts and the
    total the percentages are computed against.
    """
    counts = Counter()
    for member in members:
        last_name = (member.last_name or '').strip()
        if last_name:
            counts[last_name] += 1

    total = sum(counts.values())
    if total == 0:
        return []
    return _distribution(counts, total)


def birth_country_distribution(members: Iterable[Member]) -> List[DistributionEntry]:
    """Count members with a known birth place per birth country.

    A birth place without a country is counted as "Unknown".
    """
    counts = Counter()
    for member in members:
        if member.birth_place is None:
            continue
        counts[member.birth_place.country or UNKNOWN_COUNTRY] += 1

    total = sum(counts.values())
    if total == 0:
        return []
    return _distribution(counts, total)


def nationality_distribution(members: Iterable[Member]) -> List[DistributionEntry]:
    """Count members per nationality; percentages are against members with one."""
    counts = Counter()
    total = 0
    for member in members:
        nationalities = list(dict.fromkeys(member.nationality))
        if not nationalities:
            continue
        total += 1
        counts.update(nationalities)

    if total == 0:
        return []
    return _distribution(counts, total)


@dataclass(slots=True)
class TreeSummary:
    """Headline numbers for a tree."""
    member_count: int
    surname_count: int
    country_count: int
    earliest_birth_year: Optional[int] = None
    latest_birth_year: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'member_count': self.member_count,
            'surname_count': self.surname_count,
            'country_count': self.country_count,
            'earliest_birth_year': self.earliest_birth_year,
            'latest_birth_year': self.latest_birth_year,
        }


def tree_summary(members: Iterable[Member]) -> TreeSummary:
    """Compute headline numbers for a tree.

    Args:
        members: Every member of the tree

    Returns:
        TreeSummary; birth-year bounds are None when no member has a birth date
    """
    members = list(members)
    years = [m.birth_year for m in members if m.birth_year is not None]
    countries = {m.birth_country for m in members if m.birth_country}

    return TreeSummary(
        member_count=len(members),
        surname_count=len(surname_distribution(members)),
        country_count=len(countries),
        earliest_birth_year=min(years) if years else None,
        latest_birth_year=max(years) if years else None,
    )


@dataclass(slots=True)
class UpcomingBirthday:
    """A member whose birthday falls within the next few days."""
    member: Member
    birthday: date
    days_until: int

    @property
    def age(self) -> int:
        """Age the member turns on that birthday."""
        return self.birthday.year - self.member.birth_date.year

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.member.id,
            'name': self.member.full_name or "Unknown",
            'date': self.birthday.isoformat(),
            'days_until': self.days_until,
            'age': self.age,
        }


def _birthday_in(birth_date: date, year: int) -> date:
    """Birthday in a given year; 29 February falls on the 28th otherwise."""
    try:
        return birth_date.replace(year=year)
    except ValueError:
        return date(year, 2, 28)


def upcoming_birthdays(
    members: Iterable[Member],
    today: Optional[date] = None,
    days: int = 30,
    limit: Optional[int] = 4
) -> List[UpcomingBirthday]:
    """
    List the members whose next birthday is at most `days` days away.

    A birthday that already passed this year is looked up next year, so
    early January birthdays show up in late December.

    Args:
        members: Every member of the tree
        today: Reference date (defaults to date.today())
        days: Window size in days, both ends included
        limit: Maximum number of birthdays, None for all

    Returns:
        Soonest birthdays first, ties in input order

    Raises:
        ValueError: If days or limit is negative
    """
    if days < 0:
        raise ValueError(f"days must be zero or more, got {days}")
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be zero or more, got {limit}")

    today = today or date.today()
    upcoming = []

    for member in members:
        # Not born yet, or no date at all
        if member.birth_date is None or member.birth_date > today:
            continue

        next_birthday = _birthday_in(member.birth_date, today.year)
        if next_birthday < today:
            next_birthday = _birthday_in(member.birth_date, today.year + 1)

        days_until = (next_birthday - today).days
        if days_until <= days:
            upcoming.append(UpcomingBirthday(member=member, birthday=next_birthday, days_until=days_until))

    upcoming.sort(key=lambda b: b.days_until)

    if limit is not None:
        upcoming = upcoming[:limit]
    return upcoming
