"""Member class for representing people in a family tree."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, List, Dict, Any, Set, Self, Union


@dataclass(slots=True)
class BirthPlace:
    """Place where a member was born.

    Attributes:
        city: City name as entered by the tree owner
        country: Country name
        lat: Optional latitude, used for map display only
        lng: Optional longitude, used for map display only
    """

    city: Optional[str] = None
    country: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    def __str__(self) -> str:
        """Return "City, Country" with whichever parts are present."""
        return ", ".join(part for part in (self.city, self.country) if part)

    def to_dict(self) -> Dict[str, Any]:
        """Convert birth place to dictionary representation."""
        data: Dict[str, Any] = {'city': self.city, 'country': self.country}
        if self.lat is not None:
            data['lat'] = self.lat
        if self.lng is not None:
            data['lng'] = self.lng
        return data

    @classmethod
    def from_value(cls, value: Union[Dict[str, Any], str, None]) -> Optional[Self]:
        """Build a BirthPlace from a stored value.

        Args:
            value: Mapping with city/country/lat/lng keys, or a plain
                string which is taken as the city

        Returns:
            BirthPlace instance or None if the value is empty or of
            another type
        """
        if not value:
            return None
        if isinstance(value, str):
            return cls(city=value.strip() or None)
        if not isinstance(value, dict):
            return None
        return cls(
            city=value.get('city') or None,
            country=value.get('country') or None,
            lat=value.get('lat'),
            lng=value.get('lng'),
        )


def normalize_nationality(value: Any) -> List[str]:
    """Normalize a scalar-or-list nationality value to a list of strings.

    Args:
        value: None, a single nationality, or a collection of them

    Returns:
        List of non-empty nationality strings, in input order
    """
    if value is None:
        return []
    if isinstance(value, str):
        values = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        values = list(value)
    else:
        values = [value]
    return [str(v).strip() for v in values if v is not None and str(v).strip()]


def parse_date(value: Any) -> Optional[date]:
    """Parse a stored birth or death date.

    The document store keeps dates as epoch milliseconds; hand-edited
    exports may use ISO-8601 strings.

    Args:
        value: date, datetime, epoch milliseconds or ISO-8601 string

    Returns:
        A date, or None when the value is missing or unparseable
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
        except ValueError:
            pass
        # Bare year, e.g. "1920"
        if text.isdigit() and len(text) == 4:
            return date(int(text), 1, 1)
    return None


def _pick(data: Dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@dataclass(slots=True)
class Member:
    """Represents a person node within one family tree.

    Relationship lists are stored as entered and are not guaranteed to be
    symmetric: a listed parent may not list this member back as a child.

    Attributes:
        id: Identifier, unique within the tree
        first_name: Given name
        last_name: Family name
        birth_date: Date of birth, if known
        birth_place: Place of birth, if known
        nationality: Nationalities, always a list
        parents_ids: Ids of the member's parents
        children_ids: Ids of the member's children
        brothers_ids: Ids of the member's siblings
        tree_id: Id of the tree that owns this member
        gender: 'male', 'female', 'other' or None
        death_date: Date of death, if known
    """

    id: str
    first_name: str = ""
    last_name: str = ""
    birth_date: Optional[date] = None
    birth_place: Optional[BirthPlace] = None
    nationality: List[str] = field(default_factory=list)
    parents_ids: List[str] = field(default_factory=list)
    children_ids: List[str] = field(default_factory=list)
    brothers_ids: List[str] = field(default_factory=list)
    tree_id: Optional[str] = None
    gender: Optional[str] = None
    death_date: Optional[date] = None

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        name = self.full_name or "Unknown"
        if self.birth_year is not None:
            return f"{name} (b. {self.birth_year})"
        return name

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"Member(id={self.id!r}, name={self.full_name!r})"

    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def birth_year(self) -> Optional[int]:
        """Year of birth, or None."""
        return self.birth_date.year if self.birth_date else None

    @property
    def birth_city(self) -> Optional[str]:
        """City of birth, or None."""
        return self.birth_place.city if self.birth_place else None

    @property
    def birth_country(self) -> Optional[str]:
        """Country of birth, or None."""
        return self.birth_place.country if self.birth_place else None

    def relative_ids(self) -> Set[str]:
        """Get the union of parent, child and sibling ids."""
        return set(self.parents_ids or []) | set(self.children_ids or []) | set(self.brothers_ids or [])

    def to_dict(self) -> Dict[str, Any]:
        """Convert member to the document-store dictionary shape."""
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'birthDate': self.birth_date.isoformat() if self.birth_date else None,
            'birthPlace': self.birth_place.to_dict() if self.birth_place else None,
            'nationality': list(self.nationality),
            'parentsIds': list(self.parents_ids),
            'childrenIds': list(self.children_ids),
            'brothersIds': list(self.brothers_ids),
            'treeId': self.tree_id,
            'gender': self.gender,
            'deathDate': self.death_date.isoformat() if self.death_date else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        """Create a Member from a document-store record.

        Both camelCase (as stored) and snake_case keys are accepted.
        Optional fields that are missing or unparseable become empty.

        Args:
            data: Dictionary containing member data

        Returns:
            Member instance

        Raises:
            TypeError: If data is not a mapping
            KeyError: If the record has no id
        """
        if not isinstance(data, dict):
            raise TypeError(f"Member record must be a mapping, got {type(data).__name__}")

        return cls(
            id=str(data['id']),
            first_name=_pick(data, 'firstName', 'first_name') or "",
            last_name=_pick(data, 'lastName', 'last_name') or "",
            birth_date=parse_date(_pick(data, 'birthDate', 'birth_date')),
            birth_place=BirthPlace.from_value(_pick(data, 'birthPlace', 'birth_place')),
            nationality=normalize_nationality(data.get('nationality')),
            parents_ids=list(_pick(data, 'parentsIds', 'parents_ids') or []),
            children_ids=list(_pick(data, 'childrenIds', 'children_ids') or []),
            brothers_ids=list(_pick(data, 'brothersIds', 'brothers_ids') or []),
            tree_id=_pick(data, 'treeId', 'tree_id'),
            gender=data.get('gender'),
            death_date=parse_date(_pick(data, 'deathDate', 'death_date')),
        )
