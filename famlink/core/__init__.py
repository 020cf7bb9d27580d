"""Core data model for family tree members."""

from .member import Member, BirthPlace, normalize_nationality, parse_date

__all__ = ['Member', 'BirthPlace', 'normalize_nationality', 'parse_date']
