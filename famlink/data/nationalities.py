"""
Nationality reference data.

Maps the nationality names offered by the member form (French adjectives,
e.g. 'Française') to ISO 3166-1 alpha-2 codes and flag emoji.
"""

import json
import logging
from typing import Dict, List, Optional
from pathlib import Path

logger = logging.getLogger(__name__)

# Offset from 'A' to REGIONAL INDICATOR SYMBOL LETTER A
REGIONAL_INDICATOR_OFFSET = 127397

UNKNOWN_FLAG = '\U0001F3F3'


class NationalityReference:
    """Loads and serves the nationality to ISO code table."""

    _instance = None
    _initialized = False

    def __new__(cls):
        """Singleton pattern to ensure only one instance loads the data."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize the reference data."""
        if not NationalityReference._initialized:
            self.data_file = Path(__file__).parent / 'nationalities.json'
            self.iso_codes: Dict[str, str] = {}

            # Lowercase name -> canonical name
            self._lookup: Dict[str, str] = {}

            self._load()
            NationalityReference._initialized = True

    def _load(self):
        """Load the nationality table from JSON."""
        if not self.data_file.exists():
            logger.warning(f"Nationality data not found at {self.data_file}")
            return

        with open(self.data_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        for name, code in data.get('nationalities', {}).items():
            self.iso_codes[name] = code.upper()
            self._lookup[name.lower()] = name

        logger.debug(f"Loaded {len(self.iso_codes)} nationalities")

    def names(self) -> List[str]:
        """All known nationality names, in file order."""
        return list(self.iso_codes)

    def to_iso(self, nationality: str) -> Optional[str]:
        """
        Get the ISO code for a nationality name.

        Args:
            nationality: Name as stored on a member (exact or any casing)

        Returns:
            Two-letter ISO code or None if unknown
        """
        if not nationality:
            return None

        name = nationality.strip()
        if name in self.iso_codes:
            return self.iso_codes[name]

        canonical = self._lookup.get(name.lower())
        return self.iso_codes[canonical] if canonical else None


def iso_to_flag_emoji(iso: str) -> str:
    """
    Convert a two-letter ISO country code to its flag emoji.

    Args:
        iso: ISO 3166-1 alpha-2 code, any casing

    Returns:
        Flag emoji made of two regional indicator symbols
    """
    return ''.join(chr(REGIONAL_INDICATOR_OFFSET + ord(c)) for c in iso.upper())


def nationality_to_iso(nationality: str) -> Optional[str]:
    """Get the ISO code for a nationality name, or None."""
    return nationality_reference.to_iso(nationality)


def nationality_to_emoji(nationality: str) -> str:
    """Get the flag emoji for a nationality name (white flag if unknown)."""
    code = nationality_to_iso(nationality)
    if not code:
        return UNKNOWN_FLAG
    return iso_to_flag_emoji(code)


# Create a singleton instance for easy import
nationality_reference = NationalityReference()
