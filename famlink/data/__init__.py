"""Reference data shipped with famlink."""

from .nationalities import (
    NationalityReference,
    nationality_reference,
    nationality_to_iso,
    nationality_to_emoji,
    iso_to_flag_emoji,
)

__all__ = [
    'NationalityReference',
    'nationality_reference',
    'nationality_to_iso',
    'nationality_to_emoji',
    'iso_to_flag_emoji',
]
