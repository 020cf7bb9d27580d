"""Configuration for relationship suggestions."""

from dataclasses import dataclass, fields
from typing import Dict, Any, Optional, Self


@dataclass
class SuggestionConfig:
    """Configuration for the suggestion ranker and its front ends."""

    # Candidates must score strictly above this to be suggested
    min_score: int = 30

    # Default slice applied by the CLI and API (None = everything)
    max_results: Optional[int] = None

    # Language for relation labels shown to users ('en' or 'fr')
    locale: str = "en"

    # Log every kept suggestion at INFO instead of DEBUG
    log_suggestions: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        """Create a config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# Global configuration instance
default_config = SuggestionConfig()
