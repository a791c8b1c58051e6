"""Application settings using pydantic-settings.

Settings can be overridden via environment variables with the
TIMELINE_ANALYZER_ prefix.

Environment Variables:
    TIMELINE_ANALYZER_RULES_STORE_PATH: Location of the persisted rule set
    TIMELINE_ANALYZER_TOP_CONSUMERS_LIMIT: Entries per top-consumer list
    TIMELINE_ANALYZER_MAX_DISPLAYED_WARNINGS: Warnings shown before truncating
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from timeline_analyzer.config.defaults import (
    DEFAULT_MAX_DISPLAYED_WARNINGS,
    DEFAULT_RULES_STORE_PATH,
    DEFAULT_TOP_CONSUMERS_LIMIT,
)
from timeline_analyzer.config.exceptions import ConfigurationError

__all__ = ["AnalyzerSettings", "get_settings"]


class AnalyzerSettings(BaseSettings):
    """Settings for timeline analysis and rule-set persistence.

    Attributes:
        rules_store_path: JSON file holding the persisted rule set.
        top_consumers_limit: Maximum entries in each top-consumer list.
        max_displayed_warnings: Number of graph warnings shown before
            the rest are summarized.

    """

    model_config = SettingsConfigDict(
        env_prefix="TIMELINE_ANALYZER_",
        extra="ignore",
    )

    rules_store_path: Path = Field(
        default=DEFAULT_RULES_STORE_PATH,
        description="JSON file holding the persisted rule set",
    )
    top_consumers_limit: int = Field(
        default=DEFAULT_TOP_CONSUMERS_LIMIT,
        ge=1,
        description="Maximum entries in each top-consumer list",
    )
    max_displayed_warnings: int = Field(
        default=DEFAULT_MAX_DISPLAYED_WARNINGS,
        ge=1,
        description="Number of warnings shown before truncating",
    )


@lru_cache(maxsize=1)
def get_settings() -> AnalyzerSettings:
    """Get the cached settings singleton.

    Returns:
        The AnalyzerSettings instance with values from environment variables.

    Raises:
        ConfigurationError: If an environment variable holds an invalid value.

    """
    try:
        return AnalyzerSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid timeline-analyzer settings: {e}") from e
