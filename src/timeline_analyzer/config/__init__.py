"""Configuration module for timeline-analyzer.

Provides default constants and centralized settings via pydantic-settings.
"""

from timeline_analyzer.config.exceptions import ConfigurationError
from timeline_analyzer.config.settings import AnalyzerSettings, get_settings

__all__ = [
    "AnalyzerSettings",
    "ConfigurationError",
    "get_settings",
]
