"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the
localization engine using Pydantic BaseSettings with domain-based
organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    LocalizationSettings: Localization engine settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    locales_dir = settings.localization.locales_dir
    default_language = settings.localization.default_language
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure.localization import (
    LocalizationSettings,
)

__all__ = ["Settings", "LocalizationSettings"]
