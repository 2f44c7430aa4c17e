"""Localization engine infrastructure settings."""

from pathlib import Path

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings

# This file is at .../app/infrastructure/configuration/infrastructure/localization.py
_DEFAULT_LOCALES_DIR = Path(__file__).resolve().parents[3] / "locales"


class LocalizationSettings(InfrastructureSettings):
    """Localization engine configuration.

    Controls where language catalogs are discovered, which language is the
    mandatory baseline, and how messages are formatted.

    Environment Variables:
        I18N_DEFAULT_LANGUAGE: Baseline language tag (default: en-US)
        I18N_LOCALES_DIR: Directory holding one catalog file per language
        I18N_USE_ISOLATING: Wrap interpolated values in Unicode bidi isolation
            marks (default: False)
        I18N_PARALLEL_LOADING: Parse catalog files on a thread pool (default: True)
        I18N_MAX_WORKERS: Thread pool size for parallel loading (default: 4)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        loader = CatalogDirectoryLoader(settings.localization.locales_dir)
        ```
    """

    default_language: str = Field(
        default="en-US",
        alias="I18N_DEFAULT_LANGUAGE",
        pattern=r"^[A-Za-z0-9]+(?:[-_][A-Za-z0-9]+)*$",
        description="Language that must be present for the engine to start",
    )
    locales_dir: Path = Field(
        default=_DEFAULT_LOCALES_DIR,
        alias="I18N_LOCALES_DIR",
        description="Directory containing <language-tag>.<ext> catalog files",
    )
    use_isolating: bool = Field(
        default=False,
        alias="I18N_USE_ISOLATING",
        description="Insert FSI/PDI marks around interpolated placeables",
    )
    parallel_loading: bool = Field(
        default=True,
        alias="I18N_PARALLEL_LOADING",
        description="Parse catalog files concurrently",
    )
    max_workers: int = Field(
        default=4,
        alias="I18N_MAX_WORKERS",
        ge=1,
        description="Maximum worker threads used for parallel loading",
    )
