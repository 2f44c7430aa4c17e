"""Factory functions for wiring the localization engine into a host.

Provides convenience functions that read ``LocalizationSettings`` and
connect the directory loader and the staging hook to the host lifecycle.
"""

from pathlib import Path
from typing import Optional

from infrastructure.configuration import LocalizationSettings
from infrastructure.i18n.lifecycle import initialize_localization
from infrastructure.i18n.loader import (
    CatalogDirectoryLoader,
    CatalogLoaderRegistry,
    LoadSummary,
)
from infrastructure.i18n.models import LanguageTag
from infrastructure.i18n.registry import Localization
from infrastructure.lifecycle import LoadingPhase, Resources
from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings

logger = get_module_logger()


def setup_localization(
    phase: LoadingPhase,
    settings: Optional[LocalizationSettings] = None,
    registry: Optional[CatalogLoaderRegistry] = None,
) -> LoadSummary:
    """Load the locales directory and register the staging exit hook.

    The bundles are staged in ``phase.resources``; the ``Localization``
    resource appears once ``phase.complete()`` runs the hook.

    Args:
        phase: Host loading phase (still in ``ASSET_LOADING``).
        settings: Localization settings (default: from ``get_settings()``).
        registry: Extension to parser table (default: ftl and yaml).

    Returns:
        LoadSummary of the directory scan.

    Raises:
        LanguageTagError: If the configured default language is not a tag.
        ValueError: If the locales directory does not exist.

    Usage:
        resources = Resources()
        phase = LoadingPhase(resources)
        setup_localization(phase)
        phase.complete()
        localization = resources.require(Localization)
    """
    settings = settings or get_settings().localization
    default_language = LanguageTag.parse(settings.default_language)

    loader = CatalogDirectoryLoader(
        settings.locales_dir,
        registry=registry,
        use_isolating=settings.use_isolating,
        parallel=settings.parallel_loading,
        max_workers=settings.max_workers,
    )

    def localization_exit_hook(resources: Resources) -> None:
        initialize_localization(resources, default_language)

    phase.on_exit(localization_exit_hook)
    summary = loader.load_into(phase.resources)

    logger.info(
        "localization_setup",
        locales_dir=str(settings.locales_dir),
        default_language=str(default_language),
        loaded=len(summary.loaded),
        failed=len(summary.failed),
    )
    return summary


def create_localization(
    locales_dir: Optional[Path] = None,
    default_language: Optional[str] = None,
    use_isolating: Optional[bool] = None,
    parallel: Optional[bool] = None,
) -> Localization:
    """Load a locales directory and build a ``Localization`` in one call.

    Runs a private loading phase, for scripts and tests that have no host
    lifecycle of their own. Arguments left as None come from settings.

    Raises:
        MissingDefaultLanguageError: If the default language failed to load.

    Usage:
        localization = create_localization(Path("app/locales"))
        localization.localize_with_args("greeting", {"name": "Ada"})
    """
    overrides = {}
    if locales_dir is not None:
        overrides["locales_dir"] = Path(locales_dir)
    if default_language is not None:
        overrides["default_language"] = default_language
    if use_isolating is not None:
        overrides["use_isolating"] = use_isolating
    if parallel is not None:
        overrides["parallel_loading"] = parallel

    settings = get_settings().localization.model_copy(update=overrides)

    resources = Resources()
    phase = LoadingPhase(resources)
    setup_localization(phase, settings)
    phase.complete()
    return resources.require(Localization)
