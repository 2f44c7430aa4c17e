"""Localization engine - catalogs, language bundles and the registry.

Turns per-language catalog files into read-only language bundles and
exposes them through a single ``Localization`` resource that formats
messages for the active language.

Main components:
- catalog: parse_catalog / parse_yaml_catalog (bytes -> LanguageBundle),
  built on fluent.syntax
- bundle: LanguageBundle and FormattedMessage, built on fluent.runtime
- loader: CatalogLoaderRegistry, load_catalog, CatalogDirectoryLoader
- registry: Localization (localize / localize_with_args)
- lifecycle: LanguageAssets, LocalizationAssets, initialize_localization
- factory: setup_localization, create_localization
"""

from infrastructure.i18n.bundle import FormattedMessage, LanguageBundle
from infrastructure.i18n.catalog import decode_catalog, parse_catalog, parse_yaml_catalog
from infrastructure.i18n.errors import (
    CatalogLoadError,
    CatalogSyntaxError,
    LanguageTagError,
    LocalizationError,
    MessageNotFoundError,
    MissingDefaultLanguageError,
    ResolverError,
    SyntaxIssue,
    UnsupportedCatalogError,
)
from infrastructure.i18n.factory import create_localization, setup_localization
from infrastructure.i18n.lifecycle import (
    LanguageAssets,
    LanguageHandle,
    LocalizationAssets,
    initialize_localization,
)
from infrastructure.i18n.loader import (
    CatalogDirectoryLoader,
    CatalogLoaderRegistry,
    CatalogLoadResult,
    LoadSummary,
    create_default_loader_registry,
    load_catalog,
)
from infrastructure.i18n.memoizer import ConcurrentMemoizer
from infrastructure.i18n.models import (
    DEFAULT_LANGUAGE,
    LANGUAGE_NAME_ID,
    LanguageTag,
    RawCatalog,
)
from infrastructure.i18n.registry import Localization

__all__ = [
    # Models
    "LanguageTag",
    "RawCatalog",
    "DEFAULT_LANGUAGE",
    "LANGUAGE_NAME_ID",
    # Parsing
    "decode_catalog",
    "parse_catalog",
    "parse_yaml_catalog",
    # Bundles
    "LanguageBundle",
    "FormattedMessage",
    "ConcurrentMemoizer",
    # Loading
    "CatalogLoaderRegistry",
    "CatalogLoadResult",
    "CatalogDirectoryLoader",
    "LoadSummary",
    "create_default_loader_registry",
    "load_catalog",
    # Registry and lifecycle
    "Localization",
    "LanguageAssets",
    "LanguageHandle",
    "LocalizationAssets",
    "initialize_localization",
    "setup_localization",
    "create_localization",
    # Errors
    "LocalizationError",
    "CatalogLoadError",
    "CatalogSyntaxError",
    "SyntaxIssue",
    "LanguageTagError",
    "UnsupportedCatalogError",
    "MessageNotFoundError",
    "ResolverError",
    "MissingDefaultLanguageError",
]
