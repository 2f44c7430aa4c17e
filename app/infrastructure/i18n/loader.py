"""Catalog loading: extension dispatch and locales-directory scanning.

Catalog parsers are registered per file extension in a
``CatalogLoaderRegistry``. ``CatalogDirectoryLoader`` reads every
registered file of the locales directory, parses them (optionally on a
thread pool) and stages the successes for ``initialize_localization``.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from infrastructure.i18n.bundle import LanguageBundle
from infrastructure.i18n.catalog import parse_catalog, parse_yaml_catalog
from infrastructure.i18n.errors import CatalogLoadError, UnsupportedCatalogError
from infrastructure.i18n.lifecycle import LanguageAssets, LocalizationAssets
from infrastructure.i18n.models import RawCatalog
from infrastructure.lifecycle import Resources
from infrastructure.logging import bind_log_context, get_module_logger

logger = get_module_logger()

# parser(content, filename_stem, use_isolating=..., source_name=...)
CatalogParserFn = Callable[..., LanguageBundle]


class CatalogLoaderRegistry:
    """Maps file extensions to catalog parser functions.

    Example:
        registry = CatalogLoaderRegistry()
        registry.register(".ftl", parse_catalog)
        bundle = registry.load(RawCatalog("en-US", b"hello = Hello"))
    """

    def __init__(self):
        self._parsers: Dict[str, CatalogParserFn] = {}

    @staticmethod
    def _normalise(extension: str) -> str:
        extension = extension.lower()
        return extension if extension.startswith(".") else f".{extension}"

    def register(self, extension: str, parser: CatalogParserFn) -> None:
        self._parsers[self._normalise(extension)] = parser

    def get(self, extension: str) -> Optional[CatalogParserFn]:
        return self._parsers.get(self._normalise(extension))

    def supports(self, extension: str) -> bool:
        return self._normalise(extension) in self._parsers

    def extensions(self) -> Tuple[str, ...]:
        return tuple(sorted(self._parsers))

    def load(self, raw: RawCatalog, use_isolating: bool = False) -> LanguageBundle:
        """Parse a raw catalog with the parser registered for its extension.

        Raises:
            UnsupportedCatalogError: If no parser handles the extension.
            CatalogSyntaxError: If the catalog is malformed.
            LanguageTagError: If the file name is not a language tag.
        """
        parser = self.get(raw.extension)
        if parser is None:
            raise UnsupportedCatalogError(raw.extension)
        return parser(
            raw.content,
            raw.filename_stem,
            use_isolating=use_isolating,
            source_name=raw.file_name,
        )


def create_default_loader_registry() -> CatalogLoaderRegistry:
    """Registry with the Fluent (``.ftl``) and YAML (``.yml``, ``.yaml``) parsers."""
    registry = CatalogLoaderRegistry()
    registry.register(".ftl", parse_catalog)
    registry.register(".yml", parse_yaml_catalog)
    registry.register(".yaml", parse_yaml_catalog)
    return registry


def load_catalog(
    raw: RawCatalog,
    registry: Optional[CatalogLoaderRegistry] = None,
    use_isolating: bool = False,
) -> LanguageBundle:
    """Parse one raw catalog, dispatching on its extension."""
    registry = registry or create_default_loader_registry()
    return registry.load(raw, use_isolating=use_isolating)


@dataclass(frozen=True)
class CatalogLoadResult:
    file_name: str
    language: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class LoadSummary:
    """Outcome of loading a locales directory, one result per file."""

    results: Tuple[CatalogLoadResult, ...] = ()

    @property
    def loaded(self) -> Tuple[CatalogLoadResult, ...]:
        return tuple(r for r in self.results if r.ok)

    @property
    def failed(self) -> Tuple[CatalogLoadResult, ...]:
        return tuple(r for r in self.results if not r.ok)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def has_errors(self) -> bool:
        return any(not r.ok for r in self.results)


class CatalogDirectoryLoader:
    """Loads every catalog file of a locales directory.

    The directory is scanned non-recursively, in sorted file-name order.
    Files without a registered extension are ignored. Files that fail to
    read or parse are logged with the full error listing and dropped; the
    others are staged in load order.

    Attributes:
        directory: Locales directory.
        registry: Extension to parser table.
        use_isolating: Passed to every parsed bundle.
        parallel: Parse files on a thread pool.
        max_workers: Thread pool size when parallel.
    """

    def __init__(
        self,
        directory: Path,
        registry: Optional[CatalogLoaderRegistry] = None,
        use_isolating: bool = False,
        parallel: bool = True,
        max_workers: int = 4,
    ):
        self.directory = Path(directory)
        self.registry = registry or create_default_loader_registry()
        self.use_isolating = use_isolating
        self.parallel = parallel
        self.max_workers = max_workers

        if not self.directory.is_dir():
            raise ValueError(f"Locales directory not found: {self.directory}")

        logger.info(
            "initialized_catalog_loader",
            directory=str(self.directory),
            extensions=list(self.registry.extensions()),
            parallel=parallel,
        )

    def catalog_paths(self) -> List[Path]:
        return sorted(
            path
            for path in self.directory.iterdir()
            if path.is_file() and self.registry.supports(path.suffix)
        )

    def _load_path(self, path: Path) -> Tuple[CatalogLoadResult, Optional[LanguageBundle]]:
        with bind_log_context(catalog=path.name):
            try:
                raw = RawCatalog.from_path(path)
            except OSError as e:
                logger.error("catalog_read_failed", path=str(path), error=str(e))
                return CatalogLoadResult(path.name, error=str(e)), None

            try:
                bundle = self.registry.load(raw, use_isolating=self.use_isolating)
            except CatalogLoadError as e:
                logger.error("catalog_parse_failed", path=str(path), error=str(e))
                return CatalogLoadResult(path.name, error=str(e)), None

            logger.debug("catalog_parsed", language=str(bundle.tag))
            return CatalogLoadResult(path.name, language=str(bundle.tag)), bundle

    def load_into(self, resources: Resources) -> LoadSummary:
        """Parse every catalog and stage the bundles in ``resources``.

        Creates the ``LanguageAssets`` and ``LocalizationAssets`` resources
        when they are not present yet.

        Returns:
            LoadSummary with one result per catalog file.
        """
        assets = resources.get(LanguageAssets)
        if assets is None:
            assets = LanguageAssets()
            resources.insert(assets)
        staging = resources.get(LocalizationAssets)
        if staging is None:
            staging = LocalizationAssets()
            resources.insert(staging)

        paths = self.catalog_paths()
        if self.parallel and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(executor.map(self._load_path, paths))
        else:
            outcomes = [self._load_path(path) for path in paths]

        # Staged in file order regardless of which worker finished first
        for result, bundle in outcomes:
            if bundle is not None:
                staging.push(assets.add(bundle, result.file_name))

        summary = LoadSummary(tuple(result for result, _ in outcomes))
        logger.info(
            "catalogs_loaded",
            directory=str(self.directory),
            loaded=len(summary.loaded),
            failed=len(summary.failed),
        )
        return summary
