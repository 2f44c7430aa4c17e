"""Staging of language bundles during the loading phase.

While assets load, each parsed bundle is stored in ``LanguageAssets`` and
its handle is appended to the ``LocalizationAssets`` staging resource.
``initialize_localization`` runs once as a loading-phase exit hook: it
moves the staged bundles into a ``Localization`` resource and drops the
staging resource.
"""

import itertools
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional

from infrastructure.i18n.bundle import LanguageBundle
from infrastructure.i18n.models import DEFAULT_LANGUAGE, LanguageTag
from infrastructure.i18n.registry import Localization
from infrastructure.lifecycle import Resources
from infrastructure.logging import get_module_logger

logger = get_module_logger()


@dataclass(frozen=True)
class LanguageHandle:
    """Opaque reference to a bundle held by ``LanguageAssets``."""

    id: int
    source: str = ""


class LanguageAssets:
    """Thread-safe store of loaded bundles keyed by handle."""

    def __init__(self):
        self._bundles: Dict[LanguageHandle, LanguageBundle] = {}
        self._ids = itertools.count(1)
        self._lock = Lock()

    def add(self, bundle: LanguageBundle, source: str = "") -> LanguageHandle:
        with self._lock:
            handle = LanguageHandle(next(self._ids), source)
            self._bundles[handle] = bundle
        return handle

    def get(self, handle: LanguageHandle) -> Optional[LanguageBundle]:
        with self._lock:
            return self._bundles.get(handle)

    def remove(self, handle: LanguageHandle) -> Optional[LanguageBundle]:
        with self._lock:
            return self._bundles.pop(handle, None)

    def __contains__(self, handle: object) -> bool:
        with self._lock:
            return handle in self._bundles

    def __len__(self) -> int:
        with self._lock:
            return len(self._bundles)


@dataclass
class LocalizationAssets:
    """Handles of the bundles to register, in load order."""

    handles: List[LanguageHandle] = field(default_factory=list)
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def push(self, handle: LanguageHandle) -> None:
        with self._lock:
            self.handles.append(handle)


def initialize_localization(
    resources: Resources, default_language: "LanguageTag | str" = DEFAULT_LANGUAGE
) -> Localization:
    """Build the ``Localization`` resource from the staged bundles.

    Every staged bundle is removed from ``LanguageAssets`` in handle order;
    handles whose bundle is gone are skipped. The ``Localization`` resource
    is inserted and ``LocalizationAssets`` is removed.

    Args:
        resources: Host resource container.
        default_language: Tag of the mandatory baseline language.

    Returns:
        The installed Localization.

    Raises:
        ResourceNotFoundError: If the staging or asset resource is missing.
        MissingDefaultLanguageError: If no staged bundle has the default tag.
    """
    staging = resources.require(LocalizationAssets)
    assets = resources.require(LanguageAssets)

    languages = []
    for handle in staging.handles:
        bundle = assets.remove(handle)
        if bundle is None:
            logger.debug("staged_language_missing", handle=handle.id, source=handle.source)
            continue
        languages.append(bundle)

    localization = Localization.from_languages(languages, default_language)
    resources.insert(localization)
    resources.remove(LocalizationAssets)
    return localization
