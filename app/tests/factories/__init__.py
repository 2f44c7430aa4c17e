"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    EN_US_CATALOG,
    FR_FR_CATALOG,
    make_bundle,
    make_catalog_text,
    make_localization,
    make_raw_catalog,
    write_locales_dir,
)

__all__ = [
    "EN_US_CATALOG",
    "FR_FR_CATALOG",
    "make_bundle",
    "make_catalog_text",
    "make_localization",
    "make_raw_catalog",
    "write_locales_dir",
]
