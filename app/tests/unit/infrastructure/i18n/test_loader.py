"""Tests for infrastructure.i18n.loader module."""

from unittest.mock import MagicMock, patch

import pytest

from infrastructure.i18n import (
    CatalogDirectoryLoader,
    CatalogLoaderRegistry,
    CatalogSyntaxError,
    LanguageAssets,
    LocalizationAssets,
    UnsupportedCatalogError,
    create_default_loader_registry,
    load_catalog,
)
from tests.factories.i18n import make_raw_catalog


@pytest.mark.unit
class TestCatalogLoaderRegistry:
    """Tests for extension dispatch."""

    def test_default_extensions(self):
        registry = create_default_loader_registry()
        assert registry.extensions() == (".ftl", ".yaml", ".yml")

    def test_extension_lookup_is_case_insensitive(self):
        registry = create_default_loader_registry()
        assert registry.supports(".FTL")
        assert registry.supports("yml")
        assert not registry.supports(".json")

    def test_register_custom_parser(self):
        registry = CatalogLoaderRegistry()
        parser = MagicMock(return_value="bundle")
        registry.register("json", parser)

        result = registry.load(make_raw_catalog(extension=".json"), use_isolating=True)

        assert result == "bundle"
        parser.assert_called_once()
        args, kwargs = parser.call_args
        assert args[1] == "en-US"
        assert kwargs == {"use_isolating": True, "source_name": "en-US.json"}

    def test_unknown_extension_raises(self):
        with pytest.raises(UnsupportedCatalogError) as exc_info:
            load_catalog(make_raw_catalog(extension=".po"))
        assert exc_info.value.extension == ".po"

    def test_load_catalog_ftl(self):
        bundle = load_catalog(make_raw_catalog("fr-FR", "hello = Bonjour\n"))
        assert bundle.lookup("hello") == "Bonjour"

    def test_load_catalog_yaml(self):
        bundle = load_catalog(make_raw_catalog("fr-FR", "hello: Bonjour\n", ".yaml"))
        assert bundle.lookup("hello") == "Bonjour"

    def test_load_catalog_error_names_file(self):
        with pytest.raises(CatalogSyntaxError) as exc_info:
            load_catalog(make_raw_catalog("fr-FR", "hello\n"))
        assert "fr-FR.ftl" in str(exc_info.value)


@pytest.mark.unit
class TestCatalogDirectoryLoader:
    """Tests for locales directory loading."""

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(ValueError):
            CatalogDirectoryLoader(tmp_path / "missing")

    def test_catalog_paths_sorted_and_filtered(self, temp_locales_dir):
        loader = CatalogDirectoryLoader(temp_locales_dir)
        assert [p.name for p in loader.catalog_paths()] == ["en-US.ftl", "fr-FR.ftl"]

    @pytest.mark.parametrize("parallel", [True, False])
    def test_load_into_stages_bundles_in_order(self, temp_locales_dir, resources, parallel):
        loader = CatalogDirectoryLoader(temp_locales_dir, parallel=parallel)

        summary = loader.load_into(resources)

        assert summary.total == 2
        assert not summary.has_errors
        assets = resources.require(LanguageAssets)
        staging = resources.require(LocalizationAssets)
        assert len(assets) == 2
        tags = [str(assets.get(handle).tag) for handle in staging.handles]
        assert tags == ["en-US", "fr-FR"]

    def test_failed_files_are_dropped(self, mixed_locales_dir, resources):
        loader = CatalogDirectoryLoader(mixed_locales_dir)

        summary = loader.load_into(resources)

        assert [r.language for r in summary.loaded] == ["de-DE", "en-US"]
        assert sorted(r.file_name for r in summary.failed) == ["es-ES.ftl", "not a tag.ftl"]
        staging = resources.require(LocalizationAssets)
        assert len(staging.handles) == 2

    @patch("infrastructure.i18n.loader.logger")
    def test_parse_failure_logged_with_listing(self, mock_logger, mixed_locales_dir, resources):
        CatalogDirectoryLoader(mixed_locales_dir, parallel=False).load_into(resources)

        failures = [
            call for call in mock_logger.error.call_args_list
            if call.args[0] == "catalog_parse_failed"
        ]
        assert len(failures) == 2
        listings = [call.kwargs["error"] for call in failures]
        assert any("Could not parse catalog `es-ES.ftl`:\n0: line 2, column 1" in text for text in listings)

    def test_unreadable_file_is_reported(self, temp_locales_dir, resources):
        loader = CatalogDirectoryLoader(temp_locales_dir, parallel=False)

        with patch(
            "infrastructure.i18n.loader.RawCatalog.from_path",
            side_effect=PermissionError("denied"),
        ):
            summary = loader.load_into(resources)

        assert len(summary.failed) == 2
        assert summary.failed[0].error == "denied"
        assert resources.require(LocalizationAssets).handles == []

    def test_reuses_existing_staging_resources(self, temp_locales_dir, resources):
        assets = LanguageAssets()
        staging = LocalizationAssets()
        resources.insert(assets)
        resources.insert(staging)

        CatalogDirectoryLoader(temp_locales_dir).load_into(resources)

        assert resources.require(LanguageAssets) is assets
        assert len(staging.handles) == 2
