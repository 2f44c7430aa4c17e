import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.i18n`) works during pytest collection, however
# pytest was invoked.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest
from infrastructure.lifecycle import LoadingPhase, Resources
from infrastructure.services.providers import get_settings


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop the cached Settings so environment changes apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def resources():
    return Resources()


@pytest.fixture
def loading_phase(resources):
    return LoadingPhase(resources)


@pytest.fixture
def locales_dir():
    """The application's shipped locales directory."""
    return Path(project_root) / "locales"
