"""Feature-level fixtures for localization engine tests.

Provides catalog texts, parsed bundles and locales directories on disk.
"""

import pytest
import yaml

from infrastructure.i18n import Localization
from tests.factories.i18n import (
    EN_US_CATALOG,
    FR_FR_CATALOG,
    make_bundle,
    write_locales_dir,
)


@pytest.fixture
def en_bundle():
    return make_bundle("en-US", EN_US_CATALOG)


@pytest.fixture
def fr_bundle():
    return make_bundle("fr-FR", FR_FR_CATALOG)


@pytest.fixture
def localization(en_bundle, fr_bundle):
    return Localization.from_languages([en_bundle, fr_bundle])


@pytest.fixture
def rich_bundle():
    """Bundle exercising terms, attributes, selects and references."""
    text = """\
language_name = English

-brand = Acme
    .gender = neuter

-product = { $article ->
    [definite] the Widget
   *[indefinite] a Widget
}

welcome = Welcome to { -brand }!
buy = Buy { -product(article: "definite") } now.
brand-pronoun = { -brand.gender ->
    [neuter] it
   *[other] they
}
home = Home
    .title = Go to { home }
nav-title = { home.title }
unread = { $count ->
    [0] No messages
    [one] One message
   *[other] { $count } messages
}
numeric = { 2 ->
    [2] two
   *[other] many
}
literal = { "quoted" } text
cycle-a = { cycle-b }
cycle-b = { cycle-a }
self = { self }
only-attrs =
    .label = Label
missing-ref = See { nowhere }
missing-term = By { -nobody }
missing-attr = { home.nope }
call = { SHOUT($count) }
total = { NUMBER($amount, minimumFractionDigits: 2) }
loop-a = before { loop-b }
loop-b = after { loop-a }
value-less = { only-attrs }
"""
    return make_bundle("en-US", text)


@pytest.fixture
def temp_locales_dir(tmp_path):
    """Create a locales directory with two valid catalogs.

    Returns a directory containing:
    - en-US.ftl
    - fr-FR.ftl
    - README.md (ignored by the loader)
    """
    return write_locales_dir(
        tmp_path / "locales",
        {
            "en-US.ftl": EN_US_CATALOG,
            "fr-FR.ftl": FR_FR_CATALOG,
            "README.md": "not a catalog",
        },
    )


@pytest.fixture
def mixed_locales_dir(tmp_path):
    """Locales directory with a YAML catalog and two broken files."""
    de_de = {
        "language_name": "Deutsch",
        "greeting": "Hallo, { $name }!",
    }
    return write_locales_dir(
        tmp_path / "locales",
        {
            "en-US.ftl": EN_US_CATALOG,
            "de-DE.yml": yaml.dump(de_de, allow_unicode=True),
            "es-ES.ftl": "greeting = Hola, { $name\nbroken\n",
            "not a tag.ftl": "hello = Hi\n",
        },
    )
