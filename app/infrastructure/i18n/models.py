"""Localization models for the i18n system.

Defines the value types shared by the catalog parser, the language bundles
and the localization registry.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from babel import Locale, UnknownLocaleError

from infrastructure.i18n.errors import LanguageTagError

# Message that every catalog is expected to define, so that the language can
# be identified with a human-readable name.
LANGUAGE_NAME_ID = "language_name"

DEFAULT_LANGUAGE = "en-US"


@dataclass(frozen=True)
class LanguageTag:
    """Validated language identifier backed by a Babel ``Locale``.

    Tags use the ``language[-script][-region][-variant]`` form (e.g. en-US,
    sr-Latn-RS). Babel checks that locale data exists for the tag, puts the
    subtags in canonical case and fills in likely subtags where the bare
    form is ambiguous (``zh-TW`` becomes ``zh-Hant-TW``). Frozen to ensure
    immutability and hashability.

    Attributes:
        locale: The Babel locale, also used for plural rules and number
            formatting when messages are formatted.
    """

    locale: Locale

    @classmethod
    def parse(cls, value: str) -> "LanguageTag":
        """Parse a language tag string.

        Both ``-`` and ``_`` are accepted as subtag separators.

        Args:
            value: Tag string (e.g., "en-US", "fr_FR").

        Returns:
            LanguageTag in canonical form.

        Raises:
            LanguageTagError: If the string is not a valid tag or Babel has
                no data for it.
        """
        if not isinstance(value, str) or not value.strip():
            raise LanguageTagError(str(value), "empty tag")

        identifier = value.strip().replace("-", "_")
        # POSIX modifiers and encodings are not part of a language tag
        if "@" in identifier or "." in identifier:
            raise LanguageTagError(value, "unexpected modifier or encoding")

        try:
            locale = Locale.parse(identifier)
        except UnknownLocaleError as e:
            raise LanguageTagError(value, "unknown locale") from e
        except ValueError as e:
            raise LanguageTagError(value, str(e)) from e
        return cls(locale)

    @property
    def language(self) -> str:
        return self.locale.language

    @property
    def script(self) -> Optional[str]:
        return self.locale.script

    @property
    def region(self) -> Optional[str]:
        return self.locale.territory

    @property
    def variant(self) -> Optional[str]:
        return self.locale.variant

    @property
    def babel_identifier(self) -> str:
        """Identifier in Babel's underscore form (e.g. ``en_US``)."""
        return str(self.locale)

    def matches(self, other: "LanguageTag | str") -> bool:
        """Check whether another tag (or tag string) is the same language tag."""
        if isinstance(other, str):
            try:
                other = LanguageTag.parse(other)
            except LanguageTagError:
                return False
        return self == other

    def __str__(self) -> str:
        return self.babel_identifier.replace("_", "-")


@dataclass(frozen=True)
class RawCatalog:
    """Raw catalog content handed over by the asset IO layer.

    Attributes:
        filename_stem: File name without extension; expected to be a valid
            language tag, checked at parse time.
        content: Undecoded file bytes.
        extension: Lower-case file extension including the dot.
    """

    filename_stem: str
    content: bytes
    extension: str = ".ftl"

    @classmethod
    def from_path(cls, path: Path) -> "RawCatalog":
        """Read a catalog file from disk.

        Args:
            path: Path of the catalog file.

        Returns:
            RawCatalog with the file's stem, bytes and extension.
        """
        path = Path(path)
        return cls(
            filename_stem=path.stem,
            content=path.read_bytes(),
            extension=path.suffix.lower(),
        )

    @property
    def file_name(self) -> str:
        return f"{self.filename_stem}{self.extension}"
