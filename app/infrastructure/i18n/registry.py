"""Localization registry: the process-wide entry point for localized text."""

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from infrastructure.i18n.bundle import LanguageBundle
from infrastructure.i18n.errors import LocalizationError, MissingDefaultLanguageError
from infrastructure.i18n.models import DEFAULT_LANGUAGE, LanguageTag
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class Localization:
    """Set of loaded languages with one active language.

    Built once when the loading phase ends and read-only afterwards, so
    any system may call ``localize`` concurrently. Lookups never raise for
    content problems: they log a warning and return the message id.

    Attributes:
        languages: Loaded bundles, in load order.
        current_language_index: Index of the active bundle in ``languages``.
    """

    def __init__(self, languages: Sequence[LanguageBundle], current_language_index: int):
        if not languages:
            raise ValueError("Localization needs at least one language")
        if not 0 <= current_language_index < len(languages):
            raise ValueError(
                f"current_language_index {current_language_index} out of range "
                f"for {len(languages)} languages"
            )
        self._languages: Tuple[LanguageBundle, ...] = tuple(languages)
        self._current_language_index = current_language_index

    @classmethod
    def from_languages(
        cls,
        languages: Iterable[LanguageBundle],
        default_language: "LanguageTag | str" = DEFAULT_LANGUAGE,
    ) -> "Localization":
        """Build the registry, selecting the default language as active.

        Args:
            languages: Bundles to register, in load order.
            default_language: Tag of the mandatory baseline language.

        Returns:
            Localization whose active bundle carries the default tag.

        Raises:
            MissingDefaultLanguageError: If no bundle carries the default tag.
        """
        languages = list(languages)
        for index, bundle in enumerate(languages):
            if bundle.tag.matches(default_language):
                localization = cls(languages, index)
                logger.info(
                    "localization_initialized",
                    current_language=str(bundle.tag),
                    languages=[str(b.tag) for b in languages],
                )
                return localization

        raise MissingDefaultLanguageError(
            default_language, [bundle.tag for bundle in languages]
        )

    @property
    def languages(self) -> Tuple[LanguageBundle, ...]:
        return self._languages

    @property
    def current_language_index(self) -> int:
        return self._current_language_index

    @property
    def current_language(self) -> LanguageBundle:
        return self._languages[self._current_language_index]

    def available_languages(self) -> List[Tuple[LanguageTag, str]]:
        """List ``(tag, display name)`` pairs, e.g. for a language menu."""
        return [(bundle.tag, bundle.display_name) for bundle in self._languages]

    def localize(self, message_id: str) -> str:
        """Get the text of a message in the active language.

        Returns:
            The formatted text, or ``message_id`` if it cannot be found.
        """
        return self.localize_with_args(message_id, None)

    def localize_with_args(
        self, message_id: str, args: Optional[Mapping[str, object]]
    ) -> str:
        """Get the text of a message in the active language with arguments.

        Args:
            message_id: Message identifier.
            args: Named argument values.

        Returns:
            The formatted text, or ``message_id`` if it cannot be found or
            formats to an empty string.
        """
        try:
            text = self.current_language.lookup(message_id, args)
        except LocalizationError as e:
            logger.warning(
                "localization_message_not_found",
                message_id=message_id,
                language=str(self.current_language.tag),
                error=str(e),
            )
            return message_id

        if not text:
            logger.warning(
                "localization_empty_message",
                message_id=message_id,
                language=str(self.current_language.tag),
            )
            return message_id
        return text

    def __repr__(self) -> str:
        return (
            f"Localization(current={str(self.current_language.tag)!r}, "
            f"languages={[str(b.tag) for b in self._languages]!r})"
        )
