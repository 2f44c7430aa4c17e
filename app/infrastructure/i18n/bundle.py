"""Language bundle: every message of one language, ready to format.

Formatting is delegated to ``fluent.runtime.FluentBundle``; this module adds
the locking, argument normalisation and error reporting the rest of the
engine relies on.
"""

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from fluent.runtime import FluentBundle
from fluent.runtime.errors import FluentCyclicReferenceError
from fluent.runtime.resolver import Message, Pattern
from fluent.syntax import ast as FTL

from infrastructure.i18n.errors import (
    CyclicReferenceError,
    MessageNotFoundError,
    MissingValueError,
    NumberOutOfRangeError,
    PatternTooLargeError,
    ResolverError,
    UnknownAttributeError,
    UnknownFunctionError,
    UnknownMessageError,
    UnknownTermError,
    UnknownVariableError,
)
from infrastructure.i18n.memoizer import ConcurrentMemoizer
from infrastructure.i18n.models import LANGUAGE_NAME_ID, LanguageTag
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Message prefixes of fluent.runtime reference errors
_REFERENCE_ERRORS = (
    ("Unknown external: ", UnknownVariableError),
    ("Unknown message: ", UnknownMessageError),
    ("Unknown term: -", UnknownTermError),
    ("Unknown function: ", UnknownFunctionError),
    ("No pattern: ", MissingValueError),
)


@dataclass(frozen=True)
class FormattedMessage:
    """Best-effort text of a message plus the problems met formatting it."""

    text: str
    errors: Tuple[ResolverError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def _fluent_value(value: object) -> object:
    """Convert an argument to a type the Fluent runtime can format.

    Numbers keep their type so that number variants and plural categories
    can match. NaN and infinities have no plural category and are passed as
    text, like every other unsupported type.
    """
    if isinstance(value, (str, date)):
        return value
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, Decimal):
        return value if value.is_finite() else str(value)
    return str(value)


def _translate_error(error: Exception, message_id: str) -> ResolverError:
    """Map a Fluent runtime error onto the ResolverError taxonomy."""
    detail = str(error)
    if isinstance(error, FluentCyclicReferenceError):
        translated: ResolverError = CyclicReferenceError(message_id)
    elif detail.startswith("Too many"):
        translated = PatternTooLargeError(detail)
    elif detail.startswith("Unknown attribute: "):
        entry, _, attribute = detail[len("Unknown attribute: "):].rpartition(".")
        translated = UnknownAttributeError(entry, attribute)
    else:
        translated = ResolverError(detail)
        for prefix, error_class in _REFERENCE_ERRORS:
            if detail.startswith(prefix):
                translated = error_class(detail[len(prefix):])
                break
    translated.__cause__ = error
    return translated


def _failed(error: ResolverError, cause: Exception) -> FormattedMessage:
    # Same stand-in the runtime uses when it aborts a pattern
    error.__cause__ = cause
    return FormattedMessage("{???}", (error,))


class LanguageBundle:
    """All messages and terms of one language.

    A bundle is built once from a parsed catalog and is read-only
    afterwards, so it can be shared between threads. Messages are compiled
    on first use through a ``ConcurrentMemoizer``, so each one is compiled
    exactly once even under concurrent lookups.

    Attributes:
        tag: Language tag taken from the catalog file name.
        display_name: Value of the ``language_name`` message, or the id
            itself when the catalog has no usable one.

    Example:
        bundle = LanguageBundle(LanguageTag.parse("en-US"), messages)
        bundle.lookup("greeting", {"name": "Ada"})
        # "Hello, Ada!"
    """

    def __init__(
        self,
        tag: LanguageTag,
        messages: Iterable[FTL.Message],
        terms: Iterable[FTL.Term] = (),
        use_isolating: bool = False,
    ):
        self._tag = tag
        messages = list(messages)
        terms = list(terms)
        self._message_ids: List[str] = [message.id.name for message in messages]
        self._fluent = FluentBundle([tag.babel_identifier], use_isolating=use_isolating)
        self._fluent.add_resource(FTL.Resource([*messages, *terms]))
        self._compiled: ConcurrentMemoizer[str, Message] = ConcurrentMemoizer()
        self._display_name = self._resolve_display_name()

        logger.debug(
            "language_loaded",
            language=str(tag),
            display_name=self._display_name,
            message_count=len(self._message_ids),
            term_count=len(terms),
        )

    @property
    def tag(self) -> LanguageTag:
        return self._tag

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def use_isolating(self) -> bool:
        return self._fluent.use_isolating

    def _resolve_display_name(self) -> str:
        try:
            formatted = self.format_message(LANGUAGE_NAME_ID)
        except MessageNotFoundError:
            logger.debug("language_name_missing", language=str(self._tag))
            return LANGUAGE_NAME_ID

        if formatted.errors:
            logger.debug(
                "language_name_unformattable",
                language=str(self._tag),
                errors=[str(error) for error in formatted.errors],
            )
            return LANGUAGE_NAME_ID
        return formatted.text

    def has_message(self, message_id: str) -> bool:
        return self._fluent.has_message(message_id)

    def message_ids(self) -> List[str]:
        return list(self._message_ids)

    def _message(self, message_id: str) -> Optional[Message]:
        if not self._fluent.has_message(message_id):
            return None
        return self._compiled.get_or_create(
            message_id, lambda: self._fluent.get_message(message_id)
        )

    def _format(
        self,
        message_id: str,
        pattern: Pattern,
        args: Optional[Mapping[str, object]],
    ) -> FormattedMessage:
        fluent_args = (
            {name: _fluent_value(value) for name, value in args.items()}
            if args
            else None
        )
        try:
            text, errors = self._fluent.format_pattern(pattern, fluent_args)
        except RecursionError as e:
            # The runtime only checks cycles through patterns with text in
            # them; `a = { b }` / `b = { a }` recurses until the stack runs out
            return _failed(CyclicReferenceError(message_id), e)
        except ArithmeticError as e:
            # decimal.InvalidOperation from quantizing numbers above ~1e25
            return _failed(NumberOutOfRangeError(message_id), e)
        return FormattedMessage(
            text, tuple(_translate_error(error, message_id) for error in errors)
        )

    def format_message(
        self, message_id: str, args: Optional[Mapping[str, object]] = None
    ) -> FormattedMessage:
        """Format a message value, collecting formatting problems.

        Args:
            message_id: Message identifier.
            args: Named argument values. Numbers, dates and strings are
                passed through; anything else is formatted as ``str()``.

        Returns:
            FormattedMessage with the text and any resolver errors.

        Raises:
            MessageNotFoundError: If the id is unknown or the message has
                no value pattern.
        """
        message = self._message(message_id)
        if message is None or message.value is None:
            raise MessageNotFoundError(message_id, self._tag)
        return self._format(message_id, message.value, args)

    def lookup(
        self, message_id: str, args: Optional[Mapping[str, object]] = None
    ) -> str:
        """Format a message and return its text.

        Formatting problems are logged as one warning; the best-effort text
        is still returned.

        Raises:
            MessageNotFoundError: If the id is unknown or the message has
                no value pattern.
        """
        formatted = self.format_message(message_id, args)
        self._log_errors(message_id, formatted.errors)
        return formatted.text

    def attribute(
        self,
        message_id: str,
        name: str,
        args: Optional[Mapping[str, object]] = None,
    ) -> str:
        """Format one attribute of a message.

        Raises:
            MessageNotFoundError: If the message or the attribute is missing.
        """
        message = self._message(message_id)
        pattern = message.attributes.get(name) if message else None
        if pattern is None:
            raise MessageNotFoundError(f"{message_id}.{name}", self._tag)

        formatted = self._format(f"{message_id}.{name}", pattern, args)
        self._log_errors(f"{message_id}.{name}", formatted.errors)
        return formatted.text

    def cache_stats(self) -> Dict[str, int]:
        return self._compiled.stats()

    def _log_errors(self, message_id: str, errors: Tuple[ResolverError, ...]):
        if not errors:
            return
        listing = "".join(f"\n{i}: {error}" for i, error in enumerate(errors))
        logger.warning(
            "localization_formatting_errors",
            message_id=message_id,
            language=str(self._tag),
            errors=listing,
        )

    def __repr__(self) -> str:
        return f"LanguageBundle(tag={str(self._tag)!r}, messages={len(self._message_ids)})"
