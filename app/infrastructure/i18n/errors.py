"""Custom exceptions for the localization engine.

Provides the error taxonomy for catalog loading, message lookup, message
formatting and startup validation.
"""

from dataclasses import dataclass
from typing import Iterable, Optional


class LocalizationError(Exception):
    """Base exception for all localization errors.

    Example:
        try:
            text = bundle.lookup("greeting")
        except LocalizationError as e:
            logger.warning("localization_error", error=str(e))
    """

    pass


class CatalogLoadError(LocalizationError):
    """Raised when a catalog file cannot be turned into a language bundle.

    The offending file is dropped; the process keeps running.
    """

    pass


@dataclass(frozen=True)
class SyntaxIssue:
    """One malformed entry found while parsing a catalog.

    Attributes:
        index: Position of the issue in the catalog's issue listing.
        code: Machine error code (e.g. ``E0003``, ``E_DUPLICATE``).
        message: Human-friendly description.
        offset: Character offset into the decoded catalog text.
        line: 1-based line number.
        column: 1-based column number.
    """

    index: int
    code: str
    message: str
    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.index}: line {self.line}, column {self.column}: {self.message}"


class CatalogSyntaxError(CatalogLoadError):
    """Raised when a catalog contains one or more malformed entries.

    Lists every issue in file order so a translator can fix the whole file
    in one pass.

    Example:
        >>> parse_catalog(b"hello\\nbye = { $x", "en-US")
        Traceback (most recent call last):
        ...
        CatalogSyntaxError: Could not parse catalog `en-US`:
        0: line 1, column 6: Expected token: "="
        1: line 2, column 11: Expected token: "}"
    """

    def __init__(self, source_name: str, errors: Iterable[SyntaxIssue]):
        self.source_name = source_name
        self.errors = tuple(errors)
        listing = "".join(f"\n{issue}" for issue in self.errors)
        super().__init__(f"Could not parse catalog `{source_name}`:{listing}")


class LanguageTagError(CatalogLoadError, ValueError):
    """Raised when a string is not a valid language tag.

    Example:
        >>> LanguageTag.parse("en US")
        Traceback (most recent call last):
        ...
        LanguageTagError: Invalid language tag `en US`. The catalog file name should be a valid language tag, like `en-US.ftl` (expected only letters, got 'en us')
    """

    def __init__(self, value: str, reason: Optional[str] = None):
        self.value = value
        self.reason = reason
        message = (
            f"Invalid language tag `{value}`. The catalog file name should be "
            "a valid language tag, like `en-US.ftl`"
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnsupportedCatalogError(CatalogLoadError):
    """Raised when no catalog parser is registered for a file extension."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"No catalog parser registered for extension `{extension}`")


class MessageNotFoundError(LocalizationError):
    """Raised when a message id has no entry, or no value, in a bundle."""

    def __init__(self, message_id: str, language_tag: object):
        self.message_id = message_id
        self.language_tag = language_tag
        super().__init__(
            f"Couldn't find message with id `{message_id}` for language `{language_tag}`"
        )


class ResolverError(LocalizationError):
    """Base for problems found while formatting a pattern.

    Resolver errors are collected as warnings during formatting; they are
    never raised out of a lookup. The Fluent runtime error they were
    translated from is kept as ``__cause__``.
    """

    pass


class UnknownVariableError(ResolverError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown variable: ${name}")


class UnknownMessageError(ResolverError):
    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"Unknown message: {message_id}")


class UnknownTermError(ResolverError):
    def __init__(self, term_id: str):
        self.term_id = term_id
        super().__init__(f"Unknown term: -{term_id}")


class UnknownFunctionError(ResolverError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown function: {name}()")


class UnknownAttributeError(ResolverError):
    def __init__(self, entry: str, attribute: str):
        self.entry = entry
        self.attribute = attribute
        super().__init__(f"Unknown attribute: {entry}.{attribute}")


class MissingValueError(ResolverError):
    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"No value: {message_id}")


class CyclicReferenceError(ResolverError):
    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"Cyclic reference while formatting: {message_id}")


class PatternTooLargeError(ResolverError):
    """Raised when expanding a pattern exceeds the runtime size limits."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Pattern too large: {detail}")


class NumberOutOfRangeError(ResolverError):
    """Raised when Babel cannot format a number at the decimal context precision."""

    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"Number out of formatting range in: {message_id}")


class MissingDefaultLanguageError(LocalizationError):
    """Raised when the mandatory baseline language is absent.

    This is the only fatal localization condition: startup must abort.
    """

    def __init__(self, default_language: object, available: Iterable[object] = ()):
        self.default_language = default_language
        self.available = tuple(str(tag) for tag in available)
        found = ", ".join(self.available) or "none"
        super().__init__(
            f"Cannot start, need at least a language file for the default "
            f"language `{default_language}` ({default_language}.ftl). "
            f"Loaded languages: {found}"
        )
