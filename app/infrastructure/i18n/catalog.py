"""Catalog parsing: raw file bytes to a language bundle.

Two catalog formats are supported:

- ``.ftl``: Fluent syntax, parsed by ``fluent.syntax.FluentParser``.
- ``.yml`` / ``.yaml``: a flat mapping of message id to pattern text.
  Nested mappings become message attributes and keys starting with ``-``
  are terms. Each entry is rendered as Fluent source and goes through the
  same parser as ``.ftl``.

Either way every malformed entry is reported in a single
``CatalogSyntaxError`` and the whole file is rejected.
"""

import re
from typing import Iterable, List, Optional, Set, Tuple, Union

import yaml
from fluent.syntax import FluentParser
from fluent.syntax import ast as FTL

from infrastructure.i18n.bundle import LanguageBundle
from infrastructure.i18n.errors import CatalogSyntaxError, SyntaxIssue
from infrastructure.i18n.models import LanguageTag

_parser = FluentParser(with_spans=True)

IDENTIFIER_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9_-]*")

# (code, message, offset, line or None, column or None)
_RawIssue = Tuple[str, str, int, Optional[int], Optional[int]]

Entry = Union[FTL.Message, FTL.Term]


def decode_catalog(content: bytes) -> str:
    """Decode catalog bytes as UTF-8, replacing invalid sequences.

    A leading byte order mark is dropped and CRLF line ends are normalised.
    """
    text = content.decode("utf-8", errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n")


def _position(text: str, offset: int) -> Tuple[int, int]:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _to_issues(text: str, raw_issues: Iterable[_RawIssue]) -> List[SyntaxIssue]:
    issues = []
    ordered = sorted(raw_issues, key=lambda issue: issue[2])
    for index, (code, message, offset, line, column) in enumerate(ordered):
        if line is None or column is None:
            line, column = _position(text, offset)
        issues.append(SyntaxIssue(index, code, message, offset, line, column))
    return issues


def _entry_key(entry: Entry) -> str:
    return f"-{entry.id.name}" if isinstance(entry, FTL.Term) else entry.id.name


def _duplicate_message(key: str) -> str:
    kind = "term" if key.startswith("-") else "message"
    return f"Duplicate {kind} id `{key}`"


def _junk_issues(resource: FTL.Resource) -> List[_RawIssue]:
    return [
        (annotation.code, annotation.message, annotation.span.start, None, None)
        for entry in resource.body
        if isinstance(entry, FTL.Junk)
        for annotation in entry.annotations
    ]


def _build_bundle(
    filename_stem: str,
    entries: Iterable[Entry],
    use_isolating: bool,
) -> LanguageBundle:
    tag = LanguageTag.parse(filename_stem)
    entries = list(entries)
    return LanguageBundle(
        tag,
        [entry for entry in entries if isinstance(entry, FTL.Message)],
        [entry for entry in entries if isinstance(entry, FTL.Term)],
        use_isolating=use_isolating,
    )


def parse_catalog(
    content: bytes,
    filename_stem: str,
    use_isolating: bool = False,
    source_name: Optional[str] = None,
) -> LanguageBundle:
    """Parse a Fluent catalog into a language bundle.

    Args:
        content: Raw file bytes.
        filename_stem: File name without extension; must be a language tag.
        use_isolating: Wrap interpolated values in bidi isolation marks.
        source_name: Name used in error messages (defaults to the stem).

    Returns:
        LanguageBundle tagged with the parsed file name.

    Raises:
        CatalogSyntaxError: If any entry is malformed or an id is repeated.
        LanguageTagError: If the file name is not a valid language tag.
    """
    text = decode_catalog(content)
    resource = _parser.parse(text)

    raw_issues = _junk_issues(resource)
    entries: List[Entry] = []
    seen: Set[str] = set()
    for entry in resource.body:
        if not isinstance(entry, (FTL.Message, FTL.Term)):
            continue
        key = _entry_key(entry)
        if key in seen:
            raw_issues.append(
                ("E_DUPLICATE", _duplicate_message(key), entry.span.start, None, None)
            )
            continue
        seen.add(key)
        entries.append(entry)

    if raw_issues:
        raise CatalogSyntaxError(source_name or filename_stem, _to_issues(text, raw_issues))

    return _build_bundle(filename_stem, entries, use_isolating)


def _mark_issue(code: str, message: str, mark) -> _RawIssue:
    return (code, message, mark.index, mark.line + 1, mark.column + 1)


def _ftl_pattern(text: str, indent: str) -> str:
    first, *rest = text.split("\n")
    return "".join([f" {first}", *(f"\n{indent}{line}" for line in rest)])


def _yaml_attribute_lines(
    node: yaml.MappingNode, raw_issues: List[_RawIssue]
) -> List[str]:
    lines = []
    seen: Set[str] = set()
    for key_node, value_node in node.value:
        name = str(key_node.value)
        if not IDENTIFIER_RE.fullmatch(name):
            raw_issues.append(
                _mark_issue("E_YAML_KEY", f"Invalid attribute name `{name}`", key_node.start_mark)
            )
        elif name in seen:
            raw_issues.append(
                _mark_issue("E_DUPLICATE", f"Duplicate attribute `{name}`", key_node.start_mark)
            )
        elif not isinstance(value_node, yaml.ScalarNode):
            raw_issues.append(
                _mark_issue("E_YAML_TYPE", "Expected a text value", value_node.start_mark)
            )
        else:
            seen.add(name)
            lines.append(f"    .{name} =" + _ftl_pattern(value_node.value, " " * 8))
    return lines


def _yaml_entry(
    key: str, value_node: yaml.Node, raw_issues: List[_RawIssue]
) -> Optional[Entry]:
    """Render one YAML entry as Fluent source and parse it."""
    if isinstance(value_node, yaml.MappingNode):
        lines = [f"{key} =", *_yaml_attribute_lines(value_node, raw_issues)]
    elif isinstance(value_node, yaml.ScalarNode):
        lines = [f"{key} =" + _ftl_pattern(value_node.value, " " * 4)]
    else:
        raw_issues.append(
            _mark_issue("E_YAML_TYPE", "Expected a text value", value_node.start_mark)
        )
        return None

    resource = _parser.parse("\n".join(lines) + "\n")
    junk = [entry for entry in resource.body if isinstance(entry, FTL.Junk)]
    if junk:
        annotation = junk[0].annotations[0]
        raw_issues.append(_mark_issue(annotation.code, annotation.message, value_node.start_mark))
        return None
    return resource.body[0]


def parse_yaml_catalog(
    content: bytes,
    filename_stem: str,
    use_isolating: bool = False,
    source_name: Optional[str] = None,
) -> LanguageBundle:
    """Parse a YAML catalog into a language bundle.

    Example file::

        language_name: English
        greeting: Hello, { $name }!
        -brand: Acme
        login-input:
          placeholder: email@example.com

    Args:
        content: Raw file bytes.
        filename_stem: File name without extension; must be a language tag.
        use_isolating: Wrap interpolated values in bidi isolation marks.
        source_name: Name used in error messages (defaults to the stem).

    Returns:
        LanguageBundle tagged with the parsed file name.

    Raises:
        CatalogSyntaxError: If the YAML is invalid or any entry is malformed.
        LanguageTagError: If the file name is not a valid language tag.
    """
    text = decode_catalog(content)
    name = source_name or filename_stem
    raw_issues: List[_RawIssue] = []

    try:
        root = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark or e.context_mark
        raw_issues.append(
            _mark_issue("E_YAML", e.problem or str(e), mark)
            if mark is not None
            else ("E_YAML", str(e), 0, 1, 1)
        )
        raise CatalogSyntaxError(name, _to_issues(text, raw_issues)) from e
    except yaml.YAMLError as e:
        raise CatalogSyntaxError(name, _to_issues(text, [("E_YAML", str(e), 0, 1, 1)])) from e

    entries: List[Entry] = []

    if root is not None and not isinstance(root, yaml.MappingNode):
        raw_issues.append(
            _mark_issue("E_YAML_TYPE", "Expected a mapping of message ids", root.start_mark)
        )
    elif root is not None:
        seen: Set[str] = set()
        for key_node, value_node in root.value:
            key = str(key_node.value)
            if not IDENTIFIER_RE.fullmatch(key[1:] if key.startswith("-") else key):
                raw_issues.append(
                    _mark_issue("E_YAML_KEY", f"Invalid message id `{key}`", key_node.start_mark)
                )
                continue
            if key in seen:
                raw_issues.append(
                    _mark_issue("E_DUPLICATE", _duplicate_message(key), key_node.start_mark)
                )
                continue
            seen.add(key)

            entry = _yaml_entry(key, value_node, raw_issues)
            if entry is not None:
                entries.append(entry)

    if raw_issues:
        raise CatalogSyntaxError(name, _to_issues(text, raw_issues))

    return _build_bundle(filename_stem, entries, use_isolating)
