"""Reference-extraction rules per language.

Each rule is a compiled regular expression plus the capture group that holds
the referenced path. Rules only ever run through ``finditer`` so no match
state is shared between files.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from import_graph.core.languages import _EXTENSION_LANGUAGE_MAP, normalize_extension


@dataclass(frozen=True)
class ExtractionRule:
    """A pattern and the capture group(s) that carry the referenced path.

    When ``secondary_group`` is set and participated in the match it takes
    precedence over ``group``. ``relative`` marks forms that are always
    relative to the referencing file even without a leading ``./``
    (``require_relative 'x'``).
    """

    pattern: re.Pattern[str]
    group: int = 1
    secondary_group: int | None = None
    relative: bool = False

    def references(self, text: str) -> Iterable[str]:
        for match in self.pattern.finditer(text):
            reference = self.reference_from_match(match)
            if reference:
                yield reference

    def reference_from_match(self, match: re.Match[str]) -> str | None:
        value: str | None = None
        if self.secondary_group is not None:
            value = match.group(self.secondary_group)
        if not value:
            value = match.group(self.group)
        if not value:
            return None
        value = value.strip()
        if self.relative and value and not value.startswith("."):
            value = f"./{value}"
        return value or None


def rule(
    regex: str,
    flags: int = 0,
    *,
    group: int = 1,
    secondary_group: int | None = None,
    relative: bool = False,
) -> ExtractionRule:
    return ExtractionRule(re.compile(regex, flags), group, secondary_group, relative)


class PatternCatalogue:
    """Maps file extensions to the ordered extraction rules of their language."""

    def __init__(
        self,
        rules: Mapping[str, Sequence[ExtractionRule]],
        extensions: Mapping[str, str] | None = None,
    ) -> None:
        self._rules = {language: tuple(language_rules) for language, language_rules in rules.items()}
        source = _EXTENSION_LANGUAGE_MAP if extensions is None else extensions
        self._extensions = {
            normalize_extension(ext): language for ext, language in source.items() if language in self._rules
        }

    @classmethod
    def from_mapping(
        cls,
        patterns: Mapping[str, Sequence[str | tuple[str, int] | ExtractionRule]],
        extensions: Mapping[str, str] | None = None,
    ) -> PatternCatalogue:
        """Build a catalogue from plain regex strings or ``(regex, group)`` pairs."""
        compiled: dict[str, list[ExtractionRule]] = {}
        for language, entries in patterns.items():
            language_rules: list[ExtractionRule] = []
            for entry in entries:
                if isinstance(entry, ExtractionRule):
                    language_rules.append(entry)
                elif isinstance(entry, tuple):
                    language_rules.append(rule(entry[0], re.MULTILINE, group=entry[1]))
                else:
                    language_rules.append(rule(entry, re.MULTILINE))
            compiled[language] = language_rules
        return cls(compiled, extensions)

    def language_for(self, extension: str) -> str | None:
        return self._extensions.get(normalize_extension(extension))

    def patterns_for(self, extension: str) -> list[ExtractionRule]:
        language = self.language_for(extension)
        if language is None:
            return []
        return list(self._rules[language])

    def supports(self, extension: str) -> bool:
        return normalize_extension(extension) in self._extensions

    @property
    def extensions(self) -> dict[str, str]:
        return dict(sorted(self._extensions.items()))


_M = re.MULTILINE
_QUOTED = r"""['"]([^'"\n]+)['"]"""

_SCRIPT_RULES = [
    rule(r"\bfrom\s+" + _QUOTED, _M),  # import x from 'path' / export * from 'path'
    rule(r"\bimport\s+" + _QUOTED, _M),  # import 'path'
    rule(r"\bimport\s*\(\s*" + _QUOTED + r"\s*\)", _M),  # import('path')
    rule(r"\brequire\s*\(\s*" + _QUOTED + r"\s*\)", _M),  # require('path')
    rule(r"""///\s*<reference\s+path\s*=\s*['"]([^'"]+)['"]""", _M),
]

_COMPONENT_RULES = _SCRIPT_RULES + [
    rule(r"""<(?:script|style)\b[^>]*\bsrc\s*=\s*['"]([^'"]+)['"]""", _M | re.IGNORECASE),
]

_STYLE_RULES = [
    rule(r"@import\s+(?:url\(\s*)?" + _QUOTED, _M),  # @import 'path'
    rule(r"@(?:use|forward)\s+" + _QUOTED, _M),
    rule(r"""\burl\s*\(\s*['"]?([^'")\s]+)['"]?\s*\)""", _M),  # url('path')
]

_NATIVE_RULES = [
    rule(r"""^\s*#\s*(?:include|import)\s*[<"]([^>"\n]+)[>"]""", _M),
]

_DEFAULT_RULES: dict[str, list[ExtractionRule]] = {
    "javascript": _SCRIPT_RULES,
    "typescript": _SCRIPT_RULES,
    "tsx": _SCRIPT_RULES,
    "vue": _COMPONENT_RULES,
    "svelte": _COMPONENT_RULES,
    "astro": _COMPONENT_RULES,
    "css": _STYLE_RULES,
    "scss": _STYLE_RULES,
    "less": _STYLE_RULES,
    "python": [
        rule(r"^\s*from\s+(\.+[\w.]*|[\w.]+)\s+import\b", _M),  # from .module import x
        rule(r"^\s*import\s+([\w.]+)", _M),  # import module
    ],
    "dart": [
        rule(r"^\s*(?:import|export|part)\s+" + _QUOTED, _M),
    ],
    "rust": [
        rule(r"^\s*(?:pub(?:\([\w\s:]+\))?\s+)?use\s+((?:crate|super|self)(?:::\w+)+)", _M),  # use crate::module
        rule(r"^\s*(?:pub(?:\([\w\s:]+\))?\s+)?mod\s+(\w+)\s*;", _M, relative=True),  # mod module;
    ],
    "go": [
        rule(r'^\s*import\s+(?:[\w.]+\s+)?"([^"]+)"', _M),  # import "fmt"
        rule(r'^\s*(?!import\b)(?:[\w.]+\s+)?"([^"\n]+)"\s*$', _M),  # entries of an import ( ... ) block
    ],
    "c": _NATIVE_RULES,
    "cpp": _NATIVE_RULES,
    "objc": _NATIVE_RULES,
    "java": [
        rule(r"^\s*import\s+(?:static\s+)?([\w.]+?)(?:\.\*)?\s*;", _M),
    ],
    "kotlin": [
        rule(r"^\s*import\s+([\w.]+?)(?:\.\*)?(?:\s+as\s+\w+)?\s*;?\s*$", _M),
    ],
    "scala": [
        rule(r"^\s*import\s+([\w.]+?)(?:\.(?:_|\*|\{[^}]*\}))?\s*;?\s*$", _M),
    ],
    "groovy": [
        rule(r"^\s*import\s+(?:static\s+)?([\w.]+?)(?:\.\*)?\s*;?\s*$", _M),
    ],
    "perl": [
        rule(r"^\s*(?:use|require)\s+([A-Za-z_][\w:]*)", _M),
        rule(r"^\s*(?:require|do)\s+" + _QUOTED, _M),
    ],
    "lua": [
        rule(r"\brequire\s*\(?\s*" + _QUOTED, _M),
        rule(r"\bdofile\s*\(\s*" + _QUOTED, _M),
    ],
    "php": [
        rule(r"\b(?:include|require)(?:_once)?\s*\(?\s*(?:__DIR__\s*\.\s*)?" + _QUOTED, _M | re.IGNORECASE),
    ],
    "ruby": [
        rule(r"\brequire_relative\s*\(?\s*" + _QUOTED, _M, relative=True),
        rule(r"\b(?:require|load)\s*\(?\s*" + _QUOTED, _M),
    ],
    "shell": [
        rule(r"""^\s*(?:source|\.)\s+['"]?([^\s'";|&]+)""", _M),
    ],
    "html": [
        rule(r"""<(?:script|img|iframe|source)\b[^>]*\bsrc\s*=\s*['"]([^'"]+)['"]""", _M | re.IGNORECASE),
        rule(r"""<link\b[^>]*\bhref\s*=\s*['"]([^'"]+)['"]""", _M | re.IGNORECASE),
    ],
    "asp": [
        # <!--#include file="x"--> or <!--#include virtual="x"-->, the virtual form wins.
        rule(
            r"""<!--\s*#include\s+(?:file\s*=\s*['"]([^'"]+)['"]|virtual\s*=\s*['"]([^'"]+)['"])""",
            _M | re.IGNORECASE,
            group=1,
            secondary_group=2,
        ),
        rule(r"""<script\b[^>]*\bsrc\s*=\s*['"]([^'"]+)['"]""", _M | re.IGNORECASE),
    ],
    "jsp": [
        # <%@ include file="x" %> or <jsp:include page="x" />, the page form wins.
        rule(
            r"""<(?:%@\s*include\s+file\s*=\s*['"]([^'"]+)['"]"""
            r"""|jsp:(?:include|forward)\s+page\s*=\s*['"]([^'"]+)['"])""",
            _M | re.IGNORECASE,
            group=1,
            secondary_group=2,
        ),
    ],
}

DEFAULT_CATALOGUE = PatternCatalogue(_DEFAULT_RULES)
