"""Resolution of raw reference strings to files of the scanned tree.

Relative references (leading ``.``) are joined lexically with the directory
of the referencing file and probed with extension and index-file inference.
Everything else is matched as a path suffix against the whole index, the
match always starting at a path-segment boundary.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from import_graph.core.languages import LanguageProfile, extension_of, language_profile
from import_graph.models import FileNode

logger = logging.getLogger(__name__)

_DART_PACKAGE = re.compile(r"^package:[^/]+/")
_URL_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


class FileIndex:
    """Read-only lookup of file nodes by their tree path.

    Iteration is in lexicographic path order so suffix matching picks the
    same file on every run.
    """

    def __init__(self, files: Iterable[FileNode]) -> None:
        self._files: dict[str, FileNode] = {node.path: node for node in files}
        self._paths: tuple[str, ...] = tuple(sorted(self._files))
        by_name: dict[str, list[str]] = {}
        for path in self._paths:
            by_name.setdefault(path.rsplit("/", 1)[-1], []).append(path)
        self._by_name = {name: tuple(paths) for name, paths in by_name.items()}

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def get(self, path: str) -> FileNode | None:
        return self._files.get(path)

    def find_suffix(self, suffix: str) -> str | None:
        """First indexed path equal to ``suffix`` or ending with ``/suffix``."""
        suffix = suffix.strip("/")
        if not suffix:
            return None
        for path in self._by_name.get(suffix.rsplit("/", 1)[-1], ()):
            if path == suffix or path.endswith("/" + suffix):
                return path
        return None


def join_relative(directory: str, reference: str) -> str:
    """Lexically join ``reference`` onto ``directory``.

    ``.`` segments are ignored and ``..`` pops one segment; pops past the
    root are discarded.
    """
    stack = [part for part in directory.split("/") if part]
    for part in reference.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if stack:
                stack.pop()
        else:
            stack.append(part)
    return "/".join(stack)


def dotted_to_path(reference: str) -> str:
    """Translate a module reference such as ``..pkg.mod`` into ``../pkg/mod``."""
    stripped = reference.lstrip(".")
    dots = len(reference) - len(stripped)
    prefix = ""
    if dots:
        prefix = "./" + "../" * (dots - 1)
    return prefix + stripped.replace(".", "/")


def _normalise(reference: str, profile: LanguageProfile) -> str:
    reference = reference.strip().strip("'\"")
    if _URL_SCHEME.match(reference) and not reference.startswith("res://"):
        return ""
    reference = reference.split("?", 1)[0].split("#", 1)[0]

    if profile.module_separator == "::":
        reference = reference.replace("::", ".").rstrip(".")
        if reference.startswith("crate."):
            reference = reference[len("crate.") :]
        elif reference.startswith(("self.", "super.")):
            reference = "." + reference.split(".", 1)[1]

    reference = _DART_PACKAGE.sub("", reference)
    if reference.startswith("res://"):
        reference = reference[len("res://") :]
    if reference.startswith(("@/", "~/")):
        reference = reference[2:]
    elif reference.startswith("~"):
        reference = reference[1:]
    return reference.lstrip("/")


def _is_module_style(reference: str, profile: LanguageProfile) -> bool:
    if profile.module_separator is None or "/" in reference:
        return False
    # A quoted file name such as `require "config.pl"` is a path, not a module.
    return extension_of(reference) not in profile.extensions


def _with_partials(path: str, profile: LanguageProfile) -> list[str]:
    if profile.partial_prefix is None:
        return [path]
    head, _, tail = path.rpartition("/")
    partial = f"{head}/{profile.partial_prefix}{tail}" if head else f"{profile.partial_prefix}{tail}"
    return [path, partial]


def _relative_candidates(base: str, profile: LanguageProfile) -> Iterator[str]:
    extensions = profile.candidate_extensions
    if base:
        yield base
        for variant in _with_partials(base, profile):
            for ext in extensions:
                yield variant + ext
    prefix = f"{base}/" if base else ""
    for index_name in profile.index_names:
        for ext in extensions:
            yield f"{prefix}{index_name}{ext}"


def _package_candidates(reference: str, profile: LanguageProfile) -> Iterator[str]:
    extensions = profile.candidate_extensions
    if _is_module_style(reference, profile):
        translated = reference.replace(".", "/")
        modules = [translated]
        if profile.member_imports and "/" in translated:
            modules.append(translated.rsplit("/", 1)[0])
        for module in modules:
            for ext in extensions:
                yield module + ext
            for index_name in profile.index_names:
                for ext in extensions:
                    yield f"{module}/{index_name}{ext}"
        return

    yield reference
    if "." in reference.rsplit("/", 1)[-1]:
        return
    for variant in _with_partials(reference, profile):
        for ext in extensions:
            yield variant + ext


def resolve_relative(source_path: str, reference: str, index: FileIndex, profile: LanguageProfile) -> str | None:
    if _is_module_style(reference, profile):
        reference = dotted_to_path(reference)
    directory = source_path.rsplit("/", 1)[0] if "/" in source_path else ""
    base = join_relative(directory, reference)
    for candidate in _relative_candidates(base, profile):
        if candidate in index:
            return candidate
    return None


def resolve_package(reference: str, index: FileIndex, profile: LanguageProfile) -> str | None:
    for candidate in _package_candidates(reference, profile):
        match = index.find_suffix(candidate)
        if match is not None:
            return match
    return None


def resolve_reference(
    source_path: str,
    raw_reference: str,
    index: FileIndex,
    language: str | None = None,
) -> str | None:
    """Resolve ``raw_reference`` found in ``source_path`` to an indexed path, or ``None``."""
    profile = language_profile(language)
    reference = _normalise(raw_reference, profile)
    if not reference:
        return None
    if reference.startswith("."):
        resolved = resolve_relative(source_path, reference, index, profile)
    else:
        resolved = resolve_package(reference, index, profile)
    if resolved is None:
        logger.debug("Unresolved reference %r in %s", raw_reference, source_path)
    return resolved
