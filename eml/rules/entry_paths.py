"""
Classification of import paths against the entry-file grammar.

Pure string logic, no I/O, no shared state.

Path shapes:
  @/module/entry.<seg>...        — top-level import (only normal entries)
  ../entry..<seg>.children       — parent import (only children entries)
  ./dir/entry.<seg>...           — subdirectory import (only normal entries)
  ./anything                     — sibling import (always allowed)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


SEPARATOR = "/"

DEFAULT_ALIAS = "@"
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")

# entry, entry.core, entry.core.v2
_NORMAL_ENTRY_RE = re.compile(r"entry(\.[0-9A-Za-z-]+)*")
# entry..children, entry..utils.children
_CHILDREN_ENTRY_RE = re.compile(r"entry\.\.([0-9A-Za-z-]+\.)*children")


class ViolationKind(str, Enum):
    INVALID_TOP_LEVEL_IMPORT = "invalidTopLevelImport"
    INVALID_TOP_LEVEL_IMPORT_DEPTH = "invalidTopLevelImportDepth"
    INVALID_TOP_LEVEL_IMPORT_CHILDREN = "invalidTopLevelImportChildren"
    INVALID_PARENT_IMPORT = "invalidParentImport"
    TOO_MANY_DIRECTORY_SEGMENTS = "tooManyDirectorySegments"
    INVALID_SUBDIRECTORY_IMPORT = "invalidSubdirectoryImport"


class PrefixClass(str, Enum):
    TOP_LEVEL = "top-level"
    PARENT_TRAVERSAL = "parent-traversal"
    SUBDIRECTORY_OR_SIBLING = "subdirectory-or-sibling"
    UNRECOGNIZED = "unrecognized"


class EntryKind(str, Enum):
    NORMAL = "normal"
    CHILDREN = "children"
    PLAIN = "plain"


@dataclass(frozen=True)
class PathPolicy:
    """
    Project conventions the classifier depends on.

    top_level_alias: alias root of top-level imports ("@" → "@/module/...")
    extensions: source-file extensions stripped before grammar matching
    """
    top_level_alias: str = DEFAULT_ALIAS
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS

    @property
    def top_level_prefix(self) -> str:
        return self.top_level_alias + SEPARATOR


DEFAULT_POLICY = PathPolicy()


@dataclass(frozen=True)
class Classification:
    """Full trace of one classification, used by `eml classify`."""
    path: str
    prefix_class: PrefixClass
    segments: List[str] = field(default_factory=list)
    entry_name: Optional[str] = None
    entry_kind: Optional[EntryKind] = None
    violation: Optional[ViolationKind] = None


# ---- Pure helpers ----------------------------------------------------------

def split_segments(path: str) -> List[str]:
    """Split on the separator, keeping empty segments ('a//b' → ['a', '', 'b'])."""
    return path.split(SEPARATOR)


def strip_extension(name: str, extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS) -> str:
    """
    Remove one trailing source extension from the configured set.
    Names without a known extension are returned unchanged.
    """
    # longest first: ".d.ts" before ".ts"
    for ext in sorted(extensions, key=len, reverse=True):
        if ext and name.endswith(ext):
            return name[: -len(ext)]
    return name


def is_normal_entry(name: str) -> bool:
    return _NORMAL_ENTRY_RE.fullmatch(name) is not None


def is_children_entry(name: str) -> bool:
    return _CHILDREN_ENTRY_RE.fullmatch(name) is not None


def entry_kind(name: str) -> EntryKind:
    """
    Classify an extension-stripped file name.

    The two grammars are disjoint: every children entry contains ".." right
    after "entry", and a normal entry never contains two consecutive dots.
    Children is still checked first as the narrower form.
    """
    if is_children_entry(name):
        return EntryKind.CHILDREN
    if is_normal_entry(name):
        return EntryKind.NORMAL
    return EntryKind.PLAIN


def prefix_class(path: str, policy: PathPolicy = DEFAULT_POLICY) -> PrefixClass:
    if path.startswith(policy.top_level_prefix):
        return PrefixClass.TOP_LEVEL
    if not path.startswith("."):
        return PrefixClass.UNRECOGNIZED
    if path == ".." or path.startswith(".." + SEPARATOR):
        return PrefixClass.PARENT_TRAVERSAL
    return PrefixClass.SUBDIRECTORY_OR_SIBLING


# ---- Decision tree ---------------------------------------------------------

def explain(path: str, policy: PathPolicy = DEFAULT_POLICY) -> Classification:
    """
    Classify an import path and return every intermediate value.
    `classify()` is a thin projection of this function.
    """
    if not isinstance(path, str):
        raise TypeError(f"import path must be a string, got {type(path).__name__}")

    kind = prefix_class(path, policy)

    if kind is PrefixClass.UNRECOGNIZED:
        return Classification(path, kind)
    if kind is PrefixClass.TOP_LEVEL:
        return _explain_top_level(path, policy)
    if kind is PrefixClass.PARENT_TRAVERSAL:
        return _explain_parent(path, policy)
    return _explain_subdirectory(path, policy)


def classify(path: str, policy: PathPolicy = DEFAULT_POLICY) -> Optional[ViolationKind]:
    """Return the violation for an import path, or None when it is allowed."""
    return explain(path, policy).violation


def _explain_top_level(path: str, policy: PathPolicy) -> Classification:
    rest = path[len(policy.top_level_prefix):]
    segments = split_segments(rest)

    # <module>/<file> — both parts required and non-empty
    if len(segments) < 2 or not segments[0] or not SEPARATOR.join(segments[1:]):
        return Classification(
            path, PrefixClass.TOP_LEVEL, segments,
            violation=ViolationKind.INVALID_TOP_LEVEL_IMPORT,
        )

    if len(segments) > 2:
        return Classification(
            path, PrefixClass.TOP_LEVEL, segments,
            violation=ViolationKind.INVALID_TOP_LEVEL_IMPORT_DEPTH,
        )

    name = strip_extension(segments[1], policy.extensions)
    ek = entry_kind(name)
    violation: Optional[ViolationKind] = None
    if ek is EntryKind.CHILDREN:
        violation = ViolationKind.INVALID_TOP_LEVEL_IMPORT_CHILDREN
    elif ek is EntryKind.PLAIN:
        violation = ViolationKind.INVALID_TOP_LEVEL_IMPORT
    return Classification(path, PrefixClass.TOP_LEVEL, segments, name, ek, violation)


def _explain_parent(path: str, policy: PathPolicy) -> Classification:
    segments = split_segments(path)

    if len(segments) > 2:
        return Classification(
            path, PrefixClass.PARENT_TRAVERSAL, segments,
            violation=ViolationKind.TOO_MANY_DIRECTORY_SEGMENTS,
        )

    name = strip_extension(segments[-1], policy.extensions)
    ek = entry_kind(name)
    violation = None if ek is EntryKind.CHILDREN else ViolationKind.INVALID_PARENT_IMPORT
    return Classification(path, PrefixClass.PARENT_TRAVERSAL, segments, name, ek, violation)


def _explain_subdirectory(path: str, policy: PathPolicy) -> Classification:
    # ".hidden/x", ".env", "..foo": no "./" marker, not checked
    if not path.startswith("." + SEPARATOR):
        return Classification(path, PrefixClass.SUBDIRECTORY_OR_SIBLING, split_segments(path))

    segments = split_segments(path[2:])

    # sibling file — any name is fine
    if len(segments) == 1:
        return Classification(path, PrefixClass.SUBDIRECTORY_OR_SIBLING, segments)

    if len(segments) > 2:
        return Classification(
            path, PrefixClass.SUBDIRECTORY_OR_SIBLING, segments,
            violation=ViolationKind.TOO_MANY_DIRECTORY_SEGMENTS,
        )

    name = strip_extension(segments[-1], policy.extensions)
    ek = entry_kind(name)
    violation = None if ek is EntryKind.NORMAL else ViolationKind.INVALID_SUBDIRECTORY_IMPORT
    return Classification(path, PrefixClass.SUBDIRECTORY_OR_SIBLING, segments, name, ek, violation)


__all__ = [
    "SEPARATOR",
    "DEFAULT_ALIAS",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_POLICY",
    "ViolationKind",
    "PrefixClass",
    "EntryKind",
    "PathPolicy",
    "Classification",
    "split_segments",
    "strip_extension",
    "is_normal_entry",
    "is_children_entry",
    "entry_kind",
    "prefix_class",
    "explain",
    "classify",
]
