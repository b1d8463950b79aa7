"""File classification — assign a selection priority to each repository file.

Rules are an ordered list of ``(predicate, tier)`` pairs evaluated against the
lower-cased name and path; the first matching predicate decides the tier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from readme_generator.domain.entities import FileEntry, PriorityTier

README_RE = re.compile(r"^readme(\.(md|rst|txt|markdown))?$")
LICENSE_RE = re.compile(r"^(license|copying)(\.(md|txt|rst))?$")

MANIFEST_NAMES: frozenset[str] = frozenset(
    {
        "package.json", "package-lock.json", "pnpm-lock.yaml", "yarn.lock",
        "pyproject.toml", "poetry.lock", "requirements.txt",
        "composer.json", "composer.lock",
        "gemfile", "gemfile.lock",
        "pom.xml", "build.gradle",
        "cargo.toml", "cargo.lock",
        "go.mod", "go.sum",
        "makefile", "dockerfile",
        "docker-compose.yml", "docker-compose.yaml",
    }
)

SOURCE_EXTENSIONS: tuple[str, ...] = (
    ".js", ".ts", ".tsx", ".jsx", ".py", ".java", ".go", ".rs", ".rb",
    ".php", ".cs", ".c", ".cpp", ".swift", ".kt", ".m", ".scala", ".pl",
    ".sh", ".lua", ".sql", ".html", ".css", ".vue",
)

SOURCE_DIRS: tuple[str, ...] = (
    "src/", "lib/", "app/", "source/", "sources/", "include/", "pkg/",
    "cmd/", "internal/", "core/", "main/", "server/", "client/",
)

TEST_DIRS: tuple[str, ...] = ("test/", "tests/", "spec/", "e2e/")

DOCS_DIRS: tuple[str, ...] = ("doc/", "docs/", "documentation/", "examples/")

ENTRY_POINT_HINTS: tuple[str, ...] = ("main", "app", "index", "config")


@dataclass(frozen=True, slots=True)
class _Subject:
    """Normalised view of a file used by the rule predicates."""

    name: str
    path: str

    @classmethod
    def of(cls, entry: FileEntry) -> _Subject:
        return cls(name=entry.name.lower(), path=entry.path.lower())

    @property
    def has_source_ext(self) -> bool:
        return self.path.endswith(SOURCE_EXTENSIONS)

    @property
    def in_source_dir(self) -> bool:
        return self.path.startswith(SOURCE_DIRS)

    @property
    def in_test_dir(self) -> bool:
        return self.path.startswith(TEST_DIRS)

    @property
    def in_docs_dir(self) -> bool:
        return self.path.startswith(DOCS_DIRS)

    @property
    def has_entry_hint(self) -> bool:
        return any(hint in self.path for hint in ENTRY_POINT_HINTS)


def _is_readme(s: _Subject) -> bool:
    return README_RE.match(s.name) is not None


def _is_license(s: _Subject) -> bool:
    return LICENSE_RE.match(s.name) is not None


def _is_manifest(s: _Subject) -> bool:
    return s.name in MANIFEST_NAMES


RULES: tuple[tuple[Callable[[_Subject], bool], PriorityTier], ...] = (
    (_is_readme, PriorityTier.README),
    (_is_license, PriorityTier.LICENSE),
    (_is_manifest, PriorityTier.MANIFEST),
    (lambda s: s.has_source_ext and s.in_source_dir, PriorityTier.SOURCE_DIR),
    (lambda s: s.has_source_ext and s.has_entry_hint, PriorityTier.ENTRY_HINT),
    (
        lambda s: s.has_source_ext and not s.in_test_dir and not s.in_docs_dir,
        PriorityTier.SOURCE,
    ),
    (lambda s: s.has_source_ext and s.in_docs_dir, PriorityTier.DOCS_SOURCE),
)


def classify(entry: FileEntry) -> PriorityTier:
    """Return the :class:`PriorityTier` of *entry* (``OTHER`` when nothing matches)."""
    subject = _Subject.of(entry)
    for predicate, tier in RULES:
        if predicate(subject):
            return tier
    return PriorityTier.OTHER


def is_priority_file(entry: FileEntry) -> bool:
    """README, license and manifest files are always worth their download."""
    subject = _Subject.of(entry)
    return _is_readme(subject) or _is_license(subject) or _is_manifest(subject)


def is_relevant_file(entry: FileEntry) -> bool:
    """Files the generator should hear about even when their body is not fetched."""
    return is_priority_file(entry) or _Subject.of(entry).has_source_ext


def sort_by_priority(entries: Iterable[FileEntry]) -> list[FileEntry]:
    """Stable sort by tier; equal tiers keep their listing order."""
    return sorted(entries, key=classify)
