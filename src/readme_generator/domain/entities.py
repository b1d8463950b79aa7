"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Union


class PriorityTier(IntEnum):
    """Selection rank of a repository file (lower = fetched first)."""

    README = 1
    LICENSE = 2
    MANIFEST = 3
    SOURCE_DIR = 4
    ENTRY_HINT = 5
    SOURCE = 6
    DOCS_SOURCE = 7
    OTHER = 10


class EntryType(str, Enum):
    """Kind of node in a repository listing."""

    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"


# ── Per-file fetch outcomes ─────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Fetched:
    """Content was downloaded (possibly truncated to the per-file cap)."""

    content: str
    truncated: bool = False


@dataclass(frozen=True, slots=True)
class Skipped:
    """No request was made for this file."""

    reason: str


@dataclass(frozen=True, slots=True)
class Failed:
    """A request was made and did not yield content."""

    reason: str


FetchOutcome = Union[Fetched, Skipped, Failed]


# ── Repository data ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A single node of the repository tree, optionally carrying its content."""

    name: str
    path: str
    type: EntryType = EntryType.FILE
    size: int | None = None
    sha: str | None = None
    download_url: str | None = None
    content: str | None = None
    error: str | None = None

    @property
    def is_file(self) -> bool:
        return self.type is EntryType.FILE

    def with_outcome(self, outcome: FetchOutcome) -> FileEntry:
        """Return a copy that records *outcome* as content or error."""
        if isinstance(outcome, Fetched):
            return replace(self, content=outcome.content, error=None)
        return replace(self, content=None, error=outcome.reason)


@dataclass(frozen=True, slots=True)
class RepoMetadata:
    """High-level metadata about a GitHub repository."""

    owner: str
    repo: str
    name: str
    default_branch: str = "master"
    description: str | None = None
    language: str | None = None


@dataclass(frozen=True, slots=True)
class TreeListing:
    """Raw result of a recursive tree request."""

    entries: list[FileEntry]
    truncated: bool = False


@dataclass(frozen=True, slots=True)
class Contributor:
    """A (non-bot) contributor shown in the generated README."""

    login: str
    avatar_url: str
    profile_url: str
    contributions: int | None = None


@dataclass(frozen=True, slots=True)
class ContentFetchBudget:
    """Counters for one selection run.

    Immutable: every ``record_*`` call returns a new budget, so the value is
    threaded through the selection loop instead of being shared state.
    """

    max_files_to_fetch: int
    max_content_length: int
    max_attempts: int
    fetched_count: int = 0
    attempts: int = 0

    @classmethod
    def create(
        cls,
        max_files_to_fetch: int,
        max_content_length: int,
        max_attempts: int | None = None,
    ) -> ContentFetchBudget:
        if max_attempts is None:
            max_attempts = max_files_to_fetch * 3
        return cls(
            max_files_to_fetch=max_files_to_fetch,
            max_content_length=max_content_length,
            max_attempts=max(max_attempts, max_files_to_fetch),
        )

    @property
    def exhausted(self) -> bool:
        return (
            self.fetched_count >= self.max_files_to_fetch
            or self.attempts >= self.max_attempts
        )

    @property
    def large_file_threshold(self) -> int:
        """Size in bytes above which non-priority files are not downloaded."""
        return self.max_content_length * 3

    def record_attempt(self) -> ContentFetchBudget:
        return replace(self, attempts=self.attempts + 1)

    def record_success(self) -> ContentFetchBudget:
        return replace(self, fetched_count=self.fetched_count + 1)


@dataclass(frozen=True, slots=True)
class RepoInfo:
    """Aggregate handed to the document-generation collaborator."""

    repo_name: str | None = None
    description: str | None = None
    main_language: str | None = None
    repo_contents: list[FileEntry] | None = None
    contributors: list[Contributor] | None = None
    error: str | None = None

    @classmethod
    def failure(cls, message: str) -> RepoInfo:
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None


# ── README generation ───────────────────────────────────────────────────────


class ReadmeLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


@dataclass(frozen=True, slots=True)
class GenerationOptions:
    """User choices forwarded to the generation prompt."""

    length: ReadmeLength = ReadmeLength.MEDIUM
    include_emojis: bool = False
    target_languages: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ReadmeDocument:
    """One generated (or translated) README file."""

    language: str
    file_name: str
    content: str


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """All README documents for one request plus the data they came from."""

    readmes: list[ReadmeDocument]
    repo_info: RepoInfo
