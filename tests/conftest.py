"""Shared fixtures: an in-memory repository provider and entry builders."""

from __future__ import annotations

from typing import Any

import pytest

from readme_generator.domain.entities import (
    EntryType,
    FileEntry,
    RepoMetadata,
    TreeListing,
)
from readme_generator.domain.exceptions import ContentFetchError, TreeUnavailableError
from readme_generator.domain.value_objects import RepoIdentifier

RAW_BASE = "https://raw.example"


def make_file(path: str, size: int | None = 100, **overrides: Any) -> FileEntry:
    """Build a file entry as the tree listing would return it."""
    fields: dict[str, Any] = {
        "name": path.rsplit("/", maxsplit=1)[-1],
        "path": path,
        "type": EntryType.FILE,
        "size": size,
        "sha": f"sha-{path}",
    }
    fields.update(overrides)
    return FileEntry(**fields)


def make_dir(path: str) -> FileEntry:
    return FileEntry(name=path.rsplit("/", maxsplit=1)[-1], path=path, type=EntryType.DIR)


class FakeProvider:
    """In-memory ``RepoProvider``.

    Every attribute can be set to a value or to an exception instance, which
    is then raised by the matching method.
    """

    def __init__(self) -> None:
        self.metadata: RepoMetadata | Exception = RepoMetadata(
            owner="acme",
            repo="widget",
            name="widget",
            default_branch="main",
            description="A widget",
            language="TypeScript",
        )
        self.tree: TreeListing | Exception = TreeListing(entries=[])
        self.listing: list[FileEntry] | Exception = TreeUnavailableError(
            "HTTP 404 Not Found", 404
        )
        self.contents: dict[str, str | Exception] = {}
        self.contributors: list[dict[str, Any]] | Exception = []
        self.raw_requests: list[str] = []
        self.calls: list[str] = []

    @staticmethod
    def _resolve(value: Any) -> Any:
        if isinstance(value, Exception):
            raise value
        return value

    async def fetch_metadata(self, repo: RepoIdentifier) -> RepoMetadata:
        self.calls.append("metadata")
        return self._resolve(self.metadata)

    async def fetch_tree(self, repo: RepoIdentifier, branch: str) -> TreeListing:
        self.calls.append("tree")
        return self._resolve(self.tree)

    async def fetch_directory_listing(
        self, repo: RepoIdentifier, branch: str
    ) -> list[FileEntry]:
        self.calls.append("listing")
        return self._resolve(self.listing)

    async def fetch_raw(self, download_url: str) -> str:
        self.raw_requests.append(download_url)
        path = download_url.split("/main/", maxsplit=1)[-1]
        if path not in self.contents:
            raise ContentFetchError(f"HTTP 404 for {download_url}", 404)
        return self._resolve(self.contents[path])

    async def fetch_contributors(
        self, repo: RepoIdentifier, limit: int
    ) -> list[dict[str, Any]]:
        self.calls.append("contributors")
        return self._resolve(self.contributors)

    def raw_url(self, repo: RepoIdentifier, branch: str, path: str) -> str:
        return f"{RAW_BASE}/{repo.owner}/{repo.repo}/{branch}/{path}"


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def repo() -> RepoIdentifier:
    return RepoIdentifier(owner="acme", repo="widget")
