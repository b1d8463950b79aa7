"""Port: repository provider — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from readme_generator.domain.entities import FileEntry, RepoMetadata, TreeListing
from readme_generator.domain.value_objects import RepoIdentifier


class RepoProvider(Protocol):
    """Abstract contract for reading repository data from a hosting provider."""

    async def fetch_metadata(self, repo: RepoIdentifier) -> RepoMetadata:
        """Return high-level repository metadata."""
        ...

    async def fetch_tree(self, repo: RepoIdentifier, branch: str) -> TreeListing:
        """Return the recursive tree for *branch* (raises ``TreeUnavailableError``)."""
        ...

    async def fetch_directory_listing(
        self, repo: RepoIdentifier, branch: str
    ) -> list[FileEntry]:
        """Return the top-level listing only (raises ``TreeUnavailableError``)."""
        ...

    async def fetch_raw(self, download_url: str) -> str:
        """Return the text behind *download_url* (raises ``ContentFetchError``)."""
        ...

    async def fetch_contributors(
        self, repo: RepoIdentifier, limit: int
    ) -> list[dict[str, Any]]:
        """Return the raw contributor records, at most *limit* per page."""
        ...

    def raw_url(self, repo: RepoIdentifier, branch: str, path: str) -> str:
        """Build the direct download URL for *path* on *branch*."""
        ...
