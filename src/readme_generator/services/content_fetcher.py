"""Content fetcher — text of a single file, truncated, with errors as data."""

from __future__ import annotations

import logging

from readme_generator.domain.entities import Failed, Fetched, FetchOutcome, FileEntry
from readme_generator.domain.exceptions import ContentFetchError
from readme_generator.domain.ports.repo_provider import RepoProvider
from readme_generator.domain.value_objects import RepoIdentifier

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n... (file content truncated)"


class ContentFetcher:
    """Downloads file bodies for one repository / branch.

    :meth:`fetch` never raises: every failure mode is returned as
    :class:`Failed` so the caller can record it next to the file.
    """

    def __init__(
        self,
        provider: RepoProvider,
        repo: RepoIdentifier,
        branch: str,
        max_content_length: int,
    ) -> None:
        self._provider = provider
        self._repo = repo
        self._branch = branch
        self._max_length = max_content_length

    def resolve_url(self, entry: FileEntry) -> str | None:
        if entry.download_url:
            return entry.download_url
        if entry.sha and entry.path:
            return self._provider.raw_url(self._repo, self._branch, entry.path)
        return None

    async def fetch(self, entry: FileEntry) -> FetchOutcome:
        url = self.resolve_url(entry)
        if url is None:
            return Failed(f"No download URL could be constructed for file: {entry.path}")

        try:
            text = await self._provider.fetch_raw(url)
        except ContentFetchError as exc:
            if exc.status_code == 404:
                return Failed(f"File content not found at {url} (404).")
            if exc.status_code is not None:
                return Failed(
                    f"Failed to fetch file content from {url}. Status: {exc.status_code}"
                )
            logger.debug("Transport error fetching %s", entry.path, exc_info=True)
            return Failed(f"Exception fetching file content: {exc}")

        if len(text) > self._max_length:
            return Fetched(text[: self._max_length] + TRUNCATION_MARKER, truncated=True)
        return Fetched(text)
