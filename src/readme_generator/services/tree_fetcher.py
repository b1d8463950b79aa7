"""Tree fetcher — full repository inventory with a shallow-listing fallback."""

from __future__ import annotations

import logging
from dataclasses import replace

from readme_generator.domain.entities import FileEntry
from readme_generator.domain.exceptions import TreeFetchError, TreeUnavailableError
from readme_generator.domain.ports.repo_provider import RepoProvider
from readme_generator.domain.value_objects import RepoIdentifier

logger = logging.getLogger(__name__)


async def fetch_inventory(
    provider: RepoProvider, repo: RepoIdentifier, branch: str
) -> list[FileEntry]:
    """Return every node of *repo* at *branch* as an unranked inventory.

    Tries the recursive tree first. A truncated tree is used as-is; a failed
    request falls back to the top-level directory listing. Raises
    :class:`TreeFetchError` only when both requests fail.
    """
    try:
        listing = await provider.fetch_tree(repo, branch)
    except TreeUnavailableError as tree_exc:
        logger.warning(
            "Failed to fetch recursive tree for %s: %s. "
            "Falling back to top-level contents (less comprehensive).",
            repo.full_name,
            tree_exc,
        )
        try:
            entries = await provider.fetch_directory_listing(repo, branch)
        except TreeUnavailableError as contents_exc:
            raise TreeFetchError(
                "Failed to fetch repository contents. "
                f"Tree Error: {tree_exc}, Contents Error: {contents_exc}"
            ) from contents_exc
        return [_with_download_url(provider, repo, branch, e) for e in entries]

    if listing.truncated:
        logger.warning(
            "Repository tree for %s was truncated by the GitHub API; "
            "some files will not be considered.",
            repo.full_name,
        )
    return [_with_download_url(provider, repo, branch, e) for e in listing.entries]


def _with_download_url(
    provider: RepoProvider, repo: RepoIdentifier, branch: str, entry: FileEntry
) -> FileEntry:
    if entry.download_url or not entry.is_file:
        return entry
    return replace(entry, download_url=provider.raw_url(repo, branch, entry.path))
