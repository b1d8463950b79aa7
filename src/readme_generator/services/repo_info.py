"""Repository-info aggregation — URL in, :class:`RepoInfo` out.

Fatal problems (bad URL, metadata or tree unavailable) are reported through
``RepoInfo.error`` instead of being raised, so the generation step can show
them to the user verbatim. Everything else degrades per file or per section.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from readme_generator.domain.entities import (
    ContentFetchBudget,
    FileEntry,
    RepoInfo,
    RepoMetadata,
)
from readme_generator.domain.exceptions import (
    GitHubApiError,
    GitHubRateLimitError,
    InvalidGitHubUrlError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    TreeFetchError,
)
from readme_generator.domain.ports.repo_provider import RepoProvider
from readme_generator.domain.value_objects import RepoIdentifier
from readme_generator.services.content_fetcher import ContentFetcher
from readme_generator.services.contributor_fetcher import fetch_contributors
from readme_generator.services.selection_engine import select_contents
from readme_generator.services.tree_fetcher import fetch_inventory

logger = logging.getLogger(__name__)


class AggregationStage(str, Enum):
    PARSING = "parsing"
    FETCHING_METADATA = "fetching_metadata"
    FETCHING_TREE = "fetching_tree"
    SELECTING_CONTENT = "selecting_content"
    FETCHING_CONTRIBUTORS = "fetching_contributors"
    DONE = "done"
    ERROR = "error"


def describe_metadata_error(exc: GitHubApiError) -> str:
    """Turn a metadata failure into a message fit for direct display."""
    prefix = "Failed to fetch repository details."
    if exc.status_code is not None:
        prefix = f"Failed to fetch repository details. Status: {exc.status_code}."

    if isinstance(exc, RepositoryNotFoundError):
        cause = (
            "This could be an invalid URL or a private repository for which the "
            "provided token (if any) is invalid or lacks permissions."
        )
    elif isinstance(exc, GitHubRateLimitError):
        cause = f"This is due to API rate limits. {exc}"
    elif isinstance(exc, RepositoryAccessDeniedError):
        cause = (
            "Authentication failed. Ensure your GitHub Personal Access Token is "
            "correct and has the 'repo' scope if accessing a private repository."
        )
    elif exc.status_code is None:
        return f"Exception fetching repository details: {exc}"
    else:
        cause = "This could also be due to API rate limits."
    return f"{prefix} {cause}"


class RepoInfoAggregator:
    """Collects metadata, selected file contents and contributors for one repository.

    Parameters
    ----------
    provider:
        Repository provider already configured with the caller's credentials.
    max_files_to_fetch:
        Number of files whose content may be successfully downloaded.
    max_content_length:
        Per-file character cap; longer bodies are truncated.
    max_fetch_attempts:
        Cap on download requests, successful or not (``None`` → 3 × max files).
    max_contributors:
        Maximum number of contributors to return.
    """

    def __init__(
        self,
        provider: RepoProvider,
        max_files_to_fetch: int = 12,
        max_content_length: int = 20_000,
        max_fetch_attempts: int | None = None,
        max_contributors: int = 15,
    ) -> None:
        self._provider = provider
        self._max_files = max_files_to_fetch
        self._max_length = max_content_length
        self._max_attempts = max_fetch_attempts
        self._max_contributors = max_contributors
        self.stage = AggregationStage.PARSING

    def _enter(self, stage: AggregationStage) -> None:
        logger.debug("Aggregation stage: %s → %s", self.stage.value, stage.value)
        self.stage = stage

    def _fail(self, message: str) -> RepoInfo:
        self._enter(AggregationStage.ERROR)
        logger.warning("Repository info unavailable: %s", message)
        return RepoInfo.failure(message)

    async def fetch(self, repo_url: str) -> RepoInfo:
        """Run the whole aggregation for *repo_url*."""
        self.stage = AggregationStage.PARSING
        try:
            repo = RepoIdentifier.from_url(repo_url)
        except InvalidGitHubUrlError as exc:
            return self._fail(str(exc))

        logger.info("Collecting repository info for %s", repo.full_name)

        self._enter(AggregationStage.FETCHING_METADATA)
        try:
            metadata = await self._provider.fetch_metadata(repo)
        except GitHubApiError as exc:
            return self._fail(describe_metadata_error(exc))

        contributors_task = asyncio.create_task(
            fetch_contributors(self._provider, repo, self._max_contributors)
        )
        try:
            contents = await self._collect_contents(repo, metadata)
        except TreeFetchError as exc:
            contributors_task.cancel()
            return self._fail(str(exc))
        except BaseException:
            contributors_task.cancel()
            raise
        contributors = await contributors_task

        self._enter(AggregationStage.DONE)
        return RepoInfo(
            repo_name=metadata.name,
            description=metadata.description,
            main_language=metadata.language,
            repo_contents=contents or None,
            contributors=contributors,
        )

    async def _collect_contents(
        self, repo: RepoIdentifier, metadata: RepoMetadata
    ) -> list[FileEntry]:
        branch = metadata.default_branch
        self._enter(AggregationStage.FETCHING_TREE)
        inventory = await fetch_inventory(self._provider, repo, branch)

        self._enter(AggregationStage.SELECTING_CONTENT)
        fetcher = ContentFetcher(self._provider, repo, branch, self._max_length)
        budget = ContentFetchBudget.create(
            self._max_files, self._max_length, self._max_attempts
        )
        result = await select_contents(inventory, fetcher, budget)

        self._enter(AggregationStage.FETCHING_CONTRIBUTORS)
        return result.entries
