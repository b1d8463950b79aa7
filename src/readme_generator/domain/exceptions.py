"""Domain exception hierarchy.

The GitHub adapter raises these; the services decide which ones are fatal.
Per-file and contributor failures are turned into data, metadata and tree
failures end up in ``RepoInfo.error``, and anything that still escapes is
translated into an HTTP response by the interface layer.
"""

from __future__ import annotations


class ReadmeGeneratorError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidGitHubUrlError(ReadmeGeneratorError):
    """The supplied URL does not point to a GitHub repository."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class GitHubApiError(ReadmeGeneratorError):
    """A GitHub API call returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RepositoryNotFoundError(GitHubApiError):
    """The repository does not exist or is not visible with this token (404)."""


class RepositoryAccessDeniedError(GitHubApiError):
    """Authentication failed or the token lacks permissions (401 / 403)."""


class GitHubRateLimitError(GitHubApiError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class TreeUnavailableError(GitHubApiError):
    """A single tree listing request (recursive or shallow) failed."""


class TreeFetchError(ReadmeGeneratorError):
    """Neither the recursive tree nor the shallow listing could be fetched."""


class ContentFetchError(GitHubApiError):
    """Raw file download failed (status or transport error)."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(ReadmeGeneratorError):
    """Any error originating from the LLM provider."""
