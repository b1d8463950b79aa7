"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from readme_generator.domain.exceptions import InvalidGitHubUrlError


@dataclass(frozen=True, slots=True)
class RepoIdentifier:
    """Owner / repository pair parsed from a repository URL.

    Accepts anything shaped like ``https://github.com/<owner>/<repo>``; extra
    path segments (``/tree/main/src``) are ignored and a trailing ``.git`` is
    stripped from the repository name.
    """

    owner: str
    repo: str

    @classmethod
    def from_url(cls, url: str) -> RepoIdentifier:
        """Parse a raw URL string into an identifier."""
        url = url.strip()
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise InvalidGitHubUrlError(f"Invalid repository URL: '{url}'.")

        parts = [part for part in parsed.path.split("/") if part]
        if len(parts) < 2:
            raise InvalidGitHubUrlError(
                "Invalid GitHub repository URL format. Could not extract owner/repo."
            )

        owner = parts[0]
        repo = parts[1].removesuffix(".git")
        if not repo:
            raise InvalidGitHubUrlError(
                "Invalid GitHub repository URL format. Could not extract owner/repo."
            )
        return cls(owner=owner, repo=repo)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"
