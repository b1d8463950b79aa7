"""GitHub REST API adapter — implements the RepoProvider port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from readme_generator.domain.entities import (
    EntryType,
    FileEntry,
    RepoMetadata,
    TreeListing,
)
from readme_generator.domain.exceptions import (
    ContentFetchError,
    GitHubApiError,
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    TreeUnavailableError,
)
from readme_generator.domain.value_objects import RepoIdentifier

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_RAW_BASE = "https://raw.githubusercontent.com"
_USER_AGENT = "readme-generator/1.0"
_API_VERSION = "2022-11-28"

_TREE_TYPES: dict[str, EntryType] = {
    "blob": EntryType.FILE,
    "tree": EntryType.DIR,
}


class GitHubRestAdapter:
    """Concrete RepoProvider backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_base: str = _GITHUB_API,
    ) -> None:
        self._client = client
        self._api_base = api_base.rstrip("/")
        self._raw_headers: dict[str, str] = {"User-Agent": _USER_AGENT}
        if token:
            self._raw_headers["Authorization"] = f"Bearer {token}"
        self._api_headers: dict[str, str] = {
            **self._raw_headers,
            "Accept": "application/vnd.github.v3+json",
            "X-GitHub-Api-Version": _API_VERSION,
        }

    # ── RepoProvider ────────────────────────────────────────────────────

    async def fetch_metadata(self, repo: RepoIdentifier) -> RepoMetadata:
        """GET /repos/{owner}/{repo} → RepoMetadata."""
        resp = await self._api_get(f"/repos/{repo.owner}/{repo.repo}")
        data = _json_object(resp, GitHubApiError)
        return RepoMetadata(
            owner=repo.owner,
            repo=repo.repo,
            name=data.get("name") or repo.repo,
            default_branch=data.get("default_branch") or "master",
            description=data.get("description"),
            language=data.get("language"),
        )

    async def fetch_tree(self, repo: RepoIdentifier, branch: str) -> TreeListing:
        """GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=true → TreeListing."""
        resp = await self._listing_get(
            f"/repos/{repo.owner}/{repo.repo}/git/trees/{branch}",
            params={"recursive": "true"},
        )
        data = _json_object(resp, TreeUnavailableError)
        entries: list[FileEntry] = []
        for item in data.get("tree", []):
            path = item.get("path")
            if not path:
                continue
            entry_type = _TREE_TYPES.get(item.get("type", ""), EntryType.SYMLINK)
            entries.append(
                FileEntry(
                    name=path.rsplit("/", maxsplit=1)[-1],
                    path=path,
                    type=entry_type,
                    size=item.get("size"),
                    sha=item.get("sha"),
                    download_url=(
                        self.raw_url(repo, branch, path)
                        if entry_type is EntryType.FILE
                        else None
                    ),
                )
            )
        return TreeListing(entries=entries, truncated=bool(data.get("truncated")))

    async def fetch_directory_listing(
        self, repo: RepoIdentifier, branch: str
    ) -> list[FileEntry]:
        """GET /repos/{owner}/{repo}/contents?ref={branch} → top-level [FileEntry]."""
        resp = await self._listing_get(
            f"/repos/{repo.owner}/{repo.repo}/contents",
            params={"ref": branch},
        )
        data = _decode_json(resp, TreeUnavailableError)
        if not isinstance(data, list):
            raise TreeUnavailableError(
                f"Unexpected contents payload for {repo.full_name}.",
                resp.status_code,
            )

        entries: list[FileEntry] = []
        for item in data:
            path = item.get("path")
            if not path:
                continue
            try:
                entry_type = EntryType(item.get("type", "file"))
            except ValueError:
                # "submodule" and friends
                entry_type = EntryType.SYMLINK
            download_url = str(item.get("download_url") or "").strip() or None
            entries.append(
                FileEntry(
                    name=item.get("name") or path.rsplit("/", maxsplit=1)[-1],
                    path=path,
                    type=entry_type,
                    size=item.get("size"),
                    sha=item.get("sha"),
                    download_url=download_url,
                )
            )
        return entries

    async def fetch_raw(self, download_url: str) -> str:
        """Fetch raw file content from a direct download URL."""
        try:
            resp = await self._client.get(download_url, headers=self._raw_headers)
        except httpx.HTTPError as exc:
            raise ContentFetchError(str(exc) or type(exc).__name__) from exc

        if resp.status_code == 200:
            return resp.text

        raise ContentFetchError(
            f"HTTP {resp.status_code} for {download_url}", resp.status_code
        )

    async def fetch_contributors(
        self, repo: RepoIdentifier, limit: int
    ) -> list[dict[str, Any]]:
        """GET /repos/{owner}/{repo}/contributors?anon=0&per_page={limit}."""
        resp = await self._api_get(
            f"/repos/{repo.owner}/{repo.repo}/contributors",
            params={"anon": "0", "per_page": str(limit)},
        )
        data = _decode_json(resp, GitHubApiError)
        return data if isinstance(data, list) else []

    def raw_url(self, repo: RepoIdentifier, branch: str, path: str) -> str:
        return f"{_RAW_BASE}/{repo.owner}/{repo.repo}/{branch}/{quote(path, safe='/')}"

    # ── HTTP helpers ────────────────────────────────────────────────────

    async def _send(
        self, endpoint: str, params: dict[str, str] | None
    ) -> httpx.Response:
        url = f"{self._api_base}{endpoint}"
        try:
            return await self._client.get(url, headers=self._api_headers, params=params)
        except httpx.HTTPError as exc:
            raise GitHubApiError(f"Network error fetching {url}: {exc}") from exc

    async def _listing_get(
        self, endpoint: str, params: dict[str, str] | None = None
    ) -> httpx.Response:
        """GET a tree/contents listing; any non-200 becomes ``TreeUnavailableError``."""
        try:
            resp = await self._send(endpoint, params)
        except GitHubApiError as exc:
            raise TreeUnavailableError(str(exc)) from exc

        if resp.status_code != 200:
            raise TreeUnavailableError(
                f"HTTP {resp.status_code} {resp.reason_phrase}".rstrip(),
                resp.status_code,
            )
        return resp

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        resp = await self._send(endpoint, params)
        status = resp.status_code

        if status == 200:
            return resp

        if status == 404:
            raise RepositoryNotFoundError(
                "Repository not found (404). This could be an invalid URL or a "
                "private repository for which the provided token (if any) is "
                "invalid or lacks permissions.",
                status,
            )

        if status == 429 or (
            status == 403 and resp.headers.get("x-ratelimit-remaining", "") == "0"
        ):
            raise GitHubRateLimitError(
                f"GitHub API rate limit exceeded (HTTP {status}). Resets at "
                f"{_format_reset(resp.headers.get('x-ratelimit-reset', ''))}. "
                "Provide a GitHub token to increase the limit.",
                status,
            )

        if status in (401, 403):
            raise RepositoryAccessDeniedError(
                f"Authentication failed (HTTP {status}). Ensure your GitHub "
                "Personal Access Token is correct and has the 'repo' scope if "
                "accessing a private repository.",
                status,
            )

        raise GitHubApiError(
            f"GitHub API returned HTTP {status} for {endpoint}. "
            "This could also be due to API rate limits.",
            status,
        )


def _format_reset(reset_raw: str) -> str:
    try:
        return datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S UTC"
        )
    except (ValueError, OSError):
        return reset_raw or "unknown"


def _decode_json(resp: httpx.Response, error_type: type[GitHubApiError]) -> Any:
    """Decode a 200 body; a non-JSON body raises *error_type* without a status."""
    try:
        return resp.json()
    except ValueError as exc:
        raise error_type(
            f"Malformed JSON in GitHub response from {resp.request.url}: {exc}"
        ) from exc


def _json_object(
    resp: httpx.Response, error_type: type[GitHubApiError]
) -> dict[str, Any]:
    data = _decode_json(resp, error_type)
    if not isinstance(data, dict):
        raise error_type(
            f"Expected a JSON object from {resp.request.url}, "
            f"got {type(data).__name__}."
        )
    return data
