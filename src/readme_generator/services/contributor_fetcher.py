"""Contributor fetcher — best effort, never blocks README generation."""

from __future__ import annotations

import logging
from typing import Any

from readme_generator.domain.entities import Contributor
from readme_generator.domain.exceptions import ReadmeGeneratorError
from readme_generator.domain.ports.repo_provider import RepoProvider
from readme_generator.domain.value_objects import RepoIdentifier

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("login", "avatar_url", "html_url")


def _to_contributor(record: Any) -> Contributor | None:
    if not isinstance(record, dict) or record.get("type") == "Bot":
        return None
    if not all(record.get(key) for key in _REQUIRED_FIELDS):
        return None
    contributions = record.get("contributions")
    return Contributor(
        login=record["login"],
        avatar_url=record["avatar_url"],
        profile_url=record["html_url"],
        contributions=contributions if isinstance(contributions, int) else None,
    )


async def fetch_contributors(
    provider: RepoProvider, repo: RepoIdentifier, limit: int
) -> list[Contributor] | None:
    """Return up to *limit* human contributors, or ``None`` if GitHub failed."""
    try:
        records = await provider.fetch_contributors(repo, limit)
    except ReadmeGeneratorError as exc:
        logger.warning(
            "Failed to fetch contributors for %s: %s. "
            "This will not block README generation.",
            repo.full_name,
            exc,
        )
        return None

    contributors = [c for c in map(_to_contributor, records) if c is not None]
    return contributors[:limit]
