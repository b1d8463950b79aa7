"""FastAPI dependency injection wiring."""

from __future__ import annotations

from typing import Callable

import httpx

from readme_generator.infrastructure.config import get_settings
from readme_generator.infrastructure.github_rest_adapter import GitHubRestAdapter
from readme_generator.infrastructure.openai_adapter import OpenAIAdapter
from readme_generator.services.generate_readme import GenerateReadmeUseCase
from readme_generator.services.repo_info import RepoInfoAggregator

UseCaseFactory = Callable[[str | None], GenerateReadmeUseCase]

_http_client: httpx.AsyncClient | None = None
_openai_adapter: OpenAIAdapter | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
    )
    _openai_adapter = OpenAIAdapter(
        api_key=settings.openai_api_key.get_secret_value(),
        model=settings.openai_model,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None


def build_use_case(github_token: str | None = None) -> GenerateReadmeUseCase:
    """Wire a use case for one request; *github_token* overrides ``GITHUB_TOKEN``."""
    settings = get_settings()

    assert _http_client is not None, "startup() was not called"
    assert _openai_adapter is not None, "startup() was not called"

    token = github_token
    if token is None and settings.github_token:
        token = settings.github_token.get_secret_value()

    provider = GitHubRestAdapter(
        client=_http_client, token=token, api_base=settings.github_api_base
    )
    aggregator = RepoInfoAggregator(
        provider,
        max_files_to_fetch=settings.max_files_to_fetch,
        max_content_length=settings.max_file_content_length,
        max_fetch_attempts=settings.max_fetch_attempts,
        max_contributors=settings.max_contributors,
    )
    return GenerateReadmeUseCase(
        aggregator=aggregator,
        llm_gateway=_openai_adapter,
        max_context_tokens=settings.max_context_tokens,
    )


def get_use_case_factory() -> UseCaseFactory:
    """Dependency returning the per-request use-case builder."""
    return build_use_case
