"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from readme_generator.domain.entities import GenerationOptions
from readme_generator.interface.dependencies import UseCaseFactory, get_use_case_factory
from readme_generator.interface.schemas import (
    ErrorResponse,
    GenerateReadmeRequest,
    GenerateReadmeResponse,
    ImproveRequest,
    ImproveResponse,
    ReadmeDocumentOut,
    RepoInfoResponse,
    RepoRequest,
    TranslateRequest,
)

router = APIRouter()


@router.post("/repo-info", response_model=RepoInfoResponse)
async def repo_info(
    body: RepoRequest,
    factory: UseCaseFactory = Depends(get_use_case_factory),
) -> RepoInfoResponse:
    """Collect metadata, key file contents and contributors for a repository."""
    info = await factory(body.github_token).collect(body.repo_url)
    return RepoInfoResponse.from_entity(info)


@router.post(
    "/readme",
    response_model=GenerateReadmeResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid request body"},
        502: {"model": ErrorResponse, "description": "LLM provider error"},
    },
)
async def generate_readme(
    body: GenerateReadmeRequest,
    factory: UseCaseFactory = Depends(get_use_case_factory),
) -> GenerateReadmeResponse:
    """Generate a README (plus translations) for a GitHub repository."""
    options = GenerationOptions(
        length=body.readme_length,
        include_emojis=body.include_emojis,
        target_languages=body.target_languages,
    )
    result = await factory(body.github_token).execute(body.repo_url, options)
    return GenerateReadmeResponse(
        readmes=[ReadmeDocumentOut.from_entity(doc) for doc in result.readmes],
        repo_info=RepoInfoResponse.from_entity(result.repo_info),
    )


@router.post(
    "/readme/translate",
    response_model=ReadmeDocumentOut,
    responses={502: {"model": ErrorResponse, "description": "LLM provider error"}},
)
async def translate_readme(
    body: TranslateRequest,
    factory: UseCaseFactory = Depends(get_use_case_factory),
) -> ReadmeDocumentOut:
    """Translate README content into another language."""
    doc = await factory(None).translate(body.readme_content, body.target_language)
    return ReadmeDocumentOut.from_entity(doc)


@router.post(
    "/readme/improve",
    response_model=ImproveResponse,
    responses={502: {"model": ErrorResponse, "description": "LLM provider error"}},
)
async def improve_readme(
    body: ImproveRequest,
    factory: UseCaseFactory = Depends(get_use_case_factory),
) -> ImproveResponse:
    """Apply user edits to a generated README."""
    improved = await factory(None).improve(body.original_readme, body.user_edits)
    return ImproveResponse(improved_readme=improved)
