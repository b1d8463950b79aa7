"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from readme_generator.domain.entities import (
    Contributor,
    FileEntry,
    ReadmeDocument,
    ReadmeLength,
    RepoInfo,
)


def _strip_required(value: str, field_name: str) -> str:
    stripped = value.strip()
    if not stripped:
        msg = f"{field_name} must not be empty."
        raise ValueError(msg)
    return stripped


class RepoRequest(BaseModel):
    """Request body for ``POST /repo-info``."""

    repo_url: str
    github_token: str | None = None

    @field_validator("repo_url")
    @classmethod
    def _must_be_present(cls, v: str) -> str:
        return _strip_required(v, "repo_url")

    @field_validator("github_token")
    @classmethod
    def _blank_token_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class GenerateReadmeRequest(RepoRequest):
    """Request body for ``POST /readme``."""

    readme_length: ReadmeLength = ReadmeLength.MEDIUM
    include_emojis: bool = False
    target_languages: list[str] = Field(default_factory=list)

    @field_validator("target_languages")
    @classmethod
    def _clean_languages(cls, v: list[str]) -> list[str]:
        languages: list[str] = []
        for item in v:
            language = _strip_required(item, "target_languages item")
            if language not in languages:
                languages.append(language)
        return languages


class TranslateRequest(BaseModel):
    """Request body for ``POST /readme/translate``."""

    readme_content: str
    target_language: str

    @field_validator("readme_content", "target_language")
    @classmethod
    def _must_be_present(cls, v: str, info: ValidationInfo) -> str:
        return _strip_required(v, info.field_name or "field")


class ImproveRequest(BaseModel):
    """Request body for ``POST /readme/improve``."""

    original_readme: str
    user_edits: str

    @field_validator("original_readme")
    @classmethod
    def _must_be_present(cls, v: str) -> str:
        return _strip_required(v, "original_readme")


class FileEntryOut(BaseModel):
    name: str
    path: str
    type: str
    size: int | None = None
    sha: str | None = None
    download_url: str | None = None
    content: str | None = None
    error: str | None = None

    @classmethod
    def from_entity(cls, entry: FileEntry) -> FileEntryOut:
        return cls(
            name=entry.name,
            path=entry.path,
            type=entry.type.value,
            size=entry.size,
            sha=entry.sha,
            download_url=entry.download_url,
            content=entry.content,
            error=entry.error,
        )


class ContributorOut(BaseModel):
    login: str
    avatar_url: str
    profile_url: str
    contributions: int | None = None

    @classmethod
    def from_entity(cls, contributor: Contributor) -> ContributorOut:
        return cls(
            login=contributor.login,
            avatar_url=contributor.avatar_url,
            profile_url=contributor.profile_url,
            contributions=contributor.contributions,
        )


class RepoInfoResponse(BaseModel):
    """Collected repository data; fatal problems are reported in ``error``."""

    repo_name: str | None = None
    description: str | None = None
    main_language: str | None = None
    repo_contents: list[FileEntryOut] | None = None
    contributors: list[ContributorOut] | None = None
    error: str | None = None

    @classmethod
    def from_entity(cls, info: RepoInfo) -> RepoInfoResponse:
        return cls(
            repo_name=info.repo_name,
            description=info.description,
            main_language=info.main_language,
            repo_contents=(
                [FileEntryOut.from_entity(e) for e in info.repo_contents]
                if info.repo_contents is not None
                else None
            ),
            contributors=(
                [ContributorOut.from_entity(c) for c in info.contributors]
                if info.contributors is not None
                else None
            ),
            error=info.error,
        )


class ReadmeDocumentOut(BaseModel):
    language: str
    file_name: str
    content: str

    @classmethod
    def from_entity(cls, doc: ReadmeDocument) -> ReadmeDocumentOut:
        return cls(language=doc.language, file_name=doc.file_name, content=doc.content)


class GenerateReadmeResponse(BaseModel):
    """Successful response from ``POST /readme``."""

    readmes: list[ReadmeDocumentOut]
    repo_info: RepoInfoResponse


class ImproveResponse(BaseModel):
    improved_readme: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
