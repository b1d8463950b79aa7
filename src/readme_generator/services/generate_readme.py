"""Generate-README use case — the main orchestration pipeline.

Collects repository info, asks the LLM for a README, then fans out to the
requested translations. Depends only on the aggregator and the
:class:`LlmGateway` port; the interface layer injects concrete adapters.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from readme_generator.domain.entities import (
    GenerationOptions,
    GenerationResult,
    ReadmeDocument,
    RepoInfo,
)
from readme_generator.domain.exceptions import LlmError
from readme_generator.domain.ports.llm_gateway import LlmGateway
from readme_generator.services.prompt_context import render_repo_info
from readme_generator.services.repo_info import RepoInfoAggregator

logger = logging.getLogger(__name__)

FOOTER = "\n\n---\nGenerated by README Generator"

LANGUAGE_CODES: dict[str, str] = {
    "Spanish": "es",
    "French": "fr",
    "German": "de",
    "Japanese": "ja",
    "Chinese (Simplified)": "zh",
    "Portuguese": "pt",
    "Russian": "ru",
    "Italian": "it",
    "Korean": "ko",
}

# ── Prompt templates ────────────────────────────────────────────────────────

GENERATE_SYSTEM_PROMPT = """\
You are an expert technical writer. Write a README.md for a GitHub repository \
using only the repository information provided as JSON: metadata, the content \
of key files (entries with an "error" field have no content; mention them only \
if useful) and contributors.

Include a title, description, key features, technologies, prerequisites, \
installation, usage and license. If contributors are present, add a \
"Contributors" section as an HTML table of linked avatars with the login as \
the title attribute and no visible names. Do not invent facts and do not add \
an attribution footer.

Return **only** valid JSON: {"readme_content": "<markdown>"}
"""

TRANSLATE_SYSTEM_PROMPT = """\
You are an expert technical translator. Translate the README the user sends \
into the requested language. Preserve Markdown, HTML and links exactly; do not \
translate code, file paths or product names. Output only the translated README.
"""

IMPROVE_SYSTEM_PROMPT = """\
You are an expert technical writer. Incorporate the user's edits into the \
README, keeping its structure, style and code examples. Do not add or remove \
sections unless the edits ask for it. Output only the improved README.
"""

# ── Use case ────────────────────────────────────────────────────────────────


def readme_file_name(language: str) -> str:
    """``README.<code>.md`` for a human language name."""
    code = LANGUAGE_CODES.get(language) or language[:2].lower()
    return f"README.{code}.md"


def error_document(error: str) -> ReadmeDocument:
    return ReadmeDocument(
        language="Error",
        file_name="ERROR.md",
        content=(
            "## Unable to Analyze Repository\n\n"
            f"I was unable to fetch repository details. Error: {error}.\n\n"
            "Please check the URL and that the repository is public "
            "(or that a valid token is provided for a private repo)."
        ),
    )


class GenerateReadmeUseCase:
    """Orchestrates repository info → README → translations.

    Parameters
    ----------
    aggregator:
        Collects :class:`RepoInfo` for a repository URL.
    llm_gateway:
        Adapter that can send prompts to an LLM.
    max_context_tokens:
        Token budget for the serialised repository info in the prompt.
    """

    def __init__(
        self,
        aggregator: RepoInfoAggregator,
        llm_gateway: LlmGateway,
        max_context_tokens: int = 60_000,
    ) -> None:
        self._aggregator = aggregator
        self._llm = llm_gateway
        self._max_tokens = max_context_tokens

    # ── Public entry points ─────────────────────────────────────────────

    async def collect(self, repo_url: str) -> RepoInfo:
        return await self._aggregator.fetch(repo_url)

    async def execute(
        self, repo_url: str, options: GenerationOptions | None = None
    ) -> GenerationResult:
        """Run the full pipeline and return every generated document."""
        options = options or GenerationOptions()
        info = await self._aggregator.fetch(repo_url)

        if not info.ok:
            return GenerationResult(
                readmes=[error_document(info.error or "unknown error")],
                repo_info=info,
            )

        content = await self._generate(repo_url, info, options)
        readmes = [ReadmeDocument("English", "README.md", content + FOOTER)]

        if options.target_languages:
            translations = await asyncio.gather(
                *(self._try_translate(content, lang) for lang in options.target_languages)
            )
            readmes.extend(doc for doc in translations if doc is not None)

        return GenerationResult(readmes=readmes, repo_info=info)

    async def translate(self, readme_content: str, target_language: str) -> ReadmeDocument:
        """Translate *readme_content* (without footer) and add the footer back."""
        translated = await self._llm.complete(
            TRANSLATE_SYSTEM_PROMPT,
            f"Target language: {target_language}\n\n{readme_content}",
            json_mode=False,
        )
        if not translated.strip():
            raise LlmError(f"Translation to {target_language} returned no content.")
        return ReadmeDocument(
            language=target_language,
            file_name=readme_file_name(target_language),
            content=translated.strip() + FOOTER,
        )

    async def improve(self, original_readme: str, user_edits: str) -> str:
        """Fold *user_edits* into *original_readme*."""
        improved = await self._llm.complete(
            IMPROVE_SYSTEM_PROMPT,
            f"Original README:\n{original_readme}\n\nUser Edits:\n{user_edits}",
            json_mode=False,
        )
        if not improved.strip():
            raise LlmError("README improvement returned no content.")
        return improved.strip()

    # ── Internals ───────────────────────────────────────────────────────

    async def _generate(
        self, repo_url: str, info: RepoInfo, options: GenerationOptions
    ) -> str:
        context = render_repo_info(info, self._max_tokens)
        user_prompt = (
            f"Repository URL: {repo_url}\n"
            f"README Length: {options.length.value}\n"
            f"Include Emojis: {str(options.include_emojis).lower()}\n\n"
            f"Repository information:\n```json\n{context}\n```"
        )
        raw = await self._llm.complete(GENERATE_SYSTEM_PROMPT, user_prompt, json_mode=True)
        content = self._parse_llm_response(raw)

        if not content:
            message = "README generation failed to produce content. "
            if not info.repo_contents:
                message += (
                    "No files or content could be retrieved from the repository. "
                )
            else:
                message += "The model response was empty. "
            message += "Check that the repository is accessible and try again later."
            raise LlmError(message)
        return content

    async def _try_translate(self, content: str, language: str) -> ReadmeDocument | None:
        try:
            return await self.translate(content, language)
        except LlmError:
            logger.warning("Failed to translate README to %s", language, exc_info=True)
            return None

    @staticmethod
    def _parse_llm_response(raw: str) -> str:
        """Extract ``readme_content`` from the LLM JSON output.

        Handles markdown fences around the JSON; a response that is not JSON
        at all is taken to be the README itself.
        """
        text = raw.strip()

        if text.startswith("```"):
            first_nl = text.index("\n") if "\n" in text else 3
            text = text[first_nl + 1 :]
            if text.endswith("```"):
                text = text[:-3]
            text = text.strip()

        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError:
            return text

        if not isinstance(data, dict):
            raise LlmError("LLM returned JSON without a 'readme_content' field.")
        content = data.get("readme_content")
        if content is not None and not isinstance(content, str):
            raise LlmError("LLM response field 'readme_content' is not a string.")
        return (content or "").strip()
