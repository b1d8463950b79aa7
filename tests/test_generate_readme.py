"""
Tests for the generate-README use case and prompt-context fitting.

Tests cover:
- Error short-circuit (no LLM call)
- Response parsing (JSON, fenced JSON, plain text, malformed)
- Footer and translation fan-out with per-language failures
- Token-bounded serialisation of RepoInfo
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import make_file

from readme_generator.domain.entities import (
    Contributor,
    GenerationOptions,
    ReadmeLength,
    RepoInfo,
)
from readme_generator.domain.exceptions import LlmError
from readme_generator.services.generate_readme import (
    FOOTER,
    GenerateReadmeUseCase,
    readme_file_name,
)
from readme_generator.services.prompt_context import (
    OMITTED_ERROR,
    count_tokens,
    render_repo_info,
    to_payload,
)

URL = "https://github.com/acme/widget"


def _repo_info(**overrides: object) -> RepoInfo:
    fields: dict[str, object] = {
        "repo_name": "widget",
        "description": "A widget",
        "main_language": "TypeScript",
        "repo_contents": [
            make_file("README.md", content="# Widget"),
            make_file("src/index.ts", content="export const x = 1;"),
        ],
        "contributors": [
            Contributor("alice", "https://avatars.example/alice", "https://github.com/alice", 9)
        ],
    }
    fields.update(overrides)
    return RepoInfo(**fields)  # type: ignore[arg-type]


def _use_case(info: RepoInfo, llm: AsyncMock) -> GenerateReadmeUseCase:
    aggregator = MagicMock()
    aggregator.fetch = AsyncMock(return_value=info)
    return GenerateReadmeUseCase(aggregator=aggregator, llm_gateway=llm)


class TestExecute:
    """README generation flow."""

    @pytest.mark.asyncio
    async def test_error_info_skips_llm(self) -> None:
        llm = AsyncMock()
        use_case = _use_case(RepoInfo.failure("Repository not found"), llm)

        result = await use_case.execute(URL)

        (doc,) = result.readmes
        assert doc.file_name == "ERROR.md"
        assert doc.language == "Error"
        assert "Repository not found" in doc.content
        llm.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_generates_english_readme_with_footer(self) -> None:
        llm = AsyncMock()
        llm.complete.return_value = json.dumps({"readme_content": "# Widget\n\nDocs."})

        result = await _use_case(_repo_info(), llm).execute(
            URL, GenerationOptions(length=ReadmeLength.SHORT, include_emojis=True)
        )

        (doc,) = result.readmes
        assert doc.file_name == "README.md"
        assert doc.content == "# Widget\n\nDocs." + FOOTER
        system_prompt, user_prompt = llm.complete.call_args.args
        assert "README Length: short" in user_prompt
        assert "Include Emojis: true" in user_prompt
        assert '"path": "src/index.ts"' in user_prompt
        assert llm.complete.call_args.kwargs == {"json_mode": True}

    @pytest.mark.asyncio
    async def test_translations_fan_out_and_failures_are_dropped(self) -> None:
        async def complete(system: str, user: str, *, json_mode: bool = False) -> str:
            if json_mode:
                return json.dumps({"readme_content": "# Widget"})
            if "Klingon" in user:
                raise LlmError("unsupported")
            return "# Traducido" if "Spanish" in user else "# Traduit"

        llm = AsyncMock()
        llm.complete.side_effect = complete

        result = await _use_case(_repo_info(), llm).execute(
            URL, GenerationOptions(target_languages=["Spanish", "Klingon", "French"])
        )

        names = [doc.file_name for doc in result.readmes]
        assert names == ["README.md", "README.es.md", "README.fr.md"]
        assert result.readmes[1].content == "# Traducido" + FOOTER

    @pytest.mark.asyncio
    async def test_translation_source_has_no_footer(self) -> None:
        llm = AsyncMock()
        llm.complete.side_effect = [json.dumps({"readme_content": "# Widget"}), "# Widget (de)"]

        await _use_case(_repo_info(), llm).execute(
            URL, GenerationOptions(target_languages=["German"])
        )

        translate_prompt = llm.complete.call_args_list[1].args[1]
        assert "Generated by" not in translate_prompt

    @pytest.mark.asyncio
    async def test_empty_content_raises(self) -> None:
        llm = AsyncMock()
        llm.complete.return_value = json.dumps({"readme_content": ""})

        with pytest.raises(LlmError, match="failed to produce content"):
            await _use_case(_repo_info(repo_contents=None), llm).execute(URL)


class TestParseLlmResponse:
    """JSON extraction from model output."""

    def test_plain_json(self) -> None:
        raw = '{"readme_content": "# Title"}'
        assert GenerateReadmeUseCase._parse_llm_response(raw) == "# Title"

    def test_fenced_json(self) -> None:
        raw = '```json\n{"readme_content": "# Title"}\n```'
        assert GenerateReadmeUseCase._parse_llm_response(raw) == "# Title"

    def test_non_json_is_taken_verbatim(self) -> None:
        assert GenerateReadmeUseCase._parse_llm_response("# Title\n") == "# Title"

    def test_wrong_shape_raises(self) -> None:
        with pytest.raises(LlmError):
            GenerateReadmeUseCase._parse_llm_response('["# Title"]')
        with pytest.raises(LlmError):
            GenerateReadmeUseCase._parse_llm_response('{"readme_content": 3}')


class TestTranslateAndImprove:
    """Standalone translate / improve operations."""

    @pytest.mark.parametrize(
        ("language", "file_name"),
        [
            ("Spanish", "README.es.md"),
            ("Chinese (Simplified)", "README.zh.md"),
            ("Dutch", "README.du.md"),
        ],
    )
    def test_file_names(self, language: str, file_name: str) -> None:
        assert readme_file_name(language) == file_name

    @pytest.mark.asyncio
    async def test_improve(self) -> None:
        llm = AsyncMock()
        llm.complete.return_value = "  # Better  \n"

        improved = await _use_case(_repo_info(), llm).improve("# Orig", "make it better")

        assert improved == "# Better"
        assert "make it better" in llm.complete.call_args.args[1]

    @pytest.mark.asyncio
    async def test_blank_translation_raises(self) -> None:
        llm = AsyncMock()
        llm.complete.return_value = "   "

        with pytest.raises(LlmError):
            await _use_case(_repo_info(), llm).translate("# Orig", "Italian")


class TestRenderRepoInfo:
    """Token-bounded serialisation."""

    def test_fits_untouched(self) -> None:
        info = _repo_info()

        text = render_repo_info(info, max_tokens=10_000)

        assert json.loads(text) == json.loads(json.dumps(to_payload(info)))
        assert "sha" in text
        assert '"error"' not in text

    def test_drops_lowest_priority_bodies_first(self) -> None:
        info = _repo_info(
            repo_contents=[
                make_file("README.md", content="# Widget\n" * 20),
                make_file("package.json", content='{"name": "widget"}\n' * 20),
                make_file("src/index.ts", content="export const x = 1;\n" * 400),
            ]
        )
        full = count_tokens(render_repo_info(info, max_tokens=1_000_000))

        text = render_repo_info(info, max_tokens=full - 100)
        files = json.loads(text)["repo_contents"]

        assert "content" in files[0] and "content" in files[1]
        assert "content" not in files[2]
        assert files[2]["error"] == OMITTED_ERROR
        assert count_tokens(text) <= full - 100

    def test_truncates_top_entry_last(self) -> None:
        info = _repo_info(
            repo_contents=[make_file("README.md", content="word " * 5_000)],
            contributors=None,
        )

        text = render_repo_info(info, max_tokens=500)
        readme = json.loads(text)["repo_contents"][0]

        assert readme["content"].endswith("[… truncated to fit token budget]")
        assert count_tokens(text) <= 520

    def test_source_info_is_not_mutated(self) -> None:
        info = _repo_info(
            repo_contents=[
                make_file("README.md", content="a " * 2_000),
                make_file("src/a.ts", content="b " * 2_000),
            ]
        )

        render_repo_info(info, max_tokens=200)

        assert info.repo_contents is not None
        assert info.repo_contents[1].content == "b " * 2_000
        assert info.repo_contents[1].error is None
