"""Prompt context — serialise a :class:`RepoInfo` for the generation prompt.

Uses ``tiktoken`` for exact token counting. When the payload does not fit the
model window, file bodies are dropped starting from the lowest-priority entry;
the highest-priority body is truncated last.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import tiktoken

from readme_generator.domain.entities import RepoInfo

_ENCODING_NAME = "cl100k_base"  # GPT-4o family

OMITTED_ERROR = "Content omitted to fit the model context window."

_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    global _encoder  # noqa: PLW0603
    if _encoder is None:
        _encoder = tiktoken.get_encoding(_ENCODING_NAME)
    return _encoder


def count_tokens(text: str) -> int:
    """Return the exact token count for *text* under cl100k_base."""
    return len(_get_encoder().encode(text))


def truncate_to_budget(text: str, max_tokens: int) -> str:
    """Truncate *text* to fit within *max_tokens*, cutting at line boundaries."""
    tokens = _get_encoder().encode(text)
    if len(tokens) <= max_tokens:
        return text

    truncated = _get_encoder().decode(tokens[:max_tokens])
    last_nl = truncated.rfind("\n")
    if last_nl > len(truncated) // 2:
        truncated = truncated[: last_nl + 1]

    return truncated + "\n[… truncated to fit token budget]"


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value]
    return value


def to_payload(info: RepoInfo) -> dict[str, Any]:
    """Plain-JSON view of *info* with unset fields removed."""
    return _drop_none(asdict(info))


def _dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_repo_info(info: RepoInfo, max_tokens: int) -> str:
    """Return *info* as JSON text no longer than *max_tokens* tokens where possible.

    *info* itself is left untouched; trimming happens on a copy of the payload.
    """
    payload = to_payload(info)
    text = _dumps(payload)
    if count_tokens(text) <= max_tokens:
        return text

    files: list[dict[str, Any]] = payload.get("repo_contents", [])
    with_content = [f for f in files if "content" in f]

    # Lowest priority first; keep the top entry for truncation below.
    for entry in reversed(with_content[1:]):
        del entry["content"]
        entry["error"] = OMITTED_ERROR
        text = _dumps(payload)
        if count_tokens(text) <= max_tokens:
            return text

    if with_content:
        top = with_content[0]
        body = top.pop("content")
        overhead = count_tokens(_dumps(payload)) + 16
        allowance = max_tokens - overhead
        if allowance > 0:
            top["content"] = truncate_to_budget(body, allowance)
        else:
            top["error"] = OMITTED_ERROR
        text = _dumps(payload)

    return text
