"""Port: document transform service — the text-generation model behind README generation."""

from __future__ import annotations

from typing import Protocol


class LlmGateway(Protocol):
    """Generates or translates README text from a prompt pair."""

    async def complete(
        self, system_prompt: str, user_prompt: str, *, json_mode: bool = False
    ) -> str:
        """Return the model output; raises ``LlmError`` on any provider failure."""
        ...

    async def close(self) -> None:
        """Release provider resources."""
        ...
