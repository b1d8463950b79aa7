"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging

from openai import APIError, AsyncOpenAI, AuthenticationError, RateLimitError

from readme_generator.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API."""

    def __init__(
        self, api_key: str, model: str = "gpt-4o-mini", temperature: float = 0.4
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key, max_retries=5)
        self._model = model
        self._temperature = temperature

    async def complete(
        self, system_prompt: str, user_prompt: str, *, json_mode: bool = False
    ) -> str:
        """Send a system + user prompt and return the completion text."""
        kwargs: dict[str, object] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self._temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(**kwargs)  # type: ignore[arg-type]
        except AuthenticationError as exc:
            raise LlmError(
                "Invalid OpenAI API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc
        except RateLimitError as exc:
            logger.error("OpenAI RateLimitError: %s", exc)
            raise LlmError(f"OpenAI rate limit / quota error: {exc}") from exc
        except APIError as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

        if not response.choices or not response.choices[0].message.content:
            raise LlmError("LLM returned an empty response.")

        choice = response.choices[0]
        if response.usage is not None:
            logger.debug(
                "%s used %d prompt + %d completion tokens",
                self._model,
                response.usage.prompt_tokens,
                response.usage.completion_tokens,
            )
        if choice.finish_reason == "length":
            logger.warning("Completion from %s hit the output token limit", self._model)
        return choice.message.content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
