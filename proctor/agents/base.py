"""Base agent with shared LLM calling logic."""

from __future__ import annotations

import sys
from typing import Any

from proctor.config import Config


class BaseAgent:
    def __init__(self, config: Config, client: Any = None) -> None:
        self.config = config
        self._client = client or config.create_openai_client()

    def _chat(
        self,
        messages: list[dict],
        model: str,
        temperature: float,
        max_tokens: int,
        tools: list[dict] | None = None,
    ):
        """Run one chat completion and return the first choice's message."""
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if tools:
            kwargs["tools"] = tools
            kwargs["tool_choice"] = "auto"
        response = self._client.chat.completions.create(**kwargs)
        return response.choices[0].message

    def _call_llm(
        self,
        system: str,
        user: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        message = self._chat(
            [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return message.content or ""

    def _log(self, message: str) -> None:
        print(message, file=sys.stderr)


def strip_code_fences(text: str) -> str:
    """Drop a surrounding ``` fence (with optional language tag) if present."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned[: cleaned.rfind("```")]
    return cleaned.strip()
