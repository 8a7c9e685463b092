"""Configuration for Proctor, loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from openai import OpenAI

from proctor.executor_judge0 import PUBLIC_JUDGE0_URL, Judge0Config, Judge0Executor


@dataclass
class Config:
    openai_api_key: str = ""
    interviewer_model: str = "gpt-4o"
    evaluator_model: str = "gpt-4o"
    interviewer_temperature: float = 0.7
    evaluator_temperature: float = 0.3
    interviewer_max_tokens: int = 500
    evaluator_max_tokens: int = 300
    judge0_url: str = PUBLIC_JUDGE0_URL
    judge0_api_key: str = ""
    judge0_rapidapi_host: str = ""
    request_timeout: float = 30.0  # seconds per sandbox submission
    llm_provider: str = "openai"  # "openai" or "ollama"
    ollama_base_url: str = "http://localhost:11434/v1"

    def create_openai_client(self) -> OpenAI:
        """Create an OpenAI client configured for the active LLM provider."""
        if self.llm_provider == "ollama":
            return OpenAI(api_key="ollama", base_url=self.ollama_base_url)
        return OpenAI(api_key=self.openai_api_key)

    def create_executor(self) -> Judge0Executor:
        return Judge0Executor(
            Judge0Config(
                base_url=self.judge0_url or PUBLIC_JUDGE0_URL,
                api_key=self.judge0_api_key,
                rapidapi_host=self.judge0_rapidapi_host,
                request_timeout=self.request_timeout,
            )
        )

    @classmethod
    def from_env(cls, require_llm: bool = True, **overrides) -> Config:
        """Build a Config from the environment; keyword overrides win.

        ``require_llm=False`` allows sandbox-only use (e.g. ``proctor run``)
        without an OpenAI key.
        """
        provider = overrides.pop("llm_provider", None) or os.environ.get("PROCTOR_LLM_PROVIDER", "openai")
        api_key = overrides.pop("openai_api_key", None) or os.environ.get("OPENAI_API_KEY", "")
        if require_llm and not api_key and provider != "ollama":
            raise ValueError("OPENAI_API_KEY environment variable is required")
        if not api_key and provider == "ollama":
            api_key = "ollama"
        model = overrides.pop("model", None) or os.environ.get("PROCTOR_MODEL")
        kwargs: dict = {"openai_api_key": api_key, "llm_provider": provider}
        if model:
            kwargs["interviewer_model"] = model
            kwargs["evaluator_model"] = model
        env_map: dict[str, tuple[str, type]] = {
            "JUDGE0_URL": ("judge0_url", str),
            "JUDGE0_API_KEY": ("judge0_api_key", str),
            "JUDGE0_RAPIDAPI_HOST": ("judge0_rapidapi_host", str),
            "PROCTOR_REQUEST_TIMEOUT": ("request_timeout", float),
            "OLLAMA_BASE_URL": ("ollama_base_url", str),
        }
        for env_var, (field_name, conv) in env_map.items():
            val = os.environ.get(env_var)
            if val is not None:
                kwargs[field_name] = conv(val)
        kwargs.update(overrides)
        return cls(**kwargs)
