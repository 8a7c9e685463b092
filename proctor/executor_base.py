"""Abstract sandbox interface for running synthesized programs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from proctor.models import ExecutionResult, LanguageProfile


@runtime_checkable
class SandboxExecutor(Protocol):
    def execute(self, source_text: str, profile: LanguageProfile) -> ExecutionResult: ...
