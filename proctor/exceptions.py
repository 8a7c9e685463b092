"""Proctor domain exceptions."""

from __future__ import annotations


class ProctorError(Exception):
    """Base exception for all Proctor errors."""


class UnsupportedLanguageError(ProctorError, ValueError):
    """Raised when a language outside the supported set reaches the registry or harness."""

    def __init__(self, language: object) -> None:
        self.language = language
        super().__init__(f"Unsupported language: {language}")


class NoActiveChallengeError(ProctorError):
    """Raised when a run or submission is attempted without an active challenge."""

    def __init__(self) -> None:
        super().__init__("No active challenge")


class EvaluationError(ProctorError):
    """Raised when the LLM evaluator returns no usable response."""
