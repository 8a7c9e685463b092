"""Coding-challenge lifecycle owned by the interview flow."""

from __future__ import annotations

import sys
import threading
from typing import Callable

from proctor.exceptions import NoActiveChallengeError
from proctor.languages import generate_default_code
from proctor.models import (
    CodeOutput,
    CodingChallenge,
    CodingState,
    EvaluationResult,
    SupportedLanguage,
)
from proctor.runner import TestRunner

Evaluate = Callable[[CodingChallenge, str], EvaluationResult]


class CodingSession:
    """Tracks the one active challenge of an interview.

    idle -> active(running=False) <-> active(running=True) -> idle.
    Starting a challenge while another is active replaces it outright.
    """

    def __init__(self, runner: TestRunner, evaluate: Evaluate | None = None) -> None:
        self._runner = runner
        self._evaluate = evaluate
        self._cancel = threading.Event()
        self.state = CodingState()

    def start_challenge(self, challenge: CodingChallenge) -> None:
        self._cancel.set()
        self.state = CodingState(
            is_active=True,
            challenge=challenge,
            user_code=generate_default_code(challenge),
        )
        self._log(f"Challenge started: {challenge.title} ({challenge.language.value})")

    def end_challenge(self) -> None:
        self._cancel.set()
        self.state = CodingState()

    def _require_challenge(self) -> CodingChallenge:
        if not self.state.is_active or self.state.challenge is None:
            raise NoActiveChallengeError()
        return self.state.challenge

    def run(self, code: str, language: SupportedLanguage | str | None = None) -> CodeOutput:
        """Run *code* against the challenge's test cases.

        ``attempts`` is left alone; only explicit submissions count.
        """
        challenge = self._require_challenge()
        lang = SupportedLanguage.parse(language or challenge.language)
        state = self.state
        cancel = self._cancel = threading.Event()
        state.user_code = code
        state.is_running = True
        state.output = None
        try:
            output = self._runner.run_tests(
                lang,
                code,
                challenge.function_signature,
                challenge.test_cases,
                cancel_event=cancel,
            )
        except Exception as exc:
            self._log(f"Code execution error: {exc}")
            output = CodeOutput(error=str(exc) or "Execution failed")
        finally:
            state.is_running = False
        state.output = output
        return output

    def cancel_run(self) -> None:
        """Stop the current run before its next test case; in-flight calls finish."""
        self._cancel.set()

    def submit_for_evaluation(self, code: str) -> EvaluationResult:
        challenge = self._require_challenge()
        if self._evaluate is None:
            raise RuntimeError("No evaluator configured for this session")
        state = self.state
        state.is_submitting = True
        state.feedback = None
        try:
            result = self._evaluate(challenge, code)
        finally:
            state.is_submitting = False
        state.attempts += 1
        state.feedback = result
        state.user_code = code
        return result

    def clear_feedback(self) -> None:
        self.state.feedback = None

    def should_advance(self) -> bool:
        """True when the last run produced results and every one passed."""
        output = self.state.output
        return output is not None and output.error is None and output.all_passed

    def _log(self, message: str) -> None:
        print(message, file=sys.stderr)
