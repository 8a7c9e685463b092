"""Runs a challenge's test cases one by one against the sandbox."""

from __future__ import annotations

import sys
import threading
from typing import Iterable

from proctor.executor_base import SandboxExecutor
from proctor.harness import build_harness, parse_function_name
from proctor.languages import profile_of
from proctor.models import CodeOutput, SupportedLanguage, TestCase, TestResult

CANCELLED_MESSAGE = "Execution cancelled"


class TestRunner:
    """Sequential, fail-fast test runner.

    The first infrastructure failure (compile error, runtime crash, timeout,
    API or transport error) ends the run and discards every result collected
    so far: later cases would fail the same way and only burn sandbox quota.
    """

    __test__ = False

    def __init__(self, executor: SandboxExecutor) -> None:
        self._executor = executor

    def run_tests(
        self,
        language: SupportedLanguage | str,
        user_code: str,
        function_signature: str,
        test_cases: Iterable[TestCase],
        cancel_event: threading.Event | None = None,
    ) -> CodeOutput:
        lang = SupportedLanguage.parse(language)
        profile = profile_of(lang)

        parsed = parse_function_name(function_signature, lang)
        if parsed.fallback_used:
            self._log(
                f"Could not parse function name from {function_signature!r} ({lang.value}); "
                f"falling back to '{parsed.name}'"
            )

        results: list[TestResult] = []
        for i, tc in enumerate(test_cases, 1):
            if cancel_event is not None and cancel_event.is_set():
                self._log(f"Run cancelled before test {i}")
                return CodeOutput(error=CANCELLED_MESSAGE)

            source = build_harness(lang, user_code, parsed.name, tc.input)
            execution = self._executor.execute(source, profile)

            if not execution.ok:
                self._log(f"Test {i}: infrastructure error, stopping run: {execution.error}")
                return CodeOutput(error=execution.error)

            actual = execution.stdout.strip()
            expected = tc.output.strip()
            passed = actual == expected
            self._log(f"Test {i}: {'PASS' if passed else 'FAIL'}")
            results.append(TestResult(input=tc.input, expected=expected, actual=actual, passed=passed))

        return CodeOutput(test_results=results)

    def _log(self, message: str) -> None:
        print(message, file=sys.stderr)
