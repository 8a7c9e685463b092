"""Data models for Proctor."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable

from proctor.exceptions import UnsupportedLanguageError


class SupportedLanguage(enum.Enum):
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JAVA = "java"
    CPP = "cpp"
    C = "c"
    CSHARP = "csharp"
    GO = "go"
    RUBY = "ruby"
    RUST = "rust"

    @classmethod
    def parse(cls, value: SupportedLanguage | str) -> SupportedLanguage:
        """Coerce a raw language string into the closed enum."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedLanguageError(value) from None


@dataclass(frozen=True)
class LanguageProfile:
    id: int  # Judge0 language id
    display_name: str
    editor_syntax_id: str
    extension: str
    template: Callable[[str, str, str], str] = field(repr=False, compare=False)


@dataclass(frozen=True)
class TestCase:
    __test__ = False

    input: str  # positional argument list, e.g. "3, 5"
    output: str
    explanation: str = ""


@dataclass(frozen=True)
class CodingChallenge:
    title: str
    description: str
    function_signature: str
    language: SupportedLanguage
    test_cases: tuple[TestCase, ...]
    hints: tuple[str, ...] = ()
    solution_approach: str = ""


@dataclass(frozen=True)
class TestResult:
    __test__ = False

    input: str
    expected: str
    actual: str
    passed: bool


@dataclass
class CodeOutput:
    stdout: str = ""
    stderr: str = ""
    return_value: str | None = None
    error: str | None = None
    test_results: list[TestResult] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return bool(self.test_results) and all(tr.passed for tr in self.test_results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stdout": self.stdout,
            "stderr": self.stderr,
            "returnValue": self.return_value,
            "error": self.error,
            "testResults": [
                {
                    "input": tr.input,
                    "expected": tr.expected,
                    "actual": tr.actual,
                    "passed": tr.passed,
                }
                for tr in self.test_results
            ],
        }


@dataclass
class ExecutionResult:
    stdout: str
    stderr: str
    exit_code: int
    timed_out: bool = False
    status_id: int | None = None
    error: str | None = None  # infrastructure-level failure message

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class EvaluationResult:
    correct: bool
    feedback: str
    passed_tests: int
    total_tests: int
    hint: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "correct": self.correct,
            "feedback": self.feedback,
            "passedTests": self.passed_tests,
            "totalTests": self.total_tests,
        }
        if self.hint:
            data["hint"] = self.hint
        return data


@dataclass(frozen=True)
class FunctionName:
    name: str
    fallback_used: bool = False


@dataclass
class CodingState:
    is_active: bool = False
    challenge: CodingChallenge | None = None
    user_code: str = ""
    is_submitting: bool = False
    is_running: bool = False
    attempts: int = 0
    feedback: EvaluationResult | None = None
    output: CodeOutput | None = None


def parse_test_case(data: dict[str, Any]) -> TestCase:
    return TestCase(
        input=str(data["input"]),
        output=str(data.get("output", data.get("expected_output", ""))),
        explanation=data.get("explanation", "") or "",
    )


def challenge_from_dict(
    data: dict[str, Any],
    language: SupportedLanguage | str | None = None,
) -> CodingChallenge:
    """Build a challenge from camelCase (wire) or snake_case (tool call) keys."""
    raw_language = language or data.get("language") or SupportedLanguage.PYTHON
    signature = data.get("functionSignature", data.get("function_signature", ""))
    test_cases = data.get("testCases", data.get("test_cases")) or []
    return CodingChallenge(
        title=data.get("title", ""),
        description=data.get("description", ""),
        function_signature=signature or "",
        language=SupportedLanguage.parse(raw_language),
        test_cases=tuple(parse_test_case(tc) for tc in test_cases),
        hints=tuple(data.get("hints") or ()),
        solution_approach=data.get("solutionApproach", data.get("solution_approach", "")) or "",
    )
