"""Tests for the interviewer and evaluator agents (OpenAI client mocked)."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from proctor.agents.base import strip_code_fences
from proctor.agents.evaluator import UNABLE_TO_EVALUATE, EvaluatorAgent
from proctor.agents.interviewer import InterviewerAgent, challenge_from_tool_arguments
from proctor.config import Config
from proctor.exceptions import EvaluationError
from proctor.models import CodeOutput, CodingChallenge, SupportedLanguage, TestCase, TestResult
from proctor.prompts import CHALLENGE_COMPLETED_MESSAGE, CODING_CHALLENGE_TOOL_NAME, INTERVIEW_START_MESSAGE
from proctor.session import CodingSession

CONFIG = Config(openai_api_key="test-key")

CHALLENGE = CodingChallenge(
    title="Add",
    description="Add two numbers",
    function_signature="def add(a, b):",
    language=SupportedLanguage.PYTHON,
    test_cases=(TestCase(input="1, 2", output="3"), TestCase(input="0, 0", output="0")),
    solution_approach="a + b",
)

TOOL_ARGS = {
    "spoken_intro": "Let's do a quick one.",
    "title": "Double It",
    "description": "Return twice n.",
    "function_signature": "def double(n: int) -> int:",
    "test_cases": [{"input": "4", "output": "8"}, {"input": "0", "output": "0"}],
}


def _client(content: str | None = None, tool_calls=None) -> MagicMock:
    message = MagicMock()
    message.content = content
    message.tool_calls = tool_calls
    response = MagicMock()
    response.choices = [MagicMock(message=message)]
    client = MagicMock()
    client.chat.completions.create.return_value = response
    return client


def _tool_call(name: str, arguments: str) -> MagicMock:
    call = MagicMock()
    call.type = "function"
    call.function.name = name
    call.function.arguments = arguments
    return call


class TestStripCodeFences:
    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self):
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


class TestEvaluator:
    def test_parses_json_result(self):
        client = _client(json.dumps({
            "correct": True, "feedback": "Nice.", "passedTests": 2, "totalTests": 2,
        }))
        result = EvaluatorAgent(CONFIG, client=client).evaluate(CHALLENGE, "def add(a, b):\n    return a + b")
        assert result.correct
        assert result.passed_tests == 2
        assert result.hint is None

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 300
        assert "tools" not in kwargs
        user = kwargs["messages"][1]["content"]
        assert "Problem: Add" in user
        assert '[{"input": "1, 2", "output": "3"}' in user

    def test_fenced_json_is_accepted(self):
        client = _client('```json\n{"correct": false, "feedback": "Off by one.", '
                         '"passedTests": 1, "totalTests": 2, "hint": "Check zero."}\n```')
        result = EvaluatorAgent(CONFIG, client=client).evaluate(CHALLENGE, "x")
        assert not result.correct
        assert result.hint == "Check zero."

    def test_invalid_json_degrades_to_fallback(self):
        client = _client("I think it's fine!")
        result = EvaluatorAgent(CONFIG, client=client).evaluate(CHALLENGE, "x")
        assert not result.correct
        assert result.feedback == UNABLE_TO_EVALUATE
        assert result.passed_tests == 0
        assert result.total_tests == 2
        assert result.hint == "Make sure your code is valid Python syntax."

    def test_non_object_json_degrades_to_fallback(self):
        client = _client("[1, 2]")
        result = EvaluatorAgent(CONFIG, client=client).evaluate(CHALLENGE, "x")
        assert result.feedback == UNABLE_TO_EVALUATE

    def test_empty_response_raises(self):
        client = _client(None)
        with pytest.raises(EvaluationError):
            EvaluatorAgent(CONFIG, client=client).evaluate(CHALLENGE, "x")

    def test_to_dict_wire_shape(self):
        client = _client('{"correct": false, "feedback": "f", "passedTests": 0, "totalTests": 2, "hint": "h"}')
        result = EvaluatorAgent(CONFIG, client=client).evaluate(CHALLENGE, "x")
        assert result.to_dict() == {
            "correct": False, "feedback": "f", "passedTests": 0, "totalTests": 2, "hint": "h",
        }


class TestInterviewer:
    def test_plain_reply(self):
        client = _client("Tell me about yourself.")
        reply = InterviewerAgent(CONFIG, client=client).respond([])
        assert reply.content == "Tell me about yourself."
        assert reply.challenge is None

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"][0]["role"] == "system"
        assert kwargs["messages"][1] == {"role": "user", "content": INTERVIEW_START_MESSAGE}
        assert kwargs["tools"][0]["function"]["name"] == CODING_CHALLENGE_TOOL_NAME
        assert kwargs["tool_choice"] == "auto"
        assert kwargs["max_tokens"] == 500

    def test_tool_call_produces_challenge(self):
        client = _client(None, [_tool_call(CODING_CHALLENGE_TOOL_NAME, json.dumps(TOOL_ARGS))])
        reply = InterviewerAgent(CONFIG, client=client).respond(
            [{"role": "user", "content": "ready"}], language=SupportedLanguage.PYTHON
        )
        assert reply.content == "Let's do a quick one."
        assert reply.challenge is not None
        assert reply.challenge.title == "Double It"
        assert reply.challenge.function_signature == "def double(n: int) -> int:"
        assert reply.challenge.test_cases[0] == TestCase(input="4", output="8")
        assert reply.challenge.hints == ()
        assert reply.challenge.solution_approach == ""

    def test_tools_disabled(self):
        client = _client("Think about the base case.")
        InterviewerAgent(CONFIG, client=client).respond([{"role": "user", "content": "hint?"}], disable_tools=True)
        kwargs = client.chat.completions.create.call_args.kwargs
        assert "tools" not in kwargs
        assert "tool_choice" not in kwargs

    def test_malformed_tool_arguments_fall_back_to_text(self):
        client = _client("Let's continue.", [_tool_call(CODING_CHALLENGE_TOOL_NAME, "{not json")])
        reply = InterviewerAgent(CONFIG, client=client).respond([])
        assert reply.challenge is None
        assert reply.content == "Let's continue."

    def test_other_tools_are_ignored(self):
        client = _client("Hello.", [_tool_call("something_else", "{}")])
        reply = InterviewerAgent(CONFIG, client=client).respond([])
        assert reply.challenge is None

    def test_system_prompt_names_language(self):
        client = _client("ok")
        InterviewerAgent(CONFIG, client=client).respond([], language=SupportedLanguage.GO)
        system = client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert "The candidate codes in Go." in system

    def test_request_hint_disables_tools(self):
        client = _client("Consider a running total.")
        history = [{"role": "assistant", "content": "Here's a challenge."}]
        reply = InterviewerAgent(CONFIG, client=client).request_hint(
            CHALLENGE, "def add(a, b): pass", SupportedLanguage.PYTHON, history
        )
        assert reply.content == "Consider a running total."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert "tools" not in kwargs
        last = kwargs["messages"][-1]["content"]
        assert last.startswith("[User is stuck and asking for a hint on the coding challenge]")
        assert "```python\ndef add(a, b): pass\n```" in last
        assert len(history) == 1

    def test_challenge_from_tool_arguments_uses_language(self):
        challenge = challenge_from_tool_arguments(
            {**TOOL_ARGS, "function_signature": "func Double(n int) int", "hints": ["x2"]},
            SupportedLanguage.GO,
        )
        assert challenge.language is SupportedLanguage.GO
        assert challenge.hints == ("x2",)

    def test_select_language_announces_choice(self):
        client = _client("Great, Rust it is.")
        InterviewerAgent(CONFIG, client=client).select_language(SupportedLanguage.RUST)
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"][-1]["content"] == (
            "[User selected Rust as their preferred programming language]"
        )
        assert "The candidate codes in Rust." in kwargs["messages"][0]["content"]
        assert "tools" in kwargs


class TestCompleteChallenge:
    def _session(self, output: CodeOutput) -> CodingSession:
        runner = MagicMock()
        runner.run_tests.return_value = output
        session = CodingSession(runner)
        session.start_challenge(CHALLENGE)
        session.run("def add(a, b):\n    return a + b")
        return session

    def test_all_passed_ends_challenge_and_notifies(self):
        session = self._session(CodeOutput(test_results=[
            TestResult(input="1, 2", expected="3", actual="3", passed=True),
            TestResult(input="0, 0", expected="0", actual="0", passed=True),
        ]))
        client = _client("Nicely done. Next question.")
        history = [{"role": "assistant", "content": "Here's a challenge."}]

        reply = InterviewerAgent(CONFIG, client=client).complete_challenge(session, history)

        assert reply.content == "Nicely done. Next question."
        assert not session.state.is_active
        kwargs = client.chat.completions.create.call_args.kwargs
        assert "tools" not in kwargs
        assert kwargs["messages"][-1]["content"] == CHALLENGE_COMPLETED_MESSAGE
        assert len(history) == 1

    def test_failing_run_does_not_advance(self):
        session = self._session(CodeOutput(test_results=[
            TestResult(input="1, 2", expected="3", actual="4", passed=False),
        ]))
        client = _client("unused")
        assert InterviewerAgent(CONFIG, client=client).complete_challenge(session) is None
        assert session.state.is_active
        client.chat.completions.create.assert_not_called()

    def test_errored_run_does_not_advance(self):
        session = self._session(CodeOutput(error="Compilation error"))
        client = _client("unused")
        assert InterviewerAgent(CONFIG, client=client).complete_challenge(session) is None
        assert session.state.is_active

    def test_no_active_challenge(self):
        session = CodingSession(MagicMock())
        client = _client("unused")
        assert InterviewerAgent(CONFIG, client=client).complete_challenge(session) is None
