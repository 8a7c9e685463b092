"""Flask JSON API for Proctor."""

from __future__ import annotations

import sys

from flask import Flask, jsonify, request

from proctor.agents.evaluator import EvaluatorAgent
from proctor.agents.interviewer import InterviewerAgent
from proctor.config import Config
from proctor.exceptions import EvaluationError, UnsupportedLanguageError
from proctor.languages import DEFAULT_LANGUAGE, all_languages, generate_default_code
from proctor.models import SupportedLanguage, challenge_from_dict, parse_test_case
from proctor.prompts import CODING_CHALLENGE_TOOL_NAME
from proctor.runner import TestRunner

app = Flask(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _log(message: str) -> None:
    print(message, file=sys.stderr)


def _config(require_llm: bool = True) -> Config:
    return Config.from_env(require_llm=require_llm)


def _create_runner() -> TestRunner:
    return TestRunner(_config(require_llm=False).create_executor())


def _challenge_payload(challenge) -> dict:
    return {
        "title": challenge.title,
        "description": challenge.description,
        "functionSignature": challenge.function_signature,
        "language": challenge.language.value,
        "testCases": [
            {"input": tc.input, "output": tc.output, **({"explanation": tc.explanation} if tc.explanation else {})}
            for tc in challenge.test_cases
        ],
        "hints": list(challenge.hints),
        "solutionApproach": challenge.solution_approach,
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/languages")
def list_languages():
    return jsonify([{"value": lang.value, "label": label} for lang, label in all_languages()])


@app.route("/api/execute-code", methods=["POST"])
def execute_code():
    data = request.get_json(silent=True) or {}
    code = data.get("code")
    language = data.get("language")
    test_cases = data.get("testCases")

    if not code or not language or test_cases is None:
        return jsonify({"error": "Code, language, and testCases are required"}), 400

    try:
        lang = SupportedLanguage.parse(language)
    except UnsupportedLanguageError as e:
        return jsonify({"error": str(e)}), 400

    try:
        cases = [parse_test_case(tc) for tc in test_cases]
        output = _create_runner().run_tests(lang, code, data.get("functionSignature", ""), cases)
    except Exception as e:
        _log(f"Execute code error: {e}")
        return jsonify({"error": "Failed to execute code"}), 500

    return jsonify(output.to_dict())


@app.route("/api/evaluate-code", methods=["POST"])
def evaluate_code():
    data = request.get_json(silent=True) or {}
    code = data.get("code")
    raw_challenge = data.get("challenge")

    if not code or not raw_challenge:
        return jsonify({"error": "Code and challenge are required"}), 400

    try:
        challenge = challenge_from_dict(raw_challenge)
        result = EvaluatorAgent(_config()).evaluate(challenge, code)
    except EvaluationError as e:
        _log(f"Evaluation error: {e}")
        return jsonify({"error": str(e)}), 500
    except Exception as e:
        _log(f"Evaluation error: {e}")
        return jsonify({"error": "Failed to evaluate code"}), 500

    return jsonify(result.to_dict())


@app.route("/api/chat", methods=["POST"])
def chat():
    data = request.get_json(silent=True) or {}
    messages = data.get("messages") or []
    disable_tools = bool(data.get("disableTools", False))

    try:
        language = SupportedLanguage.parse(data.get("language") or DEFAULT_LANGUAGE)
    except UnsupportedLanguageError as e:
        return jsonify({"error": str(e)}), 400

    try:
        reply = InterviewerAgent(_config()).respond(messages, disable_tools=disable_tools, language=language)
    except Exception as e:
        _log(f"Chat error: {e}")
        return jsonify({"error": "Failed to generate response"}), 500

    tool_call = None
    if reply.challenge is not None:
        tool_call = {"name": CODING_CHALLENGE_TOOL_NAME, "challenge": _challenge_payload(reply.challenge)}
    return jsonify({"content": reply.content, "tool_call": tool_call})


@app.route("/api/default-code", methods=["POST"])
def default_code():
    data = request.get_json(silent=True) or {}
    raw_challenge = data.get("challenge")
    if not raw_challenge:
        return jsonify({"error": "Challenge is required"}), 400
    try:
        challenge = challenge_from_dict(raw_challenge)
    except (ValueError, KeyError, TypeError) as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"code": generate_default_code(challenge)})
