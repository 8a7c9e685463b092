"""Centralized prompt templates for all agents."""

from __future__ import annotations

import json

from proctor.languages import profile_of
from proctor.models import CodingChallenge, SupportedLanguage

# ---------------------------------------------------------------------------
# Interviewer
# ---------------------------------------------------------------------------

INTERVIEWER_SYSTEM = """\
You are James, an AI interviewer conducting a 7-question mock interview.

Guidelines:
- Keep responses to 1-2 short sentences max
- Brief acknowledgment of their answer, then next question
- Track question count internally
- Include 1-2 coding challenges during the interview (use the show_coding_challenge tool)
- Coding challenges should be easy/entry-level problems in the candidate's chosen language
- After 7 questions: Give brief overall feedback

Start with a one-sentence intro and your first question."""


def interviewer_system_prompt(language: SupportedLanguage) -> str:
    name = profile_of(language).display_name
    return (
        f"{INTERVIEWER_SYSTEM}\n\n"
        f"The candidate codes in {name}. Every function_signature must be valid {name}, "
        f"and every test case input must be a comma-separated list of positional {name} "
        "argument expressions (e.g. \"3, 5\", never \"a = 3, b = 5\"). Test case outputs are "
        "exactly what printing the return value produces."
    )


CODING_CHALLENGE_TOOL_NAME = "show_coding_challenge"

CODING_CHALLENGE_TOOL = {
    "type": "function",
    "function": {
        "name": CODING_CHALLENGE_TOOL_NAME,
        "description": (
            "Display a coding challenge for the candidate to solve. "
            "Use this for 1-2 questions during the interview."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "spoken_intro": {
                    "type": "string",
                    "description": "What James says to introduce the challenge (1-2 sentences)",
                },
                "title": {"type": "string", "description": "Title of the coding problem"},
                "description": {
                    "type": "string",
                    "description": "Full problem description with constraints",
                },
                "function_signature": {
                    "type": "string",
                    "description": (
                        "The exact function signature the user should implement, "
                        "e.g. 'def add_numbers(a: int, b: int) -> int:'"
                    ),
                },
                "test_cases": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "input": {"type": "string"},
                            "output": {"type": "string"},
                        },
                        "required": ["input", "output"],
                    },
                    "description": "Example input/output test cases",
                },
                "hints": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Hints to help if the candidate struggles",
                },
                "solution_approach": {
                    "type": "string",
                    "description": "Brief description of the optimal approach for evaluation",
                },
            },
            "required": ["spoken_intro", "title", "description", "function_signature", "test_cases"],
        },
    },
}

INTERVIEW_START_MESSAGE = "[Interview starting - candidate is ready]"

CHALLENGE_COMPLETED_MESSAGE = "[User completed the coding challenge successfully - all tests passed]"


def language_selected_message(language: SupportedLanguage) -> str:
    return f"[User selected {profile_of(language).display_name} as their preferred programming language]"


def hint_request_prompt(challenge: CodingChallenge, code: str, language: SupportedLanguage) -> str:
    name = profile_of(language).display_name
    return (
        "[User is stuck and asking for a hint on the coding challenge]\n"
        f"Challenge: {challenge.title}\n"
        f"Description: {challenge.description}\n"
        f"Language: {name}\n\n"
        "User's current code:\n"
        f"```{language.value}\n{code}\n```\n\n"
        "Give a clever, indirect hint. DO NOT give the solution directly.\n"
        "Keep it to 1-2 sentences max."
    )


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------

EVALUATOR_SYSTEM = """\
You are a code evaluator for a mock interview. Evaluate the submitted code against the given problem and test cases.

CRITICAL: Respond ONLY with valid JSON in this exact format:
{
  "correct": boolean,
  "feedback": "Brief feedback (2-3 sentences max)",
  "passedTests": number,
  "totalTests": number,
  "hint": "Optional hint if incorrect (1 sentence, omit if correct)"
}

Evaluation criteria:
- Check if the logic would produce correct outputs for all test cases
- Consider edge cases
- Be encouraging but accurate
- If mostly correct with minor issues, provide constructive feedback
- Do not actually run the code, evaluate the logic"""


def evaluator_user_prompt(challenge: CodingChallenge, code: str) -> str:
    test_cases = json.dumps([{"input": tc.input, "output": tc.output} for tc in challenge.test_cases])
    return (
        f"Problem: {challenge.title}\n"
        f"Description: {challenge.description}\n"
        f"Test Cases: {test_cases}\n"
        f"Expected Approach: {challenge.solution_approach}\n\n"
        "Submitted Code:\n"
        f"```{challenge.language.value}\n{code}\n```\n\n"
        "Evaluate this code and respond with JSON only."
    )
