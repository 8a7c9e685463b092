"""Evaluator agent: LLM review of a submitted solution."""

from __future__ import annotations

import json

from proctor.agents.base import BaseAgent, strip_code_fences
from proctor.exceptions import EvaluationError
from proctor.languages import profile_of
from proctor.models import CodingChallenge, EvaluationResult
from proctor.prompts import EVALUATOR_SYSTEM, evaluator_user_prompt

UNABLE_TO_EVALUATE = "Unable to evaluate your code. Please try again."


class EvaluatorAgent(BaseAgent):
    def evaluate(self, challenge: CodingChallenge, code: str) -> EvaluationResult:
        raw = self._call_llm(
            system=EVALUATOR_SYSTEM,
            user=evaluator_user_prompt(challenge, code),
            model=self.config.evaluator_model,
            temperature=self.config.evaluator_temperature,
            max_tokens=self.config.evaluator_max_tokens,
        )
        if not raw.strip():
            raise EvaluationError("No response from the evaluator model")
        return self._parse_result(raw, challenge)

    def _parse_result(self, text: str, challenge: CodingChallenge) -> EvaluationResult:
        try:
            data = json.loads(strip_code_fences(text))
            return EvaluationResult(
                correct=bool(data.get("correct", False)),
                feedback=str(data.get("feedback", "")),
                passed_tests=int(data.get("passedTests", 0)),
                total_tests=int(data.get("totalTests", len(challenge.test_cases))),
                hint=data.get("hint") or None,
            )
        except (ValueError, TypeError, AttributeError) as exc:
            self._log(f"Evaluator returned unparseable output, using fallback: {exc}")
            return fallback_evaluation(challenge)


def fallback_evaluation(challenge: CodingChallenge) -> EvaluationResult:
    name = profile_of(challenge.language).display_name
    return EvaluationResult(
        correct=False,
        feedback=UNABLE_TO_EVALUATE,
        passed_tests=0,
        total_tests=len(challenge.test_cases),
        hint=f"Make sure your code is valid {name} syntax.",
    )
