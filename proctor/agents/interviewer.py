"""Interviewer agent: drives the conversation and hands out coding challenges."""

from __future__ import annotations

import json
from dataclasses import dataclass

from proctor.agents.base import BaseAgent
from proctor.languages import DEFAULT_LANGUAGE
from proctor.models import CodingChallenge, SupportedLanguage, challenge_from_dict
from proctor.prompts import (
    CODING_CHALLENGE_TOOL,
    CODING_CHALLENGE_TOOL_NAME,
    CHALLENGE_COMPLETED_MESSAGE,
    INTERVIEW_START_MESSAGE,
    hint_request_prompt,
    interviewer_system_prompt,
    language_selected_message,
)
from proctor.session import CodingSession


@dataclass
class InterviewerReply:
    content: str
    challenge: CodingChallenge | None = None


def challenge_from_tool_arguments(arguments: str | dict, language: SupportedLanguage) -> CodingChallenge:
    """Map ``show_coding_challenge`` tool arguments onto a challenge."""
    args = json.loads(arguments) if isinstance(arguments, str) else arguments
    return challenge_from_dict(args, language=language)


class InterviewerAgent(BaseAgent):
    def respond(
        self,
        messages: list[dict],
        disable_tools: bool = False,
        language: SupportedLanguage = DEFAULT_LANGUAGE,
    ) -> InterviewerReply:
        """Get the interviewer's next turn for the conversation so far.

        Tools are withheld when ``disable_tools`` is set, e.g. for hint
        requests or right after a solved challenge, so the model answers in
        text instead of opening another challenge.
        """
        chat = [{"role": "system", "content": interviewer_system_prompt(language)}]
        if messages:
            chat.extend(messages)
        else:
            chat.append({"role": "user", "content": INTERVIEW_START_MESSAGE})

        message = self._chat(
            chat,
            model=self.config.interviewer_model,
            temperature=self.config.interviewer_temperature,
            max_tokens=self.config.interviewer_max_tokens,
            tools=None if disable_tools else [CODING_CHALLENGE_TOOL],
        )

        for tool_call in message.tool_calls or []:
            if tool_call.type != "function" or tool_call.function.name != CODING_CHALLENGE_TOOL_NAME:
                continue
            try:
                args = json.loads(tool_call.function.arguments)
                challenge = challenge_from_tool_arguments(args, language)
            except (ValueError, KeyError, TypeError) as exc:
                self._log(f"Ignoring malformed {CODING_CHALLENGE_TOOL_NAME} call: {exc}")
                break
            self._log(f"Challenge issued: {challenge.title}")
            return InterviewerReply(content=args.get("spoken_intro", ""), challenge=challenge)

        return InterviewerReply(content=message.content or "")

    def request_hint(
        self,
        challenge: CodingChallenge,
        code: str,
        language: SupportedLanguage,
        history: list[dict] | None = None,
    ) -> InterviewerReply:
        messages = list(history or [])
        messages.append({"role": "user", "content": hint_request_prompt(challenge, code, language)})
        return self.respond(messages, disable_tools=True, language=language)

    def select_language(self, language: SupportedLanguage, history: list[dict] | None = None) -> InterviewerReply:
        messages = list(history or [])
        messages.append({"role": "user", "content": language_selected_message(language)})
        return self.respond(messages, language=language)

    def complete_challenge(
        self,
        session: CodingSession,
        history: list[dict] | None = None,
    ) -> InterviewerReply | None:
        """Close a solved challenge and let the interviewer move on.

        Returns None and leaves the session untouched unless the last run
        passed every test case.
        """
        challenge = session.state.challenge
        if challenge is None or not session.should_advance():
            return None
        session.end_challenge()
        self._log(f"Challenge completed: {challenge.title}")

        messages = list(history or [])
        messages.append({"role": "user", "content": CHALLENGE_COMPLETED_MESSAGE})
        return self.respond(messages, disable_tools=True, language=challenge.language)
