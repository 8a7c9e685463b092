"""CLI interface for Proctor."""

from __future__ import annotations

import argparse
import json
import sys

from proctor.config import Config
from proctor.languages import LANGUAGES, generate_default_code
from proctor.models import CodingChallenge, SupportedLanguage, challenge_from_dict
from proctor.runner import TestRunner


def load_challenge(path: str, language: str | None = None) -> CodingChallenge:
    """Load a challenge from a JSON file (camelCase or snake_case keys)."""
    with open(path) as f:
        data = json.load(f)
    return challenge_from_dict(data, language=language)


def _cmd_run(args: argparse.Namespace) -> int:
    challenge = load_challenge(args.challenge, args.language)
    with open(args.solution) as f:
        code = f.read()

    overrides = {}
    if args.judge0_url is not None:
        overrides["judge0_url"] = args.judge0_url
    if args.judge0_api_key is not None:
        overrides["judge0_api_key"] = args.judge0_api_key
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    config = Config.from_env(require_llm=False, **overrides)

    runner = TestRunner(config.create_executor())
    output = runner.run_tests(
        challenge.language, code, challenge.function_signature, challenge.test_cases
    )

    if output.error is not None:
        print(f"Error: {output.error}", file=sys.stderr)
        return 1

    for i, tr in enumerate(output.test_results, 1):
        status = "PASS" if tr.passed else "FAIL"
        print(f"Test {i}: {status}")
        print(f"  Input:    {tr.input}")
        print(f"  Expected: {tr.expected}")
        print(f"  Actual:   {tr.actual}")

    passed = sum(1 for tr in output.test_results if tr.passed)
    print(f"\n{passed}/{len(output.test_results)} test(s) passed.")
    return 0 if output.all_passed else 1


def _cmd_languages(args: argparse.Namespace) -> int:
    for lang, profile in LANGUAGES.items():
        print(f"{lang.value:<12} {profile.display_name:<12} .{profile.extension:<4} judge0 id {profile.id}")
    return 0


def _cmd_template(args: argparse.Namespace) -> int:
    challenge = load_challenge(args.challenge, args.language)
    print(generate_default_code(challenge), end="")
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="proctor",
        description="Proctor: run coding-challenge solutions against Judge0",
    )
    subparsers = parser.add_subparsers(dest="command")
    choices = [lang.value for lang in SupportedLanguage]

    run_parser = subparsers.add_parser("run", help="Run a solution against a challenge's test cases")
    run_parser.add_argument("challenge", help="Path to challenge JSON file")
    run_parser.add_argument("solution", help="Path to the solution source file")
    run_parser.add_argument("--language", choices=choices, default=None, help="Override the challenge language")
    run_parser.add_argument("--judge0-url", type=str, default=None, help="Judge0 API base URL")
    run_parser.add_argument("--judge0-api-key", type=str, default=None, help="Judge0 API key")
    run_parser.add_argument("--timeout", type=float, default=None, help="Per-submission timeout in seconds")

    subparsers.add_parser("languages", help="List supported languages")

    template_parser = subparsers.add_parser("template", help="Print starter code for a challenge")
    template_parser.add_argument("challenge", help="Path to challenge JSON file")
    template_parser.add_argument("--language", choices=choices, default=None)

    args = parser.parse_args(argv)

    commands = {"run": _cmd_run, "languages": _cmd_languages, "template": _cmd_template}
    if args.command not in commands:
        parser.print_help()
        sys.exit(1)

    try:
        code = commands[args.command](args)
    except KeyError as e:
        print(f"Error: challenge file is missing {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        # bad JSON, bad config values, unsupported languages
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)
