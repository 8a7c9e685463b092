"""Test harness synthesis: wraps candidate code with an entry point per language."""

from __future__ import annotations

import re

from proctor.exceptions import UnsupportedLanguageError
from proctor.models import FunctionName, SupportedLanguage

FALLBACK_FUNCTION_NAME = "solution"

_L = SupportedLanguage

# Each pattern captures the callable's name in group 1.
_NAME_PATTERNS: dict[SupportedLanguage, re.Pattern[str]] = {
    _L.PYTHON: re.compile(r"def\s+(\w+)\s*\("),
    _L.RUBY: re.compile(r"def\s+(?:self\.)?(\w+[?!]?)\s*\(?"),
    _L.JAVASCRIPT: re.compile(r"(?:function\s+)?(\w+)\s*\("),
    _L.TYPESCRIPT: re.compile(r"(?:function\s+)?(\w+)\s*(?:<[^>]*>)?\s*\("),
    # Last identifier before the parameter list; modifiers and return type come first.
    _L.JAVA: re.compile(r"(\w+)\s*\([^)]*\)"),
    _L.CSHARP: re.compile(r"(\w+)\s*(?:<[^>]*>)?\s*\([^)]*\)"),
    _L.C: re.compile(r"(\w+)\s*\([^)]*\)"),
    _L.CPP: re.compile(r"(\w+)\s*\([^)]*\)"),
    _L.GO: re.compile(r"func\s+(?:\([^)]*\)\s*)?(\w+)\s*(?:\[[^\]]*\])?\s*\("),
    _L.RUST: re.compile(r"fn\s+(\w+)"),
}


def parse_function_name(signature: str, language: SupportedLanguage | str) -> FunctionName:
    """Extract the callable's name from *signature*.

    Never raises: anything unparseable (including an unknown language) yields
    ``FunctionName("solution", fallback_used=True)`` so callers can flag the
    low-confidence parse instead of failing.
    """
    try:
        lang = SupportedLanguage.parse(language)
    except UnsupportedLanguageError:
        return FunctionName(FALLBACK_FUNCTION_NAME, fallback_used=True)

    match = _NAME_PATTERNS[lang].search(signature or "")
    if match:
        return FunctionName(match.group(1))
    return FunctionName(FALLBACK_FUNCTION_NAME, fallback_used=True)


def extract_function_name(signature: str, language: SupportedLanguage | str) -> str:
    """Plain-string variant of :func:`parse_function_name`."""
    return parse_function_name(signature, language).name


# ---------------------------------------------------------------------------
# Harness builders
# ---------------------------------------------------------------------------


def build_harness(
    language: SupportedLanguage | str,
    user_code: str,
    function_name: str,
    test_input: str,
) -> str:
    """Return a runnable program that prints ``function_name(test_input)``.

    ``test_input`` is a raw positional argument list (``"3, 5"``) and is
    inserted verbatim. It is trusted input: syntax errors in it surface as
    sandbox compile/runtime errors, not here.
    """
    lang = SupportedLanguage.parse(language)
    call = f"{function_name}({test_input})"

    if lang is _L.PYTHON:
        return f"{user_code}\n\n# Test execution\nprint({call})"

    if lang in (_L.JAVASCRIPT, _L.TYPESCRIPT):
        return f"{user_code}\n\n// Test execution\nconsole.log({call});"

    if lang is _L.RUBY:
        return f"{user_code}\n\n# Test execution\nputs {call}"

    if lang is _L.GO:
        return (
            f"{user_code}\n\n"
            "func main() {\n"
            f"    fmt.Println({call})\n"
            "}"
        )

    if lang is _L.RUST:
        return (
            f"{user_code}\n\n"
            "fn main() {\n"
            f'    println!("{{}}", {call});\n'
            "}"
        )

    if lang is _L.C:
        return (
            f"{user_code}\n\n"
            "int main() {\n"
            f'    printf("%d\\n", {call});\n'
            "    return 0;\n"
            "}"
        )

    if lang is _L.CPP:
        return (
            f"{user_code}\n\n"
            "int main() {\n"
            f"    std::cout << {call} << std::endl;\n"
            "    return 0;\n"
            "}"
        )

    if lang is _L.JAVA:
        entry = (
            "    public static void main(String[] args) {\n"
            f"        System.out.println({call});\n"
            "    }"
        )
        return _splice_into_class(user_code, entry)

    if lang is _L.CSHARP:
        entry = (
            "    public static void Main(string[] args) {\n"
            f"        Console.WriteLine({call});\n"
            "    }"
        )
        return _splice_into_class(user_code, entry)

    raise UnsupportedLanguageError(language)


_TRAILING_BRACE = re.compile(r"}\s*$")


def _splice_into_class(user_code: str, entry: str) -> str:
    """Insert *entry* before the closing brace of the outermost class.

    Appending after the class would declare a second top-level type, which
    neither javac nor mcs accepts.
    """
    close_at = find_top_level_close(user_code)
    if close_at is None:
        # Unbalanced source: fall back to stripping a trailing brace.
        head = _TRAILING_BRACE.sub("", user_code)
        return f"{head.rstrip()}\n\n{entry}\n}}"

    head = user_code[:close_at].rstrip()
    tail = user_code[close_at + 1:].rstrip()
    spliced = f"{head}\n\n{entry}\n}}"
    return f"{spliced}\n{tail}" if tail else spliced


def find_top_level_close(source: str) -> int | None:
    """Return the index of the last ``}`` that closes a depth-1 block.

    Walks the source once, tracking brace depth and skipping string and char
    literals (including C# verbatim strings) and comments.
    """
    depth = 0
    last_close: int | None = None
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        nxt = source[i + 1] if i + 1 < n else ""

        if ch == "/" and nxt == "/":
            end = source.find("\n", i)
            i = n if end == -1 else end + 1
            continue
        if ch == "/" and nxt == "*":
            end = source.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        if ch == "@" and nxt == '"':
            # Verbatim string: "" is an escaped quote, backslashes are literal.
            i += 2
            while i < n:
                if source[i] == '"':
                    if i + 1 < n and source[i + 1] == '"':
                        i += 2
                        continue
                    break
                i += 1
            i += 1
            continue
        if ch in ('"', "'"):
            if source.startswith('"""', i):
                # Java text block
                end = source.find('"""', i + 3)
                i = n if end == -1 else end + 3
                continue
            i += 1
            while i < n and source[i] != ch:
                if source[i] == "\\":
                    i += 1
                elif source[i] == "\n":
                    break
                i += 1
            i += 1
            continue

        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                last_close = i
            elif depth < 0:
                return None
        i += 1

    if depth != 0:
        return None
    return last_close
