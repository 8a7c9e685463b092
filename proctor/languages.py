"""Language registry: Judge0 ids, editor ids and solution templates."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

from proctor.harness import parse_function_name
from proctor.models import CodingChallenge, LanguageProfile, SupportedLanguage

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def _python_template(fn: str, params: str, ret: str) -> str:
    return f"def {fn}({params}):\n    # Write your code here\n    pass"


def _javascript_template(fn: str, params: str, ret: str) -> str:
    return f"function {fn}({params}) {{\n    // Write your code here\n    \n}}"


def _typescript_template(fn: str, params: str, ret: str) -> str:
    return f"function {fn}({params}): {ret or 'any'} {{\n    // Write your code here\n    \n}}"


def _java_template(fn: str, params: str, ret: str) -> str:
    return (
        "public class Solution {\n"
        f"    public static {ret or 'int'} {fn}({params}) {{\n"
        "        // Write your code here\n"
        "        return 0;\n"
        "    }\n"
        "}"
    )


def _cpp_template(fn: str, params: str, ret: str) -> str:
    return (
        "#include <iostream>\n#include <vector>\n#include <string>\nusing namespace std;\n\n"
        f"{ret or 'int'} {fn}({params}) {{\n"
        "    // Write your code here\n"
        "    return 0;\n"
        "}"
    )


def _c_template(fn: str, params: str, ret: str) -> str:
    return (
        "#include <stdio.h>\n#include <stdlib.h>\n\n"
        f"{ret or 'int'} {fn}({params}) {{\n"
        "    // Write your code here\n"
        "    return 0;\n"
        "}"
    )


def _csharp_template(fn: str, params: str, ret: str) -> str:
    return (
        "using System;\n\n"
        "public class Solution {\n"
        f"    public static {ret or 'int'} {fn}({params}) {{\n"
        "        // Write your code here\n"
        "        return 0;\n"
        "    }\n"
        "}"
    )


def _go_template(fn: str, params: str, ret: str) -> str:
    return (
        'package main\n\nimport "fmt"\n\n'
        f"func {fn}({params}) {ret or 'int'} {{\n"
        "    // Write your code here\n"
        "    return 0\n"
        "}"
    )


def _ruby_template(fn: str, params: str, ret: str) -> str:
    return f"def {fn}({params})\n    # Write your code here\n    \nend"


def _rust_template(fn: str, params: str, ret: str) -> str:
    return f"fn {fn}({params}) -> {ret or 'i32'} {{\n    // Write your code here\n    0\n}}"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

# Declaration order is the order shown in language pickers.
LANGUAGES: Mapping[SupportedLanguage, LanguageProfile] = MappingProxyType({
    SupportedLanguage.PYTHON: LanguageProfile(71, "Python", "python", "py", _python_template),
    SupportedLanguage.JAVASCRIPT: LanguageProfile(63, "JavaScript", "javascript", "js", _javascript_template),
    SupportedLanguage.TYPESCRIPT: LanguageProfile(74, "TypeScript", "typescript", "ts", _typescript_template),
    SupportedLanguage.JAVA: LanguageProfile(62, "Java", "java", "java", _java_template),
    SupportedLanguage.CPP: LanguageProfile(54, "C++", "cpp", "cpp", _cpp_template),
    SupportedLanguage.C: LanguageProfile(50, "C", "c", "c", _c_template),
    SupportedLanguage.CSHARP: LanguageProfile(51, "C#", "csharp", "cs", _csharp_template),
    SupportedLanguage.GO: LanguageProfile(60, "Go", "go", "go", _go_template),
    SupportedLanguage.RUBY: LanguageProfile(72, "Ruby", "ruby", "rb", _ruby_template),
    SupportedLanguage.RUST: LanguageProfile(73, "Rust", "rust", "rs", _rust_template),
})

DEFAULT_LANGUAGE = SupportedLanguage.PYTHON


def profile_of(language: SupportedLanguage | str) -> LanguageProfile:
    """Return the profile for *language*; raises for values outside the closed set."""
    return LANGUAGES[SupportedLanguage.parse(language)]


def all_languages() -> list[tuple[SupportedLanguage, str]]:
    """Return (language, display name) pairs in registry order."""
    return [(lang, profile.display_name) for lang, profile in LANGUAGES.items()]


# ---------------------------------------------------------------------------
# Default editor code
# ---------------------------------------------------------------------------

# Return type after "->" (python/rust) or ":" (typescript), or after ")" (go).
_ARROW_RETURN = re.compile(r"\)\s*(?:->|:)\s*([^{:]+?)\s*:?\s*\{?\s*$")
_GO_RETURN = re.compile(r"\)\s*([^{]+?)\s*\{?\s*$")


def _split_signature(signature: str, function_name: str, language: SupportedLanguage) -> tuple[str, str]:
    """Pull (params, return_type) out of a signature, best effort."""
    match = re.search(rf"\b{re.escape(function_name)}\s*\(([^)]*)\)", signature)
    if not match:
        return "", ""
    params = match.group(1).strip()
    tail = signature[match.start():]

    if language in (SupportedLanguage.PYTHON, SupportedLanguage.RUST, SupportedLanguage.TYPESCRIPT):
        ret = _ARROW_RETURN.search(tail)
        return params, ret.group(1).strip() if ret else ""
    if language is SupportedLanguage.GO:
        ret = _GO_RETURN.search(tail)
        return params, ret.group(1).strip() if ret else ""
    if language in (SupportedLanguage.JAVA, SupportedLanguage.CSHARP, SupportedLanguage.C, SupportedLanguage.CPP):
        # Return type is the token right before the function name.
        head = signature[:match.start()].split()
        return params, head[-1] if head else ""
    return params, ""


def generate_default_code(challenge: CodingChallenge) -> str:
    """Build the starter code shown in the editor for *challenge*."""
    language = challenge.language
    profile = profile_of(language)
    signature = challenge.function_signature.strip()
    parsed = parse_function_name(signature, language)

    if parsed.fallback_used:
        return profile.template("solution", "", "") + "\n"

    # Keep the candidate-facing Python signature exactly as presented.
    if language is SupportedLanguage.PYTHON and signature.startswith("def "):
        header = signature if signature.endswith(":") else signature + ":"
        return f"{header}\n    # Write your code here\n    pass\n"

    params, ret = _split_signature(signature, parsed.name, language)
    return profile.template(parsed.name, params, ret) + "\n"
