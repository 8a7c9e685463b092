"""Tests for function-name extraction and harness synthesis."""

from __future__ import annotations

import pytest

from proctor.exceptions import UnsupportedLanguageError
from proctor.harness import (
    build_harness,
    extract_function_name,
    find_top_level_close,
    parse_function_name,
)
from proctor.models import SupportedLanguage


class TestExtractFunctionName:
    @pytest.mark.parametrize(
        "signature,language,expected",
        [
            ("def add_numbers(a, b):", "python", "add_numbers"),
            ("def double(n: int) -> int:", "python", "double"),
            ("def add(a, b)", "ruby", "add"),
            ("def greet name", "ruby", "greet"),
            ("function sumArray(arr) {", "javascript", "sumArray"),
            ("isPalindrome(s)", "javascript", "isPalindrome"),
            ("function twoSum(nums: number[], target: number): number[]", "typescript", "twoSum"),
            ("public static int add(int a, int b)", "java", "add"),
            ("public static int[] twoSum(int[] nums, int target) {", "java", "twoSum"),
            ("public static string Reverse(string s)", "csharp", "Reverse"),
            ("int add(int a, int b)", "c", "add"),
            ("std::vector<int> twoSum(std::vector<int>& nums, int target)", "cpp", "twoSum"),
            ("func Add(a, b int) int", "go", "Add"),
            ("fn add_two(a: i32, b: i32) -> i32", "rust", "add_two"),
        ],
    )
    def test_language_patterns(self, signature, language, expected):
        assert extract_function_name(signature, language) == expected

    def test_fallback_on_garbage(self):
        assert extract_function_name("garbage text", "python") == "solution"

    def test_fallback_on_empty_signature(self):
        for language in SupportedLanguage:
            assert extract_function_name("", language) == "solution"

    def test_never_raises_on_unknown_language(self):
        assert extract_function_name("def f():", "cobol") == "solution"

    def test_tagged_result_flags_fallback(self):
        parsed = parse_function_name("garbage text", SupportedLanguage.PYTHON)
        assert parsed.name == "solution"
        assert parsed.fallback_used

    def test_tagged_result_on_success(self):
        parsed = parse_function_name("def add(a, b):", SupportedLanguage.PYTHON)
        assert parsed.name == "add"
        assert not parsed.fallback_used


class TestAppendedHarnesses:
    def test_python_final_line_prints_call(self):
        code = build_harness("python", "def add(a,b):\n return a+b", "add", "3, 5")
        assert code.splitlines()[-1] == "print(add(3, 5))"
        assert code.startswith("def add(a,b):\n return a+b")

    def test_javascript(self):
        code = build_harness("javascript", "function add(a, b) { return a + b; }", "add", "1, 2")
        assert code.endswith("console.log(add(1, 2));")

    def test_typescript(self):
        code = build_harness(SupportedLanguage.TYPESCRIPT, "function f(): number { return 1; }", "f", "")
        assert code.endswith("console.log(f());")

    def test_ruby(self):
        code = build_harness("ruby", "def add(a, b)\n  a + b\nend", "add", "2, 3")
        assert code.splitlines()[-1] == "puts add(2, 3)"

    def test_go(self):
        code = build_harness("go", 'package main\n\nimport "fmt"\n\nfunc Add(a, b int) int { return a + b }', "Add", "1, 2")
        assert "func main() {\n    fmt.Println(Add(1, 2))\n}" in code
        assert code.endswith("}")

    def test_rust(self):
        code = build_harness("rust", "fn add(a: i32, b: i32) -> i32 { a + b }", "add", "1, 2")
        assert 'println!("{}", add(1, 2));' in code
        assert code.rstrip().endswith("}")

    def test_c(self):
        code = build_harness("c", "int add(int a, int b) { return a + b; }", "add", "1, 2")
        assert 'printf("%d\\n", add(1, 2));' in code
        assert "int main() {" in code

    def test_cpp(self):
        code = build_harness("cpp", "int add(int a, int b) { return a + b; }", "add", "1, 2")
        assert "std::cout << add(1, 2) << std::endl;" in code

    def test_input_is_inserted_verbatim(self):
        raw = '"a\\"b", [1, 2], {"k": None}'
        code = build_harness("python", "def f(*a): return a", "f", raw)
        assert code.endswith(f"print(f({raw}))")

    def test_unknown_language_raises(self):
        with pytest.raises(UnsupportedLanguageError):
            build_harness("cobol", "", "f", "")


JAVA_SOLUTION = """\
public class Solution {
    public static int add(int a, int b) {
        return a + b;
    }
}
"""

CSHARP_SOLUTION = """\
using System;

public class Solution {
    public static int Add(int a, int b) {
        return a + b;
    }
}


"""


def _top_level_closes(source: str) -> int:
    """Count braces that bring depth back to zero."""
    depth = closes = 0
    for ch in source:
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                closes += 1
    return closes


class TestClassSplicing:
    def test_java_main_is_inside_class(self):
        code = build_harness("java", JAVA_SOLUTION, "add", "3, 5")
        assert code.rstrip().endswith("}")
        assert _top_level_closes(code) == 1
        main_at = code.index("public static void main(String[] args)")
        assert main_at < code.rstrip().rindex("}")
        assert "System.out.println(add(3, 5));" in code

    def test_csharp_trailing_whitespace_tolerated(self):
        code = build_harness("csharp", CSHARP_SOLUTION, "Add", "1, 2")
        assert code.endswith("}")
        assert _top_level_closes(code) == 1
        assert "public static void Main(string[] args)" in code
        assert "Console.WriteLine(Add(1, 2));" in code

    def test_nested_class_and_braces_in_strings(self):
        source = (
            "public class Solution {\n"
            "    static class Node { int v; }\n"
            "    // closing } in a comment\n"
            "    static String s = \"}}\";\n"
            "    static char c = '}';\n"
            "    public static int f(int x) { return x; }\n"
            "}\n"
        )
        code = build_harness("java", source, "f", "1")
        assert 'static String s = "}}";' in code
        assert code.index("public static void main") > code.index("public static int f")
        assert code.rstrip().endswith("}")

    def test_trailing_comment_after_class_is_kept(self):
        source = "public class Solution {\n    static int f() { return 1; }\n}\n// end\n"
        code = build_harness("java", source, "f", "")
        assert code.endswith("// end")
        assert code.index("public static void main") < code.index("// end")

    def test_unbalanced_source_falls_back_to_trailing_brace(self):
        source = "public class Solution {\n    static int f() { return 1; }\n}}\n"
        code = build_harness("java", source, "f", "")
        assert "public static void main" in code
        assert code.endswith("}")


class TestFindTopLevelClose:
    def test_simple(self):
        assert find_top_level_close("class A { }") == 10

    def test_none_when_unbalanced(self):
        assert find_top_level_close("class A {") is None
        assert find_top_level_close("}") is None

    def test_verbatim_string(self):
        source = 'class A { string s = @"a "" } b"; }'
        assert find_top_level_close(source) == len(source) - 1

    def test_block_comment(self):
        source = "class A { /* } */ }"
        assert find_top_level_close(source) == len(source) - 1
