import pytest

from leetomatic import extract
from leetomatic.errors import (
    EmptySolutionError,
    ExtractionError,
    MarkerNotFoundError,
    MissingTerminatorError,
    UnbalancedBracesError,
)
from leetomatic.extract import extract_block, extract_solution, normalize_code

SOURCE = """\
// Time:  O(n)
// Space: O(n)

class Solution {
public:
    vector<int> twoSum(vector<int>& nums, int target) {
        unordered_map<int, int> lookup;
        for (int i = 0; i < nums.size(); ++i) {
            if (lookup.count(target - nums[i])) {
                return {lookup[target - nums[i]], i};
            }
            lookup[nums[i]] = i;
        }
        return {};
    }
};

// Time:  O(nlogn)
class Solution2 {
public:
    int f() { return 2; }
};
"""


def test_extract_block_returns_first_solution_with_terminator():
    block = extract_block(SOURCE, "class Solution")
    assert block.startswith("class Solution {")
    assert block.endswith("};")
    assert "Solution2" not in block
    assert "return {};" in block


def test_extract_block_ignores_braces_before_marker():
    text = "namespace { int x = {1}; }\n}}\nclass Solution { int a; };\n"
    assert extract_block(text, "class Solution") == "class Solution { int a; };"


def test_extract_block_allows_whitespace_before_terminator():
    text = "class Solution {\n  int a;\n}\n\n ;\nint tail;"
    assert extract_block(text, "class Solution") == "class Solution {\n  int a;\n}\n\n ;"


def test_extract_block_missing_marker():
    with pytest.raises(MarkerNotFoundError):
        extract_block("struct Foo { };", "class Solution")


@pytest.mark.parametrize(
    "text",
    [
        "class Solution { int f() { return 1; }",
        "class Solution ;",
    ],
)
def test_extract_block_unbalanced(text):
    with pytest.raises(UnbalancedBracesError):
        extract_block(text, "class Solution")


@pytest.mark.parametrize(
    "text",
    [
        "class Solution { int a; }",
        "class Solution { int a; }\nint b;",
    ],
)
def test_extract_block_missing_terminator(text):
    with pytest.raises(MissingTerminatorError):
        extract_block(text, "class Solution")


def test_extraction_errors_share_base_class():
    for error in (MarkerNotFoundError, UnbalancedBracesError, MissingTerminatorError, EmptySolutionError):
        assert issubclass(error, ExtractionError)


def test_normalize_removes_full_line_comment():
    assert normalize_code("a\n// comment\nb") == "a\nb"


def test_normalize_removes_multiline_block_comment():
    assert normalize_code("a\n/* x\ny */\nb") == "a\nb"


def test_normalize_keeps_indentation_and_trailing_code():
    code = "class S {\n    int f() { return 1; }  // fast path\n\n\n    /* helper */\n    int g;\n};"
    assert normalize_code(code) == "class S {\n    int f() { return 1; }  \n    int g;\n};"


@pytest.mark.parametrize(
    "code",
    [
        SOURCE,
        "a\n// comment\nb",
        "a\n/* x\ny */\nb",
        "  \n\n x = 1; /* y */ // z\n\n",
    ],
)
def test_normalize_is_idempotent(code):
    once = normalize_code(code)
    assert normalize_code(once) == once


def test_normalize_pure_comment_is_empty():
    assert normalize_code("// only\n/* a\n comment */\n") == ""


def test_extract_solution_end_to_end_sample():
    raw = "class Solution {\n public:\n  int f(){return 1;}\n};\n// trailing comment\n"
    assert extract_solution(raw, "class Solution") == "class Solution {\n public:\n  int f(){return 1;}\n};"


def test_extract_solution_rejects_empty_result(monkeypatch):
    monkeypatch.setattr(extract, "extract_block", lambda *args, **kwargs: "// nothing here")
    with pytest.raises(EmptySolutionError):
        extract.extract_solution("ignored", "class Solution")
