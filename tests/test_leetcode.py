"""Tests for the LeetCode client helpers (no network)."""

from unittest.mock import patch

import httpx
import pytest

import leetcode


PROBLEM_HTML = (
    "<p>Given an array of integers <code>nums</code>, return indices of the two numbers.</p>"
    "<p>&nbsp;</p>"
    "<p><strong class=\"example\">Example 1:</strong></p>"
    "<pre><strong>Input:</strong> nums = [2,7,11,15], target = 9\n<strong>Output:</strong> [0,1]</pre>"
    "<p><strong class=\"example\">Example 2:</strong></p>"
    "<pre><strong>Input:</strong> nums = [3,3], target = 6\n<strong>Output:</strong> [0,1]</pre>"
    "<p>&nbsp;</p>"
    "<p><strong>Constraints:</strong></p>\n<ul>\n"
    "<li><code>2 &lt;= nums.length &lt;= 10<sup>4</sup></code></li>\n"
    "<li>Only one valid answer exists.</li>\n</ul>"
)


# ─────────────────────────────────────────────────────────────────────────────
# Problem Content
# ─────────────────────────────────────────────────────────────────────────────


class TestParseContent:
    def test_description(self):
        parsed = leetcode.parse_problem_content(PROBLEM_HTML)
        assert parsed["description"].startswith("Given an array of integers `nums`")
        assert "Example" not in parsed["description"]

    def test_examples(self):
        examples = leetcode.parse_problem_content(PROBLEM_HTML)["examples"]
        assert len(examples) == 2
        assert examples[0].startswith("**Example 1:**")
        assert "target = 9" in examples[0]

    def test_constraints(self):
        constraints = leetcode.parse_problem_content(PROBLEM_HTML)["constraints"]
        assert "Only one valid answer exists." in constraints
        assert any("<=" in c for c in constraints)

    def test_empty(self):
        assert leetcode.parse_problem_content("") == {"description": "", "examples": [], "constraints": []}

    def test_constraints_block(self):
        block = leetcode._constraints_block(PROBLEM_HTML)
        assert block.startswith("•")
        assert "Only one valid answer exists." in block


# ─────────────────────────────────────────────────────────────────────────────
# Points and Starter Code
# ─────────────────────────────────────────────────────────────────────────────


class TestPoints:
    def test_by_difficulty(self):
        assert leetcode.difficulty_points("Easy") == 10
        assert leetcode.difficulty_points("Medium") == 20
        assert leetcode.difficulty_points("Hard") == 30
        assert leetcode.difficulty_points("unknown") == 10

    def test_by_correctness(self):
        assert leetcode.points_for_correctness("Medium", "correct") == 20
        assert leetcode.points_for_correctness("Hard", "partial") == 15
        assert leetcode.points_for_correctness("Easy", "partial") == 5
        assert leetcode.points_for_correctness("Hard", "incorrect") == 0


class TestStarterCode:
    problem = {"codeSnippets": [
        {"lang": "Python3", "langSlug": "python3", "code": "class Solution:\n    pass"},
        {"lang": "Go", "langSlug": "golang", "code": "func twoSum() {}"},
    ]}

    def test_language_alias(self):
        assert leetcode.starter_code(self.problem, "python").startswith("class Solution")
        assert leetcode.starter_code(self.problem, "go") == "func twoSum() {}"

    def test_missing_language(self):
        assert "not available" in leetcode.starter_code(self.problem, "kotlin")


# ─────────────────────────────────────────────────────────────────────────────
# GraphQL
# ─────────────────────────────────────────────────────────────────────────────


class TestFetch:
    def test_daily(self):
        data = {"activeDailyCodingChallengeQuestion": {
            "date": "2026-03-01",
            "link": "/problems/two-sum/",
            "question": {"title": "Two Sum", "titleSlug": "two-sum", "difficulty": "Easy"},
        }}
        with patch("leetcode._graphql", return_value=data):
            daily = leetcode.fetch_daily_problem()
        assert daily == {
            "date": "2026-03-01",
            "title": "Two Sum",
            "slug": "two-sum",
            "difficulty": "Easy",
            "link": "https://leetcode.com/problems/two-sum/",
        }

    def test_no_daily(self):
        with patch("leetcode._graphql", return_value={}):
            with pytest.raises(leetcode.LeetCodeError):
                leetcode.fetch_daily_problem()

    def test_problem_defaults(self):
        with patch("leetcode._graphql", return_value={"question": {"title": "Two Sum", "content": PROBLEM_HTML}}):
            problem = leetcode.fetch_problem("two-sum")
        assert problem["hints"] == []
        assert problem["codeSnippets"] == []
        assert "Only one valid answer exists." in problem["constraints"]

    def test_network_error(self):
        with patch("httpx.Client.post", side_effect=httpx.ConnectError("down")):
            with pytest.raises(leetcode.LeetCodeError):
                leetcode.fetch_problem("two-sum")
