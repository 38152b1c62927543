"""Tests for the model-output cleanup pass."""

import json

import pytest

from techboard.modules.normalizer import normalize_content


# =====================================================================
# INDIVIDUAL RULES
# =====================================================================

class TestCleanupRules:
    def test_strips_code_fences(self):
        assert normalize_content('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_untagged_fence(self):
        assert normalize_content('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_removes_block_comments(self):
        text = '{"a": /* first\n second */ 1}'
        assert json.loads(normalize_content(text)) == {"a": 1}

    def test_removes_line_comments(self):
        text = '{\n"a": 1, // the answer\n"b": 2\n}'
        assert json.loads(normalize_content(text)) == {"a": 1, "b": 2}

    def test_removes_escaped_newlines(self):
        assert normalize_content('{\\n"a": 1\\n}') == '{"a": 1}'

    def test_unescapes_quotes(self):
        assert normalize_content('{\\"a\\": \\"x\\"}') == '{"a": "x"}'

    def test_trims_whitespace(self):
        assert normalize_content('  \n {"a": 1} \t\n') == '{"a": 1}'

    def test_empty_input(self):
        assert normalize_content("") == ""
        assert normalize_content(None) == ""

    def test_does_not_repair_json(self):
        # trailing comma survives, the parser has to reject it
        assert normalize_content('{"a": 1,}') == '{"a": 1,}'

    def test_fenced_response_becomes_parseable(self, fenced_response, full_payload):
        assert json.loads(normalize_content(fenced_response)) == full_payload


# =====================================================================
# IDEMPOTENCE
# =====================================================================

SAMPLES = [
    '```json\n{"a": 1}\n```',
    '{"a": 1} // trailing',
    '/* x */ {"a": "b"}',
    '{\\"a\\": 1}',
    "not json at all",
    "``/**/`",
    '\\\\"',
    '/\\n/ hidden comment\n{"a": 1}',
    "   ",
]


class TestIdempotence:
    @pytest.mark.parametrize("raw", SAMPLES)
    def test_second_pass_changes_nothing(self, raw):
        once = normalize_content(raw)
        assert normalize_content(once) == once

    def test_fenced_response(self, fenced_response):
        once = normalize_content(fenced_response)
        assert normalize_content(once) == once

    def test_artifact_exposed_by_earlier_removal(self):
        assert normalize_content("``/**/`") == ""
