import json

import pytest

from canon_llm.base.utils.json_repair import attempt_json_repair, clean_json_markers, parse_partial_json


def test_clean_json_markers_strips_fences():
    assert clean_json_markers('```json\n{"a": 1}\n```') == '{"a": 1}'  # nosec B101
    assert clean_json_markers("```\n[1]\n```") == "[1]"  # nosec B101
    assert clean_json_markers('{"a": 1}') == '{"a": 1}'  # nosec B101


def test_attempt_json_repair_handles_common_damage():
    assert json.loads(attempt_json_repair('Here you go: {"a": 1,}')) == {"a": 1}  # nosec B101
    assert json.loads(attempt_json_repair('{"a": [1, 2')) == {"a": [1, 2]}  # nosec B101
    assert json.loads(attempt_json_repair('{"msg": "unterminated')) == {"msg": "unterminated"}  # nosec B101


def test_attempt_json_repair_ignores_brackets_inside_strings():
    assert json.loads(attempt_json_repair('{"s": "a{b[c"')) == {"s": "a{b[c"}  # nosec B101


@pytest.mark.parametrize(
    "buffer, expected",
    [
        ("", {}),
        ("{", {}),
        ('{"city": "Pa', {"city": "Pa"}),
        ('{"city": "Paris", "un', {"city": "Paris"}),
        ('{"a": 1, "b":', {"a": 1}),
        ('{"a": {"b": [1, 2', {"a": {"b": [1, 2]}}),
        ('{"city": "Paris"}', {"city": "Paris"}),
        ("[1, 2]", {}),
    ],
)
def test_parse_partial_json(buffer, expected):
    assert parse_partial_json(buffer) == expected  # nosec B101
