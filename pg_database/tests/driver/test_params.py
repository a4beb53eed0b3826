# tests/driver/test_params.py
import json
import pytest
from psycopg.types.json import Json, Jsonb
from ...driver.params import question_to_dollar, is_json, encode_json, prepare_values, to_text


class TestQuestionToDollar:
    """Tests for question_to_dollar."""

    def test_single_placeholder(self):
        assert question_to_dollar("INSERT INTO t(a) VALUES (?)") == "INSERT INTO t(a) VALUES ($1)"

    def test_multiple_placeholders(self):
        assert (question_to_dollar("SELECT * FROM t WHERE a = ? AND b = ?")
                == "SELECT * FROM t WHERE a = $1 AND b = $2")

    def test_no_placeholders(self):
        assert question_to_dollar("SELECT 1") == "SELECT 1"

    def test_quoted_question_marks_untouched(self):
        assert question_to_dollar("SELECT '?', \"a?\", ?") == "SELECT '?', \"a?\", $1"

    def test_escaped_quote_inside_literal(self):
        assert question_to_dollar("SELECT 'it''s ?', ?") == "SELECT 'it''s ?', $1"

    @pytest.mark.parametrize("query, expected", [
        ("SELECT ? -- why?\n, ?", "SELECT $1 -- why?\n, $2"),
        ("SELECT /* a? /* b? */ c? */ ?", "SELECT /* a? /* b? */ c? */ $1"),
        ("SELECT $$ a ? b $$, ?", "SELECT $$ a ? b $$, $1"),
        ("SELECT $fn$ ? $$ ? $fn$, ?", "SELECT $fn$ ? $$ ? $fn$, $1"),
        ("SELECT E'\\'?', ?", "SELECT E'\\'?', $1"),
    ])
    def test_comments_and_quoting_skipped(self, query, expected):
        assert question_to_dollar(query) == expected


class TestJsonParams:
    """Tests for JSON parameter tagging."""

    @pytest.mark.parametrize("value, expected", [
        ({"json": [1]}, True),
        (Json({"a": 1}), True),
        (Jsonb([1]), True),
        ({"json": 1, "other": 2}, False),
        ({"JSON": 1}, False),
        ("json", False),
        (None, False),
    ])
    def test_is_json(self, value, expected):
        assert is_json(value) is expected

    def test_encode_json(self):
        assert json.loads(encode_json({"json": {"a": None}})) == {"a": None}
        assert json.loads(encode_json(Jsonb([1, "x"]))) == [1, "x"]

    def test_prepare_values(self):
        values = prepare_values((1, {"json": True}, "text", None))
        assert values == (1, "true", "text", None)


class TestToText:
    """Tests for to_text."""

    @pytest.mark.parametrize("value, expected", [
        (None, None),
        (True, b"t"),
        (False, b"f"),
        (42, b"42"),
        (1.5, b"1.5"),
        ("héllo", "héllo".encode("utf-8")),
        (b"raw", b"raw"),
        (bytearray(b"raw"), b"raw"),
    ])
    def test_values(self, value, expected):
        assert to_text(value) == expected
