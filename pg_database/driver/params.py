import json
import re
from typing import Any, Iterable, Optional
from psycopg.types.json import Json, Jsonb

_DOLLAR_TAG = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")


def question_to_dollar(query: str) -> str:
    """
    Convert SQL positional placeholders from "?" to PostgreSQL-style "$n".

    Placeholders are numbered in order of appearance starting from 1
    (i.e., ?, ?, ? -> $1, $2, $3). Question marks are left alone inside
    string literals (including ``E'...'`` escape strings), double-quoted
    identifiers, dollar-quoted bodies and ``--``/``/* */`` comments.

    Args:
        query (str): A SQL query string that may contain "?" placeholders.

    Returns:
        str: The transformed SQL string. Queries without placeholders are
             returned unchanged.

    Examples:
        >>> question_to_dollar("SELECT * FROM t WHERE a = ? AND b = ?")
        'SELECT * FROM t WHERE a = $1 AND b = $2'
        >>> question_to_dollar("SELECT '?' || ?")
        "SELECT '?' || $1"
    """
    parts = []
    index = 0
    pos = 0
    length = len(query)
    while pos < length:
        char = query[pos]
        end = pos + 1
        if char == "?":
            index += 1
            parts.append(f"${index}")
            pos = end
            continue
        if char == "'":
            escapes = pos > 0 and query[pos - 1] in "eE" and not _is_word(query, pos - 2)
            end = _skip_quoted(query, end, "'", escapes)
        elif char == '"':
            end = _skip_quoted(query, end, '"', False)
        elif query.startswith("--", pos):
            newline = query.find("\n", pos)
            end = length if newline == -1 else newline + 1
        elif query.startswith("/*", pos):
            end = _skip_block_comment(query, pos)
        elif char == "$" and not _is_word(query, pos - 1):
            tag = _DOLLAR_TAG.match(query, pos)
            if tag:
                close = query.find(tag.group(), tag.end())
                end = length if close == -1 else close + len(tag.group())
        parts.append(query[pos:end])
        pos = end
    return "".join(parts)


def _is_word(query: str, pos: int) -> bool:
    return pos >= 0 and (query[pos].isalnum() or query[pos] == "_")


def _skip_quoted(query: str, pos: int, quote: str, escapes: bool) -> int:
    length = len(query)
    while pos < length:
        char = query[pos]
        if escapes and char == "\\":
            pos += 2
            continue
        pos += 1
        if char == quote:
            # Doubled quote stays inside the literal
            if pos < length and query[pos] == quote:
                pos += 1
                continue
            return pos
    return length


def _skip_block_comment(query: str, pos: int) -> int:
    depth = 0
    length = len(query)
    while pos < length:
        if query.startswith("/*", pos):
            depth += 1
            pos += 2
        elif query.startswith("*/", pos):
            depth -= 1
            pos += 2
            if depth == 0:
                return pos
        else:
            pos += 1
    return length


def is_json(value: Any) -> bool:
    """
    Check whether a query parameter is tagged as a JSON value.

    Both ``{"json": value}`` and psycopg's ``Json``/``Jsonb`` wrappers count.
    """
    if isinstance(value, (Json, Jsonb)):
        return True
    return isinstance(value, dict) and len(value) == 1 and "json" in value


def encode_json(value: Any) -> str:
    if isinstance(value, (Json, Jsonb)):
        return json.dumps(value.obj)
    return json.dumps(value["json"])


def prepare_values(params: Iterable[Any]) -> tuple:
    """Serialize JSON-tagged parameters, passing everything else through."""
    return tuple(encode_json(value) if is_json(value) else value for value in params)


def to_text(value: Any, encoding: str = "utf-8") -> Optional[bytes]:
    """
    Render a bound parameter in PostgreSQL text format.

    Returns:
        Optional[bytes]: The encoded value, or None for SQL NULL.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return b"t" if value else b"f"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return str(value).encode(encoding)
