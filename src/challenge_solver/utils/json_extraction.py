"""Lenient JSON extraction from free-text model replies.

Kept behind three narrow functions so a stricter structured-output contract
can replace it without touching callers:

- ``extract_json_object``: find the first top-level ``{...}`` in free text
- ``parse_lenient_json``: strict parse, then one best-effort repair pass
- ``round10``: round a solution to 10 decimal places
"""

import json
import math
import re
from typing import Any

from challenge_solver.exceptions import JSONExtractionError, JSONRepairError

DECIMALS = 10

_STRING_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)")
_BARE_VALUE = re.compile(r"(:\s*)([^\s\"{\[,}\]][^,}\]]*?)(\s*(?:[,}\]]|$))")
_JSON_SCALAR = re.compile(r"^(?:-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?|true|false|null)$")


def extract_json_object(text: str) -> str:
    """Return the first balanced top-level JSON object found in ``text``.

    Braces inside quoted strings are ignored, so nested objects and string
    values containing ``}`` are extracted whole.

    Args:
        text: Raw model reply

    Returns:
        The substring from the first ``{`` to its matching ``}``

    Raises:
        JSONExtractionError: If no ``{`` exists or it is never closed
    """
    start = text.find("{")
    if start == -1:
        raise JSONExtractionError("No JSON object found in the model reply")

    depth = 0
    quote: str | None = None
    escaped = False

    for index in range(start, len(text)):
        char = text[index]
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue

        if char in ('"', "'"):
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]

    raise JSONExtractionError("Unbalanced JSON object in the model reply")


def _convert_single_quotes(text: str) -> str:
    out: list[str] = []
    quote: str | None = None
    escaped = False

    for char in text:
        if quote == '"':
            out.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                quote = None
        elif quote == "'":
            if escaped:
                out.append(char if char == "'" else "\\" + char)
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == "'":
                out.append('"')
                quote = None
            elif char == '"':
                out.append('\\"')
            else:
                out.append(char)
        else:
            if char == "'":
                out.append('"')
                quote = "'"
            else:
                out.append(char)
                if char == '"':
                    quote = '"'

    return "".join(out)


def _quote_bare_value(match: re.Match[str]) -> str:
    prefix, value, suffix = match.groups()
    if _JSON_SCALAR.match(value):
        return match.group(0)
    return f'{prefix}{json.dumps(value)}{suffix}'


def _repair_segment(segment: str) -> str:
    segment = _BARE_KEY.sub(r'\1"\2"\3', segment)
    return _BARE_VALUE.sub(_quote_bare_value, segment)


def repair_json(text: str) -> str:
    """Best-effort repair of almost-JSON.

    Converts single-quoted strings to double quotes, then quotes bare keys and
    bare scalar values found outside of string literals. Numbers, ``true``,
    ``false`` and ``null`` stay unquoted.
    """
    text = _convert_single_quotes(text)

    parts: list[str] = []
    position = 0
    for token in _STRING_TOKEN.finditer(text):
        parts.append(_repair_segment(text[position : token.start()]))
        parts.append(token.group(0))
        position = token.end()
    parts.append(_repair_segment(text[position:]))

    return "".join(parts)


def parse_lenient_json(text: str) -> dict[str, Any]:
    """Parse ``text`` as a JSON object, repairing it once if needed.

    Raises:
        JSONRepairError: If the text is still invalid after repair, or is
            valid JSON but not an object
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        try:
            parsed = json.loads(repair_json(text))
        except json.JSONDecodeError as e:
            raise JSONRepairError(f"Invalid JSON in the model reply: {e}") from e

    if not isinstance(parsed, dict):
        raise JSONRepairError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def round10(value: float) -> float:
    """Round half up to 10 decimal places.

    Float representation error at this precision is accepted. Values too large
    to scale have no fractional digits and are returned unchanged.
    """
    factor = 10**DECIMALS
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def format_answer(value: float) -> str:
    """Serialize an answer with exactly 10 decimal digits."""
    return f"{value:.{DECIMALS}f}"
