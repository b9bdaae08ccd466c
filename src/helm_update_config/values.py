"""Parsing of ``--set-value`` override flags into a values tree.

Each flag holds one or more ``key=value`` pairs separated by commas. Dotted
keys describe nesting, ``{a,b}`` describes a list, and a backslash escapes
any of ``, . = \\ { }``. Flags are folded left to right, so a later pair
overwrites an earlier one for the same path:

    >>> parse_set_values(["replicas=3,env.tier=canary"])
    {'replicas': 3, 'env': {'tier': 'canary'}}
"""

import logging
import re
from typing import Any

from .exceptions import ArgumentError

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[-+]?\d+$")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_set_values(entries: list[str] | None) -> dict[str, Any]:
    """Fold override flags into a single nested mapping.

    Args:
        entries: Raw ``--set-value`` arguments, in command line order

    Returns:
        Nested override mapping keyed by strings

    Raises:
        ArgumentError: If a pair is malformed
    """
    values: dict[str, Any] = {}
    for entry in entries or []:
        parse_into(entry, values)
    return values


def parse_into(entry: str, values: dict[str, Any]) -> dict[str, Any]:
    """Parse one flag occurrence and merge its pairs into values in place."""
    parser = _PairParser(entry)
    for path, value in parser.pairs():
        _set_path(values, path, value)
        logger.debug(f"Parsed override {'.'.join(path)}={value!r}")
    return values


def typed_value(text: str) -> Any:
    """Convert a raw flag value into a bool, None, int or string.

    ``true``, ``false`` and ``null`` match case-insensitively. Floats, values
    with a leading zero (``0123``) and integers outside int64 stay strings,
    matching how Helm treats ``--set``.
    """
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    if len(text) > 1 and text[0] == "0":
        return text
    if _INT_RE.match(text):
        number = int(text)
        if _INT64_MIN <= number <= _INT64_MAX:
            return number
    return text


def _set_path(values: dict[str, Any], path: list[str], value: Any) -> None:
    node = values
    for segment in path[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            # A scalar set earlier is replaced by the nested mapping
            child = {}
            node[segment] = child
        node = child
    node[path[-1]] = value


class _PairParser:
    """Scanner over a single ``k1=v1,k2.sub=v2`` flag value."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def pairs(self):
        while self.pos < len(self.text):
            path = self._read_key()
            if self._peek() == "{":
                value: Any = self._read_list()
            else:
                value = typed_value(self._read_until(","))
            self._expect_separator()
            yield path, value

    def _peek(self) -> str | None:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def _read_key(self) -> list[str]:
        start = self.pos
        segments: list[str] = []
        current: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            self.pos += 1
            if char == "\\":
                current.append(self._escaped())
            elif char == ".":
                segments.append(self._segment(current, start))
                current = []
            elif char == "=":
                segments.append(self._segment(current, start))
                return segments
            elif char == ",":
                break
            else:
                current.append(char)
        key = self.text[start : self.pos].rstrip(",")
        raise ArgumentError(f"key '{key}' has no value (expected key=value)")

    def _segment(self, chars: list[str], start: int) -> str:
        if not chars:
            raise ArgumentError(f"empty key segment in '{self.text[start:self.pos]}'")
        return "".join(chars)

    def _read_until(self, stop: str) -> str:
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char in stop:
                break
            self.pos += 1
            if char == "\\":
                chars.append(self._escaped())
            else:
                chars.append(char)
        return "".join(chars)

    def _read_list(self) -> list[Any]:
        start = self.pos
        self.pos += 1  # opening brace
        items: list[Any] = []
        while True:
            item = self._read_until(",}")
            char = self._peek()
            if char is None:
                raise ArgumentError(f"unterminated list value '{self.text[start:]}'")
            self.pos += 1
            if item or char == ",":
                items.append(typed_value(item))
            if char == "}":
                return items

    def _expect_separator(self) -> None:
        char = self._peek()
        if char is None:
            return
        if char != ",":
            raise ArgumentError(f"unexpected '{char}' after list value in '{self.text}'")
        self.pos += 1

    def _escaped(self) -> str:
        if self.pos >= len(self.text):
            raise ArgumentError(f"dangling escape at end of '{self.text}'")
        char = self.text[self.pos]
        self.pos += 1
        return char
