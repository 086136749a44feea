# -*- test-case-name: txdigest.test.test_parse -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
A scanner for the parameter list of a Digest C{Authorization} header.
"""

from typing import Dict, List, Optional, Tuple

REQUIRED_FIELDS = ("nonce", "nc", "cnonce", "qop", "username", "uri", "response")

_WHITESPACE = " \t\r\n"
_QUOTES = "\"'"
_KEY_END = "=," + _WHITESPACE
_VALUE_END = "," + _WHITESPACE


class _UnterminatedQuote(Exception):
    """
    A quoted value was opened but never closed.
    """


def _skip(data: str, position: int, characters: str) -> int:
    while position < len(data) and data[position] in characters:
        position += 1
    return position


def _until(data: str, position: int, characters: str) -> int:
    while position < len(data) and data[position] not in characters:
        position += 1
    return position


def _scanItems(data: str) -> List[Tuple[str, str]]:
    """
    Split C{data} into C{(key, value)} pairs.

    Items are separated by commas and/or whitespace.  A value is either
    enclosed in single or double quotes, closed by the same character with no
    escaping, or is a run of characters up to the next comma or whitespace.
    Words which are not followed by C{=} are skipped.

    @raise _UnterminatedQuote: If a quoted value is not closed.
    """
    items = []
    position = 0
    while True:
        position = _skip(data, position, "," + _WHITESPACE)
        if position >= len(data):
            return items

        keyEnd = _until(data, position, _KEY_END)
        key = data[position:keyEnd]
        position = _skip(data, keyEnd, _WHITESPACE)
        if position >= len(data) or data[position] != "=":
            continue

        position = _skip(data, position + 1, _WHITESPACE)
        if position < len(data) and data[position] in _QUOTES:
            closing = data.find(data[position], position + 1)
            if closing == -1:
                raise _UnterminatedQuote(key)
            value = data[position + 1 : closing]
            position = closing + 1
        else:
            valueEnd = _until(data, position, _VALUE_END)
            value = data[position:valueEnd]
            position = valueEnd
        items.append((key, value))


def parseDigestFields(data: str) -> Optional[Dict[str, str]]:
    """
    Parse the parameters of a Digest credential string.

    A repeated required field rejects the whole string rather than
    overwriting the earlier value, as more lenient parsers do, so that two
    different values for a hashed field can never be accepted.

    @param data: The credential string with the scheme token removed, for
        example C{'username="alice", nonce="abc123", ...'}.

    @return: A C{dict} holding exactly the keys in L{REQUIRED_FIELDS}, or
        C{None} if any of them is missing or repeated, or if a quoted value
        is not terminated.  Unrecognized keys are ignored.
    """
    try:
        items = _scanItems(data)
    except _UnterminatedQuote:
        return None

    fields: Dict[str, str] = {}
    for key, value in items:
        if key not in REQUIRED_FIELDS:
            continue
        if key in fields:
            return None
        fields[key] = value

    if len(fields) != len(REQUIRED_FIELDS):
        return None
    return fields
