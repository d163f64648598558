"""
Minimal field recovery for OpenWeatherMap response bodies.

These helpers pull a few known fields out of a JSON document using substring
search and brace-depth matching instead of a JSON grammar. They only cover the
shapes the current-weather and forecast endpoints return:

    "name":"London"                         -> extract_string
    "dt":1700000000                         -> extract_number
    "main":{"temp":15.2,...}                -> extract_nested_number
    "list":[{...},{...}]                    -> extract_array_items
    "weather":[{"description":"..."}]       -> extract_first_array_field

Known limitation: lookups are flat substring searches on `"key"`, so a key
name that also appears earlier as a string value can false-match. The first
occurrence always wins.

Nothing here raises on a missing or malformed field. Absent values come back
as "" (strings), None (numeric tokens and objects) or [] (arrays).
"""
from typing import List, Optional

NUMBER_CHARS = frozenset("0123456789.-+eE")


def _find_value_start(doc: str, key: str) -> int:
    """Index just past the colon following `"key"`, or -1."""
    pattern = f'"{key}"'
    idx = doc.find(pattern)
    if idx < 0:
        return -1
    colon = doc.find(":", idx + len(pattern))
    if colon < 0:
        return -1
    return colon + 1


def _match_brace(doc: str, start: int) -> int:
    """Return the index of the `}` closing the `{` at `start`, or -1 if unbalanced."""
    depth = 0
    for i in range(start, len(doc)):
        c = doc[i]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def extract_string(doc: str, key: str) -> str:
    """Text between the first pair of quotes after `"key":`, or ""."""
    pos = _find_value_start(doc, key)
    if pos < 0:
        return ""
    first = doc.find('"', pos)
    if first < 0:
        return ""
    second = doc.find('"', first + 1)
    if second < 0:
        return ""
    return doc[first + 1:second]


def extract_number(doc: str, key: str) -> Optional[str]:
    """Raw numeric token after `"key":`, unvalidated. None when there is none."""
    pos = _find_value_start(doc, key)
    if pos < 0:
        return None
    n = len(doc)
    while pos < n and doc[pos].isspace():
        pos += 1
    end = pos
    while end < n and doc[end] in NUMBER_CHARS:
        end += 1
    if end == pos:
        return None
    return doc[pos:end]


def extract_object(doc: str, key: str) -> Optional[str]:
    """The balanced `{...}` fragment following `"key"`, braces included."""
    pattern = f'"{key}"'
    idx = doc.find(pattern)
    if idx < 0:
        return None
    brace = doc.find("{", idx + len(pattern))
    if brace < 0:
        return None
    end = _match_brace(doc, brace)
    if end < 0:
        return None
    return doc[brace:end + 1]


def extract_nested_number(doc: str, parent_key: str, child_key: str) -> Optional[str]:
    body = extract_object(doc, parent_key)
    if body is None:
        return None
    return extract_number(body, child_key)


def extract_nested_string(doc: str, parent_key: str, child_key: str) -> str:
    body = extract_object(doc, parent_key)
    if body is None:
        return ""
    return extract_string(body, child_key)


def extract_array_items(doc: str, array_key: str) -> List[str]:
    """
    Each top-level object member of the array under `array_key`, in source order.

    Non-object members are skipped. An unterminated object ends the scan, so a
    truncated body yields only the members that were complete.
    """
    items: List[str] = []
    pattern = f'"{array_key}"'
    idx = doc.find(pattern)
    if idx < 0:
        return items
    bracket = doc.find("[", idx + len(pattern))
    if bracket < 0:
        return items

    n = len(doc)
    i = bracket + 1
    while i < n:
        while i < n and (doc[i].isspace() or doc[i] == ","):
            i += 1
        if i >= n or doc[i] == "]":
            break
        if doc[i] != "{":
            i += 1
            continue
        end = _match_brace(doc, i)
        if end < 0:
            break
        items.append(doc[i:end + 1])
        i = end + 1
    return items


def extract_first_array_field(doc: str, array_key: str, child_key: str) -> str:
    """String field `child_key` of the first object in the array `array_key`."""
    pattern = f'"{array_key}"'
    idx = doc.find(pattern)
    if idx < 0:
        return ""
    bracket = doc.find("[", idx + len(pattern))
    if bracket < 0:
        return ""
    obj_start = doc.find("{", bracket)
    if obj_start < 0:
        return ""
    obj_end = _match_brace(doc, obj_start)
    if obj_end < 0:
        return ""
    return extract_string(doc[obj_start:obj_end + 1], child_key)
