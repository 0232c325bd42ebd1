# src/bwdedup/dedup/normalizer.py

import json
from typing import Any

from .value import JsonValue

# ASCII-only folding: "É" stays "É", unlike str.lower().
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def normalize_strings(value: JsonValue, trim: bool, lowercase: bool) -> JsonValue:
    """
    Trim and/or ASCII-lowercase every string leaf.

    Containers are updated in place; the (possibly new) value is returned so a
    bare string at the root is handled too.
    """
    if not trim and not lowercase:
        return value

    if isinstance(value, str):
        if trim:
            value = value.strip()
        if lowercase:
            value = ascii_lower(value)
        return value

    if isinstance(value, list):
        for i, item in enumerate(value):
            value[i] = normalize_strings(item, trim, lowercase)
    elif isinstance(value, dict):
        for key, item in value.items():
            value[key] = normalize_strings(item, trim, lowercase)
    return value


def uri_sort_key(entry: Any) -> str:
    if isinstance(entry, dict):
        uri = entry.get("uri")
        return uri if isinstance(uri, str) else ""
    if isinstance(entry, str):
        return entry
    return json.dumps(entry, separators=(",", ":"), ensure_ascii=False)


def sort_login_uris(value: JsonValue) -> None:
    """Sort ``login.uris`` by URI text. Anything not shaped like a login item is left alone."""
    if not isinstance(value, dict):
        return
    login = value.get("login")
    if not isinstance(login, dict):
        return
    uris = login.get("uris")
    if not isinstance(uris, list):
        return

    # list.sort is stable: entries with equal keys keep their relative order
    uris.sort(key=uri_sort_key)
