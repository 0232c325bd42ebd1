# src/bwdedup/dedup/filters.py

from typing import Iterable, List, Sequence, Set

from .value import JsonValue


def parse_path(path: str) -> List[str]:
    """Split a dot-separated path, dropping empty segments ("login..uris" -> ["login", "uris"])."""
    return [part for part in path.split(".") if part]


def parse_paths(paths: Iterable[str]) -> List[List[str]]:
    return [parse_path(p) for p in paths if p.strip()]


def remove_keys_anywhere(value: JsonValue, ignore_keys: Set[str]) -> None:
    """
    Delete every object key named in ``ignore_keys``, at any depth.

    Recurses into objects and arrays; scalars are leaves. Mutates ``value``.
    """
    if isinstance(value, dict):
        for key in list(value.keys()):
            if key in ignore_keys:
                del value[key]
            else:
                remove_keys_anywhere(value[key], ignore_keys)
    elif isinstance(value, list):
        for item in value:
            remove_keys_anywhere(item, ignore_keys)


def remove_path(value: JsonValue, path: Sequence[str]) -> None:
    """
    Delete the key at an exact location.

    A segment that does not resolve (missing key, or a non-object on the way)
    leaves the tree untouched.
    """
    if not path:
        return

    current = value
    last = len(path) - 1
    for index, segment in enumerate(path):
        if not isinstance(current, dict):
            return
        if index == last:
            current.pop(segment, None)
            return
        if segment not in current:
            return
        current = current[segment]
