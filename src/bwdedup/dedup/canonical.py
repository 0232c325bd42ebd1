# src/bwdedup/dedup/canonical.py

import json

from bwdedup.common.errors import CanonicalizationError

from .value import JsonValue


def canonicalize(value: JsonValue) -> JsonValue:
    """
    Return a copy of ``value`` with every object's keys sorted.

    Arrays keep their order; any reordering must happen before this step.
    """
    if isinstance(value, dict):
        return {key: canonicalize(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [canonicalize(item) for item in value]
    return value


def serialize(value: JsonValue) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise CanonicalizationError(f"Cannot serialize record canonically: {e}") from e


def fingerprint_of(value: JsonValue) -> str:
    """Exact canonical text of ``value``; equal strings mean equal trees."""
    return serialize(canonicalize(value))
