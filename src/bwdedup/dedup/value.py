# src/bwdedup/dedup/value.py

import copy
from typing import Any, Dict, List, Union

# A decoded JSON tree: object / array / string / number / bool / null.
JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


def copy_value(value: JsonValue) -> JsonValue:
    """Deep working copy, so the original record stays available for output."""
    return copy.deepcopy(value)
