# src/bwdedup/dedup/dates.py

from typing import Optional

from bwdedup.common.models import Keep

from .value import JsonValue


def best_date(item: JsonValue) -> Optional[str]:
    """revisionDate, else creationDate. Non-string values count as absent."""
    if not isinstance(item, dict):
        return None
    for field in ("revisionDate", "creationDate"):
        value = item.get(field)
        if isinstance(value, str):
            return value
    return None


def compare_dates(existing: JsonValue, candidate: JsonValue) -> int:
    """
    Three-way compare of the records' dates: -1, 0 or 1.

    Dates are compared as plain strings (ISO-8601 sorts lexicographically).
    A record without a date is older than one with a date.
    """
    a = best_date(existing)
    b = best_date(candidate)
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    return (a > b) - (a < b)


def should_replace(existing: JsonValue, candidate: JsonValue, keep: Keep) -> bool:
    if keep is Keep.FIRST:
        return False
    if keep is Keep.LAST:
        return True
    if keep is Keep.NEWEST:
        return compare_dates(existing, candidate) < 0
    if keep is Keep.OLDEST:
        return compare_dates(existing, candidate) > 0
    return False
