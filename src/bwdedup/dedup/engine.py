# src/bwdedup/dedup/engine.py

import logging
from typing import Any, Dict, Iterable, List, Optional

from bwdedup.common.models import Config, DedupResult, Duplicate

from .dates import should_replace
from .fingerprint import Fingerprinter, build_fingerprinter

logger = logging.getLogger(__name__)


def _record_name(item: Any) -> Optional[str]:
    if isinstance(item, dict) and isinstance(item.get("name"), str):
        return item["name"]
    return None


class Deduplicator:
    """
    Collapse records sharing a fingerprint.

    The first record with a given fingerprint fixes the output position; the
    keep policy only decides whose content sits there.
    """

    def __init__(self, config: Config, fingerprinter: Optional[Fingerprinter] = None):
        self.config = config
        self.fingerprinter = fingerprinter or build_fingerprinter(config)

    def run(self, records: Iterable[Any]) -> DedupResult:
        keep = self.config.dedup.keep
        seen: Dict[str, int] = {}
        deduped: List[Any] = []
        duplicates: List[Duplicate] = []
        removed = 0

        for index, item in enumerate(records):
            key = self.fingerprinter.fingerprint(item)
            existing_index = seen.get(key)

            if existing_index is None:
                seen[key] = len(deduped)
                deduped.append(item)
                continue

            replace = should_replace(deduped[existing_index], item, keep)
            if replace:
                deduped[existing_index] = item
            removed += 1
            duplicates.append(Duplicate(
                index=index,
                kept_index=existing_index,
                replaced=replace,
                name=_record_name(item),
            ))
            logger.debug(
                "Record #%d duplicates slot %d (%s)",
                index, existing_index, "replaced" if replace else "dropped",
            )

        total = len(deduped) + removed
        logger.info("Deduplicated %d records -> %d (removed %d)", total, len(deduped), removed)
        return DedupResult(items=deduped, total=total, removed=removed, duplicates=duplicates)


def deduplicate(records: Iterable[Any], config: Config) -> DedupResult:
    return Deduplicator(config).run(records)
