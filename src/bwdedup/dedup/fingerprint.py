# src/bwdedup/dedup/fingerprint.py

from typing import List, Sequence

from bwdedup.common.models import Config, DedupKey, NormalizeConfig

from .canonical import fingerprint_of
from .filters import parse_paths, remove_keys_anywhere, remove_path
from .normalizer import normalize_strings, sort_login_uris
from .projector import build_policy_value
from .value import JsonValue, copy_value


class Fingerprinter:
    """Turns a record into the string that decides its dedup identity."""

    def __init__(self, normalize: NormalizeConfig):
        self.normalize = normalize

    def reduce(self, item: JsonValue) -> JsonValue:
        """Working value for ``item``; must not share mutable state with it."""
        raise NotImplementedError

    def fingerprint(self, item: JsonValue) -> str:
        working = self.reduce(item)
        if self.normalize.sort_uris:
            sort_login_uris(working)
        working = normalize_strings(
            working,
            self.normalize.trim_strings,
            self.normalize.lowercase_strings,
        )
        return fingerprint_of(working)


class PolicyFingerprinter(Fingerprinter):
    """
    Fingerprint a projection (domains, username, password...) of the record.

    The projection is a flat dict, so the login.uris sort never touches it;
    the ``uri`` key keeps the record's original URI order.
    """

    def __init__(self, policy_keys: Sequence[DedupKey], normalize: NormalizeConfig):
        super().__init__(normalize)
        self.policy_keys = tuple(policy_keys)

    def reduce(self, item: JsonValue) -> JsonValue:
        return build_policy_value(item, self.policy_keys)


class FilterFingerprinter(Fingerprinter):
    """Fingerprint the whole record minus ignored keys and paths."""

    def __init__(self, ignore_keys, ignore_paths: Sequence[str], normalize: NormalizeConfig):
        super().__init__(normalize)
        self.ignore_keys = set(ignore_keys)
        self.ignore_paths: List[List[str]] = parse_paths(ignore_paths)

    def reduce(self, item: JsonValue) -> JsonValue:
        working = copy_value(item)
        remove_keys_anywhere(working, self.ignore_keys)
        for path in self.ignore_paths:
            remove_path(working, path)
        return working


def build_fingerprinter(config: Config) -> Fingerprinter:
    if config.dedup.policy_keys:
        return PolicyFingerprinter(config.dedup.policy_keys, config.normalize)
    return FilterFingerprinter(config.ignore.keys, config.ignore.paths, config.normalize)
