# src/bwdedup/common/models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Tuple


class Keep(str, Enum):
    # Which of two same-fingerprint records survives
    FIRST = "first"
    LAST = "last"
    NEWEST = "newest"
    OLDEST = "oldest"


class DedupKey(str, Enum):
    # Semantic fields the policy projector can extract
    DOMAIN = "domain"
    USERNAME = "username"
    PASSWORD = "password"
    NAME = "name"
    URI = "uri"
    TOTP = "totp"

    @classmethod
    def parse(cls, raw: str) -> "DedupKey":
        """Accept 'Domain', 'domain', ' DOMAIN ' alike."""
        return cls(raw.strip().lower())


DEFAULT_POLICY_KEYS: Tuple[DedupKey, ...] = (
    DedupKey.DOMAIN,
    DedupKey.USERNAME,
    DedupKey.PASSWORD,
)

DEFAULT_IGNORE_KEYS: FrozenSet[str] = frozenset(
    {"id", "revisionDate", "creationDate", "passwordHistory"}
)


@dataclass(frozen=True)
class DedupConfig:
    keep: Keep = Keep.FIRST
    policy_keys: Tuple[DedupKey, ...] = DEFAULT_POLICY_KEYS


@dataclass(frozen=True)
class IgnoreConfig:
    keys: FrozenSet[str] = DEFAULT_IGNORE_KEYS
    paths: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NormalizeConfig:
    trim_strings: bool = False
    lowercase_strings: bool = False
    sort_uris: bool = True


@dataclass(frozen=True)
class OutputConfig:
    pretty: bool = False


@dataclass(frozen=True)
class Config:
    dedup: DedupConfig = field(default_factory=DedupConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    normalize: NormalizeConfig = field(default_factory=NormalizeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


DEFAULT_CONFIG = Config()


@dataclass
class Duplicate:
    index: int               # position in the input
    kept_index: int          # output slot it collided with
    replaced: bool           # True if this record took over the slot
    name: Optional[str] = None


@dataclass
class DedupResult:
    items: List[Any]
    total: int
    removed: int
    duplicates: List[Duplicate] = field(default_factory=list)

    @property
    def kept(self) -> int:
        return len(self.items)
