# src/bwdedup/common/config.py
"""Config file loading and CLI override merging"""

import logging
import tomllib
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

import yaml

from .errors import ConfigError
from .models import (
    DEFAULT_CONFIG,
    Config,
    DedupConfig,
    DedupKey,
    IgnoreConfig,
    Keep,
    NormalizeConfig,
    OutputConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table, got {type(value).__name__}")
    return value


def _bool(section: Dict[str, Any], name: str, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{name}.{key} must be true or false, got {value!r}")
    return value


def _str_list(section: Dict[str, Any], name: str, key: str, default: Iterable[str]) -> Sequence[str]:
    value = section.get(key)
    if value is None:
        return tuple(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{name}.{key} must be a list of strings, got {value!r}")
    return tuple(value)


def parse_keep(raw: str) -> Keep:
    try:
        return Keep(str(raw).strip().lower())
    except ValueError:
        choices = ", ".join(k.value for k in Keep)
        raise ConfigError(f"Unknown keep policy {raw!r} (expected one of: {choices})")


def parse_policy_keys(raw: Iterable[str]) -> tuple:
    keys = []
    for item in raw:
        if not item.strip():
            continue
        try:
            key = DedupKey.parse(item)
        except ValueError:
            choices = ", ".join(k.value for k in DedupKey)
            raise ConfigError(f"Unknown policy key {item!r} (expected one of: {choices})")
        if key not in keys:
            keys.append(key)
    return tuple(keys)


def config_from_dict(raw: Dict[str, Any]) -> Config:
    """Build a Config from a parsed file. Missing sections and fields keep their defaults."""
    dedup = _section(raw, "dedup")
    ignore = _section(raw, "ignore")
    normalize = _section(raw, "normalize")
    output = _section(raw, "output")

    base = DEFAULT_CONFIG
    return Config(
        dedup=DedupConfig(
            keep=parse_keep(dedup["keep"]) if "keep" in dedup else base.dedup.keep,
            policy_keys=parse_policy_keys(
                _str_list(dedup, "dedup", "policy_keys", (k.value for k in base.dedup.policy_keys))
            ),
        ),
        ignore=IgnoreConfig(
            keys=frozenset(_str_list(ignore, "ignore", "keys", base.ignore.keys)),
            paths=tuple(_str_list(ignore, "ignore", "paths", base.ignore.paths)),
        ),
        normalize=NormalizeConfig(
            trim_strings=_bool(normalize, "normalize", "trim_strings", base.normalize.trim_strings),
            lowercase_strings=_bool(
                normalize, "normalize", "lowercase_strings", base.normalize.lowercase_strings
            ),
            sort_uris=_bool(normalize, "normalize", "sort_uris", base.normalize.sort_uris),
        ),
        output=OutputConfig(
            pretty=_bool(output, "output", "pretty", base.output.pretty),
        ),
    )


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        else:
            with open(path, "rb") as f:
                data = tomllib.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a table at the top level")
    return data


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load the config file, or return the defaults.

    An explicitly given path must exist; the implicit ./config.toml is optional.
    """
    if path is not None and not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return DEFAULT_CONFIG

    logger.debug("Loading config from %s", config_path)
    return config_from_dict(_read_config_file(config_path))


def apply_overrides(
    config: Config,
    keep: Optional[str] = None,
    policy_keys: Optional[Sequence[str]] = None,
    ignore_keys: Optional[Sequence[str]] = None,
    ignore_paths: Optional[Sequence[str]] = None,
    trim_strings: bool = False,
    lowercase_strings: bool = False,
    sort_uris: Optional[bool] = None,
    pretty: bool = False,
) -> Config:
    """
    Layer command-line values over ``config``. None means "not given".

    List options replace the configured list rather than extending it; boolean
    flags can only switch a normalization on.
    """
    dedup = config.dedup
    if keep is not None:
        dedup = replace(dedup, keep=parse_keep(keep))
    if policy_keys is not None:
        dedup = replace(dedup, policy_keys=parse_policy_keys(policy_keys))

    ignore = config.ignore
    if ignore_keys is not None:
        ignore = replace(ignore, keys=frozenset(k for k in ignore_keys if k))
    if ignore_paths is not None:
        ignore = replace(ignore, paths=tuple(p for p in ignore_paths if p))

    normalize = config.normalize
    if trim_strings:
        normalize = replace(normalize, trim_strings=True)
    if lowercase_strings:
        normalize = replace(normalize, lowercase_strings=True)
    if sort_uris is not None:
        normalize = replace(normalize, sort_uris=sort_uris)

    output = config.output
    if pretty:
        output = replace(output, pretty=True)

    return Config(dedup=dedup, ignore=ignore, normalize=normalize, output=output)
