"""Configuration loader for the extraction pipeline.

Reads YAML configuration, applies ``FITMARK_<SECTION>__<KEY>`` environment
overrides, and returns the typed option dataclasses used by the filters and
the markdown generator.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

from .options import Bm25FilterOptions, MarkdownGeneratorOptions, PruningFilterOptions, ThresholdType

ENV_PREFIX = "FITMARK"
CONTENT_FILTERS = ("none", "pruning", "bm25")

T = TypeVar("T")


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    return value


def _merge_dicts(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce_env_value(value: str) -> Any:
    lowered = value.strip().lower()
    if lowered in {"true", "yes", "on"}:
        return True
    if lowered in {"false", "no", "off"}:
        return False
    if lowered in {"null", "none", ""}:
        return None
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            pass
    if "," in value:
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


def env_overrides(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    """Nested dict from env vars, e.g. FITMARK_PRUNING__THRESHOLD=0.6."""
    overrides: Dict[str, Any] = {}
    for env_key, env_val in os.environ.items():
        if not env_key.startswith(prefix + "_"):
            continue
        keys = env_key[len(prefix) + 1 :].lower().split("__")
        cursor = overrides
        for key in keys[:-1]:
            cursor = cursor.setdefault(key, {})
        cursor[keys[-1]] = _coerce_env_value(env_val)
    return overrides


@dataclass
class Config:
    content_filter: str = "pruning"
    pruning: PruningFilterOptions = field(default_factory=PruningFilterOptions)
    bm25: Bm25FilterOptions = field(default_factory=Bm25FilterOptions)
    markdown: MarkdownGeneratorOptions = field(default_factory=MarkdownGeneratorOptions)


def _build(cls: Type[T], data: Optional[Dict[str, Any]]) -> T:
    known = {f.name for f in fields(cls)}
    unknown = set(data or {}) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**(data or {}))


def map_dict_to_config(data: Dict[str, Any]) -> Config:
    pruning = dict(data.get("pruning") or {})
    if "threshold_type" in pruning:
        pruning["threshold_type"] = ThresholdType(str(pruning["threshold_type"]).lower())
    bm25 = dict(data.get("bm25") or {})
    query = bm25.get("user_query")
    if isinstance(query, list):
        bm25["user_query"] = " ".join(query)
    elif query is not None:
        bm25["user_query"] = str(query)

    raw_filter = data.get("content_filter", Config.content_filter)
    content_filter = "none" if raw_filter is None else str(raw_filter).lower()
    if content_filter not in CONTENT_FILTERS:
        raise ValueError(f"content_filter must be one of {CONTENT_FILTERS}, got {content_filter!r}")
    return Config(
        content_filter=content_filter,
        pruning=_build(PruningFilterOptions, pruning),
        bm25=_build(Bm25FilterOptions, bm25),
        markdown=_build(MarkdownGeneratorOptions, data.get("markdown")),
    )


def load_config(path: Optional[Path | str] = None, env_prefix: str = ENV_PREFIX) -> Config:
    """Load YAML config and merge env overrides; a missing file means defaults."""
    config_path = Path(path) if path else Path("fitmark.yaml")
    data: Dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as f:
            data = _expand_env(yaml.safe_load(f) or {})
    return map_dict_to_config(_merge_dicts(data, env_overrides(env_prefix)))


__all__ = ["Config", "CONTENT_FILTERS", "env_overrides", "load_config", "map_dict_to_config"]
