"""YAML-configurable zone classification.

Holds the suspicious-kind set, the optional first-match zone order and the
species catalogue. Loaded lazily from ``config/zones.yaml`` and cached for the
process lifetime.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from oceanwatch.config import settings

logger = logging.getLogger(__name__)

DEFAULT_SUSPICIOUS_KINDS: tuple[str, ...] = ("Ecological Preserve",)

_ZONE_CONFIG: "ZoneConfig | None" = None


@dataclass(frozen=True)
class ZoneConfig:
    suspicious_kinds: frozenset[str] = frozenset(DEFAULT_SUSPICIOUS_KINDS)
    zone_order: tuple[str, ...] = ()
    species: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> "ZoneConfig":
        kinds = raw.get("suspicious_kinds")
        if kinds is None:
            kinds = DEFAULT_SUSPICIOUS_KINDS
        species = {
            str(name): tuple(str(s) for s in (fish or []))
            for name, fish in (raw.get("species") or {}).items()
        }
        return cls(
            suspicious_kinds=frozenset(str(k) for k in kinds),
            zone_order=tuple(str(z) for z in (raw.get("zone_order") or [])),
            species=species,
        )


def _config_path() -> Path:
    path = Path(settings.ZONES_CONFIG)
    if not path.is_absolute() and not path.exists():
        # Fall back to the repository-level config/ directory
        path = Path(__file__).resolve().parent.parent.parent.parent / settings.ZONES_CONFIG
    return path


def load_zone_config(path: Path | None = None) -> ZoneConfig:
    """Read a zone config file. Missing file → defaults."""
    path = path or _config_path()
    if not path.exists():
        logger.warning("%s not found, using default suspicious kinds %s", path, DEFAULT_SUSPICIOUS_KINDS)
        return ZoneConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return ZoneConfig.from_mapping(raw)


def get_zone_config() -> ZoneConfig:
    global _ZONE_CONFIG
    if _ZONE_CONFIG is None:
        _ZONE_CONFIG = load_zone_config()
    return _ZONE_CONFIG
