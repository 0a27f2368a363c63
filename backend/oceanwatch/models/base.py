"""Shared enums for all models."""
from __future__ import annotations

import enum


class TrackCategoryEnum(str, enum.Enum):
    # Vessel logged at least one ping inside a forbidden zone
    SUSPICIOUS = "suspicious"
    DEFAULT = "default"


class NetworkNodeTypeEnum(str, enum.Enum):
    COMPANY = "company"
    ZONE = "zone"
