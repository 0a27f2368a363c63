"""Exception hierarchy for the analysis engine.

Only dataset loading is fatal. Per-record problems (unresolvable locations,
malformed dates, missing quantities) never raise; they are dropped or
defaulted where they are read.
"""
from __future__ import annotations


class OceanWatchError(Exception):
    """Base class for all engine errors."""


class DatasetLoadError(OceanWatchError):
    """One of the required input payloads could not be read or parsed.

    Terminal for the session: no partial dataset is ever exposed.
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load {source}: {reason}")


class InvalidFilterError(OceanWatchError):
    """A filter value cannot be applied (e.g. start after end)."""


class UnknownZoneError(OceanWatchError):
    """The requested zone does not exist or is not a forbidden zone."""
