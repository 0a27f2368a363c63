"""Import all models so callers can use ``from oceanwatch.models import ...``."""
from oceanwatch.models.base import NetworkNodeTypeEnum, TrackCategoryEnum
from oceanwatch.models.vessel import Vessel
from oceanwatch.models.location import LocationNode
from oceanwatch.models.zone import Zone, UNNAMED_ZONE
from oceanwatch.models.event import PingEvent, TransactionEvent, CargoReport
from oceanwatch.models.dataset import Dataset

__all__ = [
    "NetworkNodeTypeEnum",
    "TrackCategoryEnum",
    "Vessel",
    "LocationNode",
    "Zone",
    "UNNAMED_ZONE",
    "PingEvent",
    "TransactionEvent",
    "CargoReport",
    "Dataset",
]
