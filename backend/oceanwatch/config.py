from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Input payloads (loaded once, all-or-nothing)
    GRAPH_PATH: str = "data/mc2.json"
    GEOGRAPHY_PATH: str = "data/Oceanus Information/Oceanus Geography.geojson"
    LOCATION_NODES_PATH: str = "data/Oceanus Information/Oceanus Geography Nodes.json"
    ZONES_CONFIG: str = "config/zones.yaml"
    LOG_LEVEL: str = "INFO"
    # Track segmentation: pings further apart than this start a new segment (hours)
    GAP_THRESHOLD_HOURS: float = 12.0
    # Graph payload discriminators
    PING_EVENT_TYPE: str = "Event.TransportEvent.TransponderPing"
    TRANSACTION_EVENT_TYPE: str = "Event.Transaction"
    VESSEL_NODE_PREFIX: str = "Entity.Vessel"
    DOCUMENT_NODE_PREFIX: str = "Entity.Document"
    # Company always kept in ranked results for comparison
    BASELINE_COMPANY: str | None = "SouthSeafood Express Corp"
    DEFAULT_TOP_N: int = 10
    # Company search fuzzy fallback threshold (0-100)
    COMPANY_FUZZY_THRESHOLD: int = 80


settings = Settings()
