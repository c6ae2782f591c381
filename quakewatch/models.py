from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class USGSModel(BaseModel):
    # Unknown wire fields are dropped, aliases and field names both accepted
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EarthquakeCount(USGSModel):
    """Response of the /count endpoint."""
    count: int
    max_allowed: int = Field(alias="maxAllowed")


class EventProperties(USGSModel):
    """Properties of one earthquake event, one table row."""
    magnitude: float = Field(alias="mag")
    place: Optional[str] = None
    timestamp_millis: int = Field(alias="time")
    type: str
    title: str


class Feature(USGSModel):
    type: str
    properties: EventProperties


class EventCollection(USGSModel):
    """GeoJSON FeatureCollection returned by the /query endpoint."""
    type: str
    features: List[Feature]

    def events(self) -> List[EventProperties]:
        return [feature.properties for feature in self.features]
