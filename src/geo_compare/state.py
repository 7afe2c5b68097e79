"""Session state for the geo-compare MCP server.

Holds the current comparison: the base and overlay locations, the quality
thresholds used when fetching, and the results of the last fetch batch.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from geo_compare.core.models import QualityThresholds
from geo_compare.core.store import JsonBoundaryStore
from geo_compare.models import FetchResult, LocationBounds


class SessionState(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    base: Optional[LocationBounds] = None
    overlay: Optional[LocationBounds] = None
    thresholds: QualityThresholds = Field(default_factory=QualityThresholds)
    store_path: Optional[str] = None
    last_results: list[FetchResult] = []

    def store(self) -> JsonBoundaryStore:
        return JsonBoundaryStore(self.store_path)

    def summary(self) -> dict:
        def describe(bounds: Optional[LocationBounds]) -> dict:
            if bounds is None:
                return {"selected": False}
            return {
                "selected": True,
                "name": bounds.name,
                "center": list(bounds.center),
                "area_km2": bounds.area_km2,
                "coordinate_count": bounds.coordinate_count,
            }

        return {
            "base": describe(self.base),
            "overlay": describe(self.overlay),
            "thresholds": self.thresholds.model_dump(),
            "store_path": str(self.store().path),
            "last_fetch": {
                "locations": len(self.last_results),
                "successful": sum(1 for r in self.last_results if r.success),
            },
        }


# One session per server process
state = SessionState()
