# market_insights/schemas/insights.py
# -----------------------------------------------------------------------------
# Request/response shapes for /api/insights
# - field names are part of the onboarding client's contract, keep them as-is
# -----------------------------------------------------------------------------
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InsightsRequest(BaseModel):
    # optional so a missing coordinate becomes a 400 with the usual envelope
    lat: Optional[float] = None
    lng: Optional[float] = None
    store_type: Optional[str] = Field(None, alias="storeType")

    model_config = ConfigDict(populate_by_name=True)


class ClosestStore(BaseModel):
    id: str
    store_name: str
    store_type: str
    google_place_rating: Optional[float] = None
    google_place_rating_count: Optional[int] = None
    distance_miles: float


class NearbySummary(BaseModel):
    within_1_mile: int
    within_3_miles: int
    within_5_miles: int
    closest: List[ClosestStore]


class QualityMetrics(BaseModel):
    avg_rating_local: Optional[float] = None
    avg_rating_statewide: Optional[float] = None
    sample_size_local: int
    percentile: Optional[int] = None


class CompositionBucket(BaseModel):
    type: str
    count: int
    percentage: int


class Composition(BaseModel):
    local_types: List[CompositionBucket]
    state_types: List[CompositionBucket]
    underserved: List[str]


class Trending(BaseModel):
    categories: List[str]
    confidence: Literal["high", "medium", "low"]


class LocalInsights(BaseModel):
    nearby: NearbySummary
    quality: QualityMetrics
    composition: Composition
    trending: Trending

    model_config = ConfigDict(frozen=True)

