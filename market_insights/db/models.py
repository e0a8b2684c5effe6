# market_insights/db/models.py
# -----------------------------------------------------------------------------
# ORM models
# - Store: one business location from the statewide store dataset
# -----------------------------------------------------------------------------
import uuid

from sqlalchemy import Column, Float, Index, Integer, String

from market_insights.db.session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Store(Base):
    __tablename__ = "stores"

    id = Column(String(36), primary_key=True, default=_new_id)
    google_place_id = Column(String, index=True)
    store_name = Column(String)
    store_type = Column(String, index=True)  # convenience | grocery | ... | NULL
    dma = Column(String)
    state_id = Column(String)
    store_latitude = Column(Float)
    store_longitude = Column(Float)
    google_place_rating = Column(Float)  # 1..5
    google_place_rating_count = Column(Integer)
    google_maps_url = Column(String)
    area_demographic = Column(String)
    last_activity_date = Column(String)

    # bounding-box lookups
    __table_args__ = (
        Index("ix_stores_lat_lon", "store_latitude", "store_longitude"),
    )
