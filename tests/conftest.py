"""Pytest configuration and fixtures.

Tests run against an in-memory SQLite transit store shared by the test
session and the app (StaticPool), recreated for every test.
"""

import os

os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["GOOGLE_MAPS_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

import models  # noqa: F401 - registers every table on Base.metadata
from app import app
from core.base import Base
from core.database import engine, SessionLocal
from src.gtfs_bc.route.infrastructure.models import RouteModel
from src.gtfs_bc.shape.infrastructure.models import ShapePointModel
from src.gtfs_bc.stop.infrastructure.models import StopModel
from src.gtfs_bc.stop_time.infrastructure.models import StopTimeModel
from src.gtfs_bc.trip.infrastructure.models import TripModel


class TransitData:
    """Small helper to seed the transit store in tests."""

    def __init__(self, db):
        self.db = db

    def stop(self, stop_id, name, lat, lon):
        self.db.add(StopModel(id=stop_id, name=name, lat=lat, lon=lon))
        return self

    def route(self, route_id, short_name=None, long_name=None):
        self.db.add(RouteModel(id=route_id, short_name=short_name, long_name=long_name))
        return self

    def trip(self, trip_id, route_id, stop_ids, shape_id=None):
        self.db.add(TripModel(id=trip_id, route_id=route_id, shape_id=shape_id))
        for seq, stop_id in enumerate(stop_ids, start=1):
            self.db.add(StopTimeModel(trip_id=trip_id, stop_sequence=seq, stop_id=stop_id))
        return self

    def shape(self, shape_id, points):
        for seq, (lat, lon) in enumerate(points, start=1):
            self.db.add(ShapePointModel(shape_id=shape_id, sequence=seq, lat=lat, lon=lon))
        return self

    def commit(self):
        self.db.commit()
        return self


@pytest.fixture
def db():
    """A session on a freshly created transit store."""
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def transit_data(db):
    return TransitData(db)


@pytest.fixture
def client(db):
    """Create a test client for the FastAPI app."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def api_base_url():
    """Base URL for GTFS API endpoints."""
    return "/api/v1/gtfs"
