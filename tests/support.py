"""Shared fixtures for API tests."""

import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from parkinglot.database import Base
from parkinglot.dependencies import get_db
from parkinglot.main import app

T0 = datetime(2024, 5, 1, 10, 0, 0)


def parse_ts(value: str) -> datetime:
    """Read an ISO-8601 timestamp from a response, requiring a UTC offset."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.utcoffset() is None:
        raise AssertionError(f"timestamp {value!r} carries no offset")
    return parsed.astimezone(timezone.utc).replace(tzinfo=None)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class ApiTestCase(unittest.TestCase):
    """Runs the app against a fresh in-memory database with a fixed clock."""

    def setUp(self):
        self.engine = create_engine(
            'sqlite://',
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=self.engine)
        self.SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db

        self.clock = FakeClock(T0)
        patcher = patch('parkinglot.crud.utcnow', self.clock)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.client.close()
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    def register(self, vehicle_number='KA01AB1234', **overrides):
        body = {
            'ownerName': 'Asha Rao',
            'vehicleNumber': vehicle_number,
            'vehicleType': 'Car',
            'contactNumber': '9876543210',
        }
        body.update(overrides)
        return self.client.post('/api/vehicles', json=body)

    def park(self, vehicle_number='KA01AB1234', slot='A1', **overrides):
        body = {'vehicleNumber': vehicle_number, 'slotNumber': slot}
        body.update(overrides)
        return self.client.post('/api/parking/entry', json=body)
