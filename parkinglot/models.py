import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, text

from parkinglot.database import Base

VEHICLE_TYPES = ('Car', 'Bike')

STATUS_PARKED = 'PARKED'
STATUS_EXITED = 'EXITED'


def utcnow() -> datetime:
    # stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = 'users'

    id = Column(String, primary_key=True, default=_new_user_id)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)


class Vehicle(Base):
    __tablename__ = 'vehicles'

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    owner_name = Column(String, nullable=False)
    vehicle_number = Column(String, unique=True, index=True, nullable=False)
    vehicle_type = Column(String, nullable=False)
    contact_number = Column(String, nullable=False)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class ParkingSession(Base):
    __tablename__ = 'parking_sessions'

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    # plain string, walk-in vehicles have no registry row
    vehicle_number = Column(String, nullable=False, index=True)
    slot_number = Column(String, nullable=False)
    entry_time = Column(DateTime, nullable=False, default=utcnow)
    exit_time = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default=STATUS_PARKED)
    entry_image_url = Column(String, nullable=True)
    total_amount = Column(Integer, nullable=True)

    __table_args__ = (
        Index(
            'uq_parking_sessions_parked_vehicle',
            'vehicle_number',
            unique=True,
            sqlite_where=text("status = 'PARKED'"),
            postgresql_where=text("status = 'PARKED'"),
        ),
    )
