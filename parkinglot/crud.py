"""
Storage operations for the vehicle registry, the parking session ledger and
users.

Every function takes the request's SQLAlchemy session, commits at most once
and raises a :class:`parkinglot.exceptions.ParkingError` subclass when the
request cannot be applied. Nothing is partially written: integrity failures
roll the session back before the domain error propagates.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from pydantic.alias_generators import to_camel
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from parkinglot.config import settings
from parkinglot.exceptions import (
    AlreadyExited,
    AlreadyParked,
    DuplicateVehicle,
    NotFound,
    ValidationError,
)
from parkinglot.fees import billable_minutes, compute_fee
from parkinglot.models import (
    STATUS_EXITED,
    STATUS_PARKED,
    ParkingSession,
    User,
    Vehicle,
    utcnow,
)
from parkinglot.schemas import ParkingEntry, VehicleCreate, VehicleUpdate
from parkinglot.utils import get_password_hash, verify_password

logger = logging.getLogger(__name__)

_REQUIRED_VEHICLE_FIELDS = ('owner_name', 'vehicle_number', 'vehicle_type', 'contact_number')


# ————— Vehicles —————

def get_vehicles(db: Session) -> list[Vehicle]:
    return list(db.scalars(select(Vehicle).order_by(Vehicle.id)))


def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFound('Vehicle not found')
    return vehicle


def _vehicle_by_number(db: Session, vehicle_number: str) -> Optional[Vehicle]:
    return db.scalars(select(Vehicle).where(Vehicle.vehicle_number == vehicle_number)).first()


def create_vehicle(db: Session, data: VehicleCreate) -> Vehicle:
    if _vehicle_by_number(db, data.vehicle_number) is not None:
        logger.info('Rejected duplicate registration for %s', data.vehicle_number)
        raise DuplicateVehicle(data.vehicle_number)

    vehicle = Vehicle(**data.model_dump(mode='json'), created_at=utcnow())
    db.add(vehicle)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateVehicle(data.vehicle_number)
    db.refresh(vehicle)
    logger.info('Registered vehicle %s (id=%s)', vehicle.vehicle_number, vehicle.id)
    return vehicle


def update_vehicle(db: Session, vehicle_id: int, data: VehicleUpdate) -> Vehicle:
    vehicle = get_vehicle(db, vehicle_id)
    changes = data.model_dump(mode='json', exclude_unset=True)

    for field in _REQUIRED_VEHICLE_FIELDS:
        if field in changes and changes[field] is None:
            raise ValidationError('Required', field=to_camel(field))

    new_number = changes.get('vehicle_number')
    if new_number is not None and new_number != vehicle.vehicle_number:
        if _vehicle_by_number(db, new_number) is not None:
            raise DuplicateVehicle(new_number)

    for field, value in changes.items():
        setattr(vehicle, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateVehicle(new_number or vehicle.vehicle_number)
    db.refresh(vehicle)
    logger.info('Updated vehicle id=%s fields=%s', vehicle.id, sorted(changes))
    return vehicle


def delete_vehicle(db: Session, vehicle_id: int) -> None:
    vehicle = get_vehicle(db, vehicle_id)
    db.delete(vehicle)
    db.commit()
    logger.info('Deleted vehicle id=%s', vehicle_id)


# ————— Parking sessions —————

def get_parking_sessions(db: Session, status: Optional[str] = None, day: Optional[date] = None) -> list[ParkingSession]:
    stmt = select(ParkingSession)
    if status is not None:
        stmt = stmt.where(ParkingSession.status == status)
    if day is not None:
        start = datetime.combine(day, datetime.min.time())
        stmt = stmt.where(
            ParkingSession.entry_time >= start,
            ParkingSession.entry_time < start + timedelta(days=1),
        )
    stmt = stmt.order_by(ParkingSession.entry_time.desc(), ParkingSession.id.desc())
    return list(db.scalars(stmt))


def get_parking_session(db: Session, session_id: int) -> ParkingSession:
    session = db.get(ParkingSession, session_id)
    if session is None:
        raise NotFound('Session not found')
    return session


def _is_parked(db: Session, vehicle_number: str) -> bool:
    stmt = select(ParkingSession.id).where(
        ParkingSession.vehicle_number == vehicle_number,
        ParkingSession.status == STATUS_PARKED,
    )
    return db.scalars(stmt).first() is not None


def create_parking_session(db: Session, data: ParkingEntry) -> ParkingSession:
    if _is_parked(db, data.vehicle_number):
        raise AlreadyParked(data.vehicle_number)

    session = ParkingSession(
        vehicle_number=data.vehicle_number,
        slot_number=data.slot_number,
        entry_image_url=data.entry_image_url,
        entry_time=utcnow(),
        status=STATUS_PARKED,
    )
    db.add(session)
    try:
        db.commit()
    except IntegrityError:
        # lost the race against a concurrent entry for the same plate
        db.rollback()
        raise AlreadyParked(data.vehicle_number)
    db.refresh(session)
    logger.info('Entry: %s in slot %s (session=%s)', session.vehicle_number, session.slot_number, session.id)
    return session


def exit_parking_session(db: Session, session_id: int) -> ParkingSession:
    session = get_parking_session(db, session_id)
    if session.status == STATUS_EXITED:
        raise AlreadyExited(session_id)

    now = utcnow()
    amount = compute_fee(session.entry_time, now)
    result = db.execute(
        update(ParkingSession)
        .where(ParkingSession.id == session_id, ParkingSession.status == STATUS_PARKED)
        .values(exit_time=now, total_amount=amount, status=STATUS_EXITED)
    )
    if result.rowcount != 1:
        db.rollback()
        raise AlreadyExited(session_id)
    db.commit()
    db.refresh(session)
    logger.info('Exit: %s (session=%s) charged %s', session.vehicle_number, session.id, amount)
    return session


def estimate_fee(db: Session, session_id: int) -> dict:
    session = get_parking_session(db, session_id)
    if session.status == STATUS_EXITED:
        as_of = session.exit_time
        amount = session.total_amount
    else:
        as_of = utcnow()
        amount = compute_fee(session.entry_time, as_of)
    return {
        'session_id': session.id,
        'vehicle_number': session.vehicle_number,
        'duration_minutes': billable_minutes(session.entry_time, as_of),
        'estimated_amount': amount,
        'as_of': as_of,
    }


def get_dashboard_stats(db: Session) -> dict:
    capacity = settings.PARKING_CAPACITY
    parked = db.scalar(
        select(func.count()).select_from(ParkingSession).where(ParkingSession.status == STATUS_PARKED)
    )
    registered = db.scalar(select(func.count()).select_from(Vehicle))
    utilization = round(parked * 100 / capacity) if capacity else 0
    return {
        'total_capacity': capacity,
        'currently_parked': parked,
        'available_slots': max(capacity - parked, 0),
        'registered_vehicles': registered,
        'utilization': utilization,
    }


# ————— Users —————

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.scalars(select(User).where(User.username == username)).first()


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    user = get_user_by_username(db, username)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


def create_or_reset_user(db: Session, username: str, password: str) -> User:
    user = get_user_by_username(db, username)
    if user is None:
        user = User(username=username, hashed_password=get_password_hash(password))
        db.add(user)
        logger.info('Created user %s', username)
    else:
        user.hashed_password = get_password_hash(password)
        logger.info('Reset password for user %s', username)
    db.commit()
    db.refresh(user)
    return user
