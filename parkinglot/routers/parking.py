from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from parkinglot import crud
from parkinglot.dependencies import RowId, get_current_user, get_db
from parkinglot.schemas import (
    DashboardStats,
    FeeEstimate,
    ParkingEntry,
    ParkingSessionOut,
    SessionStatus,
)

router = APIRouter(prefix='/api/parking', tags=['Parking'])


@router.get('/sessions', response_model=list[ParkingSessionOut])
def list_sessions(
    status: Optional[SessionStatus] = None,
    date: Optional[date] = None,
    db: Session = Depends(get_db),
):
    return crud.get_parking_sessions(
        db,
        status=status.value if status else None,
        day=date,
    )


@router.post('/entry', response_model=ParkingSessionOut, status_code=status.HTTP_201_CREATED)
def record_entry(entry: ParkingEntry, db: Session = Depends(get_db)):
    return crud.create_parking_session(db, entry)


@router.post('/exit/{session_id}', response_model=ParkingSessionOut)
def record_exit(session_id: RowId, db: Session = Depends(get_db)):
    return crud.exit_parking_session(db, session_id)


@router.get('/sessions/{session_id}/estimate', response_model=FeeEstimate)
def fee_estimate(session_id: RowId, db: Session = Depends(get_db)):
    return crud.estimate_fee(db, session_id)


@router.get('/stats', response_model=DashboardStats, dependencies=[Depends(get_current_user)])
def dashboard_stats(db: Session = Depends(get_db)):
    return crud.get_dashboard_stats(db)
