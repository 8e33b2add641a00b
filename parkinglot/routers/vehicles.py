from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from parkinglot import crud
from parkinglot.dependencies import RowId, get_db
from parkinglot.schemas import VehicleCreate, VehicleOut, VehicleUpdate

router = APIRouter(prefix='/api/vehicles', tags=['Vehicles'])


@router.get('', response_model=list[VehicleOut])
def list_vehicles(db: Session = Depends(get_db)):
    return crud.get_vehicles(db)


@router.post('', response_model=VehicleOut, status_code=status.HTTP_201_CREATED)
def register_vehicle(vehicle: VehicleCreate, db: Session = Depends(get_db)):
    return crud.create_vehicle(db, vehicle)


@router.patch('/{vehicle_id}', response_model=VehicleOut)
def update_vehicle(vehicle_id: RowId, changes: VehicleUpdate, db: Session = Depends(get_db)):
    return crud.update_vehicle(db, vehicle_id, changes)


@router.delete('/{vehicle_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_vehicle(vehicle_id: RowId, db: Session = Depends(get_db)):
    crud.delete_vehicle(db, vehicle_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
