from typing import Optional


class ParkingError(Exception):
    """Base class for errors that end a request with a client-facing message."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {'message': self.message}


class ValidationError(ParkingError):
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.field is not None:
            body['field'] = self.field
        return body


class DuplicateVehicle(ParkingError):
    status_code = 409

    def __init__(self, vehicle_number: str):
        super().__init__(f'Vehicle number {vehicle_number} already registered')
        self.vehicle_number = vehicle_number


class NotFound(ParkingError):
    status_code = 404


class AlreadyParked(ParkingError):
    status_code = 400

    def __init__(self, vehicle_number: str):
        super().__init__(f'Vehicle {vehicle_number} is already parked')
        self.vehicle_number = vehicle_number


class AlreadyExited(ParkingError):
    status_code = 400

    def __init__(self, session_id: int):
        super().__init__('Session already exited')
        self.session_id = session_id


class AuthFailure(ParkingError):
    status_code = 401
