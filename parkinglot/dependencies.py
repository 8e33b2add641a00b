from typing import Annotated

from fastapi import Depends, Path, Request
from sqlalchemy.orm import Session

from parkinglot import crud
from parkinglot.database import SessionLocal
from parkinglot.exceptions import AuthFailure
from parkinglot.models import User
from parkinglot.utils import token_subject

AUTH_COOKIE = 'auth_token'

# integer primary keys are signed 64-bit in SQLite and PostgreSQL
RowId = Annotated[int, Path(ge=1, le=2**63 - 1)]


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the dashboard user from the ``auth_token`` cookie."""
    token = request.cookies.get(AUTH_COOKIE)
    if not token:
        raise AuthFailure('Not logged in')

    username = token_subject(token)
    if username is None:
        raise AuthFailure('Invalid or expired token')

    user = crud.get_user_by_username(db, username)
    if user is None:
        raise AuthFailure('User no longer exists')
    return user
