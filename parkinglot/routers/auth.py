import logging

from fastapi import APIRouter, status, Depends, Response
from sqlalchemy.orm import Session

from parkinglot import crud
from parkinglot.dependencies import AUTH_COOKIE, get_db, get_current_user
from parkinglot.exceptions import AuthFailure, ValidationError
from parkinglot.schemas import UserLogin, UserRead
from parkinglot.utils import ACCESS_TOKEN_EXPIRE_MINUTES, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix='/api',
    tags=['Authentication']
)


@router.post('/login', response_model=UserRead)
def login(user: UserLogin, response: Response, db: Session = Depends(get_db)):
    if not user.username or not user.password:
        raise ValidationError('Username and password required')

    db_user = crud.authenticate_user(db, user.username, user.password)
    if db_user is None:
        logger.warning('Failed login for %s', user.username)
        raise AuthFailure('Invalid credentials')

    access_token = create_access_token(db_user.username)
    max_age = ACCESS_TOKEN_EXPIRE_MINUTES * 60
    response.set_cookie(
        key=AUTH_COOKIE,
        value=access_token,
        httponly=True,
        max_age=max_age,
        expires=max_age,
        secure=False,
        samesite='strict'
    )
    return db_user


@router.post('/logout', status_code=status.HTTP_200_OK)
def logout(response: Response):
    response.delete_cookie(key=AUTH_COOKIE)
    return {'message': 'Logged out'}


@router.post('/verify-token', dependencies=[Depends(get_current_user)])
def verify_token():
    return {'valid': True}
