import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from parkinglot.config import settings
from parkinglot.database import init_db
from parkinglot.exceptions import ParkingError
from parkinglot.routers.auth import router as auth_router
from parkinglot.routers.parking import router as parking_router
from parkinglot.routers.vehicles import router as vehicles_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = FastAPI(
    title="Parking Lot Ledger"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ParkingError)
async def parking_error_handler(request: Request, exc: ParkingError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# 404/405 for unmatched routes and methods
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = exc.errors()[0]
    source, *path = error["loc"]
    field = ".".join(str(part) for part in path)
    if source == "path":
        # bad ids: /api/vehicles/abc -> "Invalid vehicle id"
        message = "Invalid " + field.replace("_", " ")
        return JSONResponse(status_code=400, content={"message": message})
    if not field or error["type"] == "json_invalid":
        return JSONResponse(status_code=400, content={"message": error["msg"]})
    return JSONResponse(status_code=400, content={"message": error["msg"], "field": field})


init_db()

app.include_router(auth_router)
app.include_router(vehicles_router)
app.include_router(parking_router)
