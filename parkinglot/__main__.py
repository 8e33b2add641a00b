"""Serve the API.

Usage:
    python -m parkinglot
"""

import uvicorn

from parkinglot.config import settings


def main() -> None:
    uvicorn.run('parkinglot.main:app', host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == '__main__':
    main()
