"""Create (or reset) a dashboard user.

Usage:
    python -m parkinglot.seed --username admin --password secret
"""

from __future__ import annotations

import argparse
import logging

from parkinglot import crud
from parkinglot.database import SessionLocal, init_db


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Seed a dashboard user')
    parser.add_argument('--username', required=True)
    parser.add_argument('--password', required=True)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    init_db()
    with SessionLocal() as db:
        user = crud.create_or_reset_user(db, args.username, args.password)
        print(f"User {user.username} ready (id={user.id})")


if __name__ == '__main__':
    main()
