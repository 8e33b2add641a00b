"""
Parking fee rule.

A session is billed in 30 minute blocks at a flat Rs 20 per block. Elapsed
time is first rounded up to whole minutes, then whole minutes are rounded up
to whole blocks, so one second of parking costs one block while an exit at
the very instant of entry costs nothing. Amounts are integer paise.
"""

from datetime import datetime, timedelta

BLOCK_MINUTES = 30
RATE_PER_BLOCK = 20
MINOR_UNITS = 100

_MINUTE = timedelta(minutes=1)


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def billable_minutes(entry_time: datetime, exit_time: datetime) -> int:
    """Elapsed whole minutes, partial minutes rounded up."""
    elapsed = exit_time - entry_time
    if elapsed < timedelta(0):
        raise ValueError('exit time precedes entry time')
    minutes, remainder = divmod(elapsed, _MINUTE)
    return minutes + (1 if remainder else 0)


def billing_blocks(duration_minutes: int) -> int:
    return _ceil_div(duration_minutes, BLOCK_MINUTES)


def compute_fee(entry_time: datetime, exit_time: datetime) -> int:
    """Return the charge for a stay, in minor currency units."""
    blocks = billing_blocks(billable_minutes(entry_time, exit_time))
    return blocks * RATE_PER_BLOCK * MINOR_UNITS
