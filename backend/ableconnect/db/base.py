from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Largest value a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
