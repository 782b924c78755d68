from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now() -> datetime:
    """Naive UTC timestamp, the form DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
