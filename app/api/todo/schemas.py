from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel


class Message(BaseModel):
    message: str


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """DateTime columns hold naive UTC; convert offset-aware input before storing."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
