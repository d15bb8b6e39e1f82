"""Saved reading model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SavedReading(BaseModel):
    """One persisted analysis: thumbnail, generated text and when it happened."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: str
    thumbnail: str
    result: str


def format_korean_timestamp(moment: datetime) -> str:
    """Format like the ko-KR locale, e.g. ``2026. 10. 19. 오후 3:04:05``."""
    meridiem = "오전" if moment.hour < 12 else "오후"
    hour = moment.hour % 12 or 12
    return (
        f"{moment.year}. {moment.month}. {moment.day}. "
        f"{meridiem} {hour}:{moment.minute:02d}:{moment.second:02d}"
    )
