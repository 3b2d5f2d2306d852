"""Request models for the journal API."""

from datetime import date

from pydantic import BaseModel, Field


class EntryRequest(BaseModel):
    """Body for saving a day's notes and photos."""

    notes: str | None = None
    photos: list[str] | None = None


class ProfileRequest(BaseModel):
    """Body for replacing the user profile."""

    sex: str
    weight: float = Field(gt=0)
    activity_level: str | None = None
    age: int | None = Field(default=None, ge=0)
    birth_date: date | None = None
    height_feet: int | None = Field(default=None, ge=0)
    height_inches: int | None = Field(default=None, ge=0)
