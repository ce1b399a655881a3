"""Request payload models for the habits API."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from ...errors import ValidationError
from ...services.calendar import month_bounds, parse_iso_key

_TRUTHY = {"1", "true", "yes", "on"}


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class HabitCreateForm(BaseModel):
    """Payload for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(default="", max_length=120)
    start_day: int | None = Field(default=None, alias="startDay")
    year: int | None = None
    month: int | None = None
    goal: str = Field(default="", max_length=255)

    @field_validator("name", "goal", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        """Treat null as empty text."""

        return "" if value is None else str(value)

    @field_validator("start_day", "year", "month", mode="before")
    @classmethod
    def coerce_int(cls, value: Any) -> int | None:
        """Unparseable numbers fall back to their defaults."""

        return _optional_int(value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "HabitCreateForm":
        """Validate raw request data, translating failures into ValidationError."""

        try:
            form = cls.model_validate(dict(data or {}))
        except PydanticValidationError as exc:
            raise ValidationError(_first_error(exc)) from exc
        if not form.name:
            raise ValidationError("name is required")
        return form

    def resolve_start_date(self, today: date) -> date:
        """Start date in the requested month, with the day clamped into range."""

        year = self.year if self.year is not None else today.year
        month = self.month if self.month is not None else today.month - 1
        bounds = month_bounds(year, month)
        day = min(max(self.start_day if self.start_day is not None else 1, 1), bounds.days_in_month)
        return bounds.first.replace(day=day)


class MarkForm(BaseModel):
    """Payload for marking one day of a habit."""

    model_config = ConfigDict(populate_by_name=True)

    iso_date: str = Field(default="", alias="date")
    done: bool = False

    @field_validator("iso_date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("done", mode="before")
    @classmethod
    def coerce_done(cls, value: Any) -> bool:
        """Any truthy value marks the day done; everything else marks it missed."""

        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return bool(value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "MarkForm":
        try:
            form = cls.model_validate(dict(data or {}))
        except PydanticValidationError as exc:
            raise ValidationError(_first_error(exc)) from exc
        if not form.iso_date:
            raise ValidationError("date is required")
        return form

    @property
    def day(self) -> date:
        return parse_iso_key(self.iso_date)


def _first_error(exc: PydanticValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return "invalid input"
    error = errors[0]
    loc = ".".join(str(part) for part in error.get("loc", ())) or "payload"
    return f"{loc}: {error.get('msg', 'invalid value')}"


__all__ = ["HabitCreateForm", "MarkForm"]
