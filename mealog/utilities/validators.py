"""
Request body schemas using Pydantic.

Fields are optional at the schema level so that a missing field reaches the
meal service and is reported as a 400 with a readable message instead of
FastAPI's generic 422 payload.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Iterable

from mealog.utilities.errors import ValidationError


class MealInput(BaseModel):
    """Schema for POST /api/meals."""
    date: Optional[str] = None
    time: Optional[str] = None
    description: Optional[str] = None

    @field_validator('date', 'time')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class MealUpdateInput(BaseModel):
    """Schema for PUT /api/meals/{date}/{index}."""
    model_config = ConfigDict(populate_by_name=True)

    new_date: Optional[str] = Field(None, alias='newDate')
    time: Optional[str] = None
    description: Optional[str] = None

    @field_validator('new_date', 'time')
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class TemplateInput(BaseModel):
    """Schema for POST /api/templates."""
    name: Optional[str] = None
    description: Optional[str] = None


def require_fields(message: str, values: Iterable) -> None:
    """Raise ValidationError when a value is missing or empty. Whitespace counts as a value."""
    for v in values:
        if not v:
            raise ValidationError(message)
