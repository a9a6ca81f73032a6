"""
Pydantic schemas for queries.

A query is a reviewable note attached to exactly one FormData record.
Its ``status`` starts at ``OPEN`` and may be switched to ``RESOLVED``
(or back) through an update.  Titles and descriptions are stripped of
surrounding whitespace before their length is checked, so a blank
string is rejected.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import ConfigDict, Field, StringConstraints, field_validator, model_validator

from .common import IDENTIFIER_LENGTH, IDENTIFIER_PATTERN, CamelModel


class QueryStatus(str, Enum):
    """Lifecycle state of a query."""

    OPEN = "OPEN"
    RESOLVED = "RESOLVED"


# Request bodies are read by their camelCase wire names only and reject
# unknown fields, including the snake_case Python names.
_INPUT_CONFIG = ConfigDict(extra="forbid", populate_by_name=False)

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]


class QueryCreate(CamelModel):
    """Schema for creating a new query.

    ``description`` may be omitted, in which case the query is stored
    with an empty description.  When present it must not be blank.
    Identifiers are matched exactly; surrounding whitespace is an error.
    """

    model_config = _INPUT_CONFIG

    title: Title = Field(..., description="Usually the FormData question")
    description: Optional[Description] = None
    form_data_id: str = Field(
        ...,
        min_length=IDENTIFIER_LENGTH,
        max_length=IDENTIFIER_LENGTH,
        pattern=IDENTIFIER_PATTERN,
        description="Identifier of the FormData record being queried",
    )

    @field_validator("description", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but must not be null")
        return value


class QueryUpdate(CamelModel):
    """Schema for a partial update.

    At least one of ``description`` or ``status`` must be supplied.
    Fields left out are not touched.
    """

    model_config = _INPUT_CONFIG

    description: Optional[Description] = None
    status: Optional[QueryStatus] = None

    @field_validator("description", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but must not be null")
        return value

    @model_validator(mode="after")
    def require_one_field(self) -> "QueryUpdate":
        if self.description is None and self.status is None:
            raise ValueError("At least one of description or status must be provided")
        return self

    def changes(self) -> dict:
        """Return only the supplied fields."""
        return self.model_dump(exclude_none=True)


class QueryRead(CamelModel):
    """Schema for reading a query."""

    id: str
    title: str
    description: str
    status: QueryStatus
    created_at: datetime
    updated_at: datetime
    form_data_id: str
