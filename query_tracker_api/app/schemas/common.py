"""
Shared response shapes.

Every successful core response is wrapped in the same envelope
``{"statusCode": ..., "data": ..., "message": ...}``.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Lowercase canonical UUID, as generated by the store.
IDENTIFIER_PATTERN = r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
IDENTIFIER_LENGTH = 36

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model that serialises field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    """Uniform success envelope."""

    status_code: int = Field(..., description="HTTP status code of the response")
    data: T
    message: str = ""


class HealthRead(BaseModel):
    """Liveness payload."""

    status: str = "OK"
    timestamp: datetime
