"""
Pydantic schemas for FormData records.

FormData rows are owned outside this service; the API only lists them
together with their optional query.
"""

from typing import List, Optional

from pydantic import Field

from .common import CamelModel
from .query import QueryRead


class FormDataRead(CamelModel):
    """A question/answer record and its query, if one exists."""

    id: str
    question: str
    answer: str
    query: Optional[QueryRead] = None


class FormDataCreate(CamelModel):
    """Schema used by the seeding tool to insert FormData rows."""

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class FormDataList(CamelModel):
    """Counted listing returned by ``GET /form-data``."""

    total: int
    form_data: List[FormDataRead]
