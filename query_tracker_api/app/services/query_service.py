"""
Business logic for queries.

A query flags a FormData record for follow‑up.  At most one query may
exist per FormData record.  ``create_query`` checks for an existing
query before inserting, but that check races with concurrent creators;
the store's uniqueness constraint is what actually guarantees the
rule, and a rejected insert is reported to the caller exactly like a
failed pre‑check.

Updates are partial and unrestricted: a resolved query may be
re‑resolved with a new description or switched back to ``OPEN``.
"""

from __future__ import annotations

import logging

from query_tracker_api.app.core.db import QueryStore
from query_tracker_api.app.core.exceptions import (
    ConflictError,
    DuplicateQueryError,
    NotFoundError,
    RecordNotFoundError,
    ValidationFailure,
)
from query_tracker_api.app.schemas.query import QueryCreate, QueryRead, QueryUpdate

logger = logging.getLogger(__name__)

FORM_DATA_NOT_FOUND = "FormData not found"
QUERY_NOT_FOUND = "Query not found"
QUERY_EXISTS = "Query already exists for this FormData"


class QueryService:
    """Service for creating, updating and deleting queries."""

    def __init__(self, store: QueryStore) -> None:
        self.store = store

    async def get_query(self, query_id: str) -> QueryRead:
        query = self.store.find_query_by_id(query_id)
        if query is None:
            raise NotFoundError(QUERY_NOT_FOUND)
        return query

    async def create_query(self, data: QueryCreate) -> QueryRead:
        """Create an ``OPEN`` query for an existing FormData record.

        Raises ``NotFoundError`` if the FormData record does not exist
        and ``ConflictError`` if it already has a query.
        """
        form_data = self.store.find_form_data_by_id(data.form_data_id)
        if form_data is None:
            raise NotFoundError(FORM_DATA_NOT_FOUND)

        if self.store.find_query_by_form_data_id(data.form_data_id) is not None:
            raise ConflictError(QUERY_EXISTS)

        try:
            query = self.store.create_query(
                form_data_id=data.form_data_id,
                title=data.title,
                description=data.description or "",
            )
        except DuplicateQueryError as exc:
            # Another request created the query between our check and insert.
            logger.info("Concurrent query creation rejected for form data %s", data.form_data_id)
            raise ConflictError(QUERY_EXISTS) from exc
        except RecordNotFoundError as exc:
            raise NotFoundError(FORM_DATA_NOT_FOUND) from exc

        logger.info("Created query %s for form data %s", query.id, query.form_data_id)
        return query

    async def update_query(self, query_id: str, data: QueryUpdate) -> QueryRead:
        """Apply a partial update to a query.

        Only the fields present in ``data`` are written.  Raises
        ``NotFoundError`` if the query does not exist.
        """
        changes = data.changes()
        if not changes:
            raise ValidationFailure("At least one of description or status must be provided")
        try:
            query = self.store.update_query_by_id(query_id, **changes)
        except RecordNotFoundError as exc:
            raise NotFoundError(QUERY_NOT_FOUND) from exc
        logger.info("Updated query %s (%s)", query_id, ", ".join(sorted(changes)))
        return query

    async def delete_query(self, query_id: str) -> None:
        try:
            self.store.delete_query_by_id(query_id)
        except RecordNotFoundError as exc:
            raise NotFoundError(QUERY_NOT_FOUND) from exc
        logger.info("Deleted query %s", query_id)
