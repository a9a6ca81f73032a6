"""
Query endpoints.

These routes create, read, update and delete the review queries
attached to FormData records.  Request bodies and path identifiers
are validated by the schemas before a handler runs; the handlers
only translate service outcomes into status codes:

* ``NotFoundError`` becomes 404;
* ``ConflictError`` and ``ValidationFailure`` become 400;
* unexpected store failures become 400 with a generic message.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from query_tracker_api.app.api.deps import get_query_service
from query_tracker_api.app.core.exceptions import QueryTrackerError, StoreError
from query_tracker_api.app.schemas.common import IDENTIFIER_LENGTH, IDENTIFIER_PATTERN, ApiResponse
from query_tracker_api.app.schemas.query import QueryCreate, QueryRead, QueryUpdate
from query_tracker_api.app.services.query_service import QueryService

router = APIRouter()
logger = logging.getLogger(__name__)

QueryId = Annotated[
    str,
    Path(
        min_length=IDENTIFIER_LENGTH,
        max_length=IDENTIFIER_LENGTH,
        pattern=IDENTIFIER_PATTERN,
        description="Query identifier",
    ),
]


def _to_http_error(exc: Exception, operation: str) -> HTTPException:
    if isinstance(exc, QueryTrackerError):
        return HTTPException(status_code=exc.status_code, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Failed to {operation}")


@router.post("", response_model=ApiResponse[QueryRead], status_code=status.HTTP_201_CREATED)
async def create_query(
    query_in: QueryCreate,
    service: QueryService = Depends(get_query_service),
) -> ApiResponse[QueryRead]:
    """Create a query for a FormData record.

    Returns 404 if the record does not exist and 400 if it already has
    a query.
    """
    try:
        query = await service.create_query(query_in)
    except (QueryTrackerError, StoreError) as e:
        logger.error("Failed to create query for form data %s: %s", query_in.form_data_id, e)
        raise _to_http_error(e, "create query")
    return ApiResponse(status_code=status.HTTP_201_CREATED, data=query, message="Query created")


@router.get("/{query_id}", response_model=ApiResponse[QueryRead])
async def get_query(
    query_id: QueryId,
    service: QueryService = Depends(get_query_service),
) -> ApiResponse[QueryRead]:
    try:
        query = await service.get_query(query_id)
    except (QueryTrackerError, StoreError) as e:
        logger.error("Failed to fetch query %s: %s", query_id, e)
        raise _to_http_error(e, "fetch query")
    return ApiResponse(status_code=status.HTTP_200_OK, data=query, message="Query retrieved")


@router.put("/{query_id}", response_model=ApiResponse[QueryRead])
async def update_query(
    query_in: QueryUpdate,
    query_id: QueryId,
    service: QueryService = Depends(get_query_service),
) -> ApiResponse[QueryRead]:
    """Update the status and/or description of a query.

    Typically used to resolve a query:
    ``{"status": "RESOLVED", "description": "Confirmed present"}``.
    """
    try:
        query = await service.update_query(query_id, query_in)
    except (QueryTrackerError, StoreError) as e:
        logger.error("Failed to update query %s: %s", query_id, e)
        raise _to_http_error(e, "update query")
    return ApiResponse(status_code=status.HTTP_200_OK, data=query, message="Query updated")


@router.delete("/{query_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_query(
    query_id: QueryId,
    service: QueryService = Depends(get_query_service),
) -> Response:
    try:
        await service.delete_query(query_id)
    except (QueryTrackerError, StoreError) as e:
        logger.error("Failed to delete query %s: %s", query_id, e)
        raise _to_http_error(e, "delete query")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
