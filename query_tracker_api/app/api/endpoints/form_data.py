"""
FormData endpoints.

``GET /form-data`` serves the review table: every FormData record
together with its query, or ``null`` when none has been raised.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from query_tracker_api.app.api.deps import get_form_data_service
from query_tracker_api.app.core.exceptions import StoreError
from query_tracker_api.app.schemas.common import ApiResponse
from query_tracker_api.app.schemas.form_data import FormDataList
from query_tracker_api.app.services.form_data_service import FormDataService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=ApiResponse[FormDataList])
async def list_form_data(
    service: FormDataService = Depends(get_form_data_service),
) -> ApiResponse[FormDataList]:
    """Return all FormData records with their associated query."""
    try:
        listing = await service.list_form_data()
    except StoreError as e:
        logger.error("Failed to fetch form data: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to fetch form data")
    return ApiResponse(status_code=status.HTTP_200_OK, data=listing, message="Form data retrieved")
