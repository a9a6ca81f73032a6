"""FastAPI dependencies that hand the application's store to services."""

from fastapi import Depends, Request

from query_tracker_api.app.core.db import QueryStore
from query_tracker_api.app.services.form_data_service import FormDataService
from query_tracker_api.app.services.query_service import QueryService


def get_store(request: Request) -> QueryStore:
    return request.app.state.store


def get_query_service(store: QueryStore = Depends(get_store)) -> QueryService:
    return QueryService(store)


def get_form_data_service(store: QueryStore = Depends(get_store)) -> FormDataService:
    return FormDataService(store)
