"""
Read‑only access to FormData records.

FormData rows are owned by the clinical‑trial data capture system.
This service lists them with their optional query for the review
table, and seeds a demo data set for local development.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from query_tracker_api.app.core.db import QueryStore
from query_tracker_api.app.schemas.form_data import FormDataCreate, FormDataList, FormDataRead

logger = logging.getLogger(__name__)

DEMO_FORM_DATA: List[dict] = [
    {"question": "What is your age?", "answer": "34"},
    {"question": "Do you have any known allergies?", "answer": "Penicillin"},
    {"question": "Are you currently taking any medication?", "answer": "No"},
    {"question": "Have you experienced headaches since the last visit?", "answer": "Yes, twice a week"},
    {"question": "What is your resting heart rate?", "answer": "72 bpm"},
    {"question": "Is swelling present at the injection site?", "answer": "Unsure"},
]


class FormDataService:
    """Service for listing and seeding FormData records."""

    def __init__(self, store: QueryStore) -> None:
        self.store = store

    async def list_form_data(self) -> FormDataList:
        """Return all FormData records, each with its query or ``None``."""
        records = self.store.list_form_data()
        return FormDataList(total=len(records), form_data=records)

    def seed(self, records: Iterable[FormDataCreate], *, force: bool = False) -> List[FormDataRead]:
        """Insert ``records`` unless the table already holds rows.

        ``force`` inserts regardless of existing rows.
        """
        if not force and self.store.count_form_data() > 0:
            logger.info("FormData table is not empty; skipping seed")
            return []
        created = [self.store.insert_form_data(record.question, record.answer) for record in records]
        logger.info("Seeded %s FormData records", len(created))
        return created

    def seed_demo_data(self, *, force: bool = False) -> List[FormDataRead]:
        return self.seed((FormDataCreate(**row) for row in DEMO_FORM_DATA), force=force)
