#!/usr/bin/env python3
"""
Seed FormData records into the Query Tracker SQLite database.

FormData rows are normally owned by the data capture system.  For
local development and demos this script applies the schema
migrations and inserts a set of sample question/answer records, or
the records listed in a JSON file (a list of
``{"question": ..., "answer": ...}`` objects).

Usage:
    python seed_form_data.py --db ./query_tracker.db
    python seed_form_data.py --db ./query_tracker.db --file records.json --force
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from query_tracker_api.app.core.config import settings
from query_tracker_api.app.core.db import QueryStore
from query_tracker_api.app.core.exceptions import StoreError
from query_tracker_api.app.core.logging_config import setup_logging
from query_tracker_api.app.schemas.form_data import FormDataCreate
from query_tracker_api.app.services.form_data_service import FormDataService


def load_records(path: str) -> List[FormDataCreate]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError("Seed file must contain a JSON list")
    return [FormDataCreate(**item) for item in raw]


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Seed FormData records (SQLite).")
    ap.add_argument("--db", default=settings.database_url, help="Path to SQLite DB file")
    ap.add_argument("--file", help="JSON file with records. Defaults to the built-in demo set.")
    ap.add_argument("--force", action="store_true", help="Insert even if FormData rows already exist")
    args = ap.parse_args(argv)

    setup_logging(settings.log_level)

    records = None
    if args.file:
        try:
            records = load_records(args.file)
        except (OSError, ValueError, ValidationError) as exc:
            print(f"[!] Could not read seed file {args.file}: {exc}", file=sys.stderr)
            return 1

    store = QueryStore(args.db)
    try:
        store.connect()
        service = FormDataService(store)
        if records is None:
            created = service.seed_demo_data(force=args.force)
        else:
            created = service.seed(records, force=args.force)
    except StoreError as exc:
        print(f"[!] Seeding failed: {exc}", file=sys.stderr)
        return 2
    finally:
        store.close()

    if not created:
        print("[=] FormData already present; nothing inserted (use --force to insert anyway).")
    for record in created:
        print(f"[+] {record.id}  {record.question}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
