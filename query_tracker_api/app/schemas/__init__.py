"""
Pydantic schema definitions for API payloads.

Request models double as the validation layer: FastAPI applies them
before an endpoint runs, so malformed input never reaches a service.
Field names are snake_case in Python and camelCase on the wire.
"""
