"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives
the ``QueryStore`` it works against, so tests can hand it an
in‑memory double instead of a database.
"""
