"""
Endpoint subpackage.

Each module in this package defines an APIRouter for a specific
domain (queries, form data, health).  The routers are aggregated in
``api/router.py``.
"""
