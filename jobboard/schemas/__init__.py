"""
Schemas module - Request/Response schemas for API endpoints.

Difference from db.schema:
- db.schema: table definitions (what is stored)
- schemas: API contract (what client sends/receives)
"""
