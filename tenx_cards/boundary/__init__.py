"""
Boundary layer for external system integrations.

Handles persistence: the async PostgreSQL engine, ORM models and CRUD.
"""
