"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the SQL in the repositories so the API
representation can evolve independently of persistence.
"""
