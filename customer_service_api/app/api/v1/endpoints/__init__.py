"""
Endpoint modules for API v1.

Each module defines an ``APIRouter``; ``v1.router`` aggregates them.
"""
