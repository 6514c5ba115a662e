"""
Top-level router for version 1 of the API.

Aggregates the domain routers under a single prefix.  The customer
routes keep the flat paths existing clients call (``/create``,
``/fetch``, ``/customers``, ...), so no extra prefix is added.
"""

from fastapi import APIRouter

from .endpoints import customers

router = APIRouter()

router.include_router(customers.router, tags=["customers"])
