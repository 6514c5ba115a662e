"""
Top-level package for the Customer Service API.

Makes ``customer_service_api`` importable so that modules within
``app`` can be referenced by fully qualified names such as
``customer_service_api.app.main``.  All functionality lives in
submodules under ``app``.
"""

__all__ = []
