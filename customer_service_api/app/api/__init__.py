"""
API package containing versioned routes.

Each version subpackage (``v1``, ...) exposes a top-level ``router``
that the application mounts under its own prefix.
"""
