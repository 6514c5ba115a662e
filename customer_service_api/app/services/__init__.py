"""
Service layer.

Services hold the business rules for a domain and delegate storage to
the repositories, so API handlers never touch SQL directly.
"""
