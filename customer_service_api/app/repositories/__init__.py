"""
Record stores.

Repositories own all SQL.  Services call them and never open
connections themselves.
"""
