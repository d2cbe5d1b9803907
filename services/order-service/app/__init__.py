"""
Order Service.

Creates and retrieves priced orders backed by a PostgreSQL store.
"""

__version__ = "1.0.0"
