"""
Integration tests for the order service against a live PostgreSQL database.
"""
