"""
Tests for core infrastructure.

- test_connection.py: DatabaseConnectionManager retry behaviour
- test_commands.py: wait_for_db
- test_views.py: health check
- test_helpers.py: parsing and paging helpers
- test_exceptions.py: API exception handler
"""
