"""Test suite for the session lifecycle service.

Test structure follows the test pyramid:
- unit/: Unit tests - pure logic, mocked collaborators
- integration/: Integration tests - real repositories on in-memory SQLite
- api/: HTTP tests through the ASGI app
"""
