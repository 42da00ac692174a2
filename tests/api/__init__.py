"""API tests package.

End-to-end tests for REST API endpoints using httpx against the ASGI app.
Tests the complete request/response cycle including:
- Request validation
- Bearer authentication
- Response formatting
- RFC 9457 error responses
- HTTP status codes

Note:
    The lifecycle services run for real on the per-test SQLite database;
    only the container dependencies are overridden.
"""
