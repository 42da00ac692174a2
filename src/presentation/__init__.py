"""Presentation layer - API endpoints and HTTP concerns.

This layer contains FastAPI routers and endpoint definitions. The presentation
layer is thin - it calls the application services and translates results to
HTTP responses.

Structure:
- routers/system.py: Root and health endpoints
- routers/api/v1/: API version 1 endpoints (tokens, sessions)
- routers/api/middleware/: Trace ID and bearer authentication

The presentation layer depends on the application layer but contains NO
business logic.
"""
