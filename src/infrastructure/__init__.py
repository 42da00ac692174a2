"""Infrastructure layer - Adapters implementing domain protocols.

Structure:
- persistence/: SQLAlchemy models, repositories, database manager
- security/: JWT access tokens, token hashing
- enrichers/: Device fingerprinting
- jobs/: Background reaper
- logging/: structlog adapter
- errors/: Infrastructure error types
"""
