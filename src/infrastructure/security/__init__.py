"""Security infrastructure adapters.

- JWT access token generation/validation (PyJWT)
- Deterministic token hashing (SHA-256)
"""

from src.infrastructure.security.jwt_service import JWTService
from src.infrastructure.security.token_hasher import Sha256TokenHasher

__all__ = [
    "JWTService",
    "Sha256TokenHasher",
]
