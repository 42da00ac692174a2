"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols structurally, without
inheritance.

Usage:
    from src.domain.protocols import SessionRepository, TokenHasherProtocol
"""

from src.domain.protocols.device_fingerprinter_protocol import (
    DeviceFingerprinterProtocol,
)
from src.domain.protocols.lifecycle_store_protocol import (
    LifecycleStoreProtocol,
    StoreTransaction,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.refresh_token_repository import RefreshTokenRepository
from src.domain.protocols.session_repository import SessionRepository
from src.domain.protocols.token_blacklist_repository import (
    TokenBlacklistRepository,
)
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from src.domain.protocols.token_hasher_protocol import TokenHasherProtocol

__all__ = [
    "DeviceFingerprinterProtocol",
    "LifecycleStoreProtocol",
    "LoggerProtocol",
    "RefreshTokenRepository",
    "SessionRepository",
    "StoreTransaction",
    "TokenBlacklistRepository",
    "TokenGenerationProtocol",
    "TokenHasherProtocol",
]
