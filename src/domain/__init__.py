"""Domain layer - Pure session lifecycle model.

Structure:
- entities/: Session, RefreshToken, BlacklistEntry
- value_objects/: DeviceContext, DeviceFingerprint, AccessTokenClaims
- enums/: TokenKind, RevocationReason
- errors/: Outward credential error kinds
- protocols/: Ports implemented by infrastructure

No framework or infrastructure imports.
"""
