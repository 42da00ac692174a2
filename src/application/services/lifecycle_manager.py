"""Session and refresh token lifecycle manager.

Issues, rotates, validates and revokes credentials for multi-device users.

State machine per (session, refresh token chain):
    ISSUED -> ACTIVE -> ROTATED -> (REVOKED | EXPIRED)

ROTATED is transient: the moment a refresh succeeds the presented record is
revoked and its successor starts ACTIVE.

Flows:
    issue:    evict over-cap sessions, create session + refresh token,
              mint access token (one transaction)
    refresh:  lookup -> ownership -> expiry -> replay -> session check ->
              insert successor, conditionally retire presented token
    revoke:   deactivate session, revoke its refresh tokens
    validate: verify JWT, then one indexed blacklist lookup

Architecture:
- Application layer ONLY imports from domain and core
- Storage is reached through LifecycleStoreProtocol (unit of work)
- Every operation returns Result; storage failures become
  Failure(STORE_UNAVAILABLE), never a credential error
"""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from src.application.dtos import IssuedTokens
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities import BlacklistEntry, RefreshToken, Session
from src.domain.enums import RevocationReason, TokenKind
from src.domain.errors import AuthenticationErrorMessage, StoreUnavailableError
from src.domain.protocols import (
    DeviceFingerprinterProtocol,
    LifecycleStoreProtocol,
    LoggerProtocol,
    StoreTransaction,
    TokenGenerationProtocol,
    TokenHasherProtocol,
)
from src.domain.value_objects import AccessTokenClaims, DeviceContext

# Entropy of refresh secrets and session ids (bytes)
_SECRET_BYTES = 32


def _hash_prefix(token_hash: str) -> str:
    """Loggable prefix of a token digest."""
    return token_hash[:8]


@dataclass(frozen=True, slots=True)
class _Rotation:
    """Committed rotation awaiting its access token."""

    user_id: UUID
    session_id: str
    raw_refresh_token: str
    refresh_expires_at: datetime


class _RotationConflict(Exception):
    """Presented token was retired concurrently.

    Raised inside the rotation transaction so the successor insert rolls
    back; handled as a replay.
    """

    def __init__(self, record: RefreshToken) -> None:
        super().__init__("refresh token retired concurrently")
        self.record = record


class LifecycleManager:
    """Orchestrates issuance, rotation, validation and revocation.

    Sole writer of the sessions, refresh_tokens and token_blacklist tables.

    Usage:
        manager = get_lifecycle_manager()

        result = await manager.issue(user_id, DeviceContext(user_agent=ua))
        match result:
            case Success(value=tokens):
                ...
            case Failure(error=error):
                kind = public_kind(error)
    """

    def __init__(
        self,
        *,
        store: LifecycleStoreProtocol,
        token_service: TokenGenerationProtocol,
        token_hasher: TokenHasherProtocol,
        fingerprinter: DeviceFingerprinterProtocol,
        logger: LoggerProtocol,
        session_ttl: timedelta,
        refresh_token_ttl: timedelta,
        max_sessions_per_user: int,
        replay_revokes_all_sessions: bool = False,
    ) -> None:
        """Initialize manager with dependencies.

        Args:
            store: Unit of work over the three lifecycle tables.
            token_service: Access token signer/validator.
            token_hasher: Deterministic digest for opaque tokens.
            fingerprinter: Device descriptor builder.
            logger: Structured logger.
            session_ttl: Session lifetime.
            refresh_token_ttl: Refresh token lifetime.
            max_sessions_per_user: Active session cap (>= 1).
            replay_revokes_all_sessions: Escalate replay to every session
                of the user instead of the affected one.

        Raises:
            ValueError: If max_sessions_per_user is below 1.
        """
        if max_sessions_per_user < 1:
            raise ValueError("max_sessions_per_user must be >= 1")

        self._store = store
        self._token_service = token_service
        self._hasher = token_hasher
        self._fingerprinter = fingerprinter
        self._logger = logger
        self._session_ttl = session_ttl
        self._refresh_token_ttl = refresh_token_ttl
        self._max_sessions = max_sessions_per_user
        self._replay_revokes_all = replay_revokes_all_sessions

    # =========================================================================
    # Issue
    # =========================================================================

    async def issue(
        self, user_id: UUID, device: DeviceContext
    ) -> Result[IssuedTokens, DomainError]:
        """Create a session and its first credential pair.

        The cap check, eviction and inserts run in one transaction with the
        user's live sessions locked, so two concurrent logins cannot both
        count a stale number.

        Args:
            user_id: Identity verified by primary authentication.
            device: Request metadata for fingerprinting.

        Returns:
            Success(IssuedTokens) or Failure(STORE_UNAVAILABLE).
        """
        fingerprint = self._fingerprinter.fingerprint(device)
        now = datetime.now(UTC)
        session_id = secrets.token_urlsafe(_SECRET_BYTES)
        raw_refresh = secrets.token_urlsafe(_SECRET_BYTES)
        refresh_hash = self._hasher.hash(raw_refresh)
        session_expires_at = now + self._session_ttl
        # A refresh token never outlives its session
        refresh_expires_at = min(now + self._refresh_token_ttl, session_expires_at)

        try:
            async with self._store.transaction(operation="issue") as tx:
                live = await tx.sessions.lock_active_for_user(user_id, now)
                overflow = len(live) - self._max_sessions + 1
                evicted = [s.id for s in live[: max(overflow, 0)]]

                for evicted_id in evicted:
                    await tx.sessions.deactivate(
                        evicted_id,
                        reason=RevocationReason.SESSION_EVICTED.value,
                        now=now,
                    )
                await tx.refresh_tokens.revoke_for_sessions(
                    evicted,
                    reason=RevocationReason.SESSION_EVICTED.value,
                    now=now,
                )

                await tx.sessions.add(
                    Session(
                        id=session_id,
                        user_id=user_id,
                        device_fingerprint=fingerprint.fingerprint,
                        device_label=fingerprint.label,
                        ip_origin=fingerprint.ip_origin,
                        created_at=now,
                        last_activity_at=now,
                        expires_at=session_expires_at,
                    )
                )
                await tx.refresh_tokens.add(
                    RefreshToken(
                        id=uuid7(),
                        token_hash=refresh_hash,
                        user_id=user_id,
                        session_id=session_id,
                        device_fingerprint=fingerprint.fingerprint,
                        issued_at=now,
                        expires_at=refresh_expires_at,
                    )
                )
        except StoreUnavailableError as e:
            self._logger.error(
                "session_issue_failed",
                error=e,
                user_id=str(user_id),
            )
            return Failure(error=e.error)

        for evicted_id in evicted:
            self._logger.info(
                "session_evicted",
                user_id=str(user_id),
                session_id=evicted_id,
                max_sessions=self._max_sessions,
            )
        self._logger.info(
            "session_issued",
            user_id=str(user_id),
            session_id=session_id,
            device=fingerprint.label,
        )

        return Success(
            value=self._issued_tokens(
                user_id=user_id,
                session_id=session_id,
                raw_refresh=raw_refresh,
                refresh_expires_at=refresh_expires_at,
                now=now,
            )
        )

    # =========================================================================
    # Refresh
    # =========================================================================

    async def refresh(
        self, raw_refresh_token: str, session_id: str
    ) -> Result[IssuedTokens, DomainError]:
        """Exchange a refresh token for a new pair (rotation).

        Args:
            raw_refresh_token: Opaque secret presented by the client.
            session_id: Session the client believes the token belongs to.

        Returns:
            Success(IssuedTokens) or Failure with TOKEN_INVALID,
            TOKEN_EXPIRED, TOKEN_REPLAYED, SESSION_INACTIVE or
            STORE_UNAVAILABLE.
        """
        token_hash = self._hasher.hash(raw_refresh_token)
        now = datetime.now(UTC)
        log = self._logger.bind(
            session_id=session_id, token_hash_prefix=_hash_prefix(token_hash)
        )

        try:
            async with self._store.transaction(operation="refresh") as tx:
                outcome = await self._rotate(tx, token_hash, session_id, now)
        except _RotationConflict as conflict:
            log.warning("refresh_token_rotation_lost_race")
            return await self._handle_lost_race(conflict.record)
        except StoreUnavailableError as e:
            log.error("refresh_failed", error=e)
            return Failure(error=e.error)

        match outcome:
            case Failure(error=error):
                log.info("refresh_rejected", reason=error.code.value)
                return Failure(error=error)
            case Success(value=rotation):
                log.info("refresh_token_rotated", user_id=str(rotation.user_id))
                return Success(
                    value=self._issued_tokens(
                        user_id=rotation.user_id,
                        session_id=rotation.session_id,
                        raw_refresh=rotation.raw_refresh_token,
                        refresh_expires_at=rotation.refresh_expires_at,
                        now=now,
                    )
                )

    async def _rotate(
        self,
        tx: StoreTransaction,
        token_hash: str,
        session_id: str,
        now: datetime,
    ) -> Result[_Rotation, DomainError]:
        """Run the refresh checks and the rotation inside one transaction.

        Failures that write (expired delete, replay cascade) commit with
        the transaction; a lost rotation race raises _RotationConflict to
        roll back the successor insert.
        """
        record = await tx.refresh_tokens.find_by_hash(token_hash)
        if record is None:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthenticationErrorMessage.TOKEN_NOT_FOUND,
                )
            )

        if record.session_id != session_id:
            self._logger.warning(
                "refresh_token_session_mismatch",
                user_id=str(record.user_id),
                presented_session_id=session_id,
                token_hash_prefix=_hash_prefix(token_hash),
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthenticationErrorMessage.TOKEN_SESSION_MISMATCH,
                )
            )

        if record.is_expired(now):
            await tx.refresh_tokens.delete(record.id)
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message=AuthenticationErrorMessage.TOKEN_EXPIRED,
                )
            )

        if record.is_revoked:
            await self._cascade_replay(tx, record, now)
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_REPLAYED,
                    message=AuthenticationErrorMessage.TOKEN_REPLAYED,
                )
            )

        session = await tx.sessions.get(session_id)
        if session is None or not session.is_live(now):
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.SESSION_INACTIVE,
                    message=AuthenticationErrorMessage.SESSION_INACTIVE,
                )
            )

        # Insert the successor first, then retire the presented token.
        raw_refresh = secrets.token_urlsafe(_SECRET_BYTES)
        refresh_expires_at = min(now + self._refresh_token_ttl, session.expires_at)
        await tx.refresh_tokens.add(
            RefreshToken(
                id=uuid7(),
                token_hash=self._hasher.hash(raw_refresh),
                user_id=record.user_id,
                session_id=session.id,
                device_fingerprint=record.device_fingerprint,
                issued_at=now,
                expires_at=refresh_expires_at,
                rotated_from=record.token_hash,
            )
        )
        retired = await tx.refresh_tokens.revoke_if_live(
            record.id, reason=RevocationReason.ROTATED.value, now=now
        )
        if not retired:
            raise _RotationConflict(record)

        await tx.sessions.touch(session.id, now)

        return Success(
            value=_Rotation(
                user_id=record.user_id,
                session_id=session.id,
                raw_refresh_token=raw_refresh,
                refresh_expires_at=refresh_expires_at,
            )
        )

    async def _handle_lost_race(
        self, record: RefreshToken
    ) -> Result[IssuedTokens, DomainError]:
        """Treat a lost rotation race exactly like a replay."""
        now = datetime.now(UTC)
        try:
            async with self._store.transaction(operation="refresh_replay") as tx:
                await self._cascade_replay(tx, record, now)
        except StoreUnavailableError as e:
            self._logger.error(
                "refresh_replay_cascade_failed",
                error=e,
                session_id=record.session_id,
            )
            return Failure(error=e.error)

        return Failure(
            error=AuthenticationError(
                code=ErrorCode.TOKEN_REPLAYED,
                message=AuthenticationErrorMessage.ROTATION_CONFLICT,
            )
        )

    async def _cascade_replay(
        self, tx: StoreTransaction, record: RefreshToken, now: datetime
    ) -> None:
        """Fail closed after a revoked token was presented again.

        Deactivates the token's session and revokes every refresh token in
        it; with escalation enabled, does the same for all of the user's
        sessions.
        """
        reason = RevocationReason.REPLAY_DETECTED.value
        if self._replay_revokes_all:
            session_ids = await tx.sessions.deactivate_all_for_user(
                record.user_id, reason=reason, now=now
            )
            tokens_revoked = await tx.refresh_tokens.revoke_for_user(
                record.user_id, reason=reason, now=now
            )
        else:
            deactivated = await tx.sessions.deactivate(
                record.session_id, reason=reason, now=now
            )
            session_ids = [record.session_id] if deactivated else []
            tokens_revoked = await tx.refresh_tokens.revoke_for_sessions(
                [record.session_id], reason=reason, now=now
            )

        self._logger.warning(
            "refresh_token_replay_detected",
            user_id=str(record.user_id),
            session_id=record.session_id,
            token_hash_prefix=_hash_prefix(record.token_hash),
            sessions_deactivated=len(session_ids),
            tokens_revoked=tokens_revoked,
            escalated=self._replay_revokes_all,
        )

    # =========================================================================
    # Revoke
    # =========================================================================

    async def revoke(
        self,
        session_id: str,
        *,
        reason: str = RevocationReason.USER_LOGOUT.value,
    ) -> Result[bool, DomainError]:
        """Deactivate one session and revoke its refresh tokens.

        Access tokens already issued for the session stay valid until their
        natural expiry unless blacklisted.

        Args:
            session_id: Session to revoke.
            reason: Revocation reason.

        Returns:
            Success(True) if the session was active, Success(False) if it
            was already inactive or unknown, Failure(STORE_UNAVAILABLE).
        """
        now = datetime.now(UTC)
        try:
            async with self._store.transaction(operation="revoke") as tx:
                deactivated = await tx.sessions.deactivate(
                    session_id, reason=reason, now=now
                )
                tokens_revoked = await tx.refresh_tokens.revoke_for_sessions(
                    [session_id], reason=reason, now=now
                )
        except StoreUnavailableError as e:
            self._logger.error("session_revoke_failed", error=e, session_id=session_id)
            return Failure(error=e.error)

        self._logger.info(
            "session_revoked",
            session_id=session_id,
            reason=reason,
            was_active=deactivated,
            tokens_revoked=tokens_revoked,
        )
        return Success(value=deactivated)

    async def revoke_all(
        self,
        user_id: UUID,
        *,
        except_session_id: str | None = None,
        reason: str = RevocationReason.LOGOUT_ALL.value,
    ) -> Result[int, DomainError]:
        """Revoke every active session of a user.

        Args:
            user_id: Owning user.
            except_session_id: Session to keep (e.g. the caller's own).
            reason: Revocation reason.

        Returns:
            Success(number of sessions revoked) or Failure(STORE_UNAVAILABLE).
        """
        now = datetime.now(UTC)
        try:
            async with self._store.transaction(operation="revoke_all") as tx:
                session_ids = await tx.sessions.deactivate_all_for_user(
                    user_id,
                    reason=reason,
                    now=now,
                    except_session_id=except_session_id,
                )
                tokens_revoked = await tx.refresh_tokens.revoke_for_sessions(
                    session_ids, reason=reason, now=now
                )
        except StoreUnavailableError as e:
            self._logger.error(
                "session_revoke_all_failed", error=e, user_id=str(user_id)
            )
            return Failure(error=e.error)

        self._logger.info(
            "sessions_revoked",
            user_id=str(user_id),
            reason=reason,
            sessions_revoked=len(session_ids),
            tokens_revoked=tokens_revoked,
            kept_session_id=except_session_id,
        )
        return Success(value=len(session_ids))

    async def logout(
        self,
        session_id: str,
        *,
        user_id: UUID,
        logout_all: bool = False,
        access_token: str | None = None,
    ) -> Result[int, DomainError]:
        """Log out of one session (or all) and blacklist the access token.

        Args:
            session_id: Session being logged out.
            user_id: Authenticated caller.
            logout_all: Revoke every session of the user.
            access_token: Raw access token to blacklist until its expiry.

        Returns:
            Success(number of sessions revoked), Failure(SESSION_NOT_FOUND)
            if the session is not the caller's, Failure(STORE_UNAVAILABLE).
        """
        if logout_all:
            revoked = await self.revoke_all(
                user_id, reason=RevocationReason.LOGOUT_ALL.value
            )
        else:
            revoked = await self._revoke_owned(user_id, session_id)
        if isinstance(revoked, Failure):
            return revoked

        if access_token is not None:
            blacklisted = await self.blacklist_access_token(
                access_token, reason=RevocationReason.USER_LOGOUT.value
            )
            match blacklisted:
                case Failure(error=error) if error.code == ErrorCode.STORE_UNAVAILABLE:
                    return Failure(error=error)

        return revoked

    async def _revoke_owned(
        self, user_id: UUID, session_id: str
    ) -> Result[int, DomainError]:
        """Revoke a session after checking it belongs to the user."""
        try:
            async with self._store.transaction(operation="logout") as tx:
                session = await tx.sessions.get(session_id)
        except StoreUnavailableError as e:
            return Failure(error=e.error)

        if session is None or not session.belongs_to(user_id):
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.SESSION_NOT_FOUND,
                    message=AuthenticationErrorMessage.SESSION_NOT_FOUND,
                    resource_type="Session",
                    resource_id=session_id,
                )
            )

        match await self.revoke(session_id, reason=RevocationReason.USER_LOGOUT.value):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=was_active):
                return Success(value=1 if was_active else 0)

    # =========================================================================
    # Access tokens
    # =========================================================================

    async def blacklist_access_token(
        self, raw_access_token: str, *, reason: str
    ) -> Result[bool, DomainError]:
        """Reject an access token before its natural expiry.

        The entry expires together with the token, so the blacklist only
        ever holds tokens that would otherwise still be accepted.

        Args:
            raw_access_token: Encoded JWT.
            reason: Why the token is blacklisted.

        Returns:
            Success(True) if blacklisted, Success(False) if the token has
            already expired or was blacklisted before, Failure(TOKEN_INVALID)
            for a token that does not verify, Failure(STORE_UNAVAILABLE).
        """
        match self._token_service.validate_access_token(raw_access_token):
            case Failure(error=error) if error.code == ErrorCode.TOKEN_EXPIRED:
                return Success(value=False)
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=claims):
                expires_at = claims.expires_at

        token_hash = self._hasher.hash(raw_access_token)
        try:
            async with self._store.transaction(operation="blacklist") as tx:
                added = await tx.blacklist.add(
                    BlacklistEntry(
                        id=uuid7(),
                        token_hash=token_hash,
                        token_kind=TokenKind.ACCESS,
                        expires_at=expires_at,
                        reason=reason,
                    )
                )
        except StoreUnavailableError as e:
            self._logger.error("access_token_blacklist_failed", error=e)
            return Failure(error=e.error)

        if added:
            self._logger.info(
                "access_token_blacklisted",
                token_hash_prefix=_hash_prefix(token_hash),
                reason=reason,
            )
        return Success(value=added)

    async def validate_access(
        self, raw_access_token: str
    ) -> Result[AccessTokenClaims, DomainError]:
        """Validate an access token for one request.

        Signature and expiry are checked statelessly; the only storage
        access is one indexed blacklist lookup.

        Args:
            raw_access_token: Encoded JWT from the Authorization header.

        Returns:
            Success(AccessTokenClaims) or Failure with TOKEN_INVALID,
            TOKEN_EXPIRED, TOKEN_REVOKED or STORE_UNAVAILABLE.
        """
        match self._token_service.validate_access_token(raw_access_token):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=claims):
                pass

        token_hash = self._hasher.hash(raw_access_token)
        try:
            async with self._store.transaction(operation="validate_access") as tx:
                blacklisted = await tx.blacklist.contains(
                    token_hash, datetime.now(UTC)
                )
        except StoreUnavailableError as e:
            self._logger.error("access_token_validation_failed", error=e)
            return Failure(error=e.error)

        if blacklisted:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_REVOKED,
                    message=AuthenticationErrorMessage.ACCESS_TOKEN_REVOKED,
                )
            )
        return Success(value=claims)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _issued_tokens(
        self,
        *,
        user_id: UUID,
        session_id: str,
        raw_refresh: str,
        refresh_expires_at: datetime,
        now: datetime,
    ) -> IssuedTokens:
        access_token = self._token_service.generate_access_token(
            user_id=user_id, session_id=session_id
        )
        return IssuedTokens(
            access_token=access_token,
            access_token_expires_in=int(
                self._token_service.access_token_ttl.total_seconds()
            ),
            refresh_token=raw_refresh,
            refresh_token_expires_in=max(
                int((refresh_expires_at - now).total_seconds()), 0
            ),
            session_id=session_id,
        )
