"""One-time passcode issuing and verification."""
import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from healfit.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class OtpStatus(str, Enum):
    """Outcome of an OTP operation."""
    OK = "ok"
    INVALID = "invalid"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"
    LOCKED = "locked"
    COOLDOWN = "cooldown"
    RATE_LIMITED = "rate_limited"


@dataclass
class _OtpEntry:
    code: str
    expires: datetime
    attempts: int = 0


@dataclass
class _SendHistory:
    sent_at: list[datetime] = field(default_factory=list)


class OtpService:
    """
    Process-local OTP store.

    Codes are keyed by identifier (normalized phone or lower-cased email),
    expire after a TTL and are deleted on first successful use. Sends are
    throttled with a per-identifier cooldown and a rolling window limit;
    verification discards the code after too many wrong guesses and the
    identifier stays locked until a new code is issued.
    """

    def __init__(
        self,
        length: int = settings.otp_length,
        ttl_seconds: int = settings.otp_ttl_seconds,
        max_attempts: int = settings.otp_max_attempts,
        resend_cooldown_seconds: int = settings.otp_resend_cooldown_seconds,
        max_sends_per_window: int = settings.otp_max_sends_per_window,
        send_window_seconds: int = settings.otp_send_window_seconds,
        verified_window_seconds: int = settings.otp_verified_window_seconds,
    ):
        self.length = length
        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_attempts = max_attempts
        self.resend_cooldown = timedelta(seconds=resend_cooldown_seconds)
        self.max_sends_per_window = max_sends_per_window
        self.send_window = timedelta(seconds=send_window_seconds)
        self.verified_window = timedelta(seconds=verified_window_seconds)

        # Format: {identifier: _OtpEntry}
        self._codes: dict[str, _OtpEntry] = {}
        # Format: {identifier: _SendHistory}
        self._sends: dict[str, _SendHistory] = {}
        # Format: {identifier: verified_until}
        self._verified: dict[str, datetime] = {}
        # Identifiers whose code was discarded after too many wrong guesses
        self._locked: set[str] = set()

    @property
    def ttl_seconds(self) -> int:
        return int(self.ttl.total_seconds())

    def generate_code(self) -> str:
        """Generate a zero-padded numeric code from a CSPRNG."""
        return str(secrets.randbelow(10 ** self.length)).zfill(self.length)

    def issue(
        self,
        identifier: str,
        now: Optional[datetime] = None,
    ) -> tuple[Optional[str], OtpStatus]:
        """
        Issue a new code for an identifier, replacing any previous one.

        Args:
            identifier: Normalized phone or email
            now: Current time (defaults to UTC now)

        Returns:
            Tuple of (code, status). Code is None unless status is OK.
        """
        now = now or datetime.now(timezone.utc)
        self._cleanup(now)

        history = self._sends.setdefault(identifier, _SendHistory())
        history.sent_at = [t for t in history.sent_at if now - t < self.send_window]

        if history.sent_at and now - history.sent_at[-1] < self.resend_cooldown:
            return None, OtpStatus.COOLDOWN

        if len(history.sent_at) >= self.max_sends_per_window:
            logger.warning(f"OTP send limit reached for {identifier}")
            return None, OtpStatus.RATE_LIMITED

        code = self.generate_code()
        self._locked.discard(identifier)
        self._codes[identifier] = _OtpEntry(code=code, expires=now + self.ttl)
        history.sent_at.append(now)

        return code, OtpStatus.OK

    def verify(
        self,
        identifier: str,
        code: str,
        now: Optional[datetime] = None,
    ) -> OtpStatus:
        """
        Check a code. A match consumes it and marks the identifier verified.

        Args:
            identifier: Normalized phone or email
            code: Code supplied by the user
            now: Current time (defaults to UTC now)

        Returns:
            Verification status
        """
        now = now or datetime.now(timezone.utc)

        # Locked until a new code is issued
        if identifier in self._locked:
            return OtpStatus.LOCKED

        entry = self._codes.get(identifier)
        if not entry:
            return OtpStatus.NOT_FOUND

        if now > entry.expires:
            del self._codes[identifier]
            return OtpStatus.EXPIRED

        # Bytes, since compare_digest rejects non-ASCII str
        if not secrets.compare_digest(entry.code.encode(), code.strip().encode()):
            entry.attempts += 1
            if entry.attempts >= self.max_attempts:
                del self._codes[identifier]
                self._locked.add(identifier)
                logger.warning(f"OTP locked after {entry.attempts} failed attempts for {identifier}")
                return OtpStatus.LOCKED
            return OtpStatus.INVALID

        del self._codes[identifier]  # One-time use
        self._verified[identifier] = now + self.verified_window

        return OtpStatus.OK

    def consume_verification(self, identifier: str, now: Optional[datetime] = None) -> bool:
        """
        Use up a recent successful verification.

        Returns:
            True if the identifier was verified within the window
        """
        now = now or datetime.now(timezone.utc)
        until = self._verified.pop(identifier, None)
        return until is not None and now <= until

    def reset(self) -> None:
        """Forget all codes, send history and verifications."""
        self._codes.clear()
        self._sends.clear()
        self._verified.clear()
        self._locked.clear()

    def _cleanup(self, now: datetime) -> None:
        """Remove expired codes, stale send history and lapsed verifications."""
        for identifier in [i for i, e in self._codes.items() if now > e.expires]:
            del self._codes[identifier]

        for identifier in [
            i for i, h in self._sends.items()
            if not h.sent_at or now - h.sent_at[-1] >= self.send_window
        ]:
            del self._sends[identifier]

        for identifier in [i for i, until in self._verified.items() if now > until]:
            del self._verified[identifier]


# Singleton instance
otp_service = OtpService()
