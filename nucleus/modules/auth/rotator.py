"""
Rotating credential for the internal API.

The credential is a SHA-256 hash of the shared secret and the current
wall-clock minute. Issuer and verifier derive it independently from the
same secret and clock, so validation needs no shared store and no network
round-trip. The hash of the previous minute is also accepted to absorb
clock and transmission skew.
"""

import hashlib
import logging
import os
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

WINDOW = timedelta(seconds=60)


class MissingSecretError(RuntimeError):
    """The shared secret is not configured in the environment."""

    def __init__(self, env_var: str):
        super().__init__(f"No auth secret provided in environment ({env_var})")
        self.env_var = env_var


@dataclass(frozen=True)
class RotatingCredential:
    """Immutable snapshot of the two hashes valid during one window."""

    current: str
    previous: str
    expires_at: datetime

    def __repr__(self) -> str:
        return f"RotatingCredential(expires_at={self.expires_at.isoformat()})"


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _utc_now() -> datetime:
    return datetime.now(UTC)


def derive_hash(secret: str, moment: datetime) -> str:
    """
    Hash the secret with the day, hour and minute of ``moment``.

    Fields are concatenated without padding, e.g. day 10, hour 14,
    minute 5 gives ``secret + "10" + "14" + "5"``.
    """
    message = f"{secret}{moment.day}{moment.hour}{moment.minute}"
    return hashlib.sha256(message.encode("utf-8")).hexdigest()


class CredentialRotator:
    """
    Derives and validates the time-windowed authentication hash.

    The cached credential is replaced as a whole on rotation, never
    mutated, so concurrent readers always see a consistent pair.
    """

    def __init__(
        self,
        secret_env: str = "NUCLEUS_AUTH",
        clock: Optional[Callable[[], datetime]] = None,
        environ: Optional[Mapping[str, str]] = None,
        use_utc: bool = False,
    ):
        """
        Initialize rotator.

        Args:
            secret_env: Name of the environment variable holding the secret
            clock: Callable returning an aware datetime (defaults to wall clock)
            environ: Mapping to read the secret from (defaults to os.environ)
            use_utc: Derive hashes from UTC instead of local time
        """
        self.secret_env = secret_env
        self._clock = clock or (_utc_now if use_utc else _local_now)
        self._environ = os.environ if environ is None else environ
        self._credential: Optional[RotatingCredential] = None

    def _read_secret(self) -> str:
        secret = self._environ.get(self.secret_env)
        if not secret:
            raise MissingSecretError(self.secret_env)
        return secret

    def current_credential(self) -> RotatingCredential:
        """
        Return the credential for the current window, rotating if expired.

        The window starts at the wall-clock minute of the rotation, so
        expires_at falls on the next minute boundary rather than 60s after
        the call.

        Raises:
            MissingSecretError: If the secret is not configured
        """
        now = self._clock()
        cached = self._credential
        if cached is not None and cached.expires_at > now:
            return cached

        secret = self._read_secret()
        window_start = now.replace(second=0, microsecond=0)
        # Previous window derived from a full minute earlier so that minute 0
        # rolls back into the previous hour (and day) consistently.
        previous_start = window_start - WINDOW

        credential = RotatingCredential(
            current=derive_hash(secret, window_start),
            previous=derive_hash(secret, previous_start),
            expires_at=window_start + WINDOW,
        )
        self._credential = credential
        logger.debug(f"Rotated credential, expires at {credential.expires_at.isoformat()}")
        return credential

    def issue(self) -> str:
        """Return the token for the current window."""
        return self.current_credential().current

    def validate(self, token: Optional[str]) -> bool:
        """
        Check a presented token against the current and previous hashes.

        Never raises: a missing secret rejects every token.

        Args:
            token: Token presented by the caller

        Returns:
            True if the token matches either valid hash
        """
        if not token:
            return False

        try:
            credential = self.current_credential()
        except MissingSecretError as e:
            logger.error(f"Rejecting token, auth secret is not configured: {e}")
            return False

        presented = token.encode("utf-8")
        # Use constant-time comparison for security; evaluate both slots
        matches_current = secrets.compare_digest(presented, credential.current.encode("utf-8"))
        matches_previous = secrets.compare_digest(presented, credential.previous.encode("utf-8"))
        return matches_current or matches_previous
