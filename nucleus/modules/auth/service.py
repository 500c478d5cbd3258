"""
Authentication Service Facade following Black Box Design principles.

This module provides:
- A clean interface for authentication that hides the rotating hash
- Standardized authentication results
"""

from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from .rotator import CredentialRotator


@dataclass
class AuthResult:
    """Standardized authentication result."""
    ok: bool
    identity: Optional[str]
    method: Optional[Literal["rotating_hash"]]
    error: Optional[str] = None


class AuthenticationService(Protocol):
    """Protocol for authentication services."""

    def authenticate(self, token: Optional[str]) -> AuthResult:
        """
        Authenticate a request.

        Args:
            token: Token from the X-Nucleus-Auth header

        Returns:
            AuthResult with authentication status
        """
        ...


class RotatingTokenAuthService:
    """
    Default implementation of AuthenticationService.

    Callers learn only whether the token was accepted, never why it
    was rejected.
    """

    def __init__(self, rotator: CredentialRotator, identity: str = "internal"):
        self._rotator = rotator
        self._identity = identity

    def authenticate(self, token: Optional[str]) -> AuthResult:
        if self._rotator.validate(token):
            return AuthResult(ok=True, identity=self._identity, method="rotating_hash")
        return AuthResult(ok=False, identity=None, method=None, error="Invalid credentials")
