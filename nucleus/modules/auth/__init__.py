"""
Authentication Module - Black Box Interface

Purpose: Derive and validate the rotating internal API credential
Interface: CredentialRotator.validate(), current_credential(), issue()
Hidden: Hash construction, window arithmetic, secret lookup

This module can be replaced with any other auth implementation
without affecting other modules.
"""

from .rotator import CredentialRotator, MissingSecretError, RotatingCredential, derive_hash
from .service import AuthenticationService, AuthResult, RotatingTokenAuthService

__all__ = [
    "AuthResult",
    "AuthenticationService",
    "CredentialRotator",
    "MissingSecretError",
    "RotatingCredential",
    "RotatingTokenAuthService",
    "derive_hash",
]
