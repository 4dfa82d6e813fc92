"""
Signed tier credentials.

A credential is a URL-safe, timestamped token signed with the server's
secret key and carrying a single tier claim. FREE never gets a token: the
absence of a credential is what FREE looks like.

Usage:
    from securedair.access.credentials import CredentialManager

    manager = CredentialManager(secret_key='s3cret', ttl_seconds=1800)
    token = manager.issue_token(Tier.PRO)
    manager.resolve_tier(token)  # Tier.PRO
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from securedair.access.errors import InvalidCredential
from securedair.access.tiers import Tier

logger = logging.getLogger(__name__)

TOKEN_SALT = 'securedair.tier-token'


@dataclass
class TokenValidation:
    """Result of verifying a credential."""
    is_valid: bool
    tier: Optional[Tier] = None
    error: Optional[str] = None
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        if not self.is_valid:
            return {'valid': False, 'error': self.error}
        return {
            'valid': True,
            'tier': self.tier.value if self.tier else None,
            'issuedAt': self.issued_at.isoformat() if self.issued_at else None,
            'expiresAt': self.expires_at.isoformat() if self.expires_at else None,
        }


class CredentialManager:
    """
    Issues and verifies tier credentials.

    Pure apart from reading the clock: verification depends only on the
    secret key, the token and the current time.
    """

    def __init__(self, secret_key: str, ttl_seconds: int = 1800):
        self.ttl_seconds = ttl_seconds
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)

    def issue_token(self, tier: Union[Tier, str]) -> Optional[str]:
        """
        Sign a credential for the given tier.

        Returns None for FREE, which is represented by having no token.

        Raises:
            InvalidTier: if tier is not a known tier.
        """
        tier = Tier.parse(tier)
        if not self.requires_authentication(tier):
            return None
        return self._serializer.dumps({'tier': tier.value})

    def decode(self, token: Optional[str]) -> TokenValidation:
        """
        Verify a credential and extract its tier.

        Raises:
            InvalidCredential: with a reason distinguishing a missing,
                expired, not yet valid, malformed or tier-less token.
        """
        if not token:
            raise InvalidCredential('No token provided')

        try:
            payload, signed_at = self._serializer.loads(
                token, max_age=self.ttl_seconds, return_timestamp=True
            )
        except SignatureExpired as e:
            if self._signed_in_future(e):
                raise InvalidCredential('Token not active yet') from None
            raise InvalidCredential('Token has expired') from None
        except BadData:
            raise InvalidCredential('Invalid token') from None

        claim = payload.get('tier') if isinstance(payload, dict) else None
        try:
            tier = Tier(claim)
        except ValueError:
            raise InvalidCredential('Invalid tier in token') from None

        return TokenValidation(
            is_valid=True,
            tier=tier,
            issued_at=signed_at,
            expires_at=signed_at + timedelta(seconds=self.ttl_seconds),
        )

    def _signed_in_future(self, error: SignatureExpired) -> bool:
        # itsdangerous also reports a negative signature age as expired
        if error.date_signed is None:
            return False
        now = self._serializer.make_signer().get_timestamp()
        return error.date_signed.timestamp() > now

    def verify_token(self, token: Optional[str]) -> TokenValidation:
        """Like decode(), but reports failures in the result instead of raising."""
        try:
            return self.decode(token)
        except InvalidCredential as e:
            return TokenValidation(is_valid=False, error=e.reason)

    def resolve_tier(self, token: Optional[str]) -> Tier:
        """
        Resolve the caller's tier for data access.

        Any missing or unverifiable credential resolves to FREE.
        """
        if not token:
            return Tier.FREE
        try:
            return self.decode(token).tier
        except InvalidCredential as e:
            logger.debug(f'Credential rejected, falling back to free tier: {e.reason}')
            return Tier.FREE

    @staticmethod
    def requires_authentication(tier: Tier) -> bool:
        return tier > Tier.FREE

    def validate_tier_access(
        self,
        token: Optional[str],
        required_tier: Union[Tier, str],
    ) -> TokenValidation:
        """
        Check that a credential grants at least the required tier.

        Raises:
            InvalidTier: if required_tier is not a known tier.
        """
        required_tier = Tier.parse(required_tier)
        if not self.requires_authentication(required_tier):
            return TokenValidation(is_valid=True, tier=Tier.FREE)

        if not token:
            return TokenValidation(
                is_valid=False,
                error=f'{required_tier.value} tier requires authentication',
            )

        validation = self.verify_token(token)
        if not validation.is_valid:
            return validation

        if validation.tier < required_tier:
            return TokenValidation(
                is_valid=False,
                tier=validation.tier,
                error=(
                    f'Insufficient permissions. Required: {required_tier.value}, '
                    f'Current: {validation.tier.value}'
                ),
            )

        return validation
