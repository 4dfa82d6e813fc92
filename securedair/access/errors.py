"""
Exception taxonomy for the access layer.

- InvalidCredential: token malformed, expired, or carrying a bad tier claim.
  Recovered into FREE wherever data is fetched; reported verbatim by the
  verification endpoint.
- InvalidTier: a caller-supplied tier string outside the enumeration.
- AccessDenied: valid tier, but the policy disallows the requested country
  or country pair.
- UnknownTier: policy table has no entry for a tier. Signals a
  configuration defect.
"""

from typing import Optional


class AccessError(Exception):
    """Base class for all access-layer failures."""


class InvalidCredential(AccessError):
    """Credential could not be verified."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class InvalidTier(AccessError):
    """Tier value supplied by the caller is not a known tier."""

    def __init__(self, value):
        super().__init__(f'Invalid subscription tier: {value}')
        self.value = value


class UnknownTier(AccessError):
    """Policy table has no policy for the given tier."""

    def __init__(self, value):
        super().__init__(f'No policy configured for tier: {value}')
        self.value = value


class AccessDenied(AccessError):
    """Policy disallows the requested country or country pair."""

    def __init__(
        self,
        reason: str,
        tier: Optional[str] = None,
        required_tier: Optional[str] = None,
    ):
        super().__init__(reason)
        self.reason = reason
        self.tier = tier
        self.required_tier = required_tier
