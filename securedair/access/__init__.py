"""
Tiered access control.

Resolves a caller's tier from an optional signed credential and decides
which countries that tier may see.
"""

from securedair.access.credentials import CredentialManager, TokenValidation
from securedair.access.errors import (
    AccessDenied,
    AccessError,
    InvalidCredential,
    InvalidTier,
    UnknownTier,
)
from securedair.access.policy import UNRESTRICTED, AccessDecision, PolicyTable, TierPolicy
from securedair.access.tiers import Tier, tier_features

__all__ = [
    'AccessDecision',
    'AccessDenied',
    'AccessError',
    'CredentialManager',
    'InvalidCredential',
    'InvalidTier',
    'PolicyTable',
    'Tier',
    'TierPolicy',
    'TokenValidation',
    'UNRESTRICTED',
    'UnknownTier',
    'tier_features',
]
