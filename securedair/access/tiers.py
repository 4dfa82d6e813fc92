"""
Subscription tiers.

Tiers are a closed, totally ordered enumeration: FREE < PRO < ELITE.
A tier is never stored server-side; it travels inside a signed credential
(or is implied by the absence of one, for FREE).
"""

from enum import Enum
from typing import List, Union

from securedair.access.errors import InvalidTier


class Tier(str, Enum):
    """
    Subscription tier controlling data visibility.

    String values are the lowercase names, matching the wire format used in
    tokens, URLs and JSON responses.
    """
    FREE = 'free'
    PRO = 'pro'
    ELITE = 'elite'

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union['Tier', str]) -> 'Tier':
        """
        Convert a caller-supplied value into a Tier.

        Raises:
            InvalidTier: if the value is not one of the known tiers.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidTier(value) from None


_RANKS = {
    Tier.FREE: 0,
    Tier.PRO: 1,
    Tier.ELITE: 2,
}


TIER_FEATURES = {
    Tier.FREE: ('basic_access',),
    Tier.PRO: ('basic_access', 'pro_features'),
    Tier.ELITE: ('basic_access', 'pro_features', 'elite_features'),
}


def tier_features(tier: Tier) -> List[str]:
    """Features unlocked by a tier."""
    return list(TIER_FEATURES[tier])


def tiers_ascending() -> List[Tier]:
    """All tiers from lowest to highest."""
    return sorted(Tier)
