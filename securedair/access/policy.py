"""
Tier policy table and access decisions.

Each tier maps to exactly one policy: either an ordered, finite list of
country names or UNRESTRICTED. The table is built once at startup and
injected into every dataset, so tests can supply alternate policies.

Country matching is an exact, case-sensitive comparison on the canonical
country name. Tiers are checked independently against their own list; no
subset relationship between tiers is assumed.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from securedair.access.errors import UnknownTier
from securedair.access.tiers import Tier, tiers_ascending
from securedair.config import DEFAULT_FREE_COUNTRIES, DEFAULT_PRO_COUNTRIES, PolicyConfig
from securedair.models.route import UNKNOWN_COUNTRY

logger = logging.getLogger(__name__)

# Never grantable; "Unknown" marks a route endpoint that did not resolve.
UNGRANTABLE_COUNTRIES = frozenset({UNKNOWN_COUNTRY, ''})


@dataclass(frozen=True)
class TierPolicy:
    """
    Country visibility for a single tier.

    countries is None for an unrestricted policy.
    """
    countries: Optional[Tuple[str, ...]]

    def __post_init__(self):
        if self.countries is None:
            return
        bad = [c for c in self.countries if c in UNGRANTABLE_COUNTRIES]
        if bad:
            raise ValueError(f'Country list contains ungrantable names: {bad!r}')

    @property
    def is_unrestricted(self) -> bool:
        return self.countries is None

    def allows(self, country: str) -> bool:
        if self.countries is None:
            return True
        return country in self.countries


UNRESTRICTED = TierPolicy(countries=None)


def _configured_policy(tier: Tier, countries: Iterable[str]) -> TierPolicy:
    """Build a list policy from configuration, dropping ungrantable names."""
    countries = tuple(countries)
    kept = tuple(c for c in countries if c not in UNGRANTABLE_COUNTRIES)
    if len(kept) != len(countries):
        logger.warning(
            f'Ignoring ungrantable country names in {tier.value} tier list: '
            f'{[c for c in countries if c in UNGRANTABLE_COUNTRIES]!r}'
        )
    return TierPolicy(countries=kept)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a country or country-pair check."""
    allowed: bool
    reason: Optional[str] = None


class PolicyTable:
    """
    Read-only mapping from tier to policy.

    Construction fails unless every member of Tier has a policy, so adding
    a tier forces the table to be updated alongside it.
    """

    def __init__(self, policies: Mapping[Tier, TierPolicy]):
        missing = [t.value for t in Tier if t not in policies]
        if missing:
            raise ValueError(f'Policy table missing tiers: {", ".join(missing)}')
        self._policies: Dict[Tier, TierPolicy] = dict(policies)

    @classmethod
    def from_config(cls, policy_config: PolicyConfig) -> 'PolicyTable':
        return cls({
            Tier.FREE: _configured_policy(Tier.FREE, policy_config.free_countries),
            Tier.PRO: _configured_policy(Tier.PRO, policy_config.pro_countries),
            Tier.ELITE: UNRESTRICTED,
        })

    @classmethod
    def default(cls) -> 'PolicyTable':
        return cls({
            Tier.FREE: TierPolicy(countries=DEFAULT_FREE_COUNTRIES),
            Tier.PRO: TierPolicy(countries=DEFAULT_PRO_COUNTRIES),
            Tier.ELITE: UNRESTRICTED,
        })

    def policy_for(self, tier: Tier) -> TierPolicy:
        """
        Look up the policy for a tier.

        Raises:
            UnknownTier: if tier is not a Tier or has no policy.
        """
        if not isinstance(tier, Tier):
            raise UnknownTier(tier)
        try:
            return self._policies[tier]
        except KeyError:
            raise UnknownTier(tier) from None

    def has_country_access(self, tier: Tier, country: str) -> bool:
        return self.policy_for(tier).allows(country)

    def check_access(self, tier: Tier, country: str) -> AccessDecision:
        if self.has_country_access(tier, country):
            return AccessDecision(allowed=True)
        logger.info(f'Denied {tier.value} tier access to {country!r}')
        return AccessDecision(
            allowed=False,
            reason=f"Country '{country}' is not accessible with {tier.value} tier",
        )

    def check_pair_access(self, tier: Tier, source: str, destination: str) -> AccessDecision:
        """Both countries must be individually accessible."""
        if self.has_country_access(tier, source) and self.has_country_access(tier, destination):
            return AccessDecision(allowed=True)
        logger.info(f'Denied {tier.value} tier access to pair {source!r} -> {destination!r}')
        return AccessDecision(
            allowed=False,
            reason=(
                f"Access to routes between '{source}' and '{destination}' "
                'requires a higher subscription tier'
            ),
        )

    def minimum_tier_for(self, countries: Iterable[str]) -> Optional[Tier]:
        """Lowest tier whose policy grants every given country, if any."""
        countries = list(countries)
        for tier in tiers_ascending():
            policy = self._policies[tier]
            if all(policy.allows(c) for c in countries):
                return tier
        return None

    def describe(self, tier: Tier, noun: str) -> str:
        """Human-readable summary of what a tier unlocks."""
        policy = self.policy_for(tier)
        if policy.is_unrestricted:
            return f'Unlimited access to all countries and {noun} worldwide'
        countries: List[str] = list(policy.countries)
        if not countries:
            return f'No access to {noun}'
        if len(countries) == 1:
            return f'Access to {countries[0]} {noun} only'
        if len(countries) <= 4:
            return f'Access to {noun} in {", ".join(countries)}'
        highlights = ', '.join(countries[:4])
        return f'Access to {len(countries)} countries including {highlights}, and more'
