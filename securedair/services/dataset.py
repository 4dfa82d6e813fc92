"""
Tier-scoped views over a reference dataset.

A DatasetFilter wraps one immutable record collection and answers every
tier-dependent question about it: which records a tier sees grouped by
country, which records belong to a given country, which countries a tier
may ask for, and aggregate statistics.

The same class serves airlines, airports and routes. What differs per
record kind is passed in explicitly:
- countries_of: every country a record is matched against by policy
  filtering (one for airlines/airports, source and destination for routes)
- group_key: the country a record is filed under in grouped output
  (the source country for routes)

Nothing is cached. Every call re-scans the records so results always
reflect the current policy table.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Sequence, Tuple, TypeVar, Union

from securedair.access.errors import AccessDenied
from securedair.access.policy import PolicyTable
from securedair.access.tiers import Tier
from securedair.models.route import UNKNOWN_COUNTRY

logger = logging.getLogger(__name__)

R = TypeVar('R')

TierLike = Union[Tier, str]


def is_known_country(country: str) -> bool:
    """Empty and 'Unknown' countries are never grouped or listed."""
    return bool(country) and country != UNKNOWN_COUNTRY


@dataclass(frozen=True)
class TierStatistics:
    """Aggregate view of what a tier can see in one dataset."""
    total_records: int
    total_countries: int
    countries_with_data: List[str]

    def to_dict(self, total_key: str = 'totalRecords') -> dict:
        return {
            total_key: self.total_records,
            'totalCountries': self.total_countries,
            'countriesWithData': list(self.countries_with_data),
        }


class DatasetFilter(Generic[R]):
    """
    Tier-scoped access to a single record collection.

    Args:
        records: The full, immutable record collection.
        policies: Tier policy table shared by all datasets.
        countries_of: Countries a record is matched against.
        group_key: Country a record is grouped under.
        label: Plural noun for the record kind, e.g. 'airlines'.
    """

    def __init__(
        self,
        records: Sequence[R],
        policies: PolicyTable,
        countries_of: Callable[[R], Tuple[str, ...]],
        group_key: Callable[[R], str],
        label: str,
    ):
        self._records: Tuple[R, ...] = tuple(records)
        self.policies = policies
        self._countries_of = countries_of
        self._group_key = group_key
        self.label = label

    def __len__(self) -> int:
        return len(self._records)

    @property
    def total_key(self) -> str:
        """Statistics key for the record total, e.g. 'totalAirlines'."""
        return 'total' + self.label[:1].upper() + self.label[1:]

    def records(self) -> List[R]:
        """Records as exposed to callers. Subclasses may enrich them."""
        return list(self._records)

    def _policy_countries(self, tier: TierLike):
        tier = Tier.parse(tier)
        return tier, self.policies.policy_for(tier).countries

    def _group(self, records: Sequence[R]) -> Dict[str, List[R]]:
        grouped: Dict[str, List[R]] = {}
        for record in records:
            key = self._group_key(record)
            if not is_known_country(key):
                continue
            grouped.setdefault(key, []).append(record)
        return grouped

    def by_tier(self, tier: TierLike) -> Dict[str, List[R]]:
        """
        Records visible to a tier, grouped by country.

        Unrestricted tiers see everything. Restricted tiers see records
        where any of the record's countries is on their list. Records whose
        group key is empty or 'Unknown' are dropped from the result.

        Raises:
            InvalidTier: tier is not a known tier value.
            UnknownTier: the policy table has no entry for tier.
        """
        _, allowed = self._policy_countries(tier)
        records = self.records()
        if allowed is None:
            return self._group(records)

        filtered = [
            r for r in records
            if any(c in allowed for c in self._countries_of(r))
        ]
        return self._group(filtered)

    def has_country_access(self, tier: TierLike, country: str) -> bool:
        return self.policies.has_country_access(Tier.parse(tier), country)

    def by_country(self, tier: TierLike, country: str) -> List[R]:
        """
        Records belonging to a single country.

        Raises:
            AccessDenied: the tier's policy does not cover country.
        """
        tier = Tier.parse(tier)
        decision = self.policies.check_access(tier, country)
        if not decision.allowed:
            required = self.policies.minimum_tier_for([country])
            raise AccessDenied(
                decision.reason,
                tier=tier.value,
                required_tier=required.value if required else None,
            )

        return [
            r for r in self.records()
            if any(c == country for c in self._countries_of(r))
        ]

    def accessible_countries(self, tier: TierLike) -> List[str]:
        """
        Countries a tier may request.

        Unrestricted tiers get the sorted, de-duplicated countries actually
        present in the data. Restricted tiers get their configured list in
        its configured order.
        """
        _, allowed = self._policy_countries(tier)
        if allowed is not None:
            return list(allowed)

        present = set()
        for record in self.records():
            for country in self._countries_of(record):
                if is_known_country(country):
                    present.add(country)
        return sorted(present)

    def statistics(self, tier: TierLike) -> TierStatistics:
        """Totals derived from by_tier() on every call."""
        grouped = self.by_tier(tier)
        return TierStatistics(
            total_records=sum(len(group) for group in grouped.values()),
            total_countries=len(grouped),
            countries_with_data=sorted(grouped),
        )

    def is_unrestricted(self, tier: TierLike) -> bool:
        _, allowed = self._policy_countries(tier)
        return allowed is None


def single_country(record) -> Tuple[str, ...]:
    """countries_of for records carrying a direct country field."""
    return (record.country,)


def country_field(record) -> str:
    """group_key for records carrying a direct country field."""
    return record.country
