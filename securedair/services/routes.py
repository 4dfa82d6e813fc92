"""
Route dataset with two-sided country authorization.

Routes only know airport codes. Their source and destination countries
are looked up in the AirportCountryIndex each time routes are read, so
unresolvable codes surface as 'Unknown' rather than being stored.

Compared to airlines and airports:
- policy filtering matches a route if EITHER endpoint country is allowed
- grouping files a route under its SOURCE country only, so a route let in
  by its destination but with an 'Unknown' source does not appear in
  by_tier() output
- between_countries() requires BOTH endpoints to be allowed
"""

import logging
from typing import List, Sequence

from securedair.access.errors import AccessDenied
from securedair.access.policy import PolicyTable
from securedair.access.tiers import Tier
from securedair.models.route import AirportCountryIndex, RouteRecord, RouteView
from securedair.services.dataset import DatasetFilter, TierLike

logger = logging.getLogger(__name__)


def route_countries(view: RouteView):
    return (view.source_country, view.destination_country)


def route_source_country(view: RouteView) -> str:
    return view.source_country


class RouteDataset(DatasetFilter[RouteView]):
    """Tier-scoped access to flight routes."""

    def __init__(
        self,
        routes: Sequence[RouteRecord],
        airport_index: AirportCountryIndex,
        policies: PolicyTable,
    ):
        super().__init__(
            routes,
            policies,
            countries_of=route_countries,
            group_key=route_source_country,
            label='routes',
        )
        self.airport_index = airport_index

    def with_countries(self, route: RouteRecord) -> RouteView:
        return RouteView(
            route=route,
            source_country=self.airport_index.country_of(route.source_airport),
            destination_country=self.airport_index.country_of(route.destination_airport),
        )

    def records(self) -> List[RouteView]:
        return [self.with_countries(r) for r in self._records]

    def between_countries(
        self,
        tier: TierLike,
        source_country: str,
        destination_country: str,
    ) -> List[RouteView]:
        """
        Routes flying from source_country to destination_country.

        Both countries must be accessible to the tier. Matching is exact on
        both sides.

        Raises:
            AccessDenied: either country is outside the tier's policy.
        """
        tier = Tier.parse(tier)
        decision = self.policies.check_pair_access(tier, source_country, destination_country)
        if not decision.allowed:
            required = self.policies.minimum_tier_for([source_country, destination_country])
            raise AccessDenied(
                decision.reason,
                tier=tier.value,
                required_tier=required.value if required else None,
            )

        return [
            view for view in self.records()
            if view.source_country == source_country
            and view.destination_country == destination_country
        ]
