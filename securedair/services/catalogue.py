"""
The three tier-scoped datasets served by the API.

Built once at startup against a single injected PolicyTable and shared
read-only by every request. Each worker process builds its own.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Sequence

from securedair.access.policy import PolicyTable
from securedair.models import AirlineRecord, AirportCountryIndex, AirportRecord, RouteRecord
from securedair.services.dataset import DatasetFilter, country_field, single_country
from securedair.services.routes import RouteDataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AviationCatalogue:
    """Airlines, airports and routes, each filtered by tier."""
    policies: PolicyTable
    airlines: DatasetFilter[AirlineRecord]
    airports: DatasetFilter[AirportRecord]
    routes: RouteDataset

    @classmethod
    def build(
        cls,
        airlines: Sequence[AirlineRecord],
        airports: Sequence[AirportRecord],
        routes: Sequence[RouteRecord],
        policies: PolicyTable,
    ) -> 'AviationCatalogue':
        airport_index = AirportCountryIndex.from_airports(airports)
        logger.info(f'Indexed {len(airport_index)} airport-country mappings')

        return cls(
            policies=policies,
            airlines=DatasetFilter(
                airlines, policies, single_country, country_field, label='airlines'
            ),
            airports=DatasetFilter(
                airports, policies, single_country, country_field, label='airports'
            ),
            routes=RouteDataset(routes, airport_index, policies),
        )

    @property
    def sizes(self) -> Dict[str, int]:
        return {
            'airlines': len(self.airlines),
            'airports': len(self.airports),
            'routes': len(self.routes),
        }
