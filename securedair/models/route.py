"""
Flight route record.

Routes reference airports by IATA code only. Their countries are resolved
on read through an AirportCountryIndex and never stored on the record.
"""

from dataclasses import dataclass
from typing import Dict, Iterable

UNKNOWN_COUNTRY = 'Unknown'

# OpenFlights marks missing values with a literal \N
MISSING_VALUE = '\\N'


@dataclass(frozen=True)
class RouteRecord:
    """A scheduled airline route between two airports."""
    airline: str
    airline_id: str
    source_airport: str
    source_airport_id: str
    destination_airport: str
    destination_airport_id: str
    codeshare: str
    stops: str
    equipment: str

    def to_dict(self) -> dict:
        return {
            'airline': self.airline,
            'airlineId': self.airline_id,
            'sourceAirport': self.source_airport,
            'sourceAirportId': self.source_airport_id,
            'destinationAirport': self.destination_airport,
            'destinationAirportId': self.destination_airport_id,
            'codeshare': self.codeshare,
            'stops': self.stops,
            'equipment': self.equipment,
        }


@dataclass(frozen=True)
class RouteView:
    """A route together with its resolved source and destination countries."""
    route: RouteRecord
    source_country: str
    destination_country: str

    def to_dict(self) -> dict:
        result = self.route.to_dict()
        result['sourceCountry'] = self.source_country
        result['destinationCountry'] = self.destination_country
        return result


class AirportCountryIndex:
    """
    IATA airport code -> country name.

    Built once from the airport dataset. Codes that are empty or marked
    missing are not indexed; lookups of unindexed codes return 'Unknown'.
    """

    def __init__(self, mapping: Dict[str, str]):
        self._mapping = dict(mapping)

    @classmethod
    def from_airports(cls, airports: Iterable) -> 'AirportCountryIndex':
        mapping: Dict[str, str] = {}
        for airport in airports:
            iata = airport.iata.strip()
            country = airport.country.strip()
            if iata and country and iata != MISSING_VALUE:
                mapping[iata] = country
        return cls(mapping)

    def country_of(self, iata: str) -> str:
        return self._mapping.get(iata) or UNKNOWN_COUNTRY

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, iata: str) -> bool:
        return iata in self._mapping
