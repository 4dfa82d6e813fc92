"""
Airline reference record.

Loaded once at startup from the airlines CSV and never mutated.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AirlineRecord:
    """An airline and the country it is registered in."""
    name: str
    iata: str
    icao: str
    callsign: str
    country: str
    active: str

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'name': self.name,
            'iata': self.iata,
            'icao': self.icao,
            'callsign': self.callsign,
            'country': self.country,
            'active': self.active,
        }
