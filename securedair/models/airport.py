"""
Airport reference record.

Airports double as the source of the IATA code -> country index used to
place routes in countries.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AirportRecord:
    """An airport with its location and timezone metadata."""
    name: str
    city: str
    country: str
    iata: str
    icao: str
    latitude: str
    longitude: str
    altitude: str
    timezone: str
    dst: str
    timezone_db: str

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'name': self.name,
            'city': self.city,
            'country': self.country,
            'iata': self.iata,
            'icao': self.icao,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'altitude': self.altitude,
            'timezone': self.timezone,
            'dst': self.dst,
            'timezoneDb': self.timezone_db,
        }
