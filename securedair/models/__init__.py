"""
Reference data records for Secured Air.

Records are immutable once loaded and shared read-only across requests:
- AirlineRecord, AirportRecord: carry their country directly
- RouteRecord: resolves source/destination countries through an
  AirportCountryIndex built from the airport dataset
"""

from securedair.models.airline import AirlineRecord
from securedair.models.airport import AirportRecord
from securedair.models.route import (
    UNKNOWN_COUNTRY,
    AirportCountryIndex,
    RouteRecord,
    RouteView,
)

__all__ = [
    'AirlineRecord',
    'AirportRecord',
    'AirportCountryIndex',
    'RouteRecord',
    'RouteView',
    'UNKNOWN_COUNTRY',
]
