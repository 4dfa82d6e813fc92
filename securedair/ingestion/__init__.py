"""
Reference data ingestion.

Loads airlines, airports and routes from CSV files at startup.
"""

from securedair.ingestion.loader import (
    load_airlines,
    load_airports,
    load_catalogue,
    load_routes,
)

__all__ = ['load_airlines', 'load_airports', 'load_catalogue', 'load_routes']
