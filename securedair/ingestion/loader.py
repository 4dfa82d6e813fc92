"""
Reference data loader.

Reads the OpenFlights-style CSV exports for airlines, airports and routes
into immutable records. Loading happens once at startup.

Malformed rows (too few columns) are skipped. A missing file is logged and
treated as an empty dataset, so the API still starts and reports empty
statistics.

Usage:
    from securedair.ingestion.loader import load_catalogue

    catalogue = load_catalogue(config.data, PolicyTable.from_config(config.policy))
    catalogue.airlines.by_tier(Tier.FREE)
"""

import csv
import logging
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from securedair.access.policy import PolicyTable
from securedair.config import DataConfig
from securedair.models import AirlineRecord, AirportRecord, RouteRecord
from securedair.services.catalogue import AviationCatalogue

logger = logging.getLogger(__name__)

T = TypeVar('T')

AIRLINE_COLUMNS = 6
AIRPORT_COLUMNS = 11
ROUTE_COLUMNS = 9


def _read_rows(
    csv_path: Path,
    min_columns: int,
    parse: Callable[[List[str]], T],
) -> List[T]:
    """Parse every data row of a CSV file, skipping the header row."""
    if not csv_path.exists():
        logger.error(f'Data file not found: {csv_path}')
        return []

    records: List[T] = []
    skipped = 0

    with open(csv_path, 'r', encoding='utf-8', errors='ignore', newline='') as f:
        reader = csv.reader(f)
        next(reader, None)

        for row in reader:
            if not any(field.strip() for field in row):
                continue
            if len(row) < min_columns:
                skipped += 1
                continue
            records.append(parse([field.strip() for field in row]))

    if skipped:
        logger.warning(f'Skipped {skipped} malformed rows in {csv_path.name}')
    logger.info(f'Loaded {len(records)} records from {csv_path.name}')
    return records


def parse_airline(fields: List[str]) -> AirlineRecord:
    return AirlineRecord(
        name=fields[0],
        iata=fields[1],
        icao=fields[2],
        callsign=fields[3],
        country=fields[4],
        active=fields[5],
    )


def parse_airport(fields: List[str]) -> AirportRecord:
    return AirportRecord(
        name=fields[0],
        city=fields[1],
        country=fields[2],
        iata=fields[3],
        icao=fields[4],
        latitude=fields[5],
        longitude=fields[6],
        altitude=fields[7],
        timezone=fields[8],
        dst=fields[9],
        timezone_db=fields[10],
    )


def parse_route(fields: List[str]) -> RouteRecord:
    return RouteRecord(
        airline=fields[0],
        airline_id=fields[1],
        source_airport=fields[2],
        source_airport_id=fields[3],
        destination_airport=fields[4],
        destination_airport_id=fields[5],
        codeshare=fields[6],
        stops=fields[7],
        equipment=fields[8],
    )


def load_airlines(csv_path: Path) -> List[AirlineRecord]:
    """
    Expected CSV format:
    name,iata,icao,callsign,country,active
    """
    return _read_rows(csv_path, AIRLINE_COLUMNS, parse_airline)


def load_airports(csv_path: Path) -> List[AirportRecord]:
    """
    Expected CSV format:
    name,city,country,iata,icao,latitude,longitude,altitude,timezone,dst,tz
    """
    return _read_rows(csv_path, AIRPORT_COLUMNS, parse_airport)


def load_routes(csv_path: Path) -> List[RouteRecord]:
    """
    Expected CSV format:
    airline,airline_id,source,source_id,destination,destination_id,
    codeshare,stops,equipment
    """
    return _read_rows(csv_path, ROUTE_COLUMNS, parse_route)


def load_catalogue(
    data_config: DataConfig,
    policies: Optional[PolicyTable] = None,
) -> AviationCatalogue:
    """Load all three datasets and wrap them for tier-scoped access."""
    policies = policies or PolicyTable.default()
    logger.info(f'Loading reference data from {data_config.data_dir}')

    return AviationCatalogue.build(
        airlines=load_airlines(data_config.airlines_path),
        airports=load_airports(data_config.airports_path),
        routes=load_routes(data_config.routes_path),
        policies=policies,
    )
