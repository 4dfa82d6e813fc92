"""Shared pytest fixtures: a small in-memory catalogue and a test client."""

from __future__ import annotations

from typing import Callable, Dict

import pytest

from securedair.access import CredentialManager, PolicyTable, Tier
from securedair.app import create_app
from securedair.models import AirlineRecord, AirportRecord, RouteRecord
from securedair.services import AviationCatalogue


def airline(name: str, iata: str, country: str) -> AirlineRecord:
    return AirlineRecord(
        name=name, iata=iata, icao=iata + 'X', callsign=name.upper(), country=country, active='Y'
    )


def airport(name: str, iata: str, country: str) -> AirportRecord:
    return AirportRecord(
        name=name,
        city=name,
        country=country,
        iata=iata,
        icao='X' + iata,
        latitude='0.0',
        longitude='0.0',
        altitude='0',
        timezone='0',
        dst='N',
        timezone_db='Etc/UTC',
    )


def route(airline_code: str, source: str, destination: str) -> RouteRecord:
    return RouteRecord(
        airline=airline_code,
        airline_id='1',
        source_airport=source,
        source_airport_id='1',
        destination_airport=destination,
        destination_airport_id='2',
        codeshare='',
        stops='0',
        equipment='738',
    )


AIRLINES = [
    airline('El Al', 'LY', 'Israel'),
    airline('Lufthansa', 'LH', 'Germany'),
    airline('Arkia', 'IZ', 'Israel'),
    airline('Aeromexico', 'AM', 'Mexico'),
    airline('Delta', 'DL', 'United States'),
    airline('Condor', 'DE', 'Germany'),
    airline('Ghost Air', 'GH', ''),
]

AIRPORTS = [
    airport('Ben Gurion', 'TLV', 'Israel'),
    airport('Ramon', 'ETM', 'Israel'),
    airport('Frankfurt', 'FRA', 'Germany'),
    airport('John F Kennedy', 'JFK', 'United States'),
    airport('Mexico City', 'MEX', 'Mexico'),
    airport('Nadi', '\\N', 'Fiji'),
]

ROUTES = [
    route('LY', 'TLV', 'ETM'),
    route('LY', 'TLV', 'JFK'),
    route('LH', 'FRA', 'TLV'),
    route('AM', 'MEX', 'JFK'),
    route('XX', 'ZZZ', 'TLV'),
    route('DL', 'JFK', 'MEX'),
    route('LH', 'FRA', 'JFK'),
]


@pytest.fixture
def policies() -> PolicyTable:
    return PolicyTable.default()


@pytest.fixture
def catalogue(policies: PolicyTable) -> AviationCatalogue:
    return AviationCatalogue.build(AIRLINES, AIRPORTS, ROUTES, policies)


@pytest.fixture
def credentials() -> CredentialManager:
    return CredentialManager(secret_key='test-secret', ttl_seconds=1800)


@pytest.fixture
def app(catalogue: AviationCatalogue, credentials: CredentialManager):
    application = create_app(catalogue=catalogue, credentials=credentials)
    application.config['TESTING'] = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(credentials: CredentialManager) -> Callable[[Tier], Dict[str, str]]:
    """Authorization headers carrying a credential for the given tier."""

    def build(tier: Tier) -> Dict[str, str]:
        token = credentials.issue_token(tier)
        return {'Authorization': f'Bearer {token}'} if token else {}

    return build
