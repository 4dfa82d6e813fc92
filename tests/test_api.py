from __future__ import annotations

import pytest

from securedair.access import PolicyTable, Tier, UnknownTier
from securedair.app import create_app
from securedair.services import AviationCatalogue

from tests.conftest import AIRLINES, AIRPORTS, ROUTES


def test_welcome(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.get_data(as_text=True) == 'Welcome to Secured Air API'


def test_health(client):
    body = client.get('/health').get_json()

    assert body['status'] == 'OK'
    assert body['name'] == 'secured-air-api'
    assert body['version'] == '1.0.0'
    assert body['uptime'] >= 0


def test_anonymous_caller_is_free(client):
    body = client.get('/airlines').get_json()

    assert body['success'] is True
    assert body['tier'] == 'free'
    assert list(body['data']) == ['Israel']
    assert body['metadata'] == {
        'totalAirlines': 2,
        'totalCountries': 1,
        'accessibleCountries': ['Israel'],
    }


def test_invalid_token_falls_back_to_free(client):
    response = client.get('/airports/countries', headers={'Authorization': 'Bearer junk'})

    assert response.status_code == 200
    assert response.get_json()['tier'] == 'free'
    assert response.get_json()['countries'] == ['Israel']


def test_bearer_header_grants_tier(client, auth_headers):
    body = client.get('/airlines', headers=auth_headers(Tier.ELITE)).get_json()

    assert body['tier'] == 'elite'
    assert set(body['data']) == {'Israel', 'Germany', 'Mexico', 'United States'}


def test_cookie_grants_tier(client, credentials):
    token = credentials.issue_token(Tier.PRO)
    client.set_cookie('Authorization', f'Bearer {token}')

    assert client.get('/routes/countries').get_json()['tier'] == 'pro'


def test_valid_cookie_used_when_header_token_fails(client, credentials):
    token = credentials.issue_token(Tier.ELITE)
    client.set_cookie('Authorization', f'Bearer {token}')

    body = client.get('/airlines', headers={'Authorization': 'Bearer junk'}).get_json()
    assert body['tier'] == 'elite'


def test_accessible_countries(client, auth_headers):
    body = client.get('/airlines/countries', headers=auth_headers(Tier.PRO)).get_json()

    assert body['countries'][0] == 'Israel'
    assert body['totalCount'] == 11


def test_country_endpoint(client, auth_headers):
    response = client.get('/airlines/country/Germany', headers=auth_headers(Tier.PRO))
    body = response.get_json()

    assert response.status_code == 200
    assert body['country'] == 'Germany'
    assert [a['name'] for a in body['airlines']] == ['Lufthansa', 'Condor']
    assert body['count'] == 2


def test_country_endpoint_denied(client, auth_headers):
    response = client.get('/airlines/country/Mexico', headers=auth_headers(Tier.PRO))

    assert response.status_code == 403
    assert response.get_json() == {
        'success': False,
        'error': "Country 'Mexico' is not accessible with pro tier",
        'currentTier': 'pro',
        'requiredTier': 'elite',
    }


def test_country_names_with_spaces(client, auth_headers):
    response = client.get('/airports/country/United%20States', headers=auth_headers(Tier.PRO))

    assert response.status_code == 200
    assert [a['iata'] for a in response.get_json()['airports']] == ['JFK']


def test_statistics(client):
    body = client.get('/routes/statistics').get_json()

    assert body['tier'] == 'free'
    assert body['statistics'] == {
        'totalRoutes': 3,
        'totalCountries': 2,
        'countriesWithData': ['Germany', 'Israel'],
        'accessLevel': 'restricted',
        'tierBenefits': 'Access to Israel routes only',
    }


def test_statistics_unlimited_for_elite(client, auth_headers):
    stats = client.get('/airports/statistics', headers=auth_headers(Tier.ELITE)).get_json()['statistics']

    assert stats['accessLevel'] == 'unlimited'
    assert stats['totalAirports'] == 6


@pytest.mark.parametrize('country,expected', [('Israel', True), ('Germany', False)])
def test_access_check(client, country, expected):
    body = client.get(f'/airlines/access/{country}').get_json()

    assert body['hasAccess'] is expected
    assert body['country'] == country
    if expected:
        assert body['message'] == 'Access granted to Israel'
    else:
        assert body['message'] == 'Access to Germany requires a higher subscription tier'


def test_tier_preview(client):
    body = client.get('/airlines/tier/pro/preview').get_json()

    assert body['currentTier'] == 'free'
    assert body['previewTier'] == 'pro'
    preview = body['preview']
    assert preview['totalAirlines'] == 5
    assert preview['sampleCountries'] == ['Israel', 'United States', 'Canada', 'United Kingdom', 'Germany']
    assert len(preview['allCountries']) == 11
    assert preview['upgrade']['message'] == 'Upgrade to pro tier to access this data'


def test_tier_preview_of_own_tier_has_no_upgrade(client):
    body = client.get('/airlines/tier/free/preview').get_json()
    assert body['preview']['upgrade'] is None


def test_tier_preview_rejects_unknown_tier(client):
    response = client.get('/routes/tier/platinum/preview')

    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == 'Invalid data'
    assert body['details'][0]['message'].startswith('tier is')


def test_routes_between_countries(client):
    response = client.get('/routes/from/Israel/to/Israel')
    body = response.get_json()

    assert response.status_code == 200
    assert body['sourceCountry'] == 'Israel'
    assert body['count'] == 1
    assert body['routes'][0]['destinationAirport'] == 'ETM'
    assert body['routes'][0]['destinationCountry'] == 'Israel'


def test_routes_between_countries_denied(client):
    response = client.get('/routes/from/Israel/to/United%20States')

    assert response.status_code == 403
    body = response.get_json()
    assert body['error'] == (
        "Access to routes between 'Israel' and 'United States' "
        'requires a higher subscription tier'
    )
    assert body['currentTier'] == 'free'
    assert body['requiredTier'] == 'pro'


def test_routes_by_country_include_resolved_countries(client, auth_headers):
    body = client.get('/routes/country/Germany', headers=auth_headers(Tier.PRO)).get_json()

    assert [(r['sourceCountry'], r['destinationCountry']) for r in body['routes']] == [
        ('Germany', 'Israel'),
        ('Germany', 'United States'),
    ]


def test_unknown_path(client):
    response = client.get('/aircraft')
    assert response.status_code == 404
    assert response.get_json()['error'] == 'Not found'


def test_policy_misconfiguration_is_server_error(credentials, auth_headers):
    class MissingProPolicy(PolicyTable):
        def policy_for(self, tier):
            if tier is Tier.PRO:
                raise UnknownTier(tier)
            return super().policy_for(tier)

    broken = AviationCatalogue.build(
        AIRLINES, AIRPORTS, ROUTES, MissingProPolicy(PolicyTable.default()._policies)
    )
    client = create_app(catalogue=broken, credentials=credentials).test_client()

    response = client.get('/airlines', headers=auth_headers(Tier.PRO))
    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'error': 'Internal server error'}
    assert client.get('/airlines').status_code == 200
