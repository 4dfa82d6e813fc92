from __future__ import annotations

import pytest

from securedair.access import AccessDenied, Tier
from securedair.models import UNKNOWN_COUNTRY, AirportCountryIndex

from tests.conftest import AIRPORTS


def legs(views):
    return [(v.route.source_airport, v.route.destination_airport) for v in views]


def test_airport_index_skips_missing_codes():
    index = AirportCountryIndex.from_airports(AIRPORTS)

    assert len(index) == 5
    assert index.country_of('TLV') == 'Israel'
    assert '\\N' not in index
    assert index.country_of('\\N') == UNKNOWN_COUNTRY
    assert index.country_of('ZZZ') == UNKNOWN_COUNTRY


def test_countries_resolved_on_read(catalogue):
    views = catalogue.routes.records()

    assert (views[0].source_country, views[0].destination_country) == ('Israel', 'Israel')
    assert (views[4].source_country, views[4].destination_country) == (UNKNOWN_COUNTRY, 'Israel')

    data = views[1].to_dict()
    assert data['sourceAirport'] == 'TLV'
    assert data['sourceCountry'] == 'Israel'
    assert data['destinationCountry'] == 'United States'


def test_free_tier_groups_by_source_country(catalogue):
    grouped = catalogue.routes.by_tier(Tier.FREE)

    assert list(grouped) == ['Israel', 'Germany']
    assert legs(grouped['Israel']) == [('TLV', 'ETM'), ('TLV', 'JFK')]
    assert legs(grouped['Germany']) == [('FRA', 'TLV')]


def test_destination_match_with_unknown_source_is_invisible_when_grouped(catalogue):
    # ZZZ -> TLV passes the FREE filter by destination, but has no source country.
    grouped = catalogue.routes.by_tier(Tier.FREE)
    all_legs = [leg for group in grouped.values() for leg in legs(group)]

    assert ('ZZZ', 'TLV') not in all_legs
    assert ('ZZZ', 'TLV') in legs(catalogue.routes.by_country(Tier.FREE, 'Israel'))


def test_source_grouping_can_surface_unlisted_country(catalogue):
    grouped = catalogue.routes.by_tier(Tier.PRO)

    assert list(grouped) == ['Israel', 'Germany', 'Mexico', 'United States']
    assert legs(grouped['Mexico']) == [('MEX', 'JFK')]


@pytest.mark.parametrize('tier', list(Tier))
def test_unknown_never_a_group_key(catalogue, tier):
    assert UNKNOWN_COUNTRY not in catalogue.routes.by_tier(tier)


def test_elite_accessible_countries_exclude_unknown(catalogue):
    assert catalogue.routes.accessible_countries(Tier.ELITE) == [
        'Germany', 'Israel', 'Mexico', 'United States',
    ]


def test_by_country_matches_either_endpoint(catalogue):
    assert legs(catalogue.routes.by_country(Tier.PRO, 'Germany')) == [
        ('FRA', 'TLV'), ('FRA', 'JFK'),
    ]
    assert legs(catalogue.routes.by_country(Tier.FREE, 'Israel')) == [
        ('TLV', 'ETM'), ('TLV', 'JFK'), ('FRA', 'TLV'), ('ZZZ', 'TLV'),
    ]


def test_between_countries_within_free_tier(catalogue):
    routes = catalogue.routes.between_countries(Tier.FREE, 'Israel', 'Israel')
    assert legs(routes) == [('TLV', 'ETM')]


def test_between_countries_requires_both_sides(catalogue):
    with pytest.raises(AccessDenied) as exc_info:
        catalogue.routes.between_countries(Tier.FREE, 'Israel', 'United States')

    assert exc_info.value.reason == (
        "Access to routes between 'Israel' and 'United States' "
        'requires a higher subscription tier'
    )
    assert exc_info.value.required_tier == 'pro'

    with pytest.raises(AccessDenied):
        catalogue.routes.by_country(Tier.FREE, 'United States')


def test_between_countries_is_directional_and_conjunctive(catalogue):
    assert legs(catalogue.routes.between_countries(Tier.PRO, 'Israel', 'United States')) == [
        ('TLV', 'JFK'),
    ]
    assert catalogue.routes.between_countries(Tier.PRO, 'United States', 'Israel') == []
    assert legs(catalogue.routes.between_countries(Tier.ELITE, 'Mexico', 'United States')) == [
        ('MEX', 'JFK'),
    ]


def test_between_countries_denies_pro_outside_list(catalogue):
    with pytest.raises(AccessDenied) as exc_info:
        catalogue.routes.between_countries(Tier.PRO, 'Mexico', 'United States')
    assert exc_info.value.required_tier == 'elite'


def test_route_statistics(catalogue):
    stats = catalogue.routes.statistics(Tier.FREE)

    assert catalogue.routes.total_key == 'totalRoutes'
    assert stats.total_records == 3
    assert stats.countries_with_data == ['Germany', 'Israel']
    assert catalogue.routes.statistics(Tier.ELITE).total_records == 6
