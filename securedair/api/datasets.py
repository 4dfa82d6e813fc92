"""
Tier-scoped dataset API endpoints.

The same set of endpoints is mounted for each dataset:
- GET /<dataset> - Records visible to the caller's tier, grouped by country
- GET /<dataset>/countries - Countries the caller's tier may request
- GET /<dataset>/country/<country> - Records for a single country
- GET /<dataset>/statistics - Totals for the caller's tier
- GET /<dataset>/access/<country> - Whether the caller may see a country
- GET /<dataset>/tier/<tier>/preview - What another tier would unlock

Routes additionally provide:
- GET /routes/from/<source>/to/<destination> - Routes between two countries

Access denials raise AccessDenied and are turned into 403 responses by
the app-level error handler.
"""

import logging
from typing import Callable, Dict, List

from flask import Blueprint, g, jsonify

from securedair.access import Tier
from securedair.api.access import basic_access, current_tier, get_catalogue
from securedair.api.schemas import CountryParams, RoutePairParams, TierParams, validate_data
from securedair.services import AviationCatalogue, DatasetFilter

logger = logging.getLogger(__name__)

PREVIEW_SAMPLE_SIZE = 5


def _serialize_groups(grouped: Dict[str, list]) -> Dict[str, List[dict]]:
    return {country: [r.to_dict() for r in records] for country, records in grouped.items()}


def create_dataset_blueprint(
    name: str,
    select: Callable[[AviationCatalogue], DatasetFilter],
) -> Blueprint:
    """
    Build the blueprint serving one dataset.

    Args:
        name: URL prefix and response key, e.g. 'airlines'.
        select: Picks the dataset out of the app's catalogue.
    """
    bp = Blueprint(name, __name__, url_prefix=f'/{name}')

    def dataset() -> DatasetFilter:
        return select(get_catalogue())

    @bp.route('', methods=['GET'])
    @basic_access
    def list_by_tier():
        """Records visible to the caller, grouped by country."""
        tier = current_tier()
        ds = dataset()
        grouped = ds.by_tier(tier)
        stats = ds.statistics(tier)

        return jsonify({
            'success': True,
            'tier': tier.value,
            'data': _serialize_groups(grouped),
            'metadata': {
                ds.total_key: stats.total_records,
                'totalCountries': stats.total_countries,
                'accessibleCountries': stats.countries_with_data,
            },
        })

    @bp.route('/countries', methods=['GET'])
    @basic_access
    def accessible_countries():
        tier = current_tier()
        countries = dataset().accessible_countries(tier)

        return jsonify({
            'success': True,
            'tier': tier.value,
            'countries': countries,
            'totalCount': len(countries),
        })

    @bp.route('/country/<country>', methods=['GET'])
    @basic_access
    @validate_data(CountryParams, 'params')
    def by_country(country: str):
        tier = current_tier()
        records = dataset().by_country(tier, country)

        return jsonify({
            'success': True,
            'tier': tier.value,
            'country': country,
            name: [r.to_dict() for r in records],
            'count': len(records),
        })

    @bp.route('/statistics', methods=['GET'])
    @basic_access
    def statistics():
        tier = current_tier()
        ds = dataset()
        stats = ds.statistics(tier)

        result = stats.to_dict(ds.total_key)
        result['accessLevel'] = 'unlimited' if ds.is_unrestricted(tier) else 'restricted'
        result['tierBenefits'] = ds.policies.describe(tier, name)

        return jsonify({
            'success': True,
            'tier': tier.value,
            'statistics': result,
        })

    @bp.route('/access/<country>', methods=['GET'])
    @basic_access
    @validate_data(CountryParams, 'params')
    def check_access(country: str):
        tier = current_tier()
        has_access = dataset().has_country_access(tier, country)

        return jsonify({
            'success': True,
            'tier': tier.value,
            'country': country,
            'hasAccess': has_access,
            'message': (
                f'Access granted to {country}' if has_access
                else f'Access to {country} requires a higher subscription tier'
            ),
        })

    @bp.route('/tier/<tier>/preview', methods=['GET'])
    @basic_access
    @validate_data(TierParams, 'params')
    def preview_tier(tier: str):
        """Show what a (possibly different) tier would unlock."""
        current = current_tier()
        preview: Tier = g.validated.tier
        ds = dataset()

        stats = ds.statistics(preview)
        countries = ds.accessible_countries(preview)

        upgrade = None
        if preview != current:
            upgrade = {
                'message': f'Upgrade to {preview.value} tier to access this data',
                'benefits': (
                    f'Get access to {stats.total_countries} countries '
                    f'and {stats.total_records} {name}'
                ),
            }

        return jsonify({
            'success': True,
            'currentTier': current.value,
            'previewTier': preview.value,
            'preview': {
                ds.total_key: stats.total_records,
                'totalCountries': stats.total_countries,
                'sampleCountries': countries[:PREVIEW_SAMPLE_SIZE],
                'allCountries': countries,
                'upgrade': upgrade,
            },
        })

    return bp


airlines_bp = create_dataset_blueprint('airlines', lambda c: c.airlines)
airports_bp = create_dataset_blueprint('airports', lambda c: c.airports)
routes_bp = create_dataset_blueprint('routes', lambda c: c.routes)


@routes_bp.route('/from/<source_country>/to/<destination_country>', methods=['GET'])
@basic_access
@validate_data(RoutePairParams, 'params')
def routes_between(source_country: str, destination_country: str):
    """Routes from one country to another. Both must be accessible."""
    tier = current_tier()
    routes = get_catalogue().routes.between_countries(tier, source_country, destination_country)

    return jsonify({
        'success': True,
        'tier': tier.value,
        'sourceCountry': source_country,
        'destinationCountry': destination_country,
        'routes': [r.to_dict() for r in routes],
        'count': len(routes),
    })
