"""
Per-request tier resolution.

The caller's credential is read from the Authorization header
('Bearer <token>'), falling back to an Authorization cookie holding the
same value when the header is absent or its token does not verify. An
absent or unverifiable credential resolves to FREE; the only place a tier
is reported as invalid is /auth/verify.
"""

import logging
from functools import wraps
from typing import List, Optional

from flask import current_app, g, jsonify, request

from securedair.access import CredentialManager, Tier, tier_features
from securedair.services import AviationCatalogue

logger = logging.getLogger(__name__)

BEARER_PREFIX = 'Bearer '


def _strip_bearer(value: Optional[str]) -> Optional[str]:
    if not value or not value.startswith(BEARER_PREFIX):
        return None
    return value[len(BEARER_PREFIX):].strip() or None


def candidate_tokens() -> List[str]:
    """Bearer tokens sent with the request, header first."""
    tokens = [
        _strip_bearer(request.headers.get('Authorization')),
        _strip_bearer(request.cookies.get('Authorization')),
    ]
    return [t for t in tokens if t]


def extract_token() -> Optional[str]:
    """Bearer token from the request header or cookie, if any."""
    tokens = candidate_tokens()
    return tokens[0] if tokens else None


def get_credentials() -> CredentialManager:
    return current_app.config['CREDENTIALS']


def get_catalogue() -> AviationCatalogue:
    return current_app.config['CATALOGUE']


def resolve_request_tier() -> Tier:
    """First credential that verifies wins; none resolves to FREE."""
    credentials = get_credentials()
    for token in candidate_tokens():
        validation = credentials.verify_token(token)
        if validation.is_valid:
            return validation.tier
        logger.debug(f'Credential rejected: {validation.error}')
    return Tier.FREE


def current_tier() -> Tier:
    """Tier resolved by the feature guard for this request."""
    tier = g.get('tier')
    if tier is None:
        tier = resolve_request_tier()
        g.tier = tier
    return tier


def require_feature(feature_id: str):
    """
    Guard a view behind a tier feature.

    Resolves the caller's tier, stores it on flask.g and rejects the
    request with 403 if the tier does not unlock feature_id.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            tier = resolve_request_tier()
            features = tier_features(tier)

            if feature_id not in features:
                logger.info(f'Feature {feature_id!r} denied for {tier.value} tier')
                return jsonify({
                    'error': 'Access denied',
                    'message': f"Feature '{feature_id}' requires a higher tier",
                    'requiredFeature': feature_id,
                    'userTier': tier.value,
                    'userFeatures': features,
                }), 403

            g.tier = tier
            return view(*args, **kwargs)
        return wrapper
    return decorator


basic_access = require_feature('basic_access')
