"""
Credential endpoints.

- POST /auth/token - Issue a credential for a tier (none for free)
- POST /auth/verify - Verify a credential and report why it failed
"""

import logging

from flask import Blueprint, g, jsonify

from securedair.access import Tier
from securedair.api.access import extract_token, get_credentials
from securedair.api.schemas import TokenCreateRequest, TokenVerifyRequest, validate_data

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

COOKIE_NAME = 'Authorization'


@auth_bp.route('/token', methods=['POST'])
@validate_data(TokenCreateRequest)
def create_token():
    """
    Issue a credential for the requested tier.

    Body: {"tier": "free" | "pro" | "elite"}

    The free tier has no credential: token is null and any existing
    Authorization cookie is cleared.
    """
    manager = get_credentials()
    tier: Tier = g.validated.tier
    token = manager.issue_token(tier)

    response = jsonify({
        'success': True,
        'tier': tier.value,
        'token': token,
        'expiresIn': manager.ttl_seconds if token else None,
    })

    if token:
        response.set_cookie(
            COOKIE_NAME,
            f'Bearer {token}',
            max_age=manager.ttl_seconds,
            httponly=True,
            samesite='Lax',
        )
        logger.info(f'Issued {tier.value} tier credential')
    else:
        response.delete_cookie(COOKIE_NAME)

    return response


@auth_bp.route('/verify', methods=['POST'])
@validate_data(TokenVerifyRequest)
def verify_token():
    """
    Verify a credential.

    Body (optional): {"token": "...", "requiredTier": "pro"}
    Falls back to the request's Authorization header or cookie.

    Unlike the data endpoints, failures are reported rather than
    downgraded to the free tier: expired, malformed and bad-tier tokens
    each return 401 with their own error message.
    """
    manager = get_credentials()
    body: TokenVerifyRequest = g.validated
    token = body.token or extract_token()

    if body.required_tier is not None:
        validation = manager.validate_tier_access(token, body.required_tier)
    else:
        validation = manager.verify_token(token)

    if not validation.is_valid:
        logger.debug(f'Credential verification failed: {validation.error}')
        return jsonify(validation.to_dict()), 401

    return jsonify(validation.to_dict())
