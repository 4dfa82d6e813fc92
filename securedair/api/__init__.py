"""
API module for Secured Air.

Provides REST endpoints for:
- Airlines, airports and routes scoped to the caller's tier
- Credential issuance and verification
"""

from securedair.api.auth import auth_bp
from securedair.api.datasets import airlines_bp, airports_bp, routes_bp

__all__ = ['airlines_bp', 'airports_bp', 'auth_bp', 'routes_bp']
