"""
Secured Air Backend Package.

Aviation reference data API with subscription-tiered access, built with
Flask.

Modules:
    access/      Tiers, country policies and signed tier credentials
    api/         REST endpoints for datasets and credentials
    models/      Immutable airline, airport and route records
    ingestion/   CSV loaders for the reference data
    services/    Tier-scoped filtering, grouping and statistics
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
