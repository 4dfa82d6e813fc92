"""
Tier-scoped dataset services.

Wraps the immutable record collections with per-tier filtering, grouping
and statistics. Routes add two-sided country authorization.
"""

from securedair.services.catalogue import AviationCatalogue
from securedair.services.dataset import DatasetFilter, TierStatistics
from securedair.services.routes import RouteDataset

__all__ = ['AviationCatalogue', 'DatasetFilter', 'RouteDataset', 'TierStatistics']
