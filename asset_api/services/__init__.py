"""
Business logic services for the Asset Transfer API.
Services handle ledger operations separate from API endpoints.
"""

from asset_api.services.asset_service import AssetService, encode_argument
from asset_api.services.metrics import MetricsCollector, get_metrics_collector

__all__ = [
    "AssetService",
    "MetricsCollector",
    "encode_argument",
    "get_metrics_collector",
]
