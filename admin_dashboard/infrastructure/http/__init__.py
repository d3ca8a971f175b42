from .marketplace_api_client import MarketplaceApiClient

__all__ = ["MarketplaceApiClient"]
