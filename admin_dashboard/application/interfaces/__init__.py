from .marketplace_api import MarketplaceApi, MultipartPayload

__all__ = [
    "MarketplaceApi",
    "MultipartPayload",
]
