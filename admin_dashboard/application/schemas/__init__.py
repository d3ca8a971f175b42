from .common import (
    FormPrefillResponse,
    MutationResponse,
    RecordListResponse,
    RecordResponse,
    ToggleResponse,
)
from .buyer import ApprovalStatusUpdate, BuyerOrderSummarySchema, BuyerOrdersResponse
from .order import LineStatusUpdate, OrderLineSchema, OrderListResponse
from .dashboard import DashboardStatsResponse
from .seller import SellerListResponse

__all__ = [
    "FormPrefillResponse",
    "MutationResponse",
    "RecordListResponse",
    "RecordResponse",
    "ToggleResponse",
    "ApprovalStatusUpdate",
    "BuyerOrderSummarySchema",
    "BuyerOrdersResponse",
    "LineStatusUpdate",
    "OrderLineSchema",
    "OrderListResponse",
    "DashboardStatsResponse",
    "SellerListResponse",
]
