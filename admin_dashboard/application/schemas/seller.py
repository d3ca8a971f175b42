"""Pydantic schemas for the Sellers screen."""

from pydantic import Field

from admin_dashboard.application.schemas.common import RecordListResponse


class SellerListResponse(RecordListResponse):
    """Seller rows plus the header counters (total/active/approved/pending)."""

    summary: dict[str, int] = Field(default_factory=dict)
