"""Pydantic schemas for the dashboard stats endpoint."""

from pydantic import BaseModel, Field


class DashboardStatsResponse(BaseModel):
    counts: dict[str, int] = Field(default_factory=dict)
    active_buyers: int = 0
    errors: dict[str, str] = Field(default_factory=dict)

    model_config = {"from_attributes": True}
