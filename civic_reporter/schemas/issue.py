"""Issue request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Category = Literal["roads", "sanitation", "lighting", "water", "drainage", "parks", "safety", "other"]
Status = Literal["reported", "in_progress", "resolved"]
Priority = Literal["low", "medium", "high"]


class IssueCreate(BaseModel):
    """A citizen submission. ``status`` is accepted but always overridden to reported."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: Category
    priority: str | None = None
    status: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    address: str | None = None
    reporter_name: str | None = None
    reporter_email: str | None = None
    reporter_phone: str | None = None

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator(
        "priority",
        "status",
        "latitude",
        "longitude",
        "address",
        "reporter_name",
        "reporter_email",
        "reporter_phone",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        # HTML forms submit untouched inputs as empty strings
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def check_coordinates(self) -> IssueCreate:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self


class IssueFilter(BaseModel):
    """Conjunctive exact-match list filter. Empty values match everything; unknown values match nothing."""

    status: str | None = None
    category: str | None = None
    priority: str | None = None
    search: str | None = None

    @field_validator("status", "category", "priority", "search", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class IssueStatusUpdate(BaseModel):
    status: Status
    admin_notes: str | None = None


class IssueResponse(BaseModel):
    id: int
    title: str
    description: str
    category: str
    status: str
    priority: str
    latitude: float | None
    longitude: float | None
    address: str | None
    image_path: str | None
    reporter_name: str | None
    reporter_email: str | None
    reporter_phone: str | None
    created_at: datetime
    updated_at: datetime
    admin_notes: str | None

    model_config = {"from_attributes": True}


class IssueListResponse(BaseModel):
    issues: list[IssueResponse]
    total: int
    page: int
    limit: int


class IssueCreatedResponse(BaseModel):
    id: int
    message: str = "Issue reported successfully"
    status: str


class MessageResponse(BaseModel):
    message: str


class CategoryCount(BaseModel):
    category: str
    count: int


class StatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    reported: int
    in_progress: int = Field(alias="inProgress")
    resolved: int
    categories: list[CategoryCount]
