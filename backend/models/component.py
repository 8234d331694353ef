"""Component models: stored records and the /api/components wire shapes."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from backend.config import settings

# camelCase on the wire, snake_case in Python
CAMEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class Component(BaseModel):
    """Core component model. Represents a row in the components table."""

    model_config = CAMEL_CONFIG

    id: UUID
    code: str
    original_code: str
    properties: dict[str, Any] = Field(default_factory=dict)
    title: str = "Untitled Component"
    description: str = ""
    created_at: datetime
    updated_at: datetime


class SaveComponentRequest(BaseModel):
    """What the client sends to POST /api/components/save."""

    model_config = {**CAMEL_CONFIG, "extra": "forbid"}

    code: str = Field(min_length=1, max_length=settings.MAX_CODE_LENGTH)
    properties: dict[str, Any] = Field(default_factory=dict)
    title: str | None = Field(default=None, max_length=settings.MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=settings.MAX_DESCRIPTION_LENGTH)


class UpdateComponentRequest(BaseModel):
    """What the client sends to update a component. All fields optional."""

    model_config = {**CAMEL_CONFIG, "extra": "forbid"}

    code: str | None = Field(default=None, min_length=1, max_length=settings.MAX_CODE_LENGTH)
    properties: dict[str, Any] | None = None
    title: str | None = Field(default=None, max_length=settings.MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=settings.MAX_DESCRIPTION_LENGTH)


class SaveComponentResponse(BaseModel):
    """What the save endpoint returns."""

    model_config = CAMEL_CONFIG

    id: UUID
    code: str
    url: str
    share_url: str


class ComponentResponse(BaseModel):
    """What the API returns for a single component."""

    model_config = CAMEL_CONFIG

    id: UUID
    code: str
    properties: dict[str, Any]
    title: str
    description: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, component: Component) -> ComponentResponse:
        """Convert internal Component model to public API response."""
        return cls(
            id=component.id,
            code=component.code,
            properties=component.properties,
            title=component.title,
            description=component.description,
            created_at=component.created_at,
            updated_at=component.updated_at,
        )


class ComponentSummary(BaseModel):
    """List/search row: metadata without code."""

    model_config = CAMEL_CONFIG

    id: UUID
    title: str
    description: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, component: Component) -> ComponentSummary:
        return cls(
            id=component.id,
            title=component.title,
            description=component.description,
            created_at=component.created_at,
            updated_at=component.updated_at,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ComponentListResponse(BaseModel):
    """Paged list or search result."""

    items: list[ComponentSummary]
    pagination: Pagination


class ComponentStats(BaseModel):
    """Counts over the whole store. "Today" means the last 24 hours."""

    model_config = CAMEL_CONFIG

    total: int
    created_today: int
    created_this_week: int
    created_this_month: int
    updated_today: int


class DeleteComponentResponse(BaseModel):
    success: bool = True
    message: str = "Component deleted successfully"
