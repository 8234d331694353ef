"""
Pydantic models for Inspector.

All data shapes defined here. No imports from db, repos, or routes.
"""

from backend.models.component import (
    Component,
    ComponentListResponse,
    ComponentResponse,
    ComponentStats,
    ComponentSummary,
    DeleteComponentResponse,
    Pagination,
    SaveComponentRequest,
    SaveComponentResponse,
    UpdateComponentRequest,
)
from backend.models.jsx import (
    AnalyzeResponse,
    CodeRequest,
    CompileErrorBody,
    CompileResponse,
    ElementEditBody,
    PatchRequest,
    PatchResponse,
    ValidateResponse,
)

__all__ = [
    # Component models
    "Component",
    "SaveComponentRequest",
    "UpdateComponentRequest",
    "SaveComponentResponse",
    "ComponentResponse",
    "ComponentSummary",
    "ComponentListResponse",
    "ComponentStats",
    "DeleteComponentResponse",
    "Pagination",
    # JSX endpoint models
    "CodeRequest",
    "ElementEditBody",
    "PatchRequest",
    "PatchResponse",
    "AnalyzeResponse",
    "ValidateResponse",
    "CompileErrorBody",
    "CompileResponse",
]
