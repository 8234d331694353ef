"""Request/response shapes for the /api/jsx endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from backend.config import settings
from backend.models.component import CAMEL_CONFIG

StyleValue = str | int | float | bool


class CodeRequest(BaseModel):
    """Body for analyze, validate and compile."""

    model_config = {"extra": "forbid"}

    code: str = Field(max_length=settings.MAX_CODE_LENGTH)


class ElementEditBody(BaseModel):
    """One element's edits: {"style": {...}, "textContent": "..."}."""

    model_config = {**CAMEL_CONFIG, "extra": "forbid"}

    style: dict[str, StyleValue] = Field(default_factory=dict)
    text_content: str | None = None


class PatchRequest(BaseModel):
    """What the client sends to POST /api/jsx/patch."""

    model_config = {"extra": "forbid"}

    code: str = Field(max_length=settings.MAX_CODE_LENGTH)
    edits: dict[str, ElementEditBody]
    fallback: bool = False


class PatchResponse(BaseModel):
    code: str
    changed: bool


class AnalyzeResponse(BaseModel):
    """Elements as emitted by StructureEntry.to_dict() (camelCase keys)."""

    elements: list[dict[str, Any]]


class ValidateResponse(BaseModel):
    valid: bool
    error: str | None = None


class CompileErrorBody(BaseModel):
    message: str
    line: int | None = None
    column: int | None = None
    type: str = "syntax"


class CompileResponse(BaseModel):
    success: bool
    name: str | None = None
    code: str | None = None
    wrapped: bool = False
    error: CompileErrorBody | None = None
