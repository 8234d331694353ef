"""Component routes: save, load, update, delete, list, search, stats."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from backend.config import settings
from backend.middleware.errors import ValidationFailed
from backend.middleware.rate_limit import enforce_api_rate_limit
from backend.models.component import (
    ComponentListResponse,
    ComponentResponse,
    ComponentStats,
    DeleteComponentResponse,
    SaveComponentRequest,
    SaveComponentResponse,
    UpdateComponentRequest,
)
from backend.repos.component_repo import ComponentRepo, get_component_repo
from backend.services.component_service import ComponentService
from backend.services.sanitizer import UnsafeCodeError, sanitize_properties, validate_code

router = APIRouter(
    prefix="/api/components",
    tags=["components"],
    dependencies=[Depends(enforce_api_rate_limit)],
)

MAX_PAGE_SIZE = 50


def get_component_service(repo: ComponentRepo = Depends(get_component_repo)) -> ComponentService:
    return ComponentService(repo)


def _checked_code(code: str) -> None:
    try:
        validate_code(code)
    except UnsafeCodeError as e:
        raise ValidationFailed([{"msg": str(e), "loc": ["body", "code"], "type": "value_error"}]) from e


def _checked_properties(properties: dict[str, Any]) -> dict[str, Any]:
    try:
        return sanitize_properties(properties)
    except UnsafeCodeError as e:
        raise ValidationFailed([{"msg": str(e), "loc": ["body", "properties"], "type": "value_error"}]) from e


def _base_url(request: Request) -> str:
    return settings.PUBLIC_URL or str(request.base_url).rstrip("/")


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Component not found")


@router.post("/save", status_code=201)
async def save_component(
    req: SaveComponentRequest,
    request: Request,
    service: ComponentService = Depends(get_component_service),
) -> SaveComponentResponse:
    """
    Save a component with its inspector edits.

    The stored code has the edits applied; the code as sent is kept as
    originalCode.
    """
    _checked_code(req.code)
    properties = _checked_properties(req.properties)

    component = await service.save(req, properties)

    base = _base_url(request)
    return SaveComponentResponse(
        id=component.id,
        code=component.code,
        url=f"{base}/api/components/{component.id}",
        share_url=f"{base}/share/{component.id}",
    )


@router.get("", status_code=200)
async def list_components(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    service: ComponentService = Depends(get_component_service),
) -> ComponentListResponse:
    """List components, most recently updated first. limit is capped at 50."""
    return await service.list(page, min(limit, MAX_PAGE_SIZE))


@router.get("/search", status_code=200)
async def search_components(
    q: str = Query(min_length=1, max_length=200),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    service: ComponentService = Depends(get_component_service),
) -> ComponentListResponse:
    """Case-insensitive search over title, description and code."""
    return await service.list(page, min(limit, MAX_PAGE_SIZE), query=q)


@router.get("/stats", status_code=200)
async def component_stats(service: ComponentService = Depends(get_component_service)) -> ComponentStats:
    """Store-wide counts."""
    return await service.repo.stats()


@router.get("/{component_id}", status_code=200)
async def get_component(
    component_id: UUID,
    service: ComponentService = Depends(get_component_service),
) -> ComponentResponse:
    """Load a saved component by ID."""
    component = await service.get(component_id)
    if not component:
        raise _not_found()
    return ComponentResponse.from_model(component)


@router.put("/{component_id}", status_code=200)
async def update_component(
    component_id: UUID,
    req: UpdateComponentRequest,
    service: ComponentService = Depends(get_component_service),
) -> ComponentResponse:
    """Update code, edits, title or description of a component."""
    if req.code is not None:
        _checked_code(req.code)
    properties = _checked_properties(req.properties) if req.properties is not None else None

    component = await service.update(component_id, req, properties)
    if not component:
        raise _not_found()
    return ComponentResponse.from_model(component)


@router.delete("/{component_id}", status_code=200)
async def delete_component(
    component_id: UUID,
    service: ComponentService = Depends(get_component_service),
) -> DeleteComponentResponse:
    """Delete a component."""
    if not await service.delete(component_id):
        raise _not_found()
    return DeleteComponentResponse()
