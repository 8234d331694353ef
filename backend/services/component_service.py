"""
Component service: applies inspector edits to component code and persists
the result.

Edit sets arrive keyed by element. Only keys that look like path
expressions ("//div/h1", "div/p[2]") are patched; any other key is kept
in the stored properties but never touches the code. A patch failure
never blocks a save: the unpatched code is stored instead.
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from backend.config import settings
from backend.models.component import (
    Component,
    ComponentListResponse,
    ComponentSummary,
    Pagination,
    SaveComponentRequest,
    UpdateComponentRequest,
)
from backend.repos.component_repo import ComponentRepo
from engine.jsx.errors import PatchError
from engine.jsx.updater import update_source

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Component"


def path_edits(properties: dict[str, Any]) -> dict[str, Any]:
    """The entries of an edit set whose keys are path expressions."""
    return {key: value for key, value in properties.items() if key.startswith("//") or "/" in key}


async def apply_properties(code: str, properties: dict[str, Any]) -> str:
    """Patch `code` with the path-keyed entries of `properties`. Falls back to `code` on PatchError."""
    edits = path_edits(properties)
    if not edits:
        return code

    try:
        return await update_source(code, edits, fallback=settings.FALLBACK_TARGETING)
    except PatchError as e:
        logger.warning("Failed to update JSX code with properties: %s", e)
        return code


class ComponentService:
    """Save/load/update flow over a ComponentRepo."""

    def __init__(self, repo: ComponentRepo):
        self.repo = repo

    async def save(self, req: SaveComponentRequest, properties: dict[str, Any]) -> Component:
        """
        Patch and store a new component.

        Args:
            req: validated request (code, title, description)
            properties: sanitized edit set

        Returns:
            The stored Component; `code` is patched, `original_code` is as sent
        """
        now = datetime.now(UTC)
        component = Component(
            id=uuid4(),
            code=await apply_properties(req.code, properties),
            original_code=req.code,
            properties=properties,
            title=req.title or DEFAULT_TITLE,
            description=req.description or "",
            created_at=now,
            updated_at=now,
        )
        saved = await self.repo.create(component)
        logger.info("Saved component %s (%d edit(s))", saved.id, len(properties))
        return saved

    async def get(self, component_id: UUID) -> Component | None:
        return await self.repo.get(component_id)

    async def update(
        self,
        component_id: UUID,
        req: UpdateComponentRequest,
        properties: dict[str, Any] | None,
    ) -> Component | None:
        """
        Re-patch and store an existing component. Returns None when it does not exist.

        New properties are applied on top of the new code, or of the stored
        (already patched) code when none is sent. original_code only changes
        when new code is sent.
        """
        existing = await self.repo.get(component_id)
        if existing is None:
            return None

        code = req.code or existing.code
        if properties:
            code = await apply_properties(code, properties)

        changes: dict[str, Any] = {
            "code": code,
            "original_code": req.code or existing.original_code,
            "updated_at": datetime.now(UTC),
        }
        if properties is not None:
            changes["properties"] = properties
        if req.title is not None:
            changes["title"] = req.title
        if req.description is not None:
            changes["description"] = req.description

        updated = await self.repo.update(component_id, changes)
        logger.info("Updated component %s", component_id)
        return updated

    async def delete(self, component_id: UUID) -> bool:
        deleted = await self.repo.delete(component_id)
        if deleted:
            logger.info("Deleted component %s", component_id)
        return deleted

    async def list(self, page: int, limit: int, query: str | None = None) -> ComponentListResponse:
        """One page of summaries, most recently updated first. `query` switches to search."""
        offset = (page - 1) * limit
        if query:
            items, total = await self.repo.search(query, limit=limit, offset=offset)
        else:
            items, total = await self.repo.list(limit=limit, offset=offset)

        return ComponentListResponse(
            items=[ComponentSummary.from_model(c) for c in items],
            pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
        )
