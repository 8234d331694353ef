"""Public page serving: GET /share/{component_id} renders a saved component."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from backend.repos.component_repo import ComponentRepo, get_component_repo
from backend.services.preview import render_error_page, render_share_page
from engine.jsx.compiler import get_compiler
from engine.jsx.errors import MalformedInputError

router = APIRouter(tags=["pages"])

_CACHE_CONTROL = "no-cache"


@router.get("/share/{component_id}", response_class=HTMLResponse)
async def share_component(
    component_id: UUID,
    repo: ComponentRepo = Depends(get_component_repo),
) -> HTMLResponse:
    """
    Serve a saved component as a standalone preview page.

    Returns 404 if the component does not exist and 422 if its stored code
    no longer compiles.
    """
    component = await repo.get(component_id)
    if component is None:
        return HTMLResponse(
            content=render_error_page("Component not found", message="The component does not exist or has been deleted."),
            status_code=404,
        )

    try:
        compiled = get_compiler().compile(component.code)
    except MalformedInputError as e:
        return HTMLResponse(content=render_error_page(component.title, message=str(e)), status_code=422)

    return HTMLResponse(
        content=render_share_page(compiled, component.title),
        headers={"Cache-Control": _CACHE_CONTROL, "X-Content-Type-Options": "nosniff"},
    )
