"""JSX tool routes: analyze, validate, patch and compile without storing anything."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.middleware.rate_limit import enforce_api_rate_limit
from backend.models.jsx import (
    AnalyzeResponse,
    CodeRequest,
    CompileErrorBody,
    CompileResponse,
    PatchRequest,
    PatchResponse,
    ValidateResponse,
)
from engine.jsx.analyzer import analyze_structure
from engine.jsx.compiler import get_compiler
from engine.jsx.errors import MalformedInputError, PatchError
from engine.jsx.types import ElementEdit
from engine.jsx.updater import update_source, validate_jsx

router = APIRouter(
    prefix="/api/jsx",
    tags=["jsx"],
    dependencies=[Depends(enforce_api_rate_limit)],
)


@router.post("/analyze", status_code=200)
async def analyze(req: CodeRequest) -> AnalyzeResponse:
    """Every element with its addressable path expressions."""
    return AnalyzeResponse(elements=[entry.to_dict() for entry in analyze_structure(req.code)])


@router.post("/validate", status_code=200)
async def validate(req: CodeRequest) -> ValidateResponse:
    """Coarse markup check. Always 200; the verdict is in the body."""
    result = validate_jsx(req.code)
    return ValidateResponse(valid=result.valid, error=result.error)


@router.post("/patch", status_code=200)
async def patch(req: PatchRequest) -> PatchResponse:
    """Apply an edit set and return the new source."""
    edits = {
        path: ElementEdit(style=dict(body.style), text_content=body.text_content) for path, body in req.edits.items()
    }
    try:
        code = await update_source(req.code, edits, fallback=req.fallback)
    except PatchError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return PatchResponse(code=code, changed=code != req.code)


@router.post("/compile", status_code=200)
async def compile_code(req: CodeRequest) -> CompileResponse:
    """Syntax check for the live preview. Failures are reported in the body."""
    try:
        compiled = get_compiler().compile(req.code)
    except MalformedInputError as e:
        return CompileResponse(
            success=False,
            error=CompileErrorBody(message=str(e), line=e.line, column=e.column),
        )
    return CompileResponse(success=True, name=compiled.name, code=compiled.code, wrapped=compiled.wrapped)
