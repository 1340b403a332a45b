"""Prompt listing and lookup endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from promptbank.application import PromptResolutionError
from promptbank.bootstrap import get_container
from promptbank.data import (
    Ambiguous,
    InvalidPromptNameError,
    PromptNotFoundError,
    PromptStoreError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/prompts")
async def list_prompts() -> dict[str, Any]:
    return get_container().prompts.list_prompts()


@router.get("/prompts/resolve")
async def resolve_prompt(q: str) -> dict[str, Any]:
    result = get_container().prompts.resolve(q)
    return {"query": q, **result.to_dict()}


@router.get("/prompts/show")
async def show_prompt(q: str) -> dict[str, Any]:
    try:
        return get_container().prompts.show(q)
    except PromptResolutionError as exc:
        status_code = 409 if isinstance(exc.result, Ambiguous) else 404
        detail = {
            "message": str(exc),
            "suggestions": [
                {"name": p.name, "short_code": p.short_code, "description": p.description}
                for p in exc.suggestions
            ],
        }
        raise HTTPException(status_code=status_code, detail=detail) from exc
    except InvalidPromptNameError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PromptNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PromptStoreError as exc:
        # Resolved, but the stored file could not be read or parsed
        logger.warning("[Prompts] Cannot show %r: %s", q, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
