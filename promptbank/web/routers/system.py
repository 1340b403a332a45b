"""System endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from promptbank import __version__

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/")
async def root() -> dict[str, str]:
    return {"service": "promptbank", "status": "ok", "version": __version__}
