"""HTTP application entrypoint (composition-only)."""

from __future__ import annotations

import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from promptbank.web.routers import prompts_router, system_router

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=os.getenv("PROMPTBANK_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

_cors_origins_raw = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173")
_cors_origins = [o.strip() for o in _cors_origins_raw.split(",") if o.strip()]

app = FastAPI(title="promptbank")
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(system_router)
app.include_router(prompts_router)


def run() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(
        app,
        host=os.getenv("PROMPTBANK_HOST", "127.0.0.1"),
        port=int(os.getenv("PROMPTBANK_PORT", "8000")),
    )


__all__ = ["app", "run"]
