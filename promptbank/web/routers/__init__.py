from .prompts import router as prompts_router
from .system import router as system_router

__all__ = [
    "prompts_router",
    "system_router",
]
