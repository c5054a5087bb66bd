"""
API 路由包
"""
from .arena import router as arena_router

__all__ = [
    "arena_router",
]
