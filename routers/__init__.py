"""Routers module for the Local Directory API."""

from directory.router import router as directory_router
from quiz.router import router as quiz_router

from .auth import router as auth_router

__all__ = [
    "auth_router",
    "directory_router",
    "quiz_router",
]
