"""Dependency injection for FastAPI."""

from fastapi import Depends

from coach.app_context import AppContext, get_app_context
from coach.services import ContextCache, ContextService


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_context_cache(context: AppContext = Depends(get_context)) -> ContextCache:
    """Provide the shared ContextCache instance."""
    return context.context_cache


def get_context_service(context: AppContext = Depends(get_context)) -> ContextService:
    """Provide ContextService instance."""
    return context.context_service
