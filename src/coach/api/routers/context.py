"""Cached financial context endpoints."""

from fastapi import APIRouter, Depends

from coach.api.deps import get_context_cache
from coach.api.schemas import CachedContextResponse
from coach.core.exceptions import NotFoundError
from coach.services import ContextCache

router = APIRouter(prefix="/context", tags=["context"])


@router.get("/{link_id}", response_model=CachedContextResponse)
def get_cached_context(
    link_id: str,
    cache: ContextCache = Depends(get_context_cache),
) -> CachedContextResponse:
    """Return the cached context for a link if it has not expired."""
    entry = cache.get_entry(link_id)
    if entry is None:
        raise NotFoundError("Cached context", link_id)
    return CachedContextResponse.model_validate(entry)
