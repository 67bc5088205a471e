from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from typing import List, Optional

from salesboard.api.deps import get_cache, get_gateway
from salesboard.api.schemas.schemas import CategorySummaryResponse
from salesboard.core.cache import cache_key_builder

router = APIRouter(prefix="/analytics", tags=["Analytics"])


# ------------------------------
# Per-category totals for the summary cards
# ------------------------------
@router.get("/categories", response_model=CategorySummaryResponse)
async def analytics_categories(
    category: Optional[List[str]] = Query(None),
    gateway=Depends(get_gateway),
    cache=Depends(get_cache),
):
    selected = ",".join(sorted(category)) if category is not None else None
    key = cache_key_builder("categories", category=selected)
    if cache is not None:
        cached = await run_in_threadpool(cache.get, key)
        if cached is not None:
            return cached

    result = await run_in_threadpool(gateway.category_totals, category)

    if cache is not None:
        await run_in_threadpool(cache.set, key, result)
    return result
