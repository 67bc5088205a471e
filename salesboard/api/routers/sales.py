from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from salesboard.api.deps import get_gateway
from salesboard.api.schemas.schemas import SalesRecordResponse

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get("", response_model=List[SalesRecordResponse])
async def list_sales(
    category: Optional[List[str]] = Query(None),
    gateway=Depends(get_gateway),
):
    rows = await run_in_threadpool(gateway.fetch_all, category)
    return [SalesRecordResponse.from_row(row) for row in rows]
