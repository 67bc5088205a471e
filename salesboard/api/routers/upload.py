# salesboard/api/routers/upload.py

import time
import uuid
import shutil
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from salesboard.api.deps import get_cache, get_gateway, get_settings
from salesboard.api.schemas.schemas import UploadResponse
from salesboard.core.errors import PersistenceFailure
from salesboard.services.ingestor import parse_batch

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])

SUCCESS_MESSAGE = "Data successfully uploaded and processed"
FAILURE_MESSAGE = "Failed to upload data"


def _save(file: UploadFile, folder: Path) -> Path:
    name = Path(file.filename or "upload.csv").name
    file_path = folder / f"{uuid.uuid4()}_{name}"
    with file_path.open("wb") as buffer:
        shutil.copyfileobj(file.file, buffer)
    return file_path


@router.post("/upload", response_model=UploadResponse)
async def upload_files(
    files: Optional[List[UploadFile]] = File(None),
    gateway=Depends(get_gateway),
    settings=Depends(get_settings),
    cache=Depends(get_cache),
):
    """
    Parse every uploaded CSV and store all rows in one transaction.

    Either every row of every file is stored, or none is.
    """
    files = files or []
    settings.upload_dir.mkdir(parents=True, exist_ok=True)

    saved: List[Path] = []
    try:
        for file in files:
            saved.append(await run_in_threadpool(_save, file, settings.upload_dir))

        # all files are parsed before the transaction starts
        records = await run_in_threadpool(parse_batch, saved)

        deadline = time.monotonic() + settings.upload_timeout_seconds
        try:
            count = await run_in_threadpool(gateway.persist, records, deadline)
        except PersistenceFailure as e:
            logger.error("Upload of %d file(s) failed: %s", len(saved), e)
            return PlainTextResponse(FAILURE_MESSAGE, status_code=500)
    finally:
        # the ingestor removes what it read; this catches files it never reached
        for path in saved:
            path.unlink(missing_ok=True)

    if cache is not None:
        await run_in_threadpool(cache.invalidate)

    logger.info("Stored %d rows from %d file(s)", count, len(saved))
    return {"message": SUCCESS_MESSAGE}
