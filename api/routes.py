"""
Solver API Routes

Thin I/O layer over the request orchestrator. Handlers decode the HTTP
request, run the blocking pipeline off the event loop, and return the
orchestrator's status code and body unchanged.

Endpoints:
  GET  /api/health
  POST /api/process-text
  POST /api/process-file
  GET  /api/status/{job_id}
  GET  /api/papers/{paper_id}
"""

import asyncio
import functools
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from infra import InfraBootstrap

# Setup logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api", tags=["solver"])


def get_bootstrap(request: Request) -> InfraBootstrap:
    """Infrastructure built at startup (see main.lifespan)."""
    return request.app.state.infra


async def _run_blocking(func, *args, **kwargs):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


@router.get("/health")
async def health(infra: InfraBootstrap = Depends(get_bootstrap)):
    """
    Probe the generation endpoint.

    Returns 200 with the probe outcome; 500 only if the probe itself raises.
    """
    try:
        result = await _run_blocking(infra.get_probe().check)
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "Service health check failed", "error": type(e).__name__},
        )

    body = {
        "status": "ok",
        "serviceConnected": result.valid,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
    if result.error:
        body["apiError"] = result.error
    return body


@router.post("/process-text")
async def process_text(request: Request, infra: InfraBootstrap = Depends(get_bootstrap)):
    """
    Generate solutions for pasted question text.

    Expected payload:
    {
        "text": "Q1. What is 2+2?",
        "filename": "optional name"
    }
    """
    client_host = request.client.host if request.client else "unknown"
    logger.info(f"Processing text request from: {client_host}")

    try:
        payload = await request.json()
    except ValueError:
        payload = None

    response = await _run_blocking(infra.get_orchestrator().process_text, payload)
    return JSONResponse(status_code=response.status_code, content=response.body)


@router.post("/process-file")
async def process_file(request: Request, infra: InfraBootstrap = Depends(get_bootstrap)):
    """
    Generate solutions for an uploaded PDF, PNG/JPEG image, or text file.

    Multipart form with a single "file" field. A plain text field named
    "file", or no field at all, counts as no upload. At most one byte past
    the upload ceiling is read; the part's full size goes to the validator.
    """
    client_host = request.client.host if request.client else "unknown"
    logger.info(f"Processing file upload from: {client_host}")

    limit = infra.config.max_upload_bytes
    form = await request.form()
    try:
        part = form.get("file")
        if isinstance(part, UploadFile):
            data = await part.read(limit + 1)
            size = part.size if part.size is not None else len(data)
            upload = (data, part.content_type, part.filename or None, size)
        else:
            upload = (None, None, None, None)
    finally:
        await form.close()

    response = await _run_blocking(infra.get_orchestrator().process_file, *upload)
    return JSONResponse(status_code=response.status_code, content=response.body)


@router.get("/status/{job_id}")
async def job_status(job_id: str):
    """Processing is synchronous, so every job is already complete."""
    return {"jobId": job_id, "status": "completed", "progress": 100}


@router.get("/papers/{paper_id}")
async def get_paper(paper_id: str, infra: InfraBootstrap = Depends(get_bootstrap)):
    """Fetch a stored processing result."""
    store = infra.result_store
    if store is None:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": "Result storage is disabled"},
        )

    response = await _run_blocking(store.get, paper_id)
    if response.status == "not_found":
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": "Paper not found"},
        )
    if response.status != "success":
        logger.error(f"Paper lookup failed: {response.error}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Failed to load paper"},
        )

    paper = response.paper
    return {
        "success": True,
        "id": paper.id,
        "filename": paper.filename,
        "fileType": paper.file_type,
        "extractedText": paper.extracted_text,
        "solutions": paper.solutions,
        "createdAt": paper.created_at,
    }
