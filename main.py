"""
FastAPI Application Entry Point

Integrates:
  - Solver API (/api/*)
  - Liveness check
  - Middleware for logging & error handling

Run: uvicorn main:app --reload --host 0.0.0.0 --port 5000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from api import router as solver_router
from config import Config
from infra import bootstrap_infrastructure

# Setup logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.

    Backends are built once here; a missing GEMINI_API_KEY fails startup.
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Question Paper Solver starting up...")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info(f"LLM Backend: {Config.LLM_BACKEND} ({Config.GEMINI_MODEL})")
    logger.info(f"OCR Backend: {Config.OCR_BACKEND}")
    logger.info(f"PDF Backend: {Config.PDF_BACKEND}")
    logger.info("=" * 60)

    if not hasattr(app.state, "infra"):
        app.state.infra = bootstrap_infrastructure()

    yield

    # Shutdown
    logger.info("Question Paper Solver shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Question Paper Solver API",
    description="Extracts question papers and generates step-by-step solutions",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal server error"},
        )


# Include routers
app.include_router(solver_router)


@app.get("/health/live")
async def health_live():
    """Liveness check; does not touch the generation endpoint."""
    return {"status": "alive"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Question Paper Solver API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "health": "GET /api/health",
            "process_text": "POST /api/process-text",
            "process_file": "POST /api/process-file",
            "job_status": "GET /api/status/{job_id}",
            "stored_paper": "GET /api/papers/{paper_id}",
            "health_live": "GET /health/live",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=Config.APP_PORT,
        reload=Config.ENVIRONMENT == "development",
    )
