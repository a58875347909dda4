"""
Benefit Survey - FastAPI Application

Main entry point for the survey backend.

Flow:
- Wizard (client) walks the respondent through scheme selection,
  current benefits, contribution history and suggestions
- FeedbackSubmissionClient validates the session and POSTs it
- /feedback re-validates with the same rules and stores a SubmissionRecord
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers import feedback_router
from .database import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Social Security Benefit Survey",
    description="""
    Collects which social-insurance scheme a respondent belongs to, their
    contribution history, and the benefit improvements they would like to see.

    ## Endpoints
    - **POST /feedback**: store one completed survey run
    - **GET /feedback/schemes**: schemes and their benefits
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors: 400 with {"error"} like every other rejection."""
    errors = exc.errors()
    if any(err.get("type") == "missing" for err in errors):
        message = "Missing required fields"
    else:
        message = "Invalid request body"
    logger.warning(f"Rejected request to {request.url.path}: {message}")
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "details": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in errors
            ],
        },
    )


# Include routers
app.include_router(feedback_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Social Security Benefit Survey",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "submit_feedback": "POST /feedback",
            "schemes": "GET /feedback/schemes",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


# For running with: python -m benefit_survey.main
if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
