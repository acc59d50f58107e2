import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from app.core.config import settings
from app.storage.csv_store import csv_store
from app.api.routes import users

# Configure root logging once; every module logs through logging.getLogger(__name__)
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: Make sure the backing CSV file exists with its header row.
    A failure here propagates and aborts startup.
    """
    csv_store.initialize()
    yield


app = FastAPI(
    title="User CSV Registry API",
    description="Append-only user registration backed by a CSV file",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware - allows browser frontends to call the API directly
# Without this, browser would block requests due to same-origin policy
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),  # List of allowed frontend URLs
    allow_methods=["*"],  # Allow all HTTP methods
    allow_headers=["*"],  # Allow all headers
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"error": ...} instead of FastAPI's {"detail": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors like any other failed validation"""
    reasons = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body') or 'body'}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request payload: {reasons}"},
    )


# Register API route modules
# All routes are prefixed with /api for consistency
app.include_router(users.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {"message": "User CSV Registry API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """Health check endpoint - used by monitoring/deployment tools"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running at http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
