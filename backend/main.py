from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.services.colors import __version__
from app.api.v1 import router as v1_router
from app.config import config
from app.schemas import HealthResponse
from app.services.colors.errors import ImageDecodeError, InvalidParameterError
from app.utils.logging import get_logger

logger = get_logger()

app = FastAPI(
    title="GamePalette Backend",
    description="Color palette extraction and derivation for game-art workflows",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.exception_handler(ImageDecodeError)
async def image_decode_error_handler(request: Request, exc: ImageDecodeError):
    logger.warning(f"Image decode failed: {exc}", extra={"path": request.url.path})
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(InvalidParameterError)
async def invalid_parameter_handler(request: Request, exc: InvalidParameterError):
    logger.warning(f"Rejected parameters: {exc}", extra={"path": request.url.path})
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=__version__, service="gamepalette-core")


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "GamePalette Backend API",
        "version": __version__,
        "docs": "/docs"
    }
