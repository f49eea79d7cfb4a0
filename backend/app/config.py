"""
GamePalette Configuration
Manages environment variables and defaults for the palette service.
"""
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    return int(value) if value not in (None, "") else None


class Config:
    """Configuration class for GamePalette services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("GAMEPALETTE_MAX_FILE_MB", "10"))

    # Logging
    LOG_LEVEL: str = os.environ.get("GAMEPALETTE_LOG_LEVEL", "INFO")

    # Pixel sampler (shared by both engines; results are only comparable with equal values)
    SAMPLE_MAX_EDGE: int = int(os.environ.get("GAMEPALETTE_SAMPLE_MAX_EDGE", "200"))
    SAMPLE_ALPHA_MIN: int = int(os.environ.get("GAMEPALETTE_SAMPLE_ALPHA_MIN", "128"))
    SAMPLE_STRIDE: int = int(os.environ.get("GAMEPALETTE_SAMPLE_STRIDE", "4"))

    # K-means
    KMEANS_MAX_ITERATIONS: int = int(os.environ.get("GAMEPALETTE_KMEANS_MAX_ITERATIONS", "20"))
    KMEANS_SEED: Optional[int] = _optional_int("GAMEPALETTE_KMEANS_SEED")

    # Extraction defaults
    MIN_COLOR_COUNT: int = 3
    MAX_COLOR_COUNT: int = 8
    DEFAULT_COLOR_COUNT: int = int(os.environ.get("GAMEPALETTE_DEFAULT_COLOR_COUNT", "5"))
    DEFAULT_METHOD: str = os.environ.get("GAMEPALETTE_DEFAULT_METHOD", "histogram")

    # CORS
    ALLOWED_ORIGINS: str = os.environ.get("GAMEPALETTE_ALLOWED_ORIGINS", "http://localhost:3000")

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/webp", "image/gif"]

    @classmethod
    def validate_color_count(cls, count: int) -> bool:
        """Validate requested palette size."""
        return cls.MIN_COLOR_COUNT <= count <= cls.MAX_COLOR_COUNT

    @classmethod
    def allowed_origins(cls) -> list:
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
