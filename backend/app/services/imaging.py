"""
GamePalette Imaging Utilities
Handles upload validation, decoding to RGBA buffers, cropping and resizing.
"""
import io
from typing import Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image

from app.config import config
from app.services.colors.errors import ImageDecodeError, InvalidParameterError

ImageInput = Union[np.ndarray, Image.Image]

# mime -> (offset, signature) pairs that must all match
_SIGNATURES = (
    ("image/jpeg", ((0, b"\xff\xd8\xff"),)),
    ("image/png", ((0, b"\x89PNG\r\n\x1a\n"),)),
    ("image/gif", ((0, b"GIF87a"),)),
    ("image/gif", ((0, b"GIF89a"),)),
    ("image/webp", ((0, b"RIFF"), (8, b"WEBP"))),
)
_MIN_HEADER_BYTES = 12


def _check_size(num_bytes: Optional[int]) -> None:
    if num_bytes and num_bytes > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(status_code=400, detail=f"Image exceeds the {config.MAX_FILE_MB}MB upload limit")


def validate_file_upload(file: UploadFile) -> None:
    """
    Reject uploads by declared size and content type before reading them.

    Raises:
        HTTPException: 400 when over the size limit, 415 for a non-image type
    """
    # Some clients send no size; the body length is checked again after reading
    _check_size(getattr(file, "size", None))

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type {file.content_type!r}. "
                   f"Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )


def sniff_image_type(file_bytes: bytes) -> Optional[str]:
    """MIME type from the file signature, or None if it matches no supported format."""
    for mime, parts in _SIGNATURES:
        if all(file_bytes[offset:offset + len(sig)] == sig for offset, sig in parts):
            return mime
    return None


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Sniff the file signature.

    Raises:
        HTTPException: 400 for truncated payloads and unknown signatures
    """
    if len(file_bytes) < _MIN_HEADER_BYTES:
        raise HTTPException(status_code=400, detail="Upload is too short to be an image")

    mime = sniff_image_type(file_bytes)
    if mime is None:
        raise HTTPException(status_code=400, detail="Payload is not a PNG, JPEG, GIF or WEBP image")
    return mime


def decode_image_bytes(file_bytes: bytes) -> np.ndarray:
    """
    Decode encoded image bytes into an RGBA uint8 array (H, W, 4).

    Raises:
        ImageDecodeError: If Pillow cannot read the data
    """
    try:
        with Image.open(io.BytesIO(file_bytes)) as pil_image:
            pil_image.load()
            return to_rgba_array(pil_image)
    except ImageDecodeError:
        raise
    except Exception as e:
        raise ImageDecodeError(f"Failed to decode image: {e}") from e


async def read_image(file: UploadFile) -> np.ndarray:
    """
    Read an upload, check its signature and decode it to RGBA.

    Raises:
        HTTPException: 400 for unreadable, oversized or non-image payloads
        ImageDecodeError: If the payload has an image signature but won't decode
    """
    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Could not read upload: {e}")

    _check_size(len(file_bytes))
    validate_magic_bytes(file_bytes)
    return decode_image_bytes(file_bytes)


def to_rgba_array(image: ImageInput) -> np.ndarray:
    """
    Normalize a decoded image to an RGBA uint8 array.

    Accepts a PIL image, a grayscale (H, W) array, or an RGB/RGBA (H, W, C) array.
    Arrays without alpha are treated as fully opaque.
    """
    if isinstance(image, Image.Image):
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return np.asarray(image, dtype=np.uint8).copy()

    if not isinstance(image, np.ndarray):
        raise ImageDecodeError(f"Unsupported image buffer type: {type(image).__name__}")

    arr = image
    if arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)

    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ImageDecodeError(f"Expected an (H, W, 3|4) pixel buffer, got shape {image.shape}")

    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=-1)

    return np.ascontiguousarray(arr)


def crop_region(rgba: np.ndarray, region: Optional[Sequence[int]]) -> np.ndarray:
    """
    Crop an RGBA buffer to ``(x, y, width, height)``, clamped to the image bounds.

    Raises:
        InvalidParameterError: If the region is malformed or falls outside the image
    """
    if region is None:
        return rgba

    if len(region) != 4:
        raise InvalidParameterError("Region must be (x, y, width, height)")

    x, y, w, h = (int(v) for v in region)
    if w <= 0 or h <= 0:
        raise InvalidParameterError(f"Region must have positive size, got {w}x{h}")

    height, width = rgba.shape[:2]
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(width, x + w), min(height, y + h)
    if x1 <= x0 or y1 <= y0:
        raise InvalidParameterError(f"Region {tuple(region)} lies outside the {width}x{height} image")

    return np.ascontiguousarray(rgba[y0:y1, x0:x1])


def fit_long_edge(width: int, height: int, max_edge: int) -> Tuple[int, int]:
    """
    Target size with the longer edge at most ``max_edge``; never upscales.

    Fractional sizes truncate, with a floor of one pixel.
    """
    w, h = float(width), float(height)
    if w > h:
        if w > max_edge:
            h = (h / w) * max_edge
            w = max_edge
    else:
        if h > max_edge:
            w = (w / h) * max_edge
            h = max_edge
    return max(1, int(w)), max(1, int(h))


def resize_long_edge(img: np.ndarray, max_edge: int = None) -> np.ndarray:
    """
    Resize image so the longest edge is at most max_edge pixels.

    Args:
        img: Input image array (H, W, C)
        max_edge: Maximum edge size (default from config)

    Returns:
        Resized image, or the input itself when already small enough
    """
    if max_edge is None:
        max_edge = config.SAMPLE_MAX_EDGE

    height, width = img.shape[:2]
    new_width, new_height = fit_long_edge(width, height, max_edge)

    if (new_width, new_height) == (width, height):
        return img

    if img.ndim == 3 and img.shape[2] == 4:
        return _resize_premultiplied(img, (new_width, new_height))

    # INTER_AREA for downscaling (better quality)
    return cv2.resize(img, (new_width, new_height), interpolation=cv2.INTER_AREA)


def _resize_premultiplied(rgba: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    """
    Area-resize straight-alpha RGBA without bleeding transparent RGB into opaque pixels.

    Color is weighted by alpha before averaging and divided back afterwards;
    fully transparent results keep black RGB.
    """
    work = rgba.astype(np.float32)
    work[..., :3] *= work[..., 3:4] / 255.0
    small = cv2.resize(work, size, interpolation=cv2.INTER_AREA)

    alpha = small[..., 3:4]
    rgb = np.where(alpha > 0, small[..., :3] * 255.0 / np.maximum(alpha, 1e-6), 0.0)
    out = np.concatenate([rgb, alpha], axis=-1)
    return np.clip(np.floor(out + 0.5), 0, 255).astype(np.uint8)


def get_image_dimensions(img: np.ndarray) -> Tuple[int, int]:
    """Return (width, height)."""
    height, width = img.shape[:2]
    return width, height
