"""Image compression before upload.

Selected photos are decoded, scaled down to a maximum width (never up),
and re-encoded as JPEG data-URIs so uploads stay small.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageOps

from facefortune.images.datauri import parse_data_uri, to_data_uri

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 20 * 1024 * 1024
MAX_WIDTH = 800
JPEG_QUALITY = 0.7
THUMBNAIL_WIDTH = 200


class ImageError(Exception):
    """Base class for user-visible preprocessing failures."""


class ImageTooLargeError(ImageError):
    def __init__(self, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
        self.max_bytes = max_bytes
        super().__init__(f"파일 크기는 {max_bytes // (1024 * 1024)}MB 이하여야 합니다.")


class ImageProcessingError(ImageError):
    def __init__(self) -> None:
        super().__init__("이미지 처리 중 오류가 발생했습니다.")


def target_size(width: int, height: int, max_width: int = MAX_WIDTH) -> tuple[int, int]:
    """Scale (width, height) down to max_width, preserving aspect ratio."""
    if width <= max_width:
        return width, height
    ratio = max_width / width
    return max_width, max(1, round(height * ratio))


def compress_image(
    data: bytes,
    *,
    max_width: int = MAX_WIDTH,
    quality: float = JPEG_QUALITY,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> str:
    """Compress raw image bytes into a JPEG data-URI.

    Args:
        data: Encoded image (JPEG, PNG, ...).
        max_width: Output width cap in pixels.
        quality: JPEG quality in the 0-1 range.
        max_bytes: Input size limit.

    Raises:
        ImageTooLargeError: If data exceeds max_bytes.
        ImageProcessingError: If the image cannot be decoded or encoded.
    """
    if len(data) > max_bytes:
        raise ImageTooLargeError(max_bytes)

    try:
        with Image.open(BytesIO(data)) as source:
            image = ImageOps.exif_transpose(source)
            size = target_size(image.width, image.height, max_width)
            raster = image.convert("RGB")
            if raster.size != size:
                raster = raster.resize(size, Image.Resampling.LANCZOS)
            out = BytesIO()
            raster.save(out, format="JPEG", quality=round(quality * 100))
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.warning("image_processing_failed", extra={"error.message": str(e)})
        raise ImageProcessingError() from e

    logger.debug(
        "image_compressed",
        extra={"input_bytes": len(data), "output_bytes": out.tell(), "size": size},
    )
    return to_data_uri(out.getvalue(), "image/jpeg")


def compress_file(
    path: Path,
    *,
    max_width: int = MAX_WIDTH,
    quality: float = JPEG_QUALITY,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> str:
    """Compress an image file, checking its size before reading it."""
    if path.stat().st_size > max_bytes:
        raise ImageTooLargeError(max_bytes)
    return compress_image(
        path.read_bytes(), max_width=max_width, quality=quality, max_bytes=max_bytes
    )


def make_thumbnail(
    data_uri: str,
    *,
    max_width: int = THUMBNAIL_WIDTH,
    quality: float = JPEG_QUALITY,
) -> str:
    """Shrink an image data-URI for history storage."""
    try:
        image = parse_data_uri(data_uri)
    except ValueError as e:
        raise ImageProcessingError() from e
    return compress_image(
        image.data, max_width=max_width, quality=quality, max_bytes=len(image.data)
    )
