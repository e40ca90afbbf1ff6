"""Image validation and encoding for image content blocks.

Images can be supplied as a file path, raw bytes or a base64 string. They
are inspected with Pillow, checked against the media types and dimensions
the API accepts, and returned as a base64 encoded ImageBlock.
"""

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Literal

from PIL import Image, UnidentifiedImageError

from anthropic_community.conversation.types import ImageBlock
from anthropic_community.errors import ImageError

logger = logging.getLogger(__name__)

InputType = Literal["path", "binary", "base64"]

SUPPORTED_MEDIA_TYPES: dict[str, str] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}

# (aspect ratio, (max width, max height))
SUPPORTED_SIZES: list[tuple[str, tuple[int, int]]] = [
    ("1:1", (1092, 1092)),
    ("3:4", (951, 1268)),
    ("2:3", (896, 1344)),
    ("9:16", (819, 1456)),
    ("1:2", (784, 1568)),
]


def _read_image(source: str | bytes | Path, input_type: InputType) -> bytes:
    if input_type == "binary":
        if not isinstance(source, bytes):
            raise ImageError("Binary image input must be bytes.")
        return source

    if input_type == "path":
        try:
            return Path(source).read_bytes()
        except OSError as e:
            raise ImageError(f"Error reading file {e.strerror} path: {source}") from e

    if input_type == "base64":
        try:
            text = source.decode("ascii") if isinstance(source, bytes) else str(source)
            # whitespace is ignored, as in MIME encoded data
            return base64.b64decode("".join(text.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageError("Invalid base64 data provided for the image.") from e

    raise ImageError(f"Unknown image input type: {input_type}")


def _image_info(image_bytes: bytes) -> tuple[str, int, int]:
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            image_format = image.format or ""
            width, height = image.size
    except (UnidentifiedImageError, OSError) as e:
        raise ImageError(
            "Could not extract image information. The file may not be a valid image."
        ) from e
    return image_format, width, height


def _fits_supported_size(width: int, height: int) -> bool:
    return any(
        width <= max_width and height <= max_height
        for _, (max_width, max_height) in SUPPORTED_SIZES
    )


def process_image(source: str | bytes | Path, input_type: InputType) -> ImageBlock:
    """Validate an image and convert it to a base64 ImageBlock.

    Args:
        source: File path, raw bytes or base64 string, matching `input_type`
        input_type: One of "path", "binary" or "base64"

    Returns:
        ImageBlock: The encoded image with its media type

    Raises:
        ImageError: If the image cannot be read, is not a supported type,
                    or its dimensions are not supported
    """
    image_bytes = _read_image(source, input_type)
    image_format, width, height = _image_info(image_bytes)

    media_type = SUPPORTED_MEDIA_TYPES.get(image_format)
    if media_type is None:
        raise ImageError(
            f"The provided image type {image_format} is not supported. "
            f"Choose one of: {list(SUPPORTED_MEDIA_TYPES.values())}"
        )

    if not _fits_supported_size(width, height):
        raise ImageError(
            f"The provided image dimensions {(width, height)} are not supported."
        )

    logger.debug(f"Processed {media_type} image ({width}x{height})")
    return ImageBlock(
        media_type=media_type,
        data=base64.b64encode(image_bytes).decode("ascii"),
    )
