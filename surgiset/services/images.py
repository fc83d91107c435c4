"""Instrument image handling.

Picked or captured photos are normalized the same way the picker did on the
device: center-cropped to a 1:1 aspect, downsized, and re-encoded as JPEG at
quality 80. The result is either stored as a file in the app image
directory (:func:`save_image`) or inlined as a ``data:`` URI
(:func:`to_data_uri`) for backends that cannot hold files.

Failures are logged and the original reference is returned so the caller
can still attach *something* to the instrument.
"""

import base64
import io
import logging
from pathlib import Path
from typing import Union

from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_SIZE = 512
DEFAULT_IMAGE_QUALITY = 80

ImageSource = Union[str, Path, bytes]


def crop_square(img: Image.Image) -> Image.Image:
    """Return the largest centered square of ``img``."""
    width, height = img.size
    side = min(width, height)
    left = (width - side) // 2
    top = (height - side) // 2
    return img.crop((left, top, left + side, top + side))


def _open(source: ImageSource) -> Image.Image:
    if isinstance(source, bytes):
        return Image.open(io.BytesIO(source))
    return Image.open(source)


def normalize_image(img: Image.Image, size: int = DEFAULT_IMAGE_SIZE) -> Image.Image:
    """Crop to a square, shrink to at most ``size`` pixels and drop alpha."""
    square = crop_square(img.convert("RGB"))
    if square.width > size:
        square = square.resize((size, size), Image.Resampling.LANCZOS)
    return square


def encode_jpeg(img: Image.Image, quality: int = DEFAULT_IMAGE_QUALITY) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def to_data_uri(
    source: ImageSource,
    size: int = DEFAULT_IMAGE_SIZE,
    quality: int = DEFAULT_IMAGE_QUALITY,
) -> str:
    """Return a ``data:image/jpeg;base64,...`` URI for the normalized image.

    Raises:
        OSError: If ``source`` cannot be read or is not an image.
    """
    with _open(source) as img:
        data = encode_jpeg(normalize_image(img, size), quality)
    return "data:image/jpeg;base64," + base64.b64encode(data).decode("ascii")


def save_image(
    source: Union[str, Path],
    directory: Path,
    size: int = DEFAULT_IMAGE_SIZE,
    quality: int = DEFAULT_IMAGE_QUALITY,
) -> str:
    """Store a normalized JPEG copy of ``source`` in ``directory``.

    Returns:
        str: Path of the stored copy, or ``str(source)`` if it could not be
        read or written.
    """
    source_path = Path(source)
    target = Path(directory) / f"{source_path.stem}.jpg"
    try:
        with Image.open(source_path) as img:
            normalized = normalize_image(img, size)
        target.parent.mkdir(parents=True, exist_ok=True)
        normalized.save(target, format="JPEG", quality=quality)
    except OSError:
        logger.exception("Error saving image %s", source)
        return str(source)
    return str(target)
