# =============================================================================
# PlantScan Backend
# services/features.py - Feature Extraction
#
# Derives a fixed-length feature vector from an image. When image bytes are
# available the vector is keyed on a fingerprint of the decoded pixels, so the
# same picture always produces the same features regardless of its URL.
# Without bytes, the image reference string itself is hashed.
# =============================================================================

import io
import hashlib
import logging
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from plantscan.constants import FEATURE_VECTOR_LENGTH, FEATURE_STEP, FEATURE_BUCKETS
from plantscan.exceptions import InvalidImageError

# Configure logging
logger = logging.getLogger(__name__)

_INT32_MASK = 0xFFFFFFFF


def rolling_hash(text: str) -> int:
    """
    Compute a 32-bit signed rolling hash of a string.

    Each step computes ``h * 31 + ord(char)`` wrapped to 32 bits.

    Args:
        text: Input string

    Returns:
        Signed 32-bit integer hash
    """
    h = 0
    for char in text:
        h = ((h << 5) - h + ord(char)) & _INT32_MASK
    if h >= 2 ** 31:
        h -= 2 ** 32
    return h


def load_rgb_image(image_data: bytes) -> Image.Image:
    """
    Decode image bytes into an RGB Pillow image.

    Raises:
        InvalidImageError: if the bytes are not a decodable image
    """
    if not image_data:
        raise InvalidImageError('Image data is empty')

    try:
        image = Image.open(io.BytesIO(image_data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImageError(f"Could not decode image: {e}") from e

    if image.mode != 'RGB':
        image = image.convert('RGB')
    return image


def image_fingerprint(image_data: bytes) -> str:
    """
    SHA-256 fingerprint of the decoded pixel data.

    Re-encoding the same picture (different metadata, same pixels) yields
    the same fingerprint.
    """
    image = load_rgb_image(image_data)
    digest = hashlib.sha256()
    digest.update(f"{image.width}x{image.height}".encode('utf-8'))
    digest.update(image.tobytes())
    return digest.hexdigest()


def extract_features(
    image_reference: str,
    image_bytes: Optional[bytes] = None,
    length: int = FEATURE_VECTOR_LENGTH
) -> np.ndarray:
    """
    Derive a feature vector with values in [0, 1).

    Args:
        image_reference: Image URI or other reference string
        image_bytes: Raw image bytes (optional). Takes precedence over the
            reference when present.
        length: Number of features to produce

    Returns:
        1-D float array of ``length`` values
    """
    if image_bytes:
        source = image_fingerprint(image_bytes)
    else:
        source = image_reference or ''

    h = abs(rolling_hash(source))
    offsets = np.arange(length, dtype=np.int64) * FEATURE_STEP
    features = ((h + offsets) % FEATURE_BUCKETS) / FEATURE_BUCKETS

    logger.debug(f"Extracted {length} features (hash={h})")

    return features.astype(np.float64)
