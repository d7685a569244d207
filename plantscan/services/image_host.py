# =============================================================================
# PlantScan Backend
# services/image_host.py - Image Hosting Client
#
# Uploads scan images to ImgBB and returns their public URL. The API key is
# read from configuration. Failed uploads are not retried.
# =============================================================================

import io
import base64
import logging
from typing import Optional

import requests

from plantscan.exceptions import ImageUploadError
from plantscan.services.features import load_rgb_image

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.imgbb.com/1/upload'
UPLOAD_MAX_SIZE = (1600, 1600)


def encode_for_upload(image_data: bytes) -> str:
    """
    Re-encode image bytes as base64 JPEG for upload.

    Large images are shrunk to fit within UPLOAD_MAX_SIZE.

    Args:
        image_data: Raw image bytes

    Returns:
        Base64 string without a data URI prefix
    """
    image = load_rgb_image(image_data)
    image.thumbnail(UPLOAD_MAX_SIZE)

    buffer = io.BytesIO()
    image.save(buffer, format='JPEG', quality=85)
    buffer.seek(0)

    return base64.b64encode(buffer.read()).decode('utf-8')


class ImgBBClient:
    """
    Minimal ImgBB upload client.

    Args:
        api_key: ImgBB API key
        api_url: Upload endpoint
        timeout: Request timeout in seconds (None waits indefinitely)
        session: Optional requests session
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = 30,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key
        self.api_url = api_url or DEFAULT_API_URL
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> Optional['ImgBBClient']:
        """Build a client from app config, or None when no key is configured."""
        api_key = config.get('IMGBB_API_KEY')
        if not api_key:
            return None
        return cls(
            api_key=api_key,
            api_url=config.get('IMGBB_API_URL', DEFAULT_API_URL),
            timeout=config.get('IMGBB_TIMEOUT', 30)
        )

    def upload(self, base64_image: str, album_id: Optional[str] = None) -> str:
        """
        Upload a base64 encoded image.

        Args:
            base64_image: Image data as base64 (data URI prefix is stripped)
            album_id: Optional album to file the image under

        Returns:
            Public URL of the uploaded image

        Raises:
            ImageUploadError: on network failure, non-2xx status, or an
                unsuccessful response body
        """
        if not self.api_key:
            raise ImageUploadError('ImgBB API key is not configured')

        if ',' in base64_image:
            base64_image = base64_image.split(',', 1)[1]

        form = {'key': self.api_key, 'image': base64_image}
        if album_id:
            form['album'] = album_id

        try:
            response = self.session.post(self.api_url, data=form, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"ImgBB upload request failed: {e}")
            raise ImageUploadError(f"ImgBB upload request failed: {e}") from e

        if not response.ok:
            raise ImageUploadError(f"ImgBB upload failed with status {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise ImageUploadError('ImgBB returned an invalid response') from e

        if not result.get('success'):
            raise ImageUploadError('ImgBB upload was not successful')

        url = (result.get('data') or {}).get('url')
        if not url:
            raise ImageUploadError('ImgBB response did not include an image URL')

        logger.info(f"Image uploaded to {url}")
        return url
