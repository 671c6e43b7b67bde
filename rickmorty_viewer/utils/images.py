"""Image download helpers."""

import asyncio
import base64
import logging
from typing import Optional

import aiohttp

from ..constants.config import REQUEST_TIMEOUT_SECONDS
from ..errors import ImageFetchError


logger = logging.getLogger(__name__)


async def download_image_bytes(
    url: str,
    session: Optional[aiohttp.ClientSession] = None,
) -> bytes:
    """Download an image and return its raw bytes.

    Raises:
        ImageFetchError: on a non-200 status or any transport error.
    """
    timeout = aiohttp.ClientTimeout(total=REQUEST_TIMEOUT_SECONDS)

    async def _read(s: aiohttp.ClientSession) -> bytes:
        async with s.get(url, timeout=timeout) as response:
            if response.status != 200:
                raise ImageFetchError(f"Failed to download {url}: HTTP {response.status}")
            return await response.read()

    try:
        if session is not None:
            return await _read(session)
        async with aiohttp.ClientSession() as own_session:
            return await _read(own_session)
    except ImageFetchError:
        raise
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise ImageFetchError(f"Error downloading {url}: {e}") from e


async def url_to_base64(
    url: Optional[str],
    session: Optional[aiohttp.ClientSession] = None,
) -> Optional[str]:
    """Download an image and return it base64-encoded, or None if it can't be fetched."""
    if not url:
        return None

    try:
        data = await download_image_bytes(url, session=session)
    except ImageFetchError as e:
        logger.warning("Image snapshot skipped: %s", e)
        return None

    return base64.b64encode(data).decode("ascii")
