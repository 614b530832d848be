import base64
import binascii
from io import BytesIO

import httpx
from PIL import Image, UnidentifiedImageError

from ai_clients.config.logger import get_logger
from ai_clients.errors import ImageFetchError

_logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def image_bytes_to_base64(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("utf-8")


def to_data_url(image_bytes: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{image_bytes_to_base64(image_bytes)}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Sniff the MIME type from the image header, not from the URL."""
    try:
        with Image.open(BytesIO(image_bytes)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError):
        return DEFAULT_MIME_TYPE
    return Image.MIME.get(fmt or "", DEFAULT_MIME_TYPE)


def _display_url(url: str) -> str:
    return url[:48] + "..." if url.startswith("data:") and len(url) > 48 else url


def _decode_data_url(url: str) -> bytes:
    header, _, encoded = url.partition(",")
    if ";base64" not in header:
        raise ImageFetchError(_display_url(url), "only base64 data URLs are supported")
    try:
        return base64.b64decode("".join(encoded.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageFetchError(_display_url(url), exc) from exc


async def fetch_image(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    max_bytes: int | None = None,
) -> tuple[bytes, str]:
    """Download ``url`` and return ``(bytes, mime_type)``.

    ``data:`` URLs are decoded in place. Any transport error, non-2xx status
    or empty body raises :class:`ImageFetchError`.
    """
    if url.startswith("data:"):
        data = _decode_data_url(url)
    else:
        try:
            if client is not None:
                response = await client.get(url, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=timeout) as owned:
                    response = await owned.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ImageFetchError(url, exc) from exc
        data = response.content

    shown = _display_url(url)
    if not data:
        raise ImageFetchError(shown, "empty image body")
    if max_bytes is not None and len(data) > max_bytes:
        raise ImageFetchError(shown, f"image exceeds max allowed size of {max_bytes} bytes")

    mime_type = detect_mime_type(data)
    if mime_type == DEFAULT_MIME_TYPE:
        _logger.warning("[image] could not sniff image type for %s", shown)
    _logger.debug("[image] fetched %s (%d bytes, %s)", shown, len(data), mime_type)
    return data, mime_type
