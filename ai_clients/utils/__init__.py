from ai_clients.utils.image_utils import (
    detect_mime_type,
    fetch_image,
    image_bytes_to_base64,
    to_data_url,
)
from ai_clients.utils.json_patch import set_json_key

__all__ = [
    "detect_mime_type",
    "fetch_image",
    "image_bytes_to_base64",
    "to_data_url",
    "set_json_key",
]
