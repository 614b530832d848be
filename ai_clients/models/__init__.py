"""Value types passed between adapters and services."""

from ai_clients.models.message import GenerationOptions, GenerationRequest, ResponseFormat
from ai_clients.models.ocr import OCR_MESSAGE_TYPE_IDENTIFY, OCREvent, OCRRawInfo, OCRTopic
from ai_clients.models.platform import PlatformType

__all__ = [
    "GenerationOptions",
    "GenerationRequest",
    "ResponseFormat",
    "OCR_MESSAGE_TYPE_IDENTIFY",
    "OCREvent",
    "OCRRawInfo",
    "OCRTopic",
    "PlatformType",
]
