from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, FieldSerializationInfo, field_serializer

OCR_MESSAGE_TYPE_IDENTIFY = "identify_ocr"


class OCRTopic(str, Enum):
    PROD = "ocr-identify"
    DEV = "ocr-identify-dev"


class OCRRawInfo(BaseModel):
    """Fields read off a professional licence or staff card.

    Which fields are filled depends on the platform prompt. Keys the model
    returns beyond these are kept as extras and travel with the event.
    """

    model_config = ConfigDict(extra="allow")

    identify_url: Optional[str] = None
    name: Optional[str] = None
    birthday: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    facility: Optional[str] = None
    valid_date: Optional[str] = None
    specialty_valid_date: Optional[str] = None


class OCREvent(BaseModel):
    """Message published after a successful extraction.

    ``payload`` carries only the keys the model produced (plus
    ``identify_url``); declared fields it left out are not serialized.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    payload: OCRRawInfo
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    type: str = OCR_MESSAGE_TYPE_IDENTIFY
    source: str

    @field_serializer("payload")
    def _payload_as_returned(self, payload: OCRRawInfo, info: FieldSerializationInfo) -> dict:
        return payload.model_dump(mode=info.mode, exclude_unset=True)
