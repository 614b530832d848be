from pydantic import BaseModel, Field

from ai_clients.models import OCRRawInfo, PlatformType


class ScanNameRequest(BaseModel):
    image_url: str = Field(min_length=1)


class ScanNameResponse(BaseModel):
    name: str


class ScanRawInfoRequest(BaseModel):
    user_id: str = Field(min_length=1)
    image_url: str = Field(min_length=1)
    platform: PlatformType


class ScanRawInfoResponse(BaseModel):
    info: OCRRawInfo


class ArticleRequest(BaseModel):
    content: str = Field(min_length=1)
    platform: PlatformType


class ExtractTagsResponse(BaseModel):
    tags: str


class PolishResponse(BaseModel):
    content: str
