import time
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, HTTPException

from api.schemas import (
    ArticleRequest,
    ExtractTagsResponse,
    PolishResponse,
    ScanNameRequest,
    ScanNameResponse,
    ScanRawInfoRequest,
    ScanRawInfoResponse,
)
from ai_clients.config.logger import configure_logging, get_logger
from ai_clients.config.settings import settings
from ai_clients.errors import (
    AIClientError,
    MalformedResponseError,
    UpstreamError,
)
from ai_clients.llm.model_factory import create_ai_client
from ai_clients.mq.redis_mq import RedisMessageQueue
from ai_clients.services.article import ArticleConfig, ArticleService
from ai_clients.services.ocr import OCRConfig, OCRService

app = FastAPI(title="AI Clients Gateway")

configure_logging()
logger = get_logger(__name__)


@lru_cache
def _get_ocr_service() -> OCRService:
    return OCRService(
        ai_client=create_ai_client(),
        mq=RedisMessageQueue(settings.REDIS_URL),
        config=OCRConfig(
            max_tokens=settings.OCR_MAX_TOKENS,
            is_prod=settings.IS_PROD,
            prod_topic=settings.OCR_TOPIC_PROD,
            dev_topic=settings.OCR_TOPIC_DEV,
        ),
    )


@lru_cache
def _get_article_service() -> ArticleService:
    return ArticleService(
        ai_client=create_ai_client(),
        config=ArticleConfig(max_tokens=settings.ARTICLE_MAX_TOKENS),
    )


def _http_error(exc: AIClientError) -> HTTPException:
    status = 500
    if isinstance(exc, (UpstreamError, MalformedResponseError)):
        status = 502
    logger.error("[api] %s: %s", type(exc).__name__, exc)
    return HTTPException(status_code=status, detail=str(exc))


@app.middleware("http")
async def log_requests(request, call_next):
    start = time.perf_counter()
    logger.info("[request.start] %s %s", request.method, request.url.path)
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "[request.end] %s %s status=%s elapsed=%.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.get("/health")
async def health():
    return {"status": "ok", "provider": settings.get_provider()}


@app.post("/ocr/name", response_model=ScanNameResponse)
async def scan_name(payload: ScanNameRequest):
    try:
        name = await _get_ocr_service().scan_name(payload.image_url)
    except AIClientError as exc:
        raise _http_error(exc) from exc
    return ScanNameResponse(name=name)


@app.post("/ocr/raw-info", response_model=ScanRawInfoResponse)
async def scan_raw_info(payload: ScanRawInfoRequest):
    try:
        info = await _get_ocr_service().scan_raw_info(
            payload.user_id,
            payload.image_url,
            payload.platform,
        )
    except AIClientError as exc:
        raise _http_error(exc) from exc
    return ScanRawInfoResponse(info=info)


@app.post("/articles/tags", response_model=ExtractTagsResponse)
async def extract_tags(payload: ArticleRequest):
    try:
        tags = await _get_article_service().extract_tags(payload.content, payload.platform)
    except AIClientError as exc:
        raise _http_error(exc) from exc
    return ExtractTagsResponse(tags=tags)


@app.post("/articles/polish", response_model=PolishResponse)
async def polish(payload: ArticleRequest):
    try:
        content = await _get_article_service().polish(payload.content, payload.platform)
    except AIClientError as exc:
        raise _http_error(exc) from exc
    return PolishResponse(content=content)
