from ai_clients.services.article import ArticleConfig, ArticleService
from ai_clients.services.ocr import OCRConfig, OCRService

__all__ = ["ArticleConfig", "ArticleService", "OCRConfig", "OCRService"]
