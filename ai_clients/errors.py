"""Error taxonomy shared by adapters, services and queue implementations."""

from __future__ import annotations


class AIClientError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(AIClientError):
    """Setup problem. Retrying without fixing configuration will not help."""


class NotInitializedError(ConfigurationError):
    pass


class UpstreamError(AIClientError):
    """A remote dependency failed. Callers may retry under their own policy."""


class ProviderCallError(UpstreamError):
    def __init__(self, provider: str, cause: BaseException):
        super().__init__(f"{provider} call failed: {cause}")
        self.provider = provider
        self.cause = cause


class ImageFetchError(UpstreamError):
    def __init__(self, url: str, cause: BaseException | str):
        super().__init__(f"failed to download image {url}: {cause}")
        self.url = url
        self.cause = cause


class MalformedResponseError(AIClientError):
    """The model answered, but not with something usable."""


class EmptyResponseError(MalformedResponseError):
    pass


class EmptyContentError(MalformedResponseError):
    pass


class ResponseParseError(MalformedResponseError):
    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class SideEffectError(AIClientError):
    """A secondary side channel failed; never surfaced by the OCR service."""


class PublishError(SideEffectError):
    def __init__(self, topic: str, cause: BaseException):
        super().__init__(f"failed to publish to {topic}: {cause}")
        self.topic = topic
        self.cause = cause
