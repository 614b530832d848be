"""Tests for the provider adapters."""

import asyncio
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from google.auth.exceptions import DefaultCredentialsError, RefreshError
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from openai import OpenAIError

sys.path.insert(0, str(Path(__file__).parent.parent))

from ai_clients.errors import (
    ConfigurationError,
    EmptyContentError,
    EmptyResponseError,
    ImageFetchError,
    NotInitializedError,
    ProviderCallError,
)
from ai_clients.llm.gemini_client import DEFAULT_GEMINI_MODEL, GeminiClient
from ai_clients.llm.ollama_client import OllamaClient
from ai_clients.llm.openai_client import DEFAULT_OPENAI_MODEL, OpenAIClient
from ai_clients.models import GenerationOptions, GenerationRequest, ResponseFormat

JSON_OPTIONS = GenerationOptions(max_tokens=256, response_format=ResponseFormat.JSON)


def _fetcher(data: bytes = b"\x89PNG", mime: str = "image/png") -> AsyncMock:
    return AsyncMock(return_value=(data, mime))


# --- OpenAI -----------------------------------------------------------------


def _openai_completion(*contents):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=c)) for c in contents]
    )


def _openai_sdk(completion=None, error=None) -> MagicMock:
    sdk = MagicMock()
    if error is not None:
        sdk.chat.completions.create = AsyncMock(side_effect=error)
    else:
        sdk.chat.completions.create = AsyncMock(return_value=completion)
    return sdk


class TestOpenAIClient:
    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            OpenAIClient(api_key="")

    def test_text_only_request_skips_image_fetch(self):
        sdk = _openai_sdk(_openai_completion("hello"))
        fetcher = _fetcher()
        client = OpenAIClient(client=sdk, image_fetcher=fetcher)

        result = asyncio.run(client.generate(GenerationRequest(text="hi")))

        assert result == "hello"
        fetcher.assert_not_awaited()
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == DEFAULT_OPENAI_MODEL
        assert kwargs["messages"] == [
            {"role": "user", "content": [{"type": "text", "text": "hi"}]}
        ]
        assert "response_format" not in kwargs
        assert "max_tokens" not in kwargs

    def test_request_shape_with_system_images_and_json(self):
        sdk = _openai_sdk(_openai_completion('{"name":"A"}'))
        fetcher = _fetcher(b"abc", "image/jpeg")
        client = OpenAIClient(client=sdk, image_fetcher=fetcher)
        request = GenerationRequest(
            system_prompt="sys",
            text="read",
            image_urls=("https://x/1.jpg", "https://x/2.jpg"),
        )

        asyncio.run(client.generate(request, JSON_OPTIONS))

        assert [c.args[0] for c in fetcher.await_args_list] == ["https://x/1.jpg", "https://x/2.jpg"]
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["max_tokens"] == 256
        system, user = kwargs["messages"]
        assert system == {"role": "system", "content": "sys"}
        assert user["content"][0] == {"type": "text", "text": "read"}
        assert user["content"][1]["image_url"]["url"] == "data:image/jpeg;base64,YWJj"
        assert len(user["content"]) == 3

    def test_model_override_applies_to_single_call(self):
        sdk = _openai_sdk(_openai_completion("ok"))
        client = OpenAIClient(client=sdk, model="gpt-4o-mini")

        asyncio.run(client.generate(GenerationRequest(text="a"), GenerationOptions(model="o3")))
        assert sdk.chat.completions.create.call_args.kwargs["model"] == "o3"

        asyncio.run(client.generate(GenerationRequest(text="a")))
        assert sdk.chat.completions.create.call_args.kwargs["model"] == "gpt-4o-mini"

    def test_zero_choices_is_empty_response(self):
        client = OpenAIClient(client=_openai_sdk(_openai_completion()))
        with pytest.raises(EmptyResponseError):
            asyncio.run(client.generate(GenerationRequest(text="a")))

    def test_missing_content_is_empty_content(self):
        client = OpenAIClient(client=_openai_sdk(_openai_completion(None)))
        with pytest.raises(EmptyContentError):
            asyncio.run(client.generate(GenerationRequest(text="a")))

    def test_sdk_error_is_wrapped(self):
        cause = OpenAIError("rate limited")
        client = OpenAIClient(client=_openai_sdk(error=cause))
        with pytest.raises(ProviderCallError) as exc:
            asyncio.run(client.generate(GenerationRequest(text="a")))
        assert exc.value.cause is cause
        assert exc.value.__cause__ is cause

    def test_uninitialized_client(self):
        client = OpenAIClient(client=_openai_sdk(_openai_completion("x")))
        client._client = None
        with pytest.raises(NotInitializedError):
            asyncio.run(client.generate(GenerationRequest(text="a")))

    def test_image_fetch_failure_stops_before_provider_call(self):
        sdk = _openai_sdk(_openai_completion("x"))
        fetcher = AsyncMock(side_effect=ImageFetchError("https://x/1.jpg", "404"))
        client = OpenAIClient(client=sdk, image_fetcher=fetcher)

        with pytest.raises(ImageFetchError):
            asyncio.run(client.generate(GenerationRequest(image_urls=("https://x/1.jpg",))))
        sdk.chat.completions.create.assert_not_awaited()


# --- Gemini -----------------------------------------------------------------


def _part(text=None):
    return SimpleNamespace(text=text)


def _gemini_response(*candidates):
    return SimpleNamespace(candidates=list(candidates))


def _candidate(parts):
    return SimpleNamespace(content=SimpleNamespace(parts=parts))


def _gemini_sdk(response=None, error=None) -> MagicMock:
    sdk = MagicMock()
    if error is not None:
        sdk.aio.models.generate_content = AsyncMock(side_effect=error)
    else:
        sdk.aio.models.generate_content = AsyncMock(return_value=response)
    return sdk


class TestGeminiClient:
    def test_requires_project_and_location(self):
        with pytest.raises(ConfigurationError):
            GeminiClient(project="", location="asia-east1")

    def test_concatenates_text_parts_and_skips_others(self):
        response = _gemini_response(
            _candidate([_part("{\"na"), _part(None), _part("me\":\"A\"}")]),
            _candidate([_part("ignored")]),
        )
        client = GeminiClient(client=_gemini_sdk(response))

        assert asyncio.run(client.generate(GenerationRequest(text="a"))) == '{"name":"A"}'

    def test_request_shape(self):
        sdk = _gemini_sdk(_gemini_response(_candidate([_part("ok")])))
        fetcher = _fetcher(b"abc", "image/png")
        client = GeminiClient(client=sdk, image_fetcher=fetcher)
        request = GenerationRequest(system_prompt="sys", text="read", image_urls=("https://x/1.png",))

        asyncio.run(client.generate(request, JSON_OPTIONS))

        kwargs = sdk.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == DEFAULT_GEMINI_MODEL
        config = kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.max_output_tokens == 256
        assert "sys" in str(config.system_instruction)
        (content,) = kwargs["contents"]
        assert content.role == "user"
        assert content.parts[0].text == "read"
        assert content.parts[1].inline_data.data == b"abc"
        assert content.parts[1].inline_data.mime_type == "image/png"

    def test_text_format_leaves_mime_type_unset(self):
        sdk = _gemini_sdk(_gemini_response(_candidate([_part("ok")])))
        fetcher = _fetcher()
        client = GeminiClient(client=sdk, image_fetcher=fetcher)

        asyncio.run(client.generate(GenerationRequest(text="a"), GenerationOptions(model="gemini-2.5-pro")))

        kwargs = sdk.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        assert kwargs["config"].response_mime_type is None
        assert kwargs["config"].max_output_tokens is None
        fetcher.assert_not_awaited()

    def test_zero_candidates_is_empty_response(self):
        client = GeminiClient(client=_gemini_sdk(_gemini_response()))
        with pytest.raises(EmptyResponseError):
            asyncio.run(client.generate(GenerationRequest(text="a")))

    def test_none_candidates_is_empty_response(self):
        client = GeminiClient(client=_gemini_sdk(SimpleNamespace(candidates=None)))
        with pytest.raises(EmptyResponseError):
            asyncio.run(client.generate(GenerationRequest(text="a")))

    @pytest.mark.parametrize(
        "candidate",
        [SimpleNamespace(content=None), _candidate([]), _candidate(None)],
    )
    def test_candidate_without_parts_is_empty_content(self, candidate):
        client = GeminiClient(client=_gemini_sdk(_gemini_response(candidate)))
        with pytest.raises(EmptyContentError):
            asyncio.run(client.generate(GenerationRequest(text="a")))

    def test_transport_error_is_wrapped(self):
        client = GeminiClient(client=_gemini_sdk(error=httpx.ConnectError("refused")))
        with pytest.raises(ProviderCallError) as exc:
            asyncio.run(client.generate(GenerationRequest(text="a")))
        assert exc.value.provider == "gemini"

    @pytest.mark.parametrize(
        "cause",
        [
            DefaultCredentialsError("Your default credentials were not found."),
            RefreshError("token expired"),
        ],
    )
    def test_auth_error_is_wrapped(self, cause):
        client = GeminiClient(client=_gemini_sdk(error=cause))
        with pytest.raises(ProviderCallError) as exc:
            asyncio.run(client.generate(GenerationRequest(text="a")))
        assert exc.value.provider == "gemini"
        assert exc.value.cause is cause


# --- Ollama -----------------------------------------------------------------


class FakeChatOllama:
    def __init__(self, response=None, error=None):
        self.updates: list[dict] = []
        self.ainvoke = AsyncMock(side_effect=error, return_value=response)

    def model_copy(self, update=None):
        self.updates.append(update or {})
        return self


class TestOllamaClient:
    def test_request_shape_and_json_mode(self):
        llm = FakeChatOllama(AIMessage(content='{"name":"A"}'))
        fetcher = _fetcher(b"abc", "image/png")
        client = OllamaClient(model="gemma3", client=llm, image_fetcher=fetcher)
        request = GenerationRequest(system_prompt="sys", text="read", image_urls=("https://x/1.png",))

        result = asyncio.run(client.generate(request, JSON_OPTIONS))

        assert result == '{"name":"A"}'
        assert llm.updates == [{"model": "gemma3", "format": "json", "num_predict": 256}]
        system, human = llm.ainvoke.call_args.args[0]
        assert isinstance(system, SystemMessage)
        assert isinstance(human, HumanMessage)
        assert human.content[0] == {"type": "text", "text": "read"}
        assert human.content[1]["image_url"]["url"] == "data:image/png;base64,YWJj"

    def test_list_content_joined(self):
        llm = FakeChatOllama(AIMessage(content=[{"type": "text", "text": "a"}, {"type": "tool_use"}, "b"]))
        client = OllamaClient(client=llm)
        assert asyncio.run(client.generate(GenerationRequest(text="x"))) == "ab"
        assert llm.updates == [{"model": "gemma3"}]

    def test_empty_content(self):
        client = OllamaClient(client=FakeChatOllama(AIMessage(content="")))
        with pytest.raises(EmptyContentError):
            asyncio.run(client.generate(GenerationRequest(text="x")))

    def test_transport_error_is_wrapped(self):
        client = OllamaClient(client=FakeChatOllama(error=httpx.ConnectError("refused")))
        with pytest.raises(ProviderCallError):
            asyncio.run(client.generate(GenerationRequest(text="x")))
