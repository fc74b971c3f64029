"""Provider dispatch, against httpx.MockTransport."""

import json

import httpx
import pytest

from glint_chat.errors import ConfigurationError, ProviderError, TransportUnsupportedError
from glint_chat.gateway import DEEPAI_TEXT2IMG_URL, DEEPSEEK_URL, ProviderGateway
from glint_chat.models.chat import Category, Language, MessageKind
from glint_chat.models.reply import ProviderOptions
from glint_chat.transport.http import HttpClient

RELAY_URL = "https://relay.example/tts"


class Recorder:
    def __init__(self, responder=None):
        self.requests: list[httpx.Request] = []
        self._responder = responder or (lambda request: httpx.Response(200, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)


def completion(text: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": f"  {text}\n"}}]})


def make_gateway(recorder: Recorder, language=Language.ENGLISH, relay=None) -> ProviderGateway:
    http = HttpClient(transport=httpx.MockTransport(recorder))
    return ProviderGateway(http, language=lambda: language, voice_relay_url=relay)


@pytest.mark.asyncio
@pytest.mark.parametrize("category", [Category.TEXT, Category.IMAGE, Category.CODING])
async def test_missing_credential_makes_no_call(category):
    recorder = Recorder()
    gateway = make_gateway(recorder)
    with pytest.raises(ConfigurationError) as exc:
        await gateway.dispatch(category, "anything", {})
    assert exc.value.message == f"{category.value.upper()} API key not configured. Please check settings."
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_voice_without_relay_is_unsupported():
    recorder = Recorder()
    gateway = make_gateway(recorder)
    with pytest.raises(TransportUnsupportedError) as exc:
        await gateway.dispatch(Category.VOICE, "say hi", {})
    assert exc.value.message
    assert "cannot be called directly" in exc.value.message
    assert recorder.requests == []

    # Holds with a credential too, and is still a ConfigurationError
    with pytest.raises(ConfigurationError):
        await gateway.dispatch(Category.VOICE, "say hi", {Category.VOICE: "v-key"})
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_voice_message_is_localized():
    gateway = make_gateway(Recorder(), language=Language.ROMAN_URDU)
    with pytest.raises(TransportUnsupportedError) as exc:
        await gateway.dispatch("voice", "bolo", {})
    assert "backend proxy" in exc.value.message
    assert "kaam nahi karta" in exc.value.message


@pytest.mark.asyncio
async def test_text_request_shape():
    recorder = Recorder(lambda r: completion("Salaam!"))
    gateway = make_gateway(recorder)
    reply = await gateway.dispatch(Category.TEXT, "hello", {"text": "t-key"})

    assert reply.content == "Salaam!"
    assert reply.category == Category.TEXT
    assert reply.kind == MessageKind.TEXT
    assert len(recorder.requests) == 1
    req = recorder.requests[0]
    assert str(req.url) == DEEPSEEK_URL
    assert req.headers["Authorization"] == "Bearer t-key"
    body = json.loads(req.content)
    assert body["model"] == "deepseek-chat"
    assert body["max_tokens"] == 512
    assert body["temperature"] == 0.7
    assert body["messages"][1] == {"role": "user", "content": "hello"}


@pytest.mark.asyncio
async def test_coding_request_honours_options():
    recorder = Recorder(lambda r: completion("def f(): pass"))
    gateway = make_gateway(recorder)
    options = ProviderOptions(max_output_tokens=100, temperature=0.0, system_prompt_addendum="Use Python.")
    reply = await gateway.dispatch(Category.CODING, "write f", {Category.CODING: "c-key"}, options)

    assert reply.content == "def f(): pass"
    body = json.loads(recorder.requests[0].content)
    assert body["model"] == "deepseek-coder"
    assert body["max_tokens"] == 100
    assert body["temperature"] == 0.0
    assert body["messages"][0]["content"].endswith("Use Python.")


@pytest.mark.asyncio
async def test_image_returns_uri():
    recorder = Recorder(lambda r: httpx.Response(200, json={"id": "1", "output_url": "https://img.example/1.png"}))
    gateway = make_gateway(recorder)
    reply = await gateway.dispatch(Category.IMAGE, "a cat", {Category.IMAGE: "i-key"})

    assert reply.content == "https://img.example/1.png"
    assert reply.kind == MessageKind.IMAGE
    req = recorder.requests[0]
    assert str(req.url) == DEEPAI_TEXT2IMG_URL
    assert req.headers["api-key"] == "i-key"
    assert req.headers["Content-Type"].startswith("multipart/form-data")
    assert b"a cat" in req.content


@pytest.mark.asyncio
async def test_provider_rejection_carries_status():
    recorder = Recorder(lambda r: httpx.Response(401, json={"error": {"message": "Authentication Fails"}}))
    gateway = make_gateway(recorder)
    with pytest.raises(ProviderError) as exc:
        await gateway.dispatch(Category.TEXT, "hello", {Category.TEXT: "bad"})
    assert exc.value.status_code == 401
    assert "Authentication Fails" in exc.value.message
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_plain_text_error_body():
    recorder = Recorder(lambda r: httpx.Response(500, text="upstream exploded"))
    gateway = make_gateway(recorder)
    with pytest.raises(ProviderError) as exc:
        await gateway.dispatch(Category.IMAGE, "x", {Category.IMAGE: "k"})
    assert exc.value.status_code == 500
    assert "upstream exploded" in exc.value.message


@pytest.mark.asyncio
async def test_transport_failure_is_provider_error():
    def boom(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    gateway = make_gateway(Recorder(boom))
    with pytest.raises(ProviderError) as exc:
        await gateway.dispatch(Category.TEXT, "hello", {Category.TEXT: "k"})
    assert exc.value.status_code is None


@pytest.mark.asyncio
async def test_unexpected_shape():
    gateway = make_gateway(Recorder(lambda r: httpx.Response(200, json={"choices": []})))
    with pytest.raises(ProviderError):
        await gateway.dispatch(Category.TEXT, "hello", {Category.TEXT: "k"})


@pytest.mark.asyncio
@pytest.mark.parametrize("category, body", [
    (Category.IMAGE, {"output_url": ["https://img.example/1.png"]}),
    (Category.TEXT, {"choices": [{"message": {"content": None}}]}),
    (Category.TEXT, ["not", "an", "object"]),
])
async def test_wrongly_typed_payload_is_provider_error(category, body):
    gateway = make_gateway(Recorder(lambda r: httpx.Response(200, json=body)))
    with pytest.raises(ProviderError):
        await gateway.dispatch(category, "draw a cat", {category: "k"})


@pytest.mark.asyncio
async def test_relay_with_non_string_url_is_provider_error():
    gateway = make_gateway(Recorder(lambda r: httpx.Response(200, json={"url": {"href": "x"}})), relay=RELAY_URL)
    with pytest.raises(ProviderError):
        await gateway.dispatch(Category.VOICE, "speak", {Category.VOICE: "v"})


@pytest.mark.asyncio
async def test_voice_through_relay():
    recorder = Recorder(lambda r: httpx.Response(200, json={"url": "https://relay.example/a.wav"}))
    gateway = make_gateway(recorder, relay=RELAY_URL)
    reply = await gateway.dispatch(Category.VOICE, "say hi", {Category.VOICE: "v-key"})

    assert reply.kind == MessageKind.VOICE
    assert reply.content == "https://relay.example/a.wav"
    body = json.loads(recorder.requests[0].content)
    assert body == {"text": "say hi", "language": "english"}
    assert recorder.requests[0].headers["Authorization"] == "Bearer v-key"


@pytest.mark.asyncio
async def test_voice_relay_still_needs_credential():
    recorder = Recorder()
    gateway = make_gateway(recorder, relay=RELAY_URL)
    with pytest.raises(ConfigurationError) as exc:
        await gateway.dispatch(Category.VOICE, "say hi", {})
    assert not isinstance(exc.value, TransportUnsupportedError)
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_malformed_relay_url_is_provider_error():
    recorder = Recorder()
    gateway = make_gateway(recorder, relay="http://[bad")
    with pytest.raises(ProviderError):
        await gateway.dispatch(Category.VOICE, "speak", {Category.VOICE: "v"})
    assert recorder.requests == []
