"""
Provider gateway — sends a classified request to the provider bound to its
category.

    text    DeepSeek chat completions (deepseek-chat)
    coding  DeepSeek chat completions (deepseek-coder)
    image   DeepAI text2img, multipart form
    voice   a relay endpoint, if one is configured; otherwise unsupported
"""

import logging
from typing import Any, Callable, Mapping, Optional, Union

from glint_chat.errors import ConfigurationError, ProviderError, TransportUnsupportedError
from glint_chat.models.chat import Category, Language, MessageKind
from glint_chat.models.reply import ProviderOptions, Reply
from glint_chat.transport.http import HttpClient

logger = logging.getLogger("glint_chat.gateway")

DEEPSEEK_URL = "https://api.deepseek.com/v1/chat/completions"
DEEPAI_TEXT2IMG_URL = "https://api.deepai.org/api/text2img"

TEXT_MODEL = "deepseek-chat"
CODING_MODEL = "deepseek-coder"

TEXT_SYSTEM_PROMPT = (
    "You are GLINT, an AI assistant built by Guru (an app developer). "
    "You respond concisely in Roman Urdu."
)
CODING_SYSTEM_PROMPT = (
    "You are an expert programming assistant named GLINT. Provide clean, efficient code "
    "with explanations in a Roman Urdu/Urdu blend where possible. Always use proper "
    "syntax highlighting and code formatting."
)

# (max_tokens, temperature)
TEXT_DEFAULTS = (512, 0.7)
CODING_DEFAULTS = (2048, 0.3)

VOICE_UNSUPPORTED_MESSAGES = {
    Language.ROMAN_URDU: (
        "❌ Voice API (Play.ht/EdenAI) browser se direct kaam nahi karta. Iske liye aapko "
        "backend proxy ya special SDK ki zaroorat padegi. Jab tak yeh fix nahi hota, "
        "Voice feature kaam nahi karega."
    ),
    Language.ENGLISH: (
        "❌ Voice API (Play.ht/EdenAI) cannot be called directly from the client. A backend "
        "proxy or specialized SDK is required. The Voice feature will not work until then."
    ),
}


def voice_unsupported_message(language: Union[Language, str]) -> str:
    try:
        lang = Language(language)
    except ValueError:
        lang = Language.ENGLISH
    return VOICE_UNSUPPORTED_MESSAGES.get(lang, VOICE_UNSUPPORTED_MESSAGES[Language.ENGLISH])


class ProviderGateway:
    def __init__(
        self,
        http: HttpClient,
        language: Callable[[], Language] = lambda: Language.ENGLISH,
        voice_relay_url: Optional[str] = None,
        text_url: str = DEEPSEEK_URL,
        image_url: str = DEEPAI_TEXT2IMG_URL,
    ):
        self._http = http
        self._language = language
        self._voice_relay_url = voice_relay_url
        self._text_url = text_url
        self._image_url = image_url

    @property
    def voice_supported(self) -> bool:
        return bool(self._voice_relay_url)

    async def dispatch(
        self,
        category: Union[Category, str],
        content: str,
        credentials: Mapping[Union[Category, str], str],
        options: Optional[ProviderOptions] = None,
    ) -> Reply:
        """Make exactly one provider call for ``category``.

        Raises TransportUnsupportedError for voice without a relay,
        ConfigurationError when the category has no credential (no network
        call is made in either case), and ProviderError when the provider
        rejects the request.
        """
        category = Category(category)
        options = options or ProviderOptions()

        if category == Category.VOICE and not self.voice_supported:
            logger.error("Voice provider needs a relay; no client-only transport available")
            raise TransportUnsupportedError(voice_unsupported_message(self._language()))

        # keys may be Category members or their string values
        api_key = {Category(k): v for k, v in credentials.items()}.get(category)
        if not api_key:
            raise ConfigurationError(
                f"{category.value.upper()} API key not configured. Please check settings.",
                details={"category": category.value},
            )

        try:
            if category == Category.TEXT:
                return await self._chat_completion(
                    category, TEXT_MODEL, TEXT_SYSTEM_PROMPT, TEXT_DEFAULTS, content, api_key, options,
                )
            if category == Category.CODING:
                return await self._chat_completion(
                    category, CODING_MODEL, CODING_SYSTEM_PROMPT, CODING_DEFAULTS, content, api_key, options,
                )
            if category == Category.IMAGE:
                return await self._generate_image(content, api_key)
            return await self._relay_voice(content, api_key)
        except ProviderError as e:
            logger.error(f"{category.value.upper()} API Error: {e}")
            raise

    async def _chat_completion(
        self,
        category: Category,
        model: str,
        system_prompt: str,
        defaults: tuple[int, float],
        message: str,
        api_key: str,
        options: ProviderOptions,
    ) -> Reply:
        if options.system_prompt_addendum:
            system_prompt = f"{system_prompt} {options.system_prompt_addendum}"
        max_tokens, temperature = defaults
        body = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": message},
            ],
            "max_tokens": options.max_output_tokens or max_tokens,
            "temperature": options.temperature if options.temperature is not None else temperature,
        }
        data = await self._http.post_json(
            "DeepSeek", self._text_url, body, headers={"Authorization": f"Bearer {api_key}"},
        )
        try:
            text = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            text = None
        if not isinstance(text, str):
            raise ProviderError("DeepSeek returned an unexpected response shape", provider="DeepSeek")
        return Reply(category=category, content=text.strip())

    async def _generate_image(self, prompt: str, api_key: str) -> Reply:
        data = await self._http.post_form("DeepAI", self._image_url, {"text": prompt}, headers={"api-key": api_key})
        url = data.get("output_url") if isinstance(data, dict) else None
        if not url or not isinstance(url, str):
            raise ProviderError("DeepAI response has no output_url", provider="DeepAI")
        return Reply(category=Category.IMAGE, kind=MessageKind.IMAGE, content=url)

    async def _relay_voice(self, text: str, api_key: str) -> Reply:
        data: Any = await self._http.post_json(
            "Voice relay",
            self._voice_relay_url,  # type: ignore[arg-type]
            {"text": text, "language": self._language().value},
            headers={"Authorization": f"Bearer {api_key}"},
        )
        if not isinstance(data, dict):
            data = {}
        if data.get("url") and isinstance(data["url"], str):
            return Reply(category=Category.VOICE, kind=MessageKind.VOICE, content=data["url"])
        if data.get("text") and isinstance(data["text"], str):
            return Reply(category=Category.VOICE, content=data["text"])
        raise ProviderError("Voice relay response has neither url nor text", provider="Voice relay")
