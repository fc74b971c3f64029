"""
HTTP client shared by the provider calls.

One attempt per request; non-2xx responses and transport failures become
ProviderError.
"""

from typing import Any, Optional

import httpx

from glint_chat.errors import ProviderError

DEFAULT_TIMEOUT_S = 30.0
USER_AGENT = "glint-chat/0.1.0"


class HttpClient:
    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        """Pull a readable message out of a provider error body."""
        try:
            body = resp.json()
        except ValueError:
            return resp.text[:200] or resp.reason_phrase
        if isinstance(body, dict):
            err = body.get("error")
            if isinstance(err, dict) and err.get("message"):
                return str(err["message"])
            if isinstance(err, str) and err:
                return err
            if body.get("message"):
                return str(body["message"])
        return resp.text[:200] or resp.reason_phrase

    async def _send(self, provider: str, method: str, url: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise ProviderError(f"{provider} request timed out: {e}", provider=provider)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ProviderError(f"{provider} request failed: {e}", provider=provider)
        if resp.status_code >= 400:
            raise ProviderError(
                f"{provider} Error: {resp.status_code} - {self._error_message(resp)}",
                status_code=resp.status_code,
                provider=provider,
            )
        try:
            return resp.json()
        except ValueError:
            raise ProviderError(f"{provider} returned a non-JSON body", status_code=resp.status_code, provider=provider)

    async def post_json(
        self, provider: str, url: str, body: dict[str, Any], headers: Optional[dict[str, str]] = None,
    ) -> Any:
        return await self._send(provider, "POST", url, json=body, headers=headers)

    async def post_form(
        self, provider: str, url: str, fields: dict[str, str], headers: Optional[dict[str, str]] = None,
    ) -> Any:
        # multipart/form-data, boundary set by httpx
        files = {name: (None, value) for name, value in fields.items()}
        return await self._send(provider, "POST", url, files=files, headers=headers)

    async def close(self) -> None:
        await self._client.aclose()
