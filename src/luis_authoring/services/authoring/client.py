from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

_log = logging.getLogger("luis_authoring.http")

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


class LuisHttpError(RuntimeError):
    def __init__(self, message: str, *, status_code: int, error_code: str | None = None, payload: Any | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.payload = payload


@dataclass(slots=True)
class LuisHttpClient:
    """Async HTTP transport for the LUIS Authoring v2.0 API.

    ``base_url`` is the regional authoring endpoint ending in ``/apps/``; every
    path passed to :meth:`request` is resolved relative to it.
    """

    base_url: str
    authoring_key: str
    timeout: float = 30.0
    _client: httpx.AsyncClient | None = None

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            self.base_url = f"{self.base_url}/"
        if not self._client:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str = "",
        *,
        json: Any | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        assert self._client is not None
        headers = {SUBSCRIPTION_KEY_HEADER: self.authoring_key}
        _log.debug("%s %s params=%s", method, path or "/", dict(params or {}))
        try:
            response = await self._client.request(method, path, json=json, params=params, headers=headers)
        except httpx.RequestError as exc:
            raise LuisHttpError(f"{method} {path or '/'} failed: {exc}", status_code=0) from exc

        content: Any | None = None
        if response.content:
            try:
                content = response.json()
            except ValueError:
                content = response.text

        if response.status_code >= 400:
            error_code: str | None = None
            message = response.text or f"HTTP {response.status_code}"
            if isinstance(content, Mapping):
                # LUIS wraps failures as {"error": {"code": ..., "message": ...}}
                detail = content.get("error")
                if isinstance(detail, Mapping):
                    if isinstance(detail.get("message"), str):
                        message = detail["message"]
                    if isinstance(detail.get("code"), str):
                        error_code = detail["code"]
                elif isinstance(content.get("message"), str):
                    message = content["message"]
            raise LuisHttpError(message, status_code=response.status_code, error_code=error_code, payload=content)

        return content

    async def get(self, path: str = "", *, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str = "", data: Any | None = None) -> Any:
        return await self.request("POST", path, json=data)

    async def delete(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("DELETE", path, params=params)


__all__ = ["LuisHttpClient", "LuisHttpError", "SUBSCRIPTION_KEY_HEADER"]
