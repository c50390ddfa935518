# src/assignly/api/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import DEFAULT_SIGNUP_PATH, get_settings
from .errors import SignupHttpError, SignupTransportError

logger = logging.getLogger(__name__)


def _make_timeout(timeout_s: float | None) -> httpx.Timeout:
    """
    No timeout unless configured: the signup screen shows a spinner until
    the backend answers.
    """
    if timeout_s is None:
        return httpx.Timeout(None)
    return httpx.Timeout(timeout_s)


class HttpSignupApi:
    """
    SignupApi implementation over the backend REST endpoint.

    POST {base_url}/{signup_path} with a JSON body:
        {"login": ..., "tag": ..., "password": ..., "image": <base64 jpeg or "">}

    No retries. Non-2xx answers become SignupHttpError, transport failures
    become SignupTransportError.
    """

    def __init__(
            self,
            settings: Any = None,
            *,
            client: httpx.AsyncClient | None = None,
    ) -> None:
        if settings is None:
            settings = get_settings()
        self._base_url = str(getattr(settings, "api_base_url", "")).rstrip("/")
        self._signup_path = str(getattr(settings, "signup_path", DEFAULT_SIGNUP_PATH)).strip("/")
        self._timeout = _make_timeout(getattr(settings, "http_timeout_seconds", None))
        self._client = client
        self._owns_client = client is None

    @property
    def signup_url(self) -> str:
        return f"{self._base_url}/{self._signup_path}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def signup(
            self,
            *,
            login: str,
            tag: str,
            password: str,
            image: str,
    ) -> None:
        payload = {
            "login": login,
            "tag": tag,
            "password": password,
            "image": image,
        }
        client = self._get_client()

        try:
            resp = await client.post(self.signup_url, json=payload)
        except httpx.TransportError as e:
            logger.debug("signup transport failure url=%s", self.signup_url, exc_info=True)
            raise SignupTransportError(str(e) or e.__class__.__name__) from e

        if resp.is_success:
            logger.info("signup accepted login=%s status=%s", login, resp.status_code)
            return

        detail = (resp.text or "").strip()[:200]
        logger.info("signup rejected login=%s status=%s", login, resp.status_code)
        raise SignupHttpError(resp.status_code, detail)

    async def aclose(self) -> None:
        # Injected clients belong to the caller.
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
