"""HTTP client for the mail relay API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from mailrelay.clients.request_config import (
    CredentialsMode,
    JsonBody,
    MultipartBody,
    RequestConfig,
)
from mailrelay.core.config import settings

logger = logging.getLogger(__name__)


class MailerApiError(RuntimeError):
    """Raised for any non-2xx answer, as ``"<status>: <body>"``."""

    def __init__(self, status_code: int, text: str):
        super().__init__(f"{status_code}: {text}")
        self.status_code = status_code
        self.text = text


class MailerClient:
    """Small wrapper around the mail relay endpoints."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        api_prefix: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        prefix = settings.API_PREFIX if api_prefix is None else api_prefix
        self._api_prefix = "/" + prefix.strip("/") if prefix.strip("/") else ""
        self._owns_client = http_client is None
        if http_client is not None:
            self._client = http_client
        else:
            configured_base = base_url or settings.MAILER_API_URL
            self._client = httpx.Client(
                base_url=configured_base.rstrip("/"),
                timeout=timeout or settings.MAILER_API_TIMEOUT,
                transport=transport,
            )

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "MailerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _url(self, path: str) -> str:
        return f"{self._api_prefix}/{path.lstrip('/')}"

    def _build_request(self, path: str, config: RequestConfig) -> httpx.Request:
        kwargs: Dict[str, Any] = {"headers": dict(config.headers)}
        if isinstance(config.body, MultipartBody):
            kwargs["files"] = config.body.parts
        elif isinstance(config.body, JsonBody):
            kwargs["json"] = config.body.payload

        request = self._client.build_request(config.method, self._url(path), **kwargs)

        same_origin = request.url.host == self._client.base_url.host
        if config.credentials_mode is CredentialsMode.OMIT or (
            config.credentials_mode is CredentialsMode.SAME_ORIGIN and not same_origin
        ):
            request.headers.pop("Cookie", None)
        return request

    def request(self, path: str, config: RequestConfig) -> httpx.Response:
        """Send ``config`` to ``path`` and fail on any non-2xx status."""
        request = self._build_request(path, config)
        response = self._client.send(request)
        if response.is_error:
            text = response.text or response.reason_phrase
            logger.warning(
                "Mail relay returned HTTP %s for %s %s",
                response.status_code,
                config.method,
                request.url.path,
            )
            raise MailerApiError(response.status_code, text)
        return response

    def send_email(self, config: RequestConfig) -> Dict[str, Any]:
        return self.request("send-email", config).json()

    def list_emails(self) -> List[Dict[str, Any]]:
        return self.request("emails", RequestConfig(method="GET")).json()

    def get_email(self, record_id: int) -> Dict[str, Any]:
        return self.request(f"emails/{record_id}", RequestConfig(method="GET")).json()


__all__ = ["MailerApiError", "MailerClient"]
