from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from ..core.constants import CONNECTION_ERROR_MESSAGE, DEFAULT_BACKEND_TIMEOUT
from ..core.exceptions import BackendError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackendConfig:
    base_url: str
    timeout: float = DEFAULT_BACKEND_TIMEOUT


def extract_message(body: Any, default: str) -> str:
    """Backend error bodies use ``mensaje``, ``error`` or ``message``."""
    if isinstance(body, dict):
        for key in ("mensaje", "error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return default


class BackendClient:
    """Thin JSON client for the REST backend.

    Note: One ``requests.Session`` per client; the bearer token is read per
    call from ``token_provider`` so the client can be shared across requests.
    """

    def __init__(
        self,
        config: BackendConfig,
        *,
        session: Optional[requests.Session] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
    ):
        self._config = config
        self._session = session or requests.Session()
        self._token_provider = token_provider

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, token: Optional[str]) -> dict:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if token is None and self._token_provider is not None:
            token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        token: Optional[str] = None,
        default_error: str = "Error en la respuesta del servidor.",
    ) -> Any:
        url = self.url(path)
        try:
            resp = self._session.request(
                method,
                url,
                json=json,
                headers=self._headers(token),
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            logger.warning("backend %s %s failed: %s", method, url, e)
            raise BackendError(CONNECTION_ERROR_MESSAGE) from e

        body = self._decode(resp)
        if not resp.ok:
            message = extract_message(body, default_error)
            logger.warning("backend %s %s -> %s: %s", method, url, resp.status_code, message)
            raise BackendError(message, status=resp.status_code, body=body)
        return body

    @staticmethod
    def _decode(resp) -> Any:
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return {"mensaje": resp.text} if resp.text else None

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)
