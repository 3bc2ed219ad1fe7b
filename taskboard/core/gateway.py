from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession
import asyncio
import logging
from urllib.parse import urlsplit
from typing import Optional, Dict, Any, List, Callable, Iterable

from sqlalchemy.exc import SQLAlchemyError

from .backend_routes import BackendRoutes
from .credential_store import CredentialStore
from .exceptions import AuthorizationError, BackendError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 15


class HttpGateway:
    """
    Single choke point for every backend call.

    Outgoing: adds `Authorization: Basic ...` to every non-public request
    when credentials are stored.
    Incoming: a 401 from any endpoint clears the credential store, tells
    the listeners (the session state machine) and raises AuthorizationError.
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        impersonate: Optional[str] = "chrome",
        public_endpoints: Optional[Iterable[str]] = None,
        public_prefixes: Optional[Iterable[str]] = None,
        session_factory: Optional[Callable[[], Any]] = None
    ):
        self.credential_store = credential_store
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.impersonate = impersonate
        self.public_endpoints = {
            self._normalize(p) for p in (public_endpoints or BackendRoutes.PUBLIC_ENDPOINTS)
        }
        self.public_prefixes = list(public_prefixes or BackendRoutes.PUBLIC_PREFIXES)
        self._session_factory = session_factory or self._new_session
        self._unauthorized_listeners: List[Callable[[], None]] = []

        self.log_prefix = f"[API: {self.base_url}]"

    def _new_session(self) -> AsyncSession:
        if self.impersonate:
            return AsyncSession(impersonate=self.impersonate)
        return AsyncSession()

    @staticmethod
    def _normalize(path: str) -> str:
        path = urlsplit(path).path or "/"
        if len(path) > 1:
            path = path.rstrip("/")
        return path

    # ========== Request interception ==========

    def add_unauthorized_listener(self, listener: Callable[[], None]):
        """Register a callback run (synchronously) after every 401"""
        self._unauthorized_listeners.append(listener)

    def is_public(self, path: str) -> bool:
        """Check if path is on the public allow-list (never gets credentials)"""
        normalized = self._normalize(path)
        if normalized in self.public_endpoints:
            return True
        raw = urlsplit(path).path
        return any(raw.startswith(prefix) for prefix in self.public_prefixes)

    def build_headers(self, path: str) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json, text/plain, */*",
        }
        if self.is_public(path):
            return headers

        credentials = self.credential_store.load()
        if credentials:
            headers["Authorization"] = credentials.authorization_header()
        return headers

    # ========== Dispatch ==========

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None
    ) -> Any:
        """
        Send a request and return the decoded body.

        Returns:
            Parsed JSON, raw text for non-JSON bodies, or None for an empty body

        Raises:
            AuthorizationError: Backend answered 401 (session already cleared)
            BackendError: Any other non-2xx status
            TransportError: Network failure or timeout
        """
        method = method.upper()
        url = f"{self.base_url}{path}"
        headers = self.build_headers(path)
        logger.debug(
            f"{self.log_prefix} {method} {path} "
            f"(auth={'yes' if 'Authorization' in headers else 'no'})"
        )

        try:
            async with self._session_factory() as session:
                response = await session.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=headers,
                    timeout=self.timeout
                )
        except (CurlError, asyncio.TimeoutError) as e:
            logger.error(f"{self.log_prefix} [ERROR] {method} {path} transport failure: {e}")
            raise TransportError() from e

        status = response.status_code
        if status == 401:
            self._handle_unauthorized(method, path)

        payload = self._decode(response)

        if 200 <= status < 300:
            logger.debug(f"{self.log_prefix} [OK] {method} {path} -> {status}")
            return payload

        message = None
        if isinstance(payload, dict) and payload.get("message"):
            message = str(payload["message"])
        logger.warning(f"{self.log_prefix} [WARNING] {method} {path} failed ({status}): {message or payload}")
        raise BackendError(status, message, payload)

    def _handle_unauthorized(self, method: str, path: str):
        logger.warning(f"{self.log_prefix} [AUTH] 401 on {method} {path}, forcing logout")
        try:
            self.credential_store.clear()
        except SQLAlchemyError as e:
            logger.error(f"{self.log_prefix} [ERROR] Could not clear credentials after 401: {e}")

        for listener in list(self._unauthorized_listeners):
            listener()

        raise AuthorizationError(redirect_to=BackendRoutes.LOGIN_ENTRY_POINT)

    @staticmethod
    def _decode(response) -> Any:
        text = response.text or ""
        if not text.strip():
            return None
        try:
            return response.json()
        except ValueError:
            return text

    # ========== Shortcuts ==========

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, params: Optional[Dict[str, Any]] = None, json: Any = None) -> Any:
        return await self.request("POST", path, params=params, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
