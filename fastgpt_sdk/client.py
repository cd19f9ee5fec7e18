"""
FastGPT Client – Main entry point for the SDK.

Wraps the FastGPT REST API (``/api/...``) and the streaming chat endpoint.
Every call has an async form (``aget_histories``) and a sync form
(``get_histories``). Authentication is a Bearer API key.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterator, Optional

import httpx

from fastgpt_sdk import __version__
from fastgpt_sdk.app import AppAPI
from fastgpt_sdk.chat import ChatAPI
from fastgpt_sdk.dataset import DatasetAPI
from fastgpt_sdk.models import (
    APIError,
    AuthenticationError,
    Envelope,
    FastGPTConnectionError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30.0
_USER_AGENT = f"fastgpt-python-sdk/{__version__}"
_END = object()


class _BearerAuth(httpx.Auth):
    """httpx Auth handler that injects the API key on every request, including redirects."""

    def __init__(self, token: str):
        self.token = token

    def auth_flow(self, request):
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


class FastGPTClient:
    """
    FastGPT Python client.

    API groups hang off the client:

    - ``client.app``: app usage statistics
    - ``client.chat``: chat completions (streaming or not) and history
    - ``client.dataset``: datasets, collections, data and search tests

    Examples:
        client = FastGPTClient("https://cloud.fastgpt.cn", api_key="fastgpt-...")

        # Streaming chat
        request = ChatRequest(messages=[Message(role="user", content="Hello")])
        for event in client.chat.stream(request):
            print(event.content, end="", flush=True)

        # Knowledge base
        dataset_id = client.dataset.create_dataset(DatasetCreateRequest(name="Docs"))

    Use either the sync or the async methods on one client instance, not both:
    the underlying connection pool is tied to one event loop.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = _DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
        debug: bool = False,
    ):
        """
        Initialize the FastGPT client.

        Args:
            base_url: FastGPT server URL (e.g. ``https://cloud.fastgpt.cn``).
            api_key: FastGPT API key.
            timeout: Request timeout in seconds (default 30).
            verify_ssl: Verify SSL certificates (default True).
            debug: Log full response bodies.

        Raises:
            ValueError: If base_url or api_key is empty.
        """
        if not base_url:
            raise ValueError("base_url is required")
        if not api_key:
            raise ValueError("api_key is required")

        self.base_url = base_url.rstrip("/")
        self.debug = debug
        self._api_key = api_key
        self._timeout = timeout
        self._runner: Optional[tuple] = None

        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json", "User-Agent": _USER_AGENT},
            auth=_BearerAuth(api_key),
            timeout=timeout,
            verify=verify_ssl,
            follow_redirects=True,
        )

        self.app = AppAPI(self)
        self.chat = ChatAPI(self)
        self.dataset = DatasetAPI(self)

    @classmethod
    def from_env(cls, **kwargs) -> "FastGPTClient":
        """
        Build a client from ``FASTGPT_BASE_URL``, ``FASTGPT_API_KEY``
        and the optional ``FASTGPT_TIMEOUT``.
        """
        base_url = os.environ.get("FASTGPT_BASE_URL")
        api_key = os.environ.get("FASTGPT_API_KEY")
        if not base_url or not api_key:
            raise ValueError("Missing FASTGPT_BASE_URL or FASTGPT_API_KEY")
        if "FASTGPT_TIMEOUT" in os.environ:
            kwargs.setdefault("timeout", float(os.environ["FASTGPT_TIMEOUT"]))
        return cls(base_url, api_key, **kwargs)

    def set_debug(self, debug: bool) -> None:
        """Toggle logging of full response bodies."""
        self.debug = debug

    # ──────────────────────────────────────────────────────────
    # LIFECYCLE
    # ──────────────────────────────────────────────────────────

    async def aclose(self):
        """Close the underlying HTTP client."""
        await self._http.aclose()

    def close(self):
        """Close the underlying HTTP client and the sync event loop (sync)."""
        try:
            if self._runner is not None:
                loop, thread = self._runner
                try:
                    self._sync(self._http.aclose())
                finally:
                    loop.call_soon_threadsafe(loop.stop)
                    thread.join()
                    loop.close()
                    self._runner = None
                return

            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None

            if loop and loop.is_running():
                loop.create_task(self._http.aclose())
            else:
                asyncio.run(self._http.aclose())
        except Exception:
            logger.debug("Error while closing FastGPT client", exc_info=True)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ──────────────────────────────────────────────────────────
    # SYNC BRIDGE
    # ──────────────────────────────────────────────────────────

    def _loop(self) -> asyncio.AbstractEventLoop:
        """Event loop for sync calls, started on first use in a daemon thread."""
        if self._runner is None:
            loop = asyncio.new_event_loop()
            thread = threading.Thread(
                target=loop.run_forever, name="fastgpt-sdk-loop", daemon=True
            )
            thread.start()
            self._runner = (loop, thread)
        return self._runner[0]

    def _sync(self, coro):
        """Run an async coroutine synchronously."""
        return asyncio.run_coroutine_threadsafe(coro, self._loop()).result()

    def _sync_iter(self, agen) -> Iterator[Any]:
        """Drive an async generator from sync code, one item at a time."""

        async def _anext():
            try:
                return await agen.__anext__()
            except StopAsyncIteration:
                return _END

        async def _aclose():
            await agen.aclose()

        try:
            while True:
                item = self._sync(_anext())
                if item is _END:
                    return
                yield item
        finally:
            self._sync(_aclose())

    # ──────────────────────────────────────────────────────────
    # INTERNAL HELPERS
    # ──────────────────────────────────────────────────────────

    def _handle_error(self, response: httpx.Response) -> None:
        """Raise the appropriate exception based on HTTP status."""
        if response.is_success:
            return

        status = response.status_code
        try:
            body = response.json()
            detail = body.get("message") or body.get("detail") or response.text
        except Exception:
            detail = response.text

        if status == 401:
            raise AuthenticationError(
                "Authentication failed", status_code=status, detail=detail
            )
        elif status == 403:
            raise PermissionDeniedError(
                "Permission denied", status_code=status, detail=detail
            )
        elif status == 404:
            raise NotFoundError("Resource not found", status_code=status, detail=detail)
        elif status == 429:
            retry_after = int(response.headers.get("Retry-After", "60"))
            raise RateLimitError(
                "Rate limit exceeded",
                retry_after=retry_after,
                status_code=status,
                detail=detail,
            )
        else:
            raise APIError(f"HTTP {status}", code=status, status_code=status, detail=detail)

    def _unwrap(self, response: httpx.Response) -> Any:
        """
        Return the result carried by a successful response.

        An object with a ``code`` key is a FastGPT envelope: its ``data`` is
        the result, and a ``code`` other than 200 is an error. Any other JSON
        body is the result itself.
        """
        if self.debug:
            logger.debug("HTTP Response: %s", response.text)

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise APIError(
                "Invalid JSON response",
                status_code=response.status_code,
                detail=response.text[:200],
            ) from e

        if isinstance(body, dict) and "code" in body:
            envelope = Envelope.model_validate(body)
            if not envelope.is_success:
                raise APIError(
                    envelope.message or envelope.status_text or "API error",
                    code=envelope.code,
                    status_code=response.status_code,
                    detail=envelope.status_text,
                )
            return envelope.data
        return body

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the unwrapped result."""
        logger.debug("%s %s", method, path)
        try:
            resp = await self._http.request(method, path, json=json, params=params)
        except httpx.TransportError as e:
            raise FastGPTConnectionError(
                f"{method} {path} failed", detail=str(e)
            ) from e
        logger.debug("%s %s -> %s", method, path, resp.status_code)
        self._handle_error(resp)
        return self._unwrap(resp)

    @asynccontextmanager
    async def _stream(
        self, method: str, path: str, *, json: Optional[Any] = None
    ) -> AsyncIterator[httpx.Response]:
        """Open a streaming response; errors are raised before the body is read."""
        logger.debug("%s %s (stream)", method, path)
        try:
            async with self._http.stream(method, path, json=json) as resp:
                if not resp.is_success:
                    await resp.aread()
                    self._handle_error(resp)
                yield resp
        except httpx.TransportError as e:
            raise FastGPTConnectionError("Failed to read SSE stream", detail=str(e)) from e

    # ──────────────────────────────────────────────────────────
    # REPR
    # ──────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"FastGPTClient(base_url={self.base_url!r}, debug={self.debug})"
