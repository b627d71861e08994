"""
Async httpx client for OpenAI-compatible chat completions.

One POST per attempt. HTTP 429 is retried by `async_retry` with a fixed
delay; every other failure is mapped to a non-retryable ProviderError.
"""
import logging
import time
from typing import Any

import httpx

from ..core.environment import get_request_timeout
from ..core.prometheus_metrics import SmokeMetricsCollector, metrics as default_metrics
from ..core.retry import async_retry
from ..eval.tools import openai_tools
from ..exceptions import (
    ProviderHTTPError,
    ProviderResponseError,
    ProviderTransportError,
    RateLimitError,
)
from .config import RATE_LIMIT_DELAY_SECONDS, RATE_LIMIT_MAX_ATTEMPTS, ProviderConfig

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Sends tool-enabled chat requests to a single provider.

    Usage::

        async with ChatCompletionClient(provider) as client:
            body = await client.create_chat_completion("List all files.")
            if has_tool_calls(body):
                ...
    """

    def __init__(
        self,
        provider: ProviderConfig,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        metrics: SmokeMetricsCollector | None = None,
    ):
        self.provider = provider
        self.metrics = metrics or default_metrics
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else get_request_timeout()
        )
        self._tools = openai_tools()

    def build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.provider.model_id,
            "messages": [{"role": "user", "content": prompt}],
            "tools": self._tools,
            "temperature": 0,
        }

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.provider.api_key.get_secret_value()}",
        }

    @async_retry(max_attempts=RATE_LIMIT_MAX_ATTEMPTS, delay=RATE_LIMIT_DELAY_SECONDS)
    async def create_chat_completion(self, prompt: str) -> dict[str, Any]:
        """Send one prompt with the full tool table attached.

        Returns:
            The decoded response body, unchanged.

        Raises:
            RateLimitError: HTTP 429 on the final attempt.
            ProviderHTTPError: Any other non-2xx status.
            ProviderTransportError: Connection failures, timeouts and invalid URLs.
            ProviderResponseError: Body is not a JSON object.
        """
        name = self.provider.name
        logger.debug(f"POST {self.provider.endpoint_url} (provider={name}, model={self.provider.model_id})")
        started = time.perf_counter()
        try:
            response = await self._client.post(
                self.provider.endpoint_url,
                json=self.build_payload(prompt),
                headers=self._headers(),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.metrics.record_request(name, "error", time.perf_counter() - started)
            raise ProviderTransportError(
                f"Request to {name} failed: {type(e).__name__}: {e}"
            ) from e

        self.metrics.record_request(name, str(response.status_code), time.perf_counter() - started)

        if response.status_code == 429:
            raise RateLimitError(
                f"Rate limit hit for {name}: HTTP 429 - {response.text[:500]}",
                retry_after=response.headers.get("Retry-After"),
            )

        if response.is_error:
            raise ProviderHTTPError(
                f"Request to {name} failed with status code {response.status_code}: "
                f"{response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderResponseError(f"{name} returned a non-JSON body: {e}") from e

        if not isinstance(body, dict):
            raise ProviderResponseError(
                f"{name} returned JSON {type(body).__name__}, expected an object"
            )
        return body

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ChatCompletionClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


def has_tool_calls(response: dict[str, Any]) -> bool:
    """True when choices[0].message.tool_calls is present and non-empty.

    Raises:
        ProviderResponseError: If choices[0].message is missing.
    """
    try:
        message = response["choices"][0]["message"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(
            f"Cannot read choices[0].message from response: {type(e).__name__}: {e}"
        ) from e
    if not isinstance(message, dict):
        raise ProviderResponseError("choices[0].message is not an object")
    return bool(message.get("tool_calls"))
