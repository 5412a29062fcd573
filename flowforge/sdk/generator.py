"""Client for the external graph generator.

The generator turns a natural-language prompt into a raw, untrusted graph.
This client only moves bytes: the returned mapping still has to go through
`flowforge.pipeline.assemble` before anything renders it.

    generator = GraphGenerator("https://gen.example.com/v1/graphs")
    raw = await generator.generate("Create a flowchart for making coffee")
"""

from __future__ import annotations

import asyncio
import logging
import warnings
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class GraphGeneratorError(Exception):
    """Exception raised when the generator cannot produce a graph."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GraphGenerator:
    """Async client for the graph generator endpoint.

    Connection errors and 5xx responses are retried up to `max_retries`
    times with exponential backoff; anything else fails immediately.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        max_retries: int = 2,
        api_key: str | None = None,
        backoff: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            endpoint: full URL the generation request is POSTed to
            timeout: HTTP request timeout in seconds
            max_retries: retries after the first attempt
            api_key: sent as a bearer token when given
            backoff: base delay in seconds between retries
            transport: custom httpx transport (tests use MockTransport)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.api_key = api_key
        self.backoff = backoff
        self._transport = transport

        if api_key and endpoint.startswith("http://"):
            warnings.warn(
                f"sending generator API key over plain HTTP to {endpoint}",
                stacklevel=2,
            )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def generate(
        self,
        prompt: str,
        diagram_kind: str = "flowchart",
        complexity: str = "medium",
        style: str = "default",
    ) -> dict[str, Any]:
        """Request a raw graph for `prompt`.

        Returns:
            The raw graph mapping (a top-level "data" wrapper is unwrapped).

        Raises:
            GraphGeneratorError: the endpoint failed after all retries, or
                answered with a client error or a non-object body.
        """
        payload = {
            "prompt": prompt,
            "diagramKind": diagram_kind,
            "complexity": complexity,
            "style": style,
        }

        attempts = self.max_retries + 1
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport,
        ) as client:
            for attempt in range(attempts):
                last = attempt == attempts - 1
                try:
                    response = await client.post(self.endpoint, json=payload)
                except httpx.RequestError as e:
                    if last:
                        raise GraphGeneratorError(
                            f"Failed to connect to generator at {self.endpoint}: {e}"
                        ) from e
                    logger.info("generator request failed (%s), retrying", e)
                    await asyncio.sleep(self.backoff * 2**attempt)
                    continue

                if response.status_code >= 500 and not last:
                    logger.info("generator answered %d, retrying", response.status_code)
                    await asyncio.sleep(self.backoff * 2**attempt)
                    continue
                return self._parse(response)

    def _parse(self, response: httpx.Response) -> dict[str, Any]:
        if response.status_code >= 400:
            raise GraphGeneratorError(
                f"Generator returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as e:
            raise GraphGeneratorError("Generator returned a non-JSON body") from e

        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            body = body["data"]
        if not isinstance(body, dict):
            raise GraphGeneratorError("Generator returned a non-object body")
        return body
