"""Tests for the async graph generator client (httpx MockTransport)."""

import asyncio
import json

import httpx
import pytest

from flowforge.sdk.generator import GraphGenerator, GraphGeneratorError

ENDPOINT = "https://generator.test/v1/graphs"
GRAPH = {"nodes": [{"id": "a", "data": {"label": "Start"}}], "edges": []}


def _generator(handler, **kwargs) -> GraphGenerator:
    kwargs.setdefault("backoff", 0)
    return GraphGenerator(ENDPOINT, transport=httpx.MockTransport(handler), **kwargs)


class TestGenerate:
    def test_posts_request_payload(self):
        """The prompt and options are sent as camelCase JSON."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=GRAPH)

        generator = _generator(handler, api_key="secret")
        result = asyncio.run(generator.generate("Make coffee", diagram_kind="flowchart", complexity="simple"))

        assert result == GRAPH
        assert seen["body"] == {
            "prompt": "Make coffee",
            "diagramKind": "flowchart",
            "complexity": "simple",
            "style": "default",
        }
        assert seen["auth"] == "Bearer secret"

    def test_unwraps_data_key(self):
        generator = _generator(lambda request: httpx.Response(200, json={"success": True, "data": GRAPH}))
        assert asyncio.run(generator.generate("x")) == GRAPH

    def test_retries_server_errors(self):
        """5xx responses are retried until one succeeds."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 3:
                return httpx.Response(503, text="busy")
            return httpx.Response(200, json=GRAPH)

        generator = _generator(handler, max_retries=2)
        assert asyncio.run(generator.generate("x")) == GRAPH
        assert len(calls) == 3

    def test_gives_up_after_retries(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, text="boom")

        generator = _generator(handler, max_retries=1)
        with pytest.raises(GraphGeneratorError) as exc_info:
            asyncio.run(generator.generate("x"))
        assert exc_info.value.status_code == 500
        assert len(calls) == 2

    def test_retries_connection_errors(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        generator = _generator(handler, max_retries=2)
        with pytest.raises(GraphGeneratorError, match="Failed to connect"):
            asyncio.run(generator.generate("x"))
        assert len(calls) == 3

    def test_client_errors_are_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(400, json={"error": "bad prompt"})

        generator = _generator(handler, max_retries=3)
        with pytest.raises(GraphGeneratorError) as exc_info:
            asyncio.run(generator.generate("x"))
        assert exc_info.value.status_code == 400
        assert len(calls) == 1

    def test_non_json_body(self):
        generator = _generator(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(GraphGeneratorError, match="non-JSON"):
            asyncio.run(generator.generate("x"))

    def test_non_object_body(self):
        generator = _generator(lambda request: httpx.Response(200, json=[1, 2]))
        with pytest.raises(GraphGeneratorError, match="non-object"):
            asyncio.run(generator.generate("x"))


class TestConfiguration:
    def test_plain_http_api_key_warns(self):
        with pytest.warns(UserWarning, match="plain HTTP"):
            GraphGenerator("http://generator.test/graphs", api_key="secret")

    def test_negative_retries_clamped(self):
        assert GraphGenerator(ENDPOINT, max_retries=-1).max_retries == 0

    def test_zero_retries_surfaces_first_server_error(self):
        """With no retries the first 5xx is raised with its status code."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, text="busy")

        generator = _generator(handler, max_retries=0)
        with pytest.raises(GraphGeneratorError) as exc_info:
            asyncio.run(generator.generate("x"))
        assert exc_info.value.status_code == 503
        assert len(calls) == 1
