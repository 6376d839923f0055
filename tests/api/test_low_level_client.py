#!/usr/bin/env python3
"""
Tests for the low-level Client: request building, error mapping and
response deserialization.
"""

import json
import os
import sys
import unittest

import httpx

# Add parent directory to path to import helpers
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from helpers.mock_api import chat_completion, error_response, json_response, make_client

from aio_openai import (
    ApiError,
    AzureConfig,
    Client,
    HttpError,
    JSONDeserializeError,
    OpenAIConfig,
    RequestOptions,
)
from aio_openai.models import CreateChatCompletionRequest, ListModelResponse

MODELS_PAYLOAD = {
    "object": "list",
    "data": [{"id": "gpt-4o", "object": "model", "created": 1715367049, "owned_by": "system"}],
}


class _Recorder:
    """Records requests and answers each with the same response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class TestClientRequests(unittest.IsolatedAsyncioTestCase):
    """Test cases for request building."""

    async def test_openai_headers_and_url(self):
        """Test authentication and organization headers on a GET request."""
        recorder = _Recorder(json_response(MODELS_PAYLOAD))
        config = OpenAIConfig(api_base="https://api.test/v1", api_key="sk-test", org_id="org-1",
                              project_id="proj-1", beta="assistants=v2")

        async with make_client(recorder, config=config) as client:
            await client.get("/models", response_model=dict)

        request = recorder.last
        self.assertEqual(request.method, "GET")
        self.assertEqual(str(request.url), "https://api.test/v1/models")
        self.assertEqual(request.headers["authorization"], "Bearer sk-test")
        self.assertEqual(request.headers["openai-organization"], "org-1")
        self.assertEqual(request.headers["openai-project"], "proj-1")
        self.assertEqual(request.headers["openai-beta"], "assistants=v2")

    async def test_azure_url_query_and_key(self):
        """Test Azure deployment routing, api-version and api-key header."""
        recorder = _Recorder(json_response(chat_completion()))
        config = AzureConfig(api_base="https://res.openai.azure.com", api_key="azure-key",
                             deployment_id="gpt4o", api_version="2024-10-21")

        async with make_client(recorder, config=config) as client:
            await client.post("/chat/completions", {"messages": []}, response_model=dict)

        request = recorder.last
        self.assertEqual(request.url.path, "/openai/deployments/gpt4o/chat/completions")
        self.assertEqual(request.url.params["api-version"], "2024-10-21")
        self.assertEqual(request.headers["api-key"], "azure-key")
        self.assertNotIn("authorization", request.headers)

    async def test_json_body_omits_unset_fields(self):
        """Test request models are sent without None fields."""
        recorder = _Recorder(json_response(chat_completion()))
        request = CreateChatCompletionRequest(
            model="gpt-4o-mini",
            messages=[{"role": "user", "content": "Hi"}],
            temperature=0.2,
        )

        async with make_client(recorder) as client:
            await client.post("/chat/completions", request, response_model=dict)

        sent = recorder.last
        self.assertEqual(sent.headers["content-type"], "application/json")
        self.assertEqual(json.loads(sent.content), {
            "messages": [{"role": "user", "content": "Hi"}],
            "model": "gpt-4o-mini",
            "temperature": 0.2,
        })

    async def test_request_options_are_merged(self):
        """Test per-request query parameters and headers."""
        recorder = _Recorder(json_response({"object": "list", "data": []}))
        config = OpenAIConfig(api_base="https://api.test/v1", api_key="sk-test",
                              custom_headers={"X-Trace": "config"})
        options = RequestOptions().with_query({"limit": 2, "after": "file-1"}).with_header("x-trace", "request")

        async with make_client(recorder, config=config) as client:
            await client.get("/files", options, response_model=dict)

        request = recorder.last
        self.assertEqual(request.url.params["limit"], "2")
        self.assertEqual(request.url.params["after"], "file-1")
        self.assertEqual(request.headers.get_list("x-trace"), ["request"])

    async def test_get_raw_returns_body_and_headers(self):
        recorder = _Recorder(httpx.Response(200, content=b"raw bytes", headers={"content-type": "application/jsonl"}))

        async with make_client(recorder) as client:
            body, headers = await client.get_raw("/files/file-1/content")

        self.assertEqual(body, b"raw bytes")
        self.assertEqual(headers["content-type"], "application/jsonl")

    async def test_delete(self):
        recorder = _Recorder(json_response({"id": "ft:model", "object": "model", "deleted": True}))

        async with make_client(recorder) as client:
            result = await client.delete("/models/ft:model", response_model=dict)

        self.assertEqual(recorder.last.method, "DELETE")
        self.assertTrue(result["deleted"])

    async def test_request_logging(self):
        """Test every round trip is logged as a structured record."""
        recorder = _Recorder(json_response(MODELS_PAYLOAD))

        with self.assertLogs("aio_openai.api.client", level="DEBUG") as logs:
            async with make_client(recorder) as client:
                await client.get("/models", response_model=dict)

        records = [line for line in logs.output if "API_REQUEST:" in line]
        self.assertEqual(len(records), 1)
        payload = json.loads(records[0].split("API_REQUEST: ", 1)[1])
        self.assertEqual(payload["method"], "GET")
        self.assertEqual(payload["status"], 200)
        self.assertNotIn("sk-test", records[0])


class TestClientResponses(unittest.IsolatedAsyncioTestCase):
    """Test cases for response handling."""

    async def test_typed_response(self):
        async with make_client(_Recorder(json_response(MODELS_PAYLOAD))) as client:
            models = await client.get("/models", response_model=ListModelResponse)

        self.assertIsInstance(models, ListModelResponse)
        self.assertEqual(models.data[0].id, "gpt-4o")

    async def test_error_envelope_raises_api_error(self):
        """Test an error envelope becomes ApiError with its fields."""
        recorder = _Recorder(error_response(401, "Incorrect API key provided", "invalid_request_error",
                                            "invalid_api_key"))

        with self.assertLogs("aio_openai.api.client", level="WARNING") as logs:
            async with make_client(recorder) as client:
                with self.assertRaises(ApiError) as ctx:
                    await client.get("/models", response_model=dict)

        error = ctx.exception
        self.assertEqual(error.status, 401)
        self.assertEqual(error.code, "invalid_api_key")
        self.assertEqual(error.type, "invalid_request_error")
        self.assertEqual(str(error), "invalid_request_error: Incorrect API key provided (code: invalid_api_key)")
        self.assertTrue(any("API_ERROR:" in line for line in logs.output))

    async def test_failed_response_without_envelope_raises_http_error(self):
        recorder = _Recorder(httpx.Response(502, text="<html>Bad Gateway</html>"))

        async with make_client(recorder) as client:
            with self.assertRaises(HttpError) as ctx:
                await client.get("/models", response_model=dict)

        self.assertEqual(ctx.exception.status, 502)
        self.assertIn("Bad Gateway", ctx.exception.message)

    async def test_transport_failure_raises_http_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        async with make_client(handler) as client:
            with self.assertRaises(HttpError) as ctx:
                await client.get("/models", response_model=dict)

        self.assertIsNone(ctx.exception.status)
        self.assertIn("connection refused", str(ctx.exception))

    async def test_mismatched_response_raises_deserialize_error(self):
        """Test a body that does not fit the response type."""
        async with make_client(_Recorder(json_response({"object": "list"}))) as client:
            with self.assertRaises(JSONDeserializeError) as ctx:
                await client.get("/models", response_model=ListModelResponse)

        self.assertEqual(json.loads(ctx.exception.content), {"object": "list"})


class TestClientConfiguration(unittest.IsolatedAsyncioTestCase):
    """Test cases for client construction helpers."""

    async def test_with_config_returns_copy(self):
        client = make_client(_Recorder(json_response({})))
        azure = AzureConfig(api_base="https://res.openai.azure.com", api_key="k", deployment_id="d",
                            api_version="v")

        other = client.with_config(azure)

        self.assertIs(other.config, azure)
        self.assertIsInstance(client.config, OpenAIConfig)
        self.assertIs(other.transport, client.transport)
        await client.aclose()

    async def test_resource_accessors(self):
        client = Client(OpenAIConfig(api_key="sk-test"))

        for name in ("models", "chat", "completions", "embeddings", "moderations", "files", "images", "audio"):
            with self.subTest(resource=name):
                self.assertIs(getattr(client, name)._client, client)
        await client.aclose()


if __name__ == "__main__":
    unittest.main()
