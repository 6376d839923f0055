#!/usr/bin/env python3
"""
Tests for bring-your-own-type method variants.
"""

import json
import os
import sys
import unittest
from dataclasses import dataclass
from typing import Any, List

from pydantic import BaseModel

# Add parent directory to path to import helpers
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from helpers.mock_api import chat_chunk, chat_completion, json_response, make_client, sse_body, sse_response

from aio_openai import InvalidArgumentError, JSONDeserializeError
from aio_openai.api import Display, Serializable, byot, deserialize, to_jsonable
from aio_openai.models import ChatCompletionChunk, CreateChatCompletionResponse, Model
from aio_openai.resources import Chat, Models


class Greeting(BaseModel):
    text: str


class GreetingRequest(BaseModel):
    name: str


class Greeter:
    """Resource-like class echoing its arguments, without HTTP."""

    @byot(T0=Display)
    async def greet(self, name: str, *, response_model: Any = None) -> Greeting:
        return deserialize(json.dumps({"text": f"hello {name}"}), response_model)

    @byot(T0=Serializable)
    async def send(self, request: GreetingRequest, *, response_model: Any = None) -> Greeting:
        return deserialize(json.dumps({"text": f"hello {to_jsonable(request)['name']}"}), response_model)

    @byot(T0=int, R=BaseModel)
    async def repeat(self, times: int, *, response_model: Any = None) -> Greeting:
        return deserialize(json.dumps({"text": "hi " * times}), response_model)


@dataclass
class MyChatRequest:
    model: str
    messages: List[dict]


class TestByotDecorator(unittest.IsolatedAsyncioTestCase):
    """Test cases for the byot decorator itself."""

    def test_generic_twin_is_registered(self):
        self.assertTrue(hasattr(Greeter, "greet_byot"))
        self.assertEqual(Greeter.greet_byot.__name__, "greet_byot")
        self.assertEqual(Greeter.greet_byot.__qualname__, "Greeter.greet_byot")
        self.assertEqual(Greeter.greet.__name__, "greet")

    def test_resource_methods_have_twins(self):
        for resource, name in ((Chat, "create"), (Chat, "create_stream"), (Models, "retrieve"), (Models, "list")):
            with self.subTest(method=name):
                self.assertTrue(callable(getattr(resource, f"{name}_byot")))

    def test_method_without_response_model_is_rejected(self):
        with self.assertRaises(TypeError):
            byot(lambda self, value: None)

    async def test_concrete_uses_return_annotation(self):
        result = await Greeter().greet("Ada")

        self.assertEqual(result, Greeting(text="hello Ada"))

    async def test_generic_uses_caller_type(self):
        result = await Greeter().greet_byot("Ada", response_model=dict)

        self.assertEqual(result, {"text": "hello Ada"})

    async def test_concrete_validates_mappings(self):
        """Test mapping arguments are validated into the annotated model."""
        result = await Greeter().send({"name": "Ada"})

        self.assertEqual(result.text, "hello Ada")

    async def test_concrete_rejects_other_types(self):
        with self.assertRaises(InvalidArgumentError) as ctx:
            await Greeter().send(["Ada"])

        self.assertIn("send_byot()", str(ctx.exception))

    async def test_concrete_reports_validation_errors(self):
        with self.assertRaises(InvalidArgumentError):
            await Greeter().send({"nickname": "Ada"})

    async def test_generic_accepts_custom_objects(self):
        """Test the generic variant accepts any serializable request."""
        @dataclass
        class Person:
            name: str

        result = await Greeter().send_byot(Person(name="Ada"), response_model=Greeting)

        self.assertEqual(result.text, "hello Ada")

    async def test_capability_bound_is_checked(self):
        with self.assertRaises(InvalidArgumentError) as ctx:
            await Greeter().greet_byot(None, response_model=dict)

        self.assertIn("Display", str(ctx.exception))

    async def test_type_bounds_are_checked(self):
        """Test type bounds on arguments and on the response type."""
        self.assertEqual((await Greeter().repeat_byot(2, response_model=Greeting)).text, "hi hi ")

        with self.assertRaises(InvalidArgumentError):
            await Greeter().repeat_byot("2", response_model=Greeting)
        with self.assertRaises(InvalidArgumentError):
            await Greeter().repeat_byot(2, response_model=dict)

    async def test_response_model_is_required(self):
        with self.assertRaises(InvalidArgumentError):
            await Greeter().greet_byot("Ada", response_model=None)


class TestDeserialize(unittest.TestCase):
    """Test cases for deserialize and to_jsonable."""

    def test_generic_types(self):
        self.assertEqual(deserialize(b'[1, 2, 3]', List[int]), [1, 2, 3])
        self.assertEqual(deserialize('{"a": 1}', Any), {"a": 1})

    def test_mismatch_raises(self):
        with self.assertRaises(JSONDeserializeError):
            deserialize(b'{"id": 1}', Greeting)
        with self.assertRaises(JSONDeserializeError):
            deserialize(b"not json", dict)

    def test_to_jsonable(self):
        self.assertEqual(to_jsonable(GreetingRequest(name="Ada")), {"name": "Ada"})
        self.assertEqual(to_jsonable(MyChatRequest(model="m", messages=[])), {"model": "m", "messages": []})

    def test_to_jsonable_rejects_unknown_objects(self):
        with self.assertRaises(InvalidArgumentError):
            to_jsonable(object())


class TestResourceByot(unittest.IsolatedAsyncioTestCase):
    """Test cases for generic variants of resource methods against a mocked API."""

    async def test_models_retrieve_variants(self):
        payload = {"id": "gpt-4o", "object": "model", "created": 1715367049, "owned_by": "system"}

        async with make_client(lambda request: json_response(payload)) as client:
            typed = await client.models.retrieve("gpt-4o")
            raw = await client.models.retrieve_byot("gpt-4o", response_model=dict)

        self.assertIsInstance(typed, Model)
        self.assertEqual(raw, payload)

    async def test_chat_create_with_custom_request(self):
        """Test a dataclass request and dict response through create_byot."""
        sent = []

        def handler(request):
            sent.append(json.loads(request.content))
            return json_response(chat_completion("Hi there"))

        async with make_client(handler) as client:
            response = await client.chat.create_byot(
                MyChatRequest(model="gpt-4o-mini", messages=[{"role": "user", "content": "Hi"}]),
                response_model=dict,
            )

        self.assertEqual(sent[0], {"model": "gpt-4o-mini", "messages": [{"role": "user", "content": "Hi"}]})
        self.assertEqual(response["choices"][0]["message"]["content"], "Hi there")

    async def test_chat_create_concrete_accepts_mapping(self):
        async with make_client(lambda request: json_response(chat_completion())) as client:
            response = await client.chat.create({"model": "gpt-4o-mini", "messages": [{"role": "user", "content": "Hi"}]})

        self.assertIsInstance(response, CreateChatCompletionResponse)

    async def test_chat_stream_variants(self):
        """Test concrete and generic streams decode into their item types."""
        body = sse_body(chat_chunk("a"), "[DONE]")

        async with make_client(lambda request: sse_response(body)) as client:
            request = {"model": "gpt-4o-mini", "messages": [{"role": "user", "content": "Hi"}]}

            typed = [chunk async for chunk in await client.chat.create_stream(request)]
            raw = [chunk async for chunk in await client.chat.create_stream_byot(request, response_model=dict)]

        self.assertIsInstance(typed[0], ChatCompletionChunk)
        self.assertEqual(raw[0]["choices"][0]["delta"]["content"], "a")

    async def test_generic_rejects_unserializable_request(self):
        async with make_client(lambda request: json_response({})) as client:
            with self.assertRaises(InvalidArgumentError):
                await client.chat.create_byot(object(), response_model=dict)


if __name__ == "__main__":
    unittest.main()
