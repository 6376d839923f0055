#!/usr/bin/env python3
"""
Chat Completion Models

This module contains the request messages, tool definitions, and the
response and stream chunk structures of the chat completions endpoint.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from .common import RequestModel, ResponseModel


class Role(str, Enum):
    SYSTEM = "system"
    DEVELOPER = "developer"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ImageDetail(str, Enum):
    AUTO = "auto"
    LOW = "low"
    HIGH = "high"


# Content parts


class ChatCompletionRequestMessageContentPartText(RequestModel):
    type: Literal["text"] = "text"
    text: str


class ImageUrl(RequestModel):
    """Either a url of the image or base64 encoded image data (``data:image/...``)."""

    url: str
    detail: Optional[ImageDetail] = None


class ChatCompletionRequestMessageContentPartImage(RequestModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[
    Union[ChatCompletionRequestMessageContentPartText, ChatCompletionRequestMessageContentPartImage],
    Field(discriminator="type"),
]


# Request messages


class ChatCompletionRequestSystemMessage(RequestModel):
    role: Literal["system"] = "system"
    content: Union[str, List[ChatCompletionRequestMessageContentPartText]]
    name: Optional[str] = None


class ChatCompletionRequestDeveloperMessage(RequestModel):
    role: Literal["developer"] = "developer"
    content: Union[str, List[ChatCompletionRequestMessageContentPartText]]
    name: Optional[str] = None


class ChatCompletionRequestUserMessage(RequestModel):
    role: Literal["user"] = "user"
    content: Union[str, List[ContentPart]]
    name: Optional[str] = None


class FunctionCall(RequestModel):
    """A function the model called; ``arguments`` is a JSON encoded string."""

    name: str
    arguments: str


class ChatCompletionMessageToolCall(RequestModel):
    id: str
    type: Literal["function"] = "function"
    function: FunctionCall


class ChatCompletionRequestAssistantMessage(RequestModel):
    role: Literal["assistant"] = "assistant"
    content: Optional[Union[str, List[ChatCompletionRequestMessageContentPartText]]] = None
    refusal: Optional[str] = None
    name: Optional[str] = None
    tool_calls: Optional[List[ChatCompletionMessageToolCall]] = None


class ChatCompletionRequestToolMessage(RequestModel):
    role: Literal["tool"] = "tool"
    content: Union[str, List[ChatCompletionRequestMessageContentPartText]]
    tool_call_id: str


ChatCompletionRequestMessage = Annotated[
    Union[
        ChatCompletionRequestSystemMessage,
        ChatCompletionRequestDeveloperMessage,
        ChatCompletionRequestUserMessage,
        ChatCompletionRequestAssistantMessage,
        ChatCompletionRequestToolMessage,
    ],
    Field(discriminator="role"),
]


# Tools


class FunctionObject(RequestModel):
    """
    A function the model may call.

    Attributes:
        name: Function name, a-z, A-Z, 0-9, underscores and dashes
        description: What the function does, used by the model to choose it
        parameters: JSON Schema object describing the arguments
        strict: Enable strict schema adherence
    """

    name: str
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    strict: Optional[bool] = None


class ChatCompletionTool(RequestModel):
    type: Literal["function"] = "function"
    function: FunctionObject


class FunctionName(RequestModel):
    name: str


class ChatCompletionNamedToolChoice(RequestModel):
    type: Literal["function"] = "function"
    function: FunctionName


# "none", "auto", "required" or a named function
ChatCompletionToolChoiceOption = Union[Literal["none", "auto", "required"], ChatCompletionNamedToolChoice]


class ResponseFormatJsonSchema(RequestModel):
    name: str
    description: Optional[str] = None
    schema_: Optional[Dict[str, Any]] = Field(None, alias="schema")
    strict: Optional[bool] = None


class ResponseFormat(RequestModel):
    """``{"type": "text"}``, ``{"type": "json_object"}`` or a JSON schema format."""

    type: Literal["text", "json_object", "json_schema"] = "text"
    json_schema: Optional[ResponseFormatJsonSchema] = None


class ChatCompletionStreamOptions(RequestModel):
    """When ``include_usage`` is set, an extra chunk carrying usage precedes ``[DONE]``."""

    include_usage: bool


class CreateChatCompletionRequest(RequestModel):
    """
    Request body for ``POST /chat/completions``.

    Attributes:
        messages: Conversation so far
        model: ID of the model to use
        stream: Set by the resource method, must not be set to True for ``create``
    """

    messages: List[ChatCompletionRequestMessage]
    model: str
    store: Optional[bool] = None
    metadata: Optional[Dict[str, str]] = None
    frequency_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    logit_bias: Optional[Dict[str, int]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = Field(None, ge=0, le=20)
    max_completion_tokens: Optional[int] = None
    n: Optional[int] = None
    presence_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    response_format: Optional[ResponseFormat] = None
    seed: Optional[int] = None
    service_tier: Optional[str] = None
    stop: Optional[Union[str, List[str]]] = None
    stream: Optional[bool] = None
    stream_options: Optional[ChatCompletionStreamOptions] = None
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    top_p: Optional[float] = None
    tools: Optional[List[ChatCompletionTool]] = None
    tool_choice: Optional[ChatCompletionToolChoiceOption] = None
    parallel_tool_calls: Optional[bool] = None
    user: Optional[str] = None


# Responses


class CompletionTokensDetails(ResponseModel):
    reasoning_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None
    accepted_prediction_tokens: Optional[int] = None
    rejected_prediction_tokens: Optional[int] = None


class PromptTokensDetails(ResponseModel):
    cached_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None


class CompletionUsage(ResponseModel):
    """Usage statistics for a completion request."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    prompt_tokens_details: Optional[PromptTokensDetails] = None
    completion_tokens_details: Optional[CompletionTokensDetails] = None


class ChatCompletionResponseToolCall(ResponseModel):
    id: str
    type: str = "function"
    function: FunctionCall


class ChatCompletionResponseMessage(ResponseModel):
    role: Role = Role.ASSISTANT
    content: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[ChatCompletionResponseToolCall]] = None


class TopLogprob(ResponseModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None


class ChatCompletionTokenLogprob(ResponseModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None
    top_logprobs: List[TopLogprob] = Field(default_factory=list)


class ChatChoiceLogprobs(ResponseModel):
    content: Optional[List[ChatCompletionTokenLogprob]] = None
    refusal: Optional[List[ChatCompletionTokenLogprob]] = None


class ChatChoice(ResponseModel):
    index: int
    message: ChatCompletionResponseMessage
    finish_reason: Optional[str] = None
    logprobs: Optional[ChatChoiceLogprobs] = None


class CreateChatCompletionResponse(ResponseModel):
    """A chat completion returned by ``POST /chat/completions``."""

    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: List[ChatChoice]
    service_tier: Optional[str] = None
    system_fingerprint: Optional[str] = None
    usage: Optional[CompletionUsage] = None


# Stream chunks


class FunctionCallStream(ResponseModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ChatCompletionMessageToolCallChunk(ResponseModel):
    index: int
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionCallStream] = None


class ChatCompletionStreamResponseDelta(ResponseModel):
    role: Optional[Role] = None
    content: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[ChatCompletionMessageToolCallChunk]] = None


class ChatChoiceStream(ResponseModel):
    index: int
    delta: ChatCompletionStreamResponseDelta
    finish_reason: Optional[str] = None
    logprobs: Optional[ChatChoiceLogprobs] = None


class ChatCompletionChunk(ResponseModel):
    """
    One streamed chunk of a chat completion.

    With ``stream_options.include_usage`` the last chunk before ``[DONE]`` has
    empty ``choices`` and carries ``usage``.
    """

    id: str
    object: str = "chat.completion.chunk"
    created: int
    model: str
    choices: List[ChatChoiceStream] = Field(default_factory=list)
    service_tier: Optional[str] = None
    system_fingerprint: Optional[str] = None
    usage: Optional[CompletionUsage] = None
